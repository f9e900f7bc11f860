"""Round trip through the real system clipboard.

Skipped by default because it overwrites whatever is on the clipboard.
To run it manually, remove or change the skip condition below.
"""

import asyncio

import pytest

from latexvector.clipboard import get_clipboard_backend
from latexvector.render import MathtextExportWorker
from latexvector.services import FormulaSession


@pytest.mark.skipif(True, reason="Integration test - enable for manual runs")
def test_formula_lands_on_clipboard_as_pdf():
    async def scenario():
        loop = asyncio.get_running_loop()
        session = FormulaSession(loop, clipboard=get_clipboard_backend())
        session.attach_worker(MathtextExportWorker(loop))
        done = asyncio.Event()
        session.exported.connect(lambda result: done.set())
        try:
            session.set_text_input("$$e^{i\\pi} + 1 = 0$$")
            session.flush_input()
            await asyncio.wait_for(done.wait(), 10.0)
        finally:
            session.close()
        return session.show_success_toast

    assert asyncio.run(scenario()) is True
