import io

from latexvector.render import HtmlFileDisplay, TerminalDisplay
from latexvector.schemas import DisplayRequest


def test_terminal_lists_formulas_on_one_line_each():
    stream = io.StringIO()
    TerminalDisplay(stream).show(DisplayRequest(formulas=["a +\n  b", "c"]))
    assert stream.getvalue() == "2 formula(s):\n  [0] a + b\n  [1] c\n"


def test_terminal_reports_empty_result():
    stream = io.StringIO()
    TerminalDisplay(stream).show(DisplayRequest(formulas=[]))
    assert stream.getvalue() == "No formulas found.\n"


def test_selection_is_forwarded_to_handler():
    display = TerminalDisplay(io.StringIO())
    picked = []
    display.post_message(0)
    display.set_selection_handler(picked.append)
    display.post_message(1)
    assert picked == [1]


def test_html_page_is_rewritten_on_update(tmp_path):
    path = tmp_path / "preview" / "formulas.html"
    display = HtmlFileDisplay(path)

    display.show(DisplayRequest(formulas=["x < y"]))
    assert "$$ x &lt; y $$" in path.read_text(encoding="utf-8")

    display.show(DisplayRequest(formulas=[]))
    assert 'class="card"' not in path.read_text(encoding="utf-8")
