import subprocess
from types import SimpleNamespace

import pytest

from latexvector.clipboard import linux
from latexvector.clipboard.linux import LinuxClipboard


class FakeRun:
    def __init__(self, outputs=None, fail=False):
        self.outputs = outputs or {}
        self.fail = fail
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append((tuple(command), kwargs))
        if self.fail:
            raise subprocess.CalledProcessError(1, command)
        return SimpleNamespace(stdout=self.outputs.get(tuple(command), b""))


@pytest.fixture
def tools(monkeypatch):
    installed = set()
    monkeypatch.setattr(linux.shutil, "which",
                        lambda name: f"/usr/bin/{name}" if name in installed else None)
    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    return installed


def test_reads_text_through_xclip(tools, monkeypatch):
    tools.add("xclip")
    run = FakeRun({
        ("xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"): b"TARGETS\nUTF8_STRING\nSTRING\n",
        ("xclip", "-selection", "clipboard", "-t", "UTF8_STRING", "-o"): "$x^2$ é".encode(),
    })
    monkeypatch.setattr(linux.subprocess, "run", run)

    assert LinuxClipboard().read_text() == "$x^2$ é"


def test_prefers_wayland_when_available(tools, monkeypatch):
    tools.update({"wl-paste", "xclip"})
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    run = FakeRun({
        ("wl-paste", "--list-types"): b"text/plain;charset=utf-8\nimage/png\n",
        ("wl-paste", "--no-newline", "--type", "text/plain;charset=utf-8"): b"$$a$$",
    })
    monkeypatch.setattr(linux.subprocess, "run", run)

    assert LinuxClipboard().read_text() == "$$a$$"
    assert all(call[0][0] == "wl-paste" for call in run.calls)


def test_no_text_target_reads_nothing(tools, monkeypatch):
    tools.add("xclip")
    run = FakeRun({
        ("xclip", "-selection", "clipboard", "-t", "TARGETS", "-o"): b"TARGETS\nimage/png\n",
    })
    monkeypatch.setattr(linux.subprocess, "run", run)

    assert LinuxClipboard().read_text() is None


def test_no_tools_reads_nothing(tools):
    assert LinuxClipboard().read_text() is None


def test_pdf_written_with_xclip(tools, monkeypatch):
    tools.add("xclip")
    run = FakeRun()
    monkeypatch.setattr(linux.subprocess, "run", run)

    assert LinuxClipboard().write_pdf(b"%PDF-1.4") is True

    command, kwargs = run.calls[0]
    assert command == ("xclip", "-selection", "clipboard", "-t", "application/pdf", "-i")
    assert kwargs["input"] == b"%PDF-1.4"


def test_pdf_written_with_wl_copy(tools, monkeypatch):
    tools.update({"wl-copy", "xclip"})
    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    run = FakeRun()
    monkeypatch.setattr(linux.subprocess, "run", run)

    assert LinuxClipboard().write_pdf(b"%PDF-1.4") is True
    assert run.calls[0][0] == ("wl-copy", "--type", "application/pdf")


def test_failed_write_reports_false(tools, monkeypatch):
    tools.add("xclip")
    monkeypatch.setattr(linux.subprocess, "run", FakeRun(fail=True))

    assert LinuxClipboard().write_pdf(b"%PDF-1.4") is False


def test_write_without_tools_or_payload(tools):
    assert LinuxClipboard().write_pdf(b"%PDF-1.4") is False
    assert LinuxClipboard().write_pdf(b"") is False
