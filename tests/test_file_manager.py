from latexvector.utils import FileManager


def test_save_pdf_generates_a_name(tmp_path):
    manager = FileManager(tmp_path / "exports")
    path = manager.save_pdf(b"%PDF-1.4")

    assert path.parent == tmp_path / "exports"
    assert path.suffix == ".pdf"
    assert path.read_bytes() == b"%PDF-1.4"
    assert manager.get_file_uri(path).startswith("file://")


def test_existing_names_are_not_overwritten(tmp_path):
    manager = FileManager(tmp_path)
    first = manager.save_pdf(b"one", "formula.pdf")
    second = manager.save_pdf(b"two", "formula.pdf")

    assert first.name == "formula.pdf"
    assert second.name == "formula_1.pdf"
    assert first.read_bytes() == b"one"
    assert second.read_bytes() == b"two"


def test_unwritable_target_returns_none(tmp_path):
    manager = FileManager(tmp_path)
    # Parent directory of the target does not exist.
    assert manager.save_pdf(b"x", "missing/formula.pdf") is None


def test_saved_export_is_logged_as_file_uri(tmp_path, caplog):
    manager = FileManager(tmp_path)
    with caplog.at_level("INFO", logger="latexvector.utils.file_manager"):
        path = manager.save_pdf(b"%PDF", "a.pdf")
    assert manager.get_file_uri(path) in caplog.text
