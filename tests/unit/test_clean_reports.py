from webshop_e2e_kit.utils.clean_reports import clean_reports


def test_clean_reports_empties_existing_dirs(tmp_path):
    (tmp_path / "reports" / "firefox").mkdir(parents=True)
    (tmp_path / "reports" / "firefox" / "cucumber-report.json").write_text("[]")
    (tmp_path / "reports" / "index.html").write_text("<html></html>")
    (tmp_path / "traces").mkdir()
    (tmp_path / "keep.txt").write_text("keep")

    cleaned = clean_reports(tmp_path)

    assert cleaned == [tmp_path / "reports", tmp_path / "traces"]
    assert (tmp_path / "reports").is_dir()
    assert list((tmp_path / "reports").iterdir()) == []
    assert (tmp_path / "keep.txt").exists()


def test_clean_reports_without_dirs(tmp_path):
    assert clean_reports(tmp_path) == []
