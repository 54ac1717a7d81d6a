from hikescout.dates import FALLBACK_WINDOW, resolve_target_dates


def test_resolve_reads_and_strips_file(tmp_path):
    dates_file = tmp_path / "weekend_dates.md"
    dates_file.write_text("\n  Saturday 25th - Sunday 26th October  \n", encoding="utf-8")

    assert resolve_target_dates(dates_file) == "Saturday 25th - Sunday 26th October"


def test_resolve_missing_file_falls_back_to_this_weekend(tmp_path):
    assert resolve_target_dates(tmp_path / "missing.md") == "this weekend"


def test_resolve_unreadable_path_falls_back(tmp_path):
    # A directory cannot be read as text
    assert resolve_target_dates(tmp_path) == FALLBACK_WINDOW


def test_resolve_empty_file_falls_back(tmp_path):
    dates_file = tmp_path / "weekend_dates.md"
    dates_file.write_text("   \n", encoding="utf-8")

    assert resolve_target_dates(dates_file) == FALLBACK_WINDOW


def test_resolve_default_path_uses_working_directory(tmp_path, monkeypatch):
    (tmp_path / "weekend_dates.md").write_text("1st - 2nd November", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert resolve_target_dates() == "1st - 2nd November"
