import threading

import pytest

from chanworks.du import Usage, dirents, disk_usage, format_usage, main, walk_dir


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"x" * 10)
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "b.bin").write_bytes(b"y" * 25)
    deep = sub / "deep"
    deep.mkdir()
    (deep / "c").write_bytes(b"")
    return tmp_path


def test_dirents_lists_entries(tree):
    assert sorted(entry.name for entry in dirents(str(tree))) == ["a.txt", "sub"]


def test_dirents_missing_directory_reports_error(tmp_path, capsys):
    assert dirents(str(tmp_path / "missing")) == []
    assert capsys.readouterr().err.startswith("du: ")


def test_walk_dir_yields_every_file_size(tree):
    assert sorted(walk_dir(str(tree))) == [0, 10, 25]


def test_walk_dir_stops_when_cancelled(tree):
    cancel = threading.Event()
    cancel.set()
    assert list(walk_dir(str(tree), cancel)) == []


def test_disk_usage_totals_per_root(tree):
    sub = str(tree / "sub")
    usages = disk_usage([str(tree), sub])
    assert usages == [Usage(str(tree), 3, 35), Usage(sub, 2, 25)]


def test_disk_usage_cancelled_counts_nothing(tree):
    cancel = threading.Event()
    cancel.set()
    assert disk_usage([str(tree)], cancel) == [Usage(str(tree), 0, 0)]


def test_disk_usage_no_roots():
    assert disk_usage([]) == []


def test_format_usage():
    line = format_usage(Usage("data", 3, 1_500_000_000))
    assert line == "         3 files  1.500 GB under data"


def test_main_prints_totals(tree, capsys):
    assert main([str(tree)]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[-1] == format_usage(Usage(str(tree), 3, 35))


def test_main_defaults_to_current_directory(tree, capsys, monkeypatch):
    monkeypatch.chdir(tree)
    assert main(["-v"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[-1] == format_usage(Usage(".", 3, 35))