"""Unit tests for zip_files."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from filekit.core.errors import FileError, InvalidArgumentError
from filekit.fileio import zip_files
from filekit.fileio.archives import normalize_prefix


@pytest.fixture()
def two_files(tmp_path: Path) -> list[Path]:
    (tmp_path / "in" / "nested").mkdir(parents=True)
    a = tmp_path / "in" / "a.txt"
    b = tmp_path / "in" / "nested" / "b.txt"
    a.write_bytes(b"alpha\n")
    b.write_bytes(bytes(range(256)) * 64)
    return [a, b]


def test_zip_files_one_flat_entry_per_file(tmp_path: Path, two_files: list[Path]) -> None:
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    zip_path = zip_files("report", two_files, temp_dir=out_dir)

    assert zip_path.parent == out_dir
    assert zip_path.name.startswith("report_")
    assert zip_path.suffix == ".zip"
    with zipfile.ZipFile(zip_path) as zf:
        assert sorted(zf.namelist()) == ["a.txt", "b.txt"]
        assert zf.read("a.txt") == two_files[0].read_bytes()
        assert zf.read("b.txt") == two_files[1].read_bytes()
        assert zf.testzip() is None


def test_zip_files_blank_prefix_is_random(tmp_path: Path, two_files: list[Path]) -> None:
    zip_path = zip_files("  ", two_files[:1], temp_dir=tmp_path)
    prefix, sep, _rest = zip_path.name.partition("_")
    assert sep == "_"
    assert len(prefix) == 8
    assert prefix.isalnum()


def test_zip_files_rejects_empty_file_list(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError):
        zip_files("x", [], temp_dir=tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_zip_files_propagates_missing_source(tmp_path: Path, two_files: list[Path]) -> None:
    with pytest.raises(FileNotFoundError):
        zip_files("x", [two_files[0], tmp_path / "missing.bin"], temp_dir=tmp_path)


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        ("data", "data_"),
        ("data_", "data_"),
        ("data__", "data_"),
    ],
)
def test_normalize_prefix_single_separator(prefix: str, expected: str) -> None:
    assert normalize_prefix(prefix) == expected


def test_normalize_prefix_blank_generates_random() -> None:
    first = normalize_prefix(None)
    second = normalize_prefix("")
    assert len(first) == 9 and first.endswith("_")
    assert first != second


def test_zip_files_rejects_duplicate_base_names(tmp_path: Path) -> None:
    (tmp_path / "d1").mkdir()
    (tmp_path / "d2").mkdir()
    first = tmp_path / "d1" / "a.txt"
    second = tmp_path / "d2" / "a.txt"
    first.write_bytes(b"one")
    second.write_bytes(b"two")

    with pytest.raises(FileError, match="Duplicate zip entry: a.txt") as excinfo:
        zip_files("x", [first, second], temp_dir=tmp_path)

    assert isinstance(excinfo.value, OSError)
