from pathlib import Path

import pytest

from nbstools import song
from nbstools.formats import DUMPERS, Format
from nbstools.formats.guess import guess_format


@pytest.mark.parametrize("format_", list(Format))
def test_that_dumped_files_are_recognized(tmp_path: Path, format_: Format) -> None:
    files = DUMPERS[format_](song.Song(), tmp_path)
    for path, contents in files.items():
        path.write_bytes(contents)
        assert guess_format(path) == format_


def test_that_folders_are_refused(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        guess_format(tmp_path)


@pytest.mark.parametrize(
    "contents",
    [
        b"",
        b"\x9e\x02\x01",
        b'{"meta": {}, "time": [], "note": []}',
        b"[1, 2, 3]",
        b"\x00\x00\x05\x10",
    ],
)
def test_that_unrelated_files_are_not_recognized(
    tmp_path: Path, contents: bytes
) -> None:
    path = tmp_path / "file"
    path.write_bytes(contents)
    with pytest.raises(ValueError):
        guess_format(path)
