import json
from pathlib import Path

from .enum import Format
from .nbs.cursor import ByteReader
from .nbs.errors import NBSError
from .nbs.load import read_header
from .nbs.options import NBSOptions


def guess_format(path: Path) -> Format:
    if path.is_dir():
        raise ValueError("Can't guess song format for a folder")

    try:
        return recognize_json_formats(path)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        pass

    if looks_like_nbs(path):
        return Format.NBS

    raise ValueError("Unrecognized file format")


def recognize_json_formats(path: Path) -> Format:
    with path.open(encoding="utf-8") as f:
        obj = json.load(f)

    if not isinstance(obj, dict):
        raise ValueError("Top level value is not an object")

    if obj.keys() >= {"header", "notes"}:
        return Format.NBS_JSON
    else:
        raise ValueError("Unrecognized file format")


def looks_like_nbs(path: Path) -> bool:
    """Only the header is checked, it's the only part with a recognizable
    shape, a header that decodes is enough to make an educated guess"""
    reader = ByteReader(path.read_bytes())
    try:
        read_header(reader, NBSOptions())
    except NBSError:
        return False

    return True
