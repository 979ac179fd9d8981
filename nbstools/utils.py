"""General utility functions"""

from collections import defaultdict
from typing import Callable, Dict, Hashable, Iterable, List, TypeVar


def lossy_text(raw: bytes) -> str:
    """Decode raw bytes for display only, invalid sequences become U+FFFD.
    Never use this on anything that gets written back to a file"""
    return raw.decode("utf-8", errors="replace")


def bytes_to_text(raw: bytes) -> str:
    """Lossless bytes → str conversion, invalid sequences are smuggled as lone
    surrogates that text_to_bytes turns back into the original bytes"""
    return raw.decode("utf-8", errors="surrogateescape")


def text_to_bytes(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def group_by(elements: Iterable[V], key: Callable[[V], K]) -> Dict[K, List[V]]:
    res = defaultdict(list)
    for e in elements:
        res[key(e)].append(e)

    return res
