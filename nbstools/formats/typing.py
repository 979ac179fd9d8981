from pathlib import Path
from typing import Any, Dict, Protocol

from nbstools.formats.filetypes import SongFile
from nbstools.song import Song


class Dumper(Protocol):
    """A Dumper is a callable that takes in a Song object, a Path hint and
    potential options, then gives back a dict that maps file name suggestions
    to the binary content of the file"""

    def __call__(self, song: Song, path: Path, **kwargs: Any) -> Dict[Path, bytes]:
        ...


class SongFileDumper(Protocol):
    """Generic signature of internal dumpers, every format supported here
    uses a single file to hold a whole song"""

    def __call__(self, song: Song, **kwargs: Any) -> SongFile:
        ...


class Loader(Protocol):
    """A Loader deserializes a Path to a Song object and possibly takes in
    some options via the kwargs"""

    def __call__(self, path: Path, **kwargs: Any) -> Song:
        ...
