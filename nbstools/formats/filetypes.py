from dataclasses import dataclass

from nbstools.song import Song


@dataclass
class SongFile:
    """The contents of a file along with the song it was made from"""

    contents: bytes
    song: Song
