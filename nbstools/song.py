"""Provides the Song class, the central model for Note Block Studio songs
Every input format is converted to a Song instance
Every output format is created from a Song instance

Names, authors, descriptions and sample paths are kept as raw bytes : files
found in the wild are not guaranteed to contain valid text, and whatever they
contain has to survive a load / dump cycle untouched"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import List, Optional, Tuple


class NBSVersion(IntEnum):
    """Known revisions of the "new" nbs layout, as stored in the version byte
    that follows the legacy marker"""

    V1 = 1
    V2 = 2
    V3 = 3
    V4 = 4
    V5 = 5


CURRENT_VERSION = NBSVersion.V5


@dataclass
class Note:
    """A note block placed at a given tick, on a given layer"""

    tick: int
    layer: int
    instrument: int
    # 0 is A0, 87 is C8
    key: int
    # percentage
    velocity: int = 100
    # -100 (left) to 100 (right), 0 is center
    panning: int = 0
    # fine tuning in cents
    pitch: int = 0

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.tick, self.layer)


def note_cell(note: Note) -> Tuple[int, int]:
    return note.cell


@dataclass
class Layer:
    id: int
    name: bytes = b""
    lock: bool = False
    volume: int = 100
    panning: int = 0


@dataclass
class Instrument:
    """A custom instrument, made from a sound file"""

    name: bytes
    file: bytes
    # key the sample is recorded at, 45 is F#4
    key: int = 45
    press_key: bool = False


@dataclass
class Header:
    version: int = CURRENT_VERSION
    default_instruments: int = 16
    song_length: int = 0
    song_layers: int = 0
    song_name: bytes = b""
    song_author: bytes = b""
    original_author: bytes = b""
    description: bytes = b""
    # ticks per second × 100
    tempo: int = 1000
    auto_save: bool = False
    auto_save_duration: int = 10
    time_signature: int = 4
    minutes_spent: int = 0
    left_clicks: int = 0
    right_clicks: int = 0
    blocks_added: int = 0
    blocks_removed: int = 0
    song_origin: bytes = b""
    loop: bool = False
    max_loop_count: int = 0
    loop_start: int = 0
    # The version byte actually found in the file, for information only
    declared_version: Optional[int] = field(default=None, compare=False)

    @property
    def tempo_in_ticks_per_second(self) -> Decimal:
        return Decimal(self.tempo) / 100


@dataclass
class Song:
    """The abstract representation of an nbs file : metadata, a sparse grid
    of notes indexed by tick and layer, the layers themselves and the custom
    instruments"""

    header: Header = field(default_factory=Header)
    notes: List[Note] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    instruments: List[Instrument] = field(default_factory=list)

    def normalize_header(self) -> None:
        """Recompute the song length and layer count stored in the header
        from the actual notes and layers. Loaders never do this on their own,
        dumpers neither, so a freshly built or edited song should go through
        this before being dumped"""
        self.header.song_length = max((n.tick for n in self.notes), default=0)
        self.header.song_layers = len(self.layers)

    def custom_instrument_of(self, note: Note) -> Optional[Instrument]:
        """Return the custom instrument the note plays, None if it plays one
        of the built-in instruments"""
        index = note.instrument - self.header.default_instruments
        if index < 0:
            return None

        try:
            return self.instruments[index]
        except IndexError:
            raise ValueError(
                f"Note at {note.cell} uses instrument {note.instrument} but the "
                f"song only has {len(self.instruments)} custom instruments"
            ) from None
