"""Layout of nbs-json files, a plain text rendition of an nbs song.

Integer fields are validated against the width they have in a binary nbs
file. Byte strings are stored as text decoded with the surrogateescape error
handler, so invalid sequences show up as lone surrogates (\\udc80-\\udcff)
and still convert back to the exact original bytes."""

from dataclasses import dataclass, field
from typing import Any, List

from marshmallow import EXCLUDE, Schema, validate
from marshmallow_dataclass import class_schema

from nbstools.song import CURRENT_VERSION

VERSION = "1.0.0"


def integer(min_: int, max_: int) -> Any:
    return field(metadata={"validate": validate.Range(min=min_, max=max_)})


def u8() -> Any:
    return integer(0, 0xFF)


def u16() -> Any:
    return integer(0, 0xFFFF)


def u32() -> Any:
    return integer(0, 0xFFFF_FFFF)


def i16() -> Any:
    return integer(-0x8000, 0x7FFF)


@dataclass
class Header:
    # Only songs laid out like the latest nbs revision can be represented
    version: int = field(metadata={"validate": validate.Equal(int(CURRENT_VERSION))})
    default_instruments: int = u8()
    song_length: int = u16()
    song_layers: int = u16()
    song_name: str
    song_author: str
    original_author: str
    description: str
    tempo: int = u16()
    auto_save: bool
    auto_save_duration: int = u8()
    time_signature: int = u8()
    minutes_spent: int = u32()
    left_clicks: int = u32()
    right_clicks: int = u32()
    blocks_added: int = u32()
    blocks_removed: int = u32()
    song_origin: str
    loop: bool
    max_loop_count: int = u8()
    loop_start: int = u16()


# The range of valid panning values depends on how the binary file stores
# them, so they are left unchecked
@dataclass
class Note:
    tick: int = u16()
    layer: int = u16()
    instrument: int = u8()
    key: int = u8()
    velocity: int = u8()
    panning: int
    pitch: int = i16()


@dataclass
class Layer:
    name: str
    lock: bool
    volume: int = u8()
    panning: int


@dataclass
class Instrument:
    name: str
    file: str
    key: int = u8()
    press_key: bool


@dataclass
class File:
    version: str = field(metadata={"validate": validate.Equal(VERSION)})
    header: Header
    notes: List[Note]
    layers: List[Layer]
    instruments: List[Instrument] = field(
        metadata={"validate": validate.Length(max=0xFF)}
    )


class BaseSchema(Schema):
    class Meta:
        ordered = True
        unknown = EXCLUDE


FILE_SCHEMA = class_schema(File, base_schema=BaseSchema)()
