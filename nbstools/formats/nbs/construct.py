"""The fixed-layout parts of the nbs format described using construct.
see https://construct.readthedocs.io/en/latest/index.html
and https://opennbs.org/nbs for the format itself

The note stream has no fixed layout, notes.py walks it by hand and only uses
the NoteFields struct defined here for the per-note payload.

Panning bytes are parsed as unsigned, the conversion to a signed value lives
in options.py since it depends on the panning encoding in use"""

from dataclasses import dataclass

import construct as c
import construct_typed as ct

# u32 length then raw bytes, not necessarily valid text
String = c.Prefixed(c.Int32ul, c.GreedyBytes)


@dataclass
class Header(ct.DataclassMixin):
    """Everything in the header after the legacy marker"""

    version: int = ct.csfield(c.Int8ul)
    default_instruments: int = ct.csfield(c.Int8ul)
    song_length: int = ct.csfield(c.Int16ul)
    song_layers: int = ct.csfield(c.Int16ul)
    song_name: bytes = ct.csfield(String)
    song_author: bytes = ct.csfield(String)
    original_author: bytes = ct.csfield(String)
    description: bytes = ct.csfield(String)
    tempo: int = ct.csfield(c.Int16ul)
    auto_save: bool = ct.csfield(c.Flag)
    auto_save_duration: int = ct.csfield(c.Int8ul)
    time_signature: int = ct.csfield(c.Int8ul)
    minutes_spent: int = ct.csfield(c.Int32ul)
    left_clicks: int = ct.csfield(c.Int32ul)
    right_clicks: int = ct.csfield(c.Int32ul)
    blocks_added: int = ct.csfield(c.Int32ul)
    blocks_removed: int = ct.csfield(c.Int32ul)
    song_origin: bytes = ct.csfield(String)
    loop: bool = ct.csfield(c.Flag)
    max_loop_count: int = ct.csfield(c.Int8ul)
    loop_start: int = ct.csfield(c.Int16ul)


@dataclass
class NoteFields(ct.DataclassMixin):
    instrument: int = ct.csfield(c.Int8ul)
    key: int = ct.csfield(c.Int8ul)
    velocity: int = ct.csfield(c.Int8ul)
    panning: int = ct.csfield(c.Int8ul)
    pitch: int = ct.csfield(c.Int16sl)


@dataclass
class Layer(ct.DataclassMixin):
    name: bytes = ct.csfield(String)
    lock: bool = ct.csfield(c.Flag)
    volume: int = ct.csfield(c.Int8ul)
    panning: int = ct.csfield(c.Int8ul)


@dataclass
class Instrument(ct.DataclassMixin):
    name: bytes = ct.csfield(String)
    file: bytes = ct.csfield(String)
    key: int = ct.csfield(c.Int8ul)
    press_key: bool = ct.csfield(c.Flag)


header = ct.DataclassStruct(Header)
note_fields = ct.DataclassStruct(NoteFields)
layer = ct.DataclassStruct(Layer)
instrument = ct.DataclassStruct(Instrument)
