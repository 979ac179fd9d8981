import warnings
from pathlib import Path
from typing import Any, List

from nbstools import song

from . import construct
from .cursor import ByteReader
from .errors import UnsupportedFormatVariant
from .notes import read_notes
from .options import NBSOptions, PanningEncoding, panning_from_wire


def load_nbs(
    path: Path, *, panning: PanningEncoding = PanningEncoding.SIGNED, **kwargs: Any
) -> song.Song:
    options = NBSOptions(panning=PanningEncoding(panning))
    return decode(path.read_bytes(), options)


def decode(bytes_: bytes, options: NBSOptions = NBSOptions()) -> song.Song:
    """Decode a whole nbs file, either everything goes well and the full song
    is returned or the first error is raised, nothing in between"""
    reader = ByteReader(bytes_)
    header = read_header(reader, options)
    notes = read_notes(reader, options.panning)
    layers = read_layers(reader, header.song_layers, options.panning)
    instruments = read_instruments(reader)
    if not reader.at_end():
        warnings.warn(
            f"Ignored {reader.remaining} bytes of trailing data after the "
            "instrument list"
        )

    return song.Song(
        header=header,
        notes=notes,
        layers=layers,
        instruments=instruments,
    )


def read_header(reader: ByteReader, options: NBSOptions) -> song.Header:
    # Files in the legacy layout start with their song length, which is never
    # zero, where newer files start with a zero
    legacy_song_length = reader.read_u16()
    if legacy_song_length != 0:
        raise UnsupportedFormatVariant(
            "This file uses the legacy nbs layout (no version byte, "
            "single track), only files using the new layout are supported"
        )

    raw_header: construct.Header = reader.read_struct(construct.header)
    return make_header_from_construct(raw_header, options)


def make_header_from_construct(
    h: construct.Header, options: NBSOptions
) -> song.Header:
    # The layout is entirely decided by the options, the version byte found
    # in the file is only kept around for information
    return song.Header(
        version=options.version,
        default_instruments=h.default_instruments,
        song_length=h.song_length,
        song_layers=h.song_layers,
        song_name=h.song_name,
        song_author=h.song_author,
        original_author=h.original_author,
        description=h.description,
        tempo=h.tempo,
        auto_save=h.auto_save,
        auto_save_duration=h.auto_save_duration,
        time_signature=h.time_signature,
        minutes_spent=h.minutes_spent,
        left_clicks=h.left_clicks,
        right_clicks=h.right_clicks,
        blocks_added=h.blocks_added,
        blocks_removed=h.blocks_removed,
        song_origin=h.song_origin,
        loop=h.loop,
        max_loop_count=h.max_loop_count,
        loop_start=h.loop_start,
        declared_version=h.version,
    )


def read_layers(
    reader: ByteReader, count: int, panning: PanningEncoding
) -> List[song.Layer]:
    """The header's layer count is trusted here, there is no end marker"""
    layers = []
    for id_ in range(count):
        raw_layer: construct.Layer = reader.read_struct(construct.layer)
        layers.append(
            song.Layer(
                id=id_,
                name=raw_layer.name,
                lock=raw_layer.lock,
                volume=raw_layer.volume,
                panning=panning_from_wire(raw_layer.panning, panning),
            )
        )

    return layers


def read_instruments(reader: ByteReader) -> List[song.Instrument]:
    count = reader.read_u8()
    return [
        make_instrument_from_construct(reader.read_struct(construct.instrument))
        for _ in range(count)
    ]


def make_instrument_from_construct(i: construct.Instrument) -> song.Instrument:
    return song.Instrument(
        name=i.name,
        file=i.file,
        key=i.key,
        press_key=i.press_key,
    )
