from pathlib import Path
from typing import Any, Iterable, List

from nbstools import song
from nbstools.formats.dump_tools import make_dumper_from_song_file_dumper
from nbstools.formats.filetypes import SongFile

from . import construct
from .cursor import ByteWriter
from .notes import write_notes
from .options import NBSOptions, PanningEncoding, panning_to_wire

LEGACY_MARKER = 0
MAX_INSTRUMENTS = 0xFF


def _dump_nbs(
    song: song.Song,
    *,
    panning: PanningEncoding = PanningEncoding.SIGNED,
    **kwargs: Any,
) -> SongFile:
    options = NBSOptions(panning=PanningEncoding(panning))
    return SongFile(contents=encode(song, options), song=song)


dump_nbs = make_dumper_from_song_file_dumper(
    internal_dumper=_dump_nbs, file_name_template=Path("{title}.nbs")
)


def encode(s: song.Song, options: NBSOptions = NBSOptions()) -> bytes:
    """Encode the song as is, in particular the header is written without
    being checked against the notes and layers, call Song.normalize_header
    beforehand if needed"""
    writer = ByteWriter()
    write_header(writer, s.header, options)
    write_notes(writer, s.notes, options.panning)
    write_layers(writer, s.layers, options.panning)
    write_instruments(writer, s.instruments)
    return writer.getvalue()


def write_header(writer: ByteWriter, header: song.Header, options: NBSOptions) -> None:
    writer.write_u16(LEGACY_MARKER)
    writer.write_struct(construct.header, make_construct_header(header, options))


def make_construct_header(h: song.Header, options: NBSOptions) -> construct.Header:
    return construct.Header(
        version=int(options.version),
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
    )


def write_layers(
    writer: ByteWriter, layers: Iterable[song.Layer], panning: PanningEncoding
) -> None:
    for layer in layers:
        raw_layer = construct.Layer(
            name=layer.name,
            lock=layer.lock,
            volume=layer.volume,
            panning=panning_to_wire(layer.panning, panning),
        )
        writer.write_struct(construct.layer, raw_layer)


def write_instruments(writer: ByteWriter, instruments: List[song.Instrument]) -> None:
    if len(instruments) > MAX_INSTRUMENTS:
        raise ValueError(
            f"nbs files can hold at most {MAX_INSTRUMENTS} custom instruments, "
            f"this song has {len(instruments)}"
        )

    writer.write_u8(len(instruments))
    for i in instruments:
        raw_instrument = construct.Instrument(
            name=i.name,
            file=i.file,
            key=i.key,
            press_key=i.press_key,
        )
        writer.write_struct(construct.instrument, raw_instrument)
