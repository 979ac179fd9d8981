from pathlib import Path
from typing import Any

import simplejson as json

from nbstools import song
from nbstools.formats.dump_tools import make_dumper_from_song_file_dumper
from nbstools.formats.filetypes import SongFile
from nbstools.song import CURRENT_VERSION
from nbstools.utils import bytes_to_text

from . import schema


def _dump_nbs_json(song: song.Song, **kwargs: Any) -> SongFile:
    file = schema.File(
        version=schema.VERSION,
        header=dump_header(song.header),
        notes=[dump_note(n) for n in song.notes],
        layers=[dump_layer(layer) for layer in song.layers],
        instruments=[dump_instrument(i) for i in song.instruments],
    )
    json_file = schema.FILE_SCHEMA.dump(file)
    # ensure_ascii keeps the lone surrogates standing in for invalid bytes as
    # \u escapes, they could not be encoded to utf-8 otherwise
    file_bytes = json.dumps(json_file, indent=4, ensure_ascii=True).encode("ascii")
    return SongFile(contents=file_bytes, song=song)


dump_nbs_json = make_dumper_from_song_file_dumper(
    internal_dumper=_dump_nbs_json, file_name_template=Path("{title}.nbs.json")
)


def dump_header(h: song.Header) -> schema.Header:
    return schema.Header(
        version=int(CURRENT_VERSION),
        default_instruments=h.default_instruments,
        song_length=h.song_length,
        song_layers=h.song_layers,
        song_name=bytes_to_text(h.song_name),
        song_author=bytes_to_text(h.song_author),
        original_author=bytes_to_text(h.original_author),
        description=bytes_to_text(h.description),
        tempo=h.tempo,
        auto_save=h.auto_save,
        auto_save_duration=h.auto_save_duration,
        time_signature=h.time_signature,
        minutes_spent=h.minutes_spent,
        left_clicks=h.left_clicks,
        right_clicks=h.right_clicks,
        blocks_added=h.blocks_added,
        blocks_removed=h.blocks_removed,
        song_origin=bytes_to_text(h.song_origin),
        loop=h.loop,
        max_loop_count=h.max_loop_count,
        loop_start=h.loop_start,
    )


def dump_note(n: song.Note) -> schema.Note:
    return schema.Note(
        tick=n.tick,
        layer=n.layer,
        instrument=n.instrument,
        key=n.key,
        velocity=n.velocity,
        panning=n.panning,
        pitch=n.pitch,
    )


def dump_layer(layer: song.Layer) -> schema.Layer:
    return schema.Layer(
        name=bytes_to_text(layer.name),
        lock=layer.lock,
        volume=layer.volume,
        panning=layer.panning,
    )


def dump_instrument(i: song.Instrument) -> schema.Instrument:
    return schema.Instrument(
        name=bytes_to_text(i.name),
        file=bytes_to_text(i.file),
        key=i.key,
        press_key=i.press_key,
    )
