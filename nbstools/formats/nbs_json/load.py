from pathlib import Path
from typing import Any

import simplejson as json
from marshmallow import ValidationError

from nbstools import song
from nbstools.song import CURRENT_VERSION
from nbstools.utils import text_to_bytes

from . import schema


def load_nbs_json(path: Path, **kwargs: Any) -> song.Song:
    with path.open(encoding="utf-8") as f:
        raw_json = json.load(f)

    return load_song(raw_json)


def load_song(raw_json: Any) -> song.Song:
    try:
        file: schema.File = schema.FILE_SCHEMA.load(raw_json)
    except ValidationError as e:
        raise ValueError(f"Invalid nbs-json file : {e.messages}") from e

    return song.Song(
        header=load_header(file.header),
        notes=[load_note(n) for n in file.notes],
        layers=[load_layer(id_, layer) for id_, layer in enumerate(file.layers)],
        instruments=[load_instrument(i) for i in file.instruments],
    )


def load_header(h: schema.Header) -> song.Header:
    return song.Header(
        version=CURRENT_VERSION,
        default_instruments=h.default_instruments,
        song_length=h.song_length,
        song_layers=h.song_layers,
        song_name=text_to_bytes(h.song_name),
        song_author=text_to_bytes(h.song_author),
        original_author=text_to_bytes(h.original_author),
        description=text_to_bytes(h.description),
        tempo=h.tempo,
        auto_save=h.auto_save,
        auto_save_duration=h.auto_save_duration,
        time_signature=h.time_signature,
        minutes_spent=h.minutes_spent,
        left_clicks=h.left_clicks,
        right_clicks=h.right_clicks,
        blocks_added=h.blocks_added,
        blocks_removed=h.blocks_removed,
        song_origin=text_to_bytes(h.song_origin),
        loop=h.loop,
        max_loop_count=h.max_loop_count,
        loop_start=h.loop_start,
    )


def load_note(n: schema.Note) -> song.Note:
    return song.Note(
        tick=n.tick,
        layer=n.layer,
        instrument=n.instrument,
        key=n.key,
        velocity=n.velocity,
        panning=n.panning,
        pitch=n.pitch,
    )


def load_layer(id_: int, layer: schema.Layer) -> song.Layer:
    return song.Layer(
        id=id_,
        name=text_to_bytes(layer.name),
        lock=layer.lock,
        volume=layer.volume,
        panning=layer.panning,
    )


def load_instrument(i: schema.Instrument) -> song.Instrument:
    return song.Instrument(
        name=text_to_bytes(i.name),
        file=text_to_bytes(i.file),
        key=i.key,
        press_key=i.press_key,
    )
