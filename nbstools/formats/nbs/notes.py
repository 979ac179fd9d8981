"""The note stream

Notes are stored as a sparse (tick × layer) grid using forward jumps :

    tick jump (u16)
        layer jump (u16), note fields
        layer jump (u16), note fields
        ...
        0 (end of this tick)
    tick jump (u16)
        ...
    0 (end of the note stream)

Both the tick and the layer cursors start at -1, the layer cursor goes back
to -1 at every new tick. Since a jump is always at least 1, 0 is free to mark
the end of a group."""

from typing import Iterable, List

from nbstools import song
from nbstools.utils import group_by

from . import construct
from .cursor import ByteReader, ByteWriter
from .errors import NBSError
from .options import PanningEncoding, panning_from_wire, panning_to_wire

END_OF_GROUP = 0
MAX_JUMP = 0xFFFF
# ticks and layers are u16 everywhere else in the format
MAX_POSITION = 0xFFFF


def read_notes(reader: ByteReader, panning: PanningEncoding) -> List[song.Note]:
    notes = []
    tick = -1
    while True:
        tick_jump = reader.read_u16()
        if tick_jump == END_OF_GROUP:
            break

        tick += tick_jump
        check_position(tick, "tick", reader)
        layer = -1
        while True:
            layer_jump = reader.read_u16()
            if layer_jump == END_OF_GROUP:
                break

            layer += layer_jump
            check_position(layer, "layer", reader)
            fields: construct.NoteFields = reader.read_struct(construct.note_fields)
            notes.append(
                song.Note(
                    tick=tick,
                    layer=layer,
                    instrument=fields.instrument,
                    key=fields.key,
                    velocity=fields.velocity,
                    panning=panning_from_wire(fields.panning, panning),
                    pitch=fields.pitch,
                )
            )

    return notes


def check_position(value: int, kind: str, reader: ByteReader) -> None:
    if value > MAX_POSITION:
        raise NBSError(
            f"Note stream goes past the last {kind} : reached {kind} {value} "
            f"at byte {reader.position}"
        )


def write_notes(
    writer: ByteWriter, notes: Iterable[song.Note], panning: PanningEncoding
) -> None:
    sorted_notes = sorted(notes, key=song.note_cell)
    check_for_duplicate_cells(sorted_notes)
    previous_tick = -1
    previous_layer = -1
    for note in sorted_notes:
        if note.tick != previous_tick:
            if previous_tick != -1:
                writer.write_u16(END_OF_GROUP)
            write_jump(writer, note.tick - previous_tick, "tick")
            previous_tick = note.tick
            previous_layer = -1

        write_jump(writer, note.layer - previous_layer, "layer")
        previous_layer = note.layer
        writer.write_struct(construct.note_fields, make_note_fields(note, panning))

    if sorted_notes:
        writer.write_u16(END_OF_GROUP)
    writer.write_u16(END_OF_GROUP)


def write_jump(writer: ByteWriter, jump: int, kind: str) -> None:
    # Starting from -1 means tick (or layer) 65535 can only be reached from
    # a previous non-empty one
    if not 0 < jump <= MAX_JUMP:
        raise ValueError(f"Can't encode a {kind} jump of {jump}")
    writer.write_u16(jump)


def make_note_fields(
    note: song.Note, panning: PanningEncoding
) -> construct.NoteFields:
    return construct.NoteFields(
        instrument=note.instrument,
        key=note.key,
        velocity=note.velocity,
        panning=panning_to_wire(note.panning, panning),
        pitch=note.pitch,
    )


def check_for_duplicate_cells(notes: Iterable[song.Note]) -> None:
    """A cell can only hold one note, jumps can't go backwards or stay put"""
    notes_by_cell = group_by(notes, song.note_cell)
    duplicates = sorted(
        cell for cell, group in notes_by_cell.items() if len(group) > 1
    )
    if duplicates:
        raise ValueError(
            "Several notes share the same (tick, layer) cell, the nbs format "
            f"can only hold one note per cell. Affected cells : {duplicates}"
        )
