import pytest
from hypothesis import given

from nbstools import song
from nbstools.testutils import strategies as nbst


def test_that_normalizing_uses_the_last_tick_and_the_layer_count() -> None:
    s = song.Song(
        header=song.Header(song_length=1000, song_layers=40),
        notes=[
            song.Note(tick=30, layer=0, instrument=0, key=45),
            song.Note(tick=12, layer=3, instrument=0, key=45),
        ],
        layers=[song.Layer(id=i) for i in range(4)],
    )
    s.normalize_header()
    assert s.header.song_length == 30
    assert s.header.song_layers == 4


def test_that_normalizing_an_empty_song_gives_zeros() -> None:
    s = song.Song(header=song.Header(song_length=12, song_layers=3))
    s.normalize_header()
    assert (s.header.song_length, s.header.song_layers) == (0, 0)


@given(nbst.song(normalized=False))
def test_that_normalizing_is_idempotent(s: song.Song) -> None:
    s.normalize_header()
    once = (s.header.song_length, s.header.song_layers)
    s.normalize_header()
    assert (s.header.song_length, s.header.song_layers) == once


def test_that_the_declared_version_is_not_compared() -> None:
    assert song.Header(declared_version=3) == song.Header(declared_version=5)


def test_custom_instruments() -> None:
    meow = song.Instrument(name=b"Meow", file=b"meow.ogg")
    s = song.Song(header=song.Header(default_instruments=16), instruments=[meow])
    assert s.custom_instrument_of(song.Note(0, 0, instrument=3, key=45)) is None
    assert s.custom_instrument_of(song.Note(0, 0, instrument=16, key=45)) == meow
    with pytest.raises(ValueError):
        s.custom_instrument_of(song.Note(0, 0, instrument=17, key=45))


def test_that_note_cells_sort_by_tick_then_layer() -> None:
    notes = [
        song.Note(tick=1, layer=0, instrument=0, key=0),
        song.Note(tick=0, layer=5, instrument=0, key=0),
        song.Note(tick=0, layer=2, instrument=0, key=0),
    ]
    assert [n.cell for n in sorted(notes, key=song.note_cell)] == [
        (0, 2),
        (0, 5),
        (1, 0),
    ]
