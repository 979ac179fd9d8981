import warnings
from decimal import Decimal
from random import Random

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nbstools import song
from nbstools.formats import Format
from nbstools.testutils import strategies as nbst
from nbstools.testutils.test_patterns import dump_and_load_then_compare

from .. import NBSOptions, PanningEncoding, decode, encode
from ..errors import NBSError, UnexpectedEndOfData, UnsupportedFormatVariant


def u8(v: int) -> bytes:
    return v.to_bytes(1, "little")


def u16(v: int) -> bytes:
    return v.to_bytes(2, "little")


def u32(v: int) -> bytes:
    return v.to_bytes(4, "little")


def string(b: bytes) -> bytes:
    return u32(len(b)) + b


# fmt: off
NYAN_CAT_HEADER = (
    u16(0)  # new format
    + u8(4)  # version, not the one this codec writes
    + u8(16)
    + u16(670)
    + u16(2)
    + string(b"Nyan Cat")
    + string(b"chenxi050402")
    + string(b"")
    + string(b'"Nyan Cat" recreated in note blocks by chenxi050402.')
    + u16(1893)
    + u8(0)
    + u8(10)
    + u8(8)
    + u32(32)
    + u32(1207)
    + u32(32)
    + u32(212)
    + u32(27)
    + string(b"")
    + u8(1)
    + u8(0)
    + u16(160)
)

NYAN_CAT_NOTES = (
    u16(1)
    + u16(1)
    + bytes([0, 45, 100, 0]) + u16(0)
    + u16(1)
    + bytes([16, 57, 80, 0xCE]) + u16(0xFFF6)  # panning -50, pitch -10
    + u16(0)
    + u16(670)
    + u16(1)
    + bytes([1, 33, 100, 50]) + u16(100)
    + u16(0)
    + u16(0)
)

NYAN_CAT_LAYERS = (
    string(b"Melody") + u8(0) + u8(100) + u8(0)
    + string(b"\xffBass\xfe") + u8(1) + u8(75) + u8(0x9C)
)

NYAN_CAT_INSTRUMENTS = (
    u8(1) + string(b"Meow") + string(b"custom/meow.ogg") + u8(45) + u8(1)
)
# fmt: on

NYAN_CAT = NYAN_CAT_HEADER + NYAN_CAT_NOTES + NYAN_CAT_LAYERS + NYAN_CAT_INSTRUMENTS


def test_that_a_handmade_file_decodes() -> None:
    s = decode(NYAN_CAT)
    h = s.header
    assert h.version == 5
    assert h.declared_version == 4
    assert h.default_instruments == 16
    assert h.song_length == 670
    assert h.song_layers == 2
    assert h.song_name == b"Nyan Cat"
    assert h.song_author == b"chenxi050402"
    assert h.original_author == b""
    assert h.description == b'"Nyan Cat" recreated in note blocks by chenxi050402.'
    assert h.tempo == 1893
    assert h.tempo_in_ticks_per_second == Decimal("18.93")
    assert h.auto_save is False
    assert h.auto_save_duration == 10
    assert h.time_signature == 8
    assert (
        h.minutes_spent,
        h.left_clicks,
        h.right_clicks,
        h.blocks_added,
        h.blocks_removed,
    ) == (32, 1207, 32, 212, 27)
    assert h.song_origin == b""
    assert h.loop is True
    assert h.max_loop_count == 0
    assert h.loop_start == 160

    assert s.notes == [
        song.Note(tick=0, layer=0, instrument=0, key=45),
        song.Note(
            tick=0, layer=1, instrument=16, key=57, velocity=80, panning=-50, pitch=-10
        ),
        song.Note(tick=670, layer=0, instrument=1, key=33, panning=50, pitch=100),
    ]
    assert s.layers == [
        song.Layer(id=0, name=b"Melody"),
        song.Layer(id=1, name=b"\xffBass\xfe", lock=True, volume=75, panning=-100),
    ]
    assert s.instruments == [
        song.Instrument(
            name=b"Meow", file=b"custom/meow.ogg", key=45, press_key=True
        )
    ]
    assert s.custom_instrument_of(s.notes[1]) == s.instruments[0]


def test_that_a_handmade_file_is_written_back_with_the_current_version() -> None:
    expected = NYAN_CAT[:2] + u8(5) + NYAN_CAT[3:]
    assert encode(decode(NYAN_CAT)) == expected


def test_that_the_legacy_layout_is_refused() -> None:
    legacy = u16(670) + NYAN_CAT[2:]
    with pytest.raises(UnsupportedFormatVariant):
        decode(legacy)


def test_that_the_header_layer_count_is_trusted() -> None:
    one_layer = NYAN_CAT_HEADER[:6] + u16(1) + NYAN_CAT_HEADER[8:]
    first_layer = string(b"Melody") + u8(0) + u8(100) + u8(0)
    s = decode(one_layer + NYAN_CAT_NOTES + first_layer + NYAN_CAT_INSTRUMENTS)
    assert [layer.name for layer in s.layers] == [b"Melody"]
    assert len(s.instruments) == 1


def test_that_trailing_data_is_ignored_with_a_warning() -> None:
    with pytest.warns(UserWarning, match="3 bytes of trailing data"):
        s = decode(NYAN_CAT + b"\x00\x01\x02")

    assert s == decode(NYAN_CAT)


def test_that_a_complete_file_decodes_without_warnings() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        decode(NYAN_CAT)


def test_biased_panning() -> None:
    # fmt: off
    biased = (
        NYAN_CAT_HEADER
        + NYAN_CAT_NOTES
        + string(b"Melody") + u8(0) + u8(100) + u8(100)
        + string(b"Bass") + u8(1) + u8(75) + u8(0)
        + NYAN_CAT_INSTRUMENTS
    )
    # fmt: on
    options = NBSOptions(panning=PanningEncoding.BIASED)
    s = decode(biased, options)
    assert [layer.panning for layer in s.layers] == [0, -100]
    # 0xCE biased is 106
    assert s.notes[1].panning == 106
    assert encode(s, options)[3:] == biased[3:]


def test_an_empty_song() -> None:
    s = song.Song()
    bytes_ = encode(s)
    header_size = 2 + 1 + 1 + 2 + 2 + 4 * 4 + 2 + 1 + 1 + 1 + 5 * 4 + 4 + 1 + 1 + 2
    assert len(bytes_) == header_size + 2 + 1
    assert bytes_[header_size:] == u16(0) + u8(0)
    assert decode(bytes_) == s


def test_that_too_many_instruments_are_refused() -> None:
    s = song.Song(instruments=[song.Instrument(b"", b"") for _ in range(256)])
    with pytest.raises(ValueError):
        encode(s)


def test_that_the_header_is_not_normalized_implicitly() -> None:
    s = song.Song(
        notes=[song.Note(tick=12, layer=0, instrument=0, key=45)],
        layers=[song.Layer(id=0)],
    )
    # the layer record is left unread
    with pytest.warns(UserWarning, match="7 bytes of trailing data"):
        recovered = decode(encode(s))

    assert recovered.header.song_length == 0
    assert recovered.header.song_layers == 0
    assert recovered.layers == []


@given(nbst.song())
def test_that_normalized_songs_roundtrip(s: song.Song) -> None:
    assert decode(encode(s)) == s


@given(nbst.song(), st.randoms())
def test_that_note_order_does_not_matter(s: song.Song, random: Random) -> None:
    shuffled = song.Song(
        header=s.header,
        notes=random.sample(s.notes, len(s.notes)),
        layers=s.layers,
        instruments=s.instruments,
    )
    assert decode(encode(shuffled)) == s


@given(nbst.song(), st.data())
def test_that_truncated_files_are_refused(s: song.Song, data: st.DataObject) -> None:
    bytes_ = encode(s)
    cut = data.draw(st.integers(min_value=0, max_value=len(bytes_) - 1))
    with pytest.raises(UnexpectedEndOfData):
        decode(bytes_[:cut])


@given(nbst.raw_bytes(max_size=64))
def test_that_names_are_kept_byte_for_byte(name: bytes) -> None:
    s = song.Song(
        header=song.Header(song_name=name, song_layers=1),
        layers=[song.Layer(id=0, name=name)],
        instruments=[song.Instrument(name=name, file=name)],
    )
    recovered = decode(encode(s))
    assert recovered.header.song_name == name
    assert recovered.layers[0].name == name
    assert recovered.instruments[0].name == name
    assert recovered.instruments[0].file == name


@given(nbst.song())
def test_that_full_song_roundtrips(s: song.Song) -> None:
    dump_and_load_then_compare(Format.NBS, s)


@given(nbst.song())
def test_that_full_song_roundtrips_with_biased_panning(s: song.Song) -> None:
    dump_and_load_then_compare(
        Format.NBS,
        s,
        load_options={"panning": PanningEncoding.BIASED},
        dump_options={"panning": "biased"},
    )


def test_that_values_too_wide_for_the_file_are_refused() -> None:
    s = song.Song(header=song.Header(tempo=0x10000))
    with pytest.raises(ValueError, match="at byte 2"):
        encode(s)


def test_that_notes_past_the_last_tick_are_refused() -> None:
    fields = bytes([0, 45, 100, 0]) + u16(0)
    notes = u16(0xFFFF) + u16(1) + fields + u16(0) + u16(0xFFFF) + u16(1) + fields
    with pytest.raises(NBSError, match="past the last tick"):
        decode(NYAN_CAT_HEADER + notes + u16(0) + u16(0))
