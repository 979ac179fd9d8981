"""
Hypothesis strategies to generate notes, layers, instruments and songs
"""

from typing import Dict, List, Optional, Tuple

import hypothesis.strategies as st

from nbstools.song import CURRENT_VERSION, Header, Instrument, Layer, Note, Song

u8 = st.integers(min_value=0, max_value=0xFF)
u16 = st.integers(min_value=0, max_value=0xFFFF)
u32 = st.integers(min_value=0, max_value=0xFFFF_FFFF)
i16 = st.integers(min_value=-0x8000, max_value=0x7FFF)
panning = st.integers(min_value=-100, max_value=100)


@st.composite
def raw_bytes(draw: st.DrawFn, max_size: Optional[int] = 32) -> bytes:
    """Mostly text-like byte strings, with the occasional invalid utf-8"""
    b: bytes = draw(
        st.one_of(
            st.text(max_size=max_size).map(lambda s: s.encode("utf-8")),
            st.binary(max_size=max_size),
        )
    )
    return b


@st.composite
def note(
    draw: st.DrawFn,
    tick_strat: st.SearchStrategy[int] = u16,
    layer_strat: st.SearchStrategy[int] = u16,
) -> Note:
    return Note(
        tick=draw(tick_strat),
        layer=draw(layer_strat),
        instrument=draw(u8),
        key=draw(st.integers(min_value=0, max_value=87)),
        velocity=draw(st.integers(min_value=0, max_value=100)),
        panning=draw(panning),
        pitch=draw(i16),
    )


@st.composite
def notes(
    draw: st.DrawFn,
    tick_strat: st.SearchStrategy[int] = st.integers(min_value=0, max_value=500),
    layer_strat: st.SearchStrategy[int] = st.integers(min_value=0, max_value=20),
    max_size: int = 64,
) -> List[Note]:
    """Notes sorted by (tick, layer), with at most one note per cell"""
    cells = st.tuples(tick_strat, layer_strat)
    by_cell: Dict[Tuple[int, int], Note] = draw(
        st.dictionaries(cells, note(), max_size=max_size)
    )
    return [
        Note(
            tick=tick,
            layer=layer,
            instrument=n.instrument,
            key=n.key,
            velocity=n.velocity,
            panning=n.panning,
            pitch=n.pitch,
        )
        for (tick, layer), n in sorted(by_cell.items())
    ]


@st.composite
def layers(draw: st.DrawFn, max_size: int = 8) -> List[Layer]:
    count = draw(st.integers(min_value=0, max_value=max_size))
    return [
        Layer(
            id=id_,
            name=draw(raw_bytes()),
            lock=draw(st.booleans()),
            volume=draw(st.integers(min_value=0, max_value=100)),
            panning=draw(panning),
        )
        for id_ in range(count)
    ]


@st.composite
def instrument(draw: st.DrawFn) -> Instrument:
    return Instrument(
        name=draw(raw_bytes()),
        file=draw(raw_bytes()),
        key=draw(st.integers(min_value=0, max_value=87)),
        press_key=draw(st.booleans()),
    )


@st.composite
def header(draw: st.DrawFn) -> Header:
    return Header(
        version=CURRENT_VERSION,
        default_instruments=draw(u8),
        song_length=draw(u16),
        song_layers=draw(u16),
        song_name=draw(raw_bytes()),
        song_author=draw(raw_bytes()),
        original_author=draw(raw_bytes()),
        description=draw(raw_bytes(max_size=200)),
        tempo=draw(u16),
        auto_save=draw(st.booleans()),
        auto_save_duration=draw(u8),
        time_signature=draw(u8),
        minutes_spent=draw(u32),
        left_clicks=draw(u32),
        right_clicks=draw(u32),
        blocks_added=draw(u32),
        blocks_removed=draw(u32),
        song_origin=draw(raw_bytes()),
        loop=draw(st.booleans()),
        max_loop_count=draw(u8),
        loop_start=draw(u16),
    )


@st.composite
def song(
    draw: st.DrawFn,
    header_strat: st.SearchStrategy[Header] = header(),
    notes_strat: st.SearchStrategy[List[Note]] = notes(),
    layers_strat: st.SearchStrategy[List[Layer]] = layers(),
    instruments_strat: st.SearchStrategy[List[Instrument]] = st.lists(
        instrument(), max_size=4
    ),
    normalized: bool = True,
) -> Song:
    """Songs whose header matches their contents unless normalized is False,
    only those can be expected to survive a dump / load cycle"""
    s = Song(
        header=draw(header_strat),
        notes=draw(notes_strat),
        layers=draw(layers_strat),
        instruments=draw(instruments_strat),
    )
    if normalized:
        s.normalize_header()

    return s
