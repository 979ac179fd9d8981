from typing import Any, Callable, List, Optional, Union

import click

from nbstools import song
from nbstools.utils import lossy_text


def loader_option(
    *args: Any, kwarg: Optional[str] = None, **kwargs: Any
) -> Callable:
    """Option that gets passed to the loader, under the name given by kwarg
    if the option's own name is already taken"""
    return click.option(
        *args,
        callback=add_to_dict("loader_options", kwarg),
        expose_value=False,
        **kwargs,
    )


def dumper_option(
    *args: Any, kwarg: Optional[str] = None, **kwargs: Any
) -> Callable:
    return click.option(
        *args,
        callback=add_to_dict("dumper_options", kwarg),
        expose_value=False,
        **kwargs,
    )


def add_to_dict(
    key: str, kwarg: Optional[str] = None
) -> Callable[[click.Context, Union[click.Option, click.Parameter], Any], None]:
    def add_to_key(
        ctx: click.Context, param: Union[click.Option, click.Parameter], value: Any
    ) -> None:
        # Avoid shadowing load/dump functions kwargs default values with the
        # default values chosen by click
        assert param.name is not None
        if not parameter_is_a_click_default(ctx, param.name):
            ctx.params.setdefault(key, {})[kwarg or param.name] = value

    return add_to_key


def parameter_is_a_click_default(
    ctx: click.Context,
    name: str,
) -> bool:
    return ctx.get_parameter_source(name) in (
        click.core.ParameterSource.DEFAULT,
        click.core.ParameterSource.DEFAULT_MAP,
    )


def describe_song(s: song.Song) -> List[str]:
    """Human readable summary of a song, text fields that are not valid utf-8
    are rendered with replacement characters"""
    h = s.header
    lines = [
        f"Name            : {lossy_text(h.song_name)}",
        f"Author          : {lossy_text(h.song_author)}",
        f"Original author : {lossy_text(h.original_author)}",
        f"Description     : {lossy_text(h.description)}",
        f"Origin          : {lossy_text(h.song_origin)}",
        f"Version         : {int(h.version)} (file says {h.declared_version})",
        f"Tempo           : {h.tempo_in_ticks_per_second} ticks per second",
        f"Time signature  : {h.time_signature}/4",
        f"Song length     : {h.song_length} ticks",
        f"Layers          : {h.song_layers} declared, {len(s.layers)} found",
        f"Notes           : {describe_notes(s)}",
        f"Loop            : {describe_loop(h)}",
        f"Auto save       : {describe_auto_save(h)}",
        f"Minutes spent   : {h.minutes_spent}",
        f"Clicks          : {h.left_clicks} left, {h.right_clicks} right",
        f"Blocks          : {h.blocks_added} added, {h.blocks_removed} removed",
    ]
    if s.layers:
        lines.append("Layers :")
        lines.extend(f"  {describe_layer(layer)}" for layer in s.layers)

    if s.instruments:
        lines.append(f"Custom instruments ({h.default_instruments} built-in) :")
        lines.extend(
            f"  {id_}: {lossy_text(i.name)} ({lossy_text(i.file)}, key {i.key})"
            for id_, i in enumerate(s.instruments, start=h.default_instruments)
        )

    return lines


def describe_loop(h: song.Header) -> str:
    if not h.loop:
        return "off"

    times = "forever" if h.max_loop_count == 0 else f"{h.max_loop_count} times"
    return f"from tick {h.loop_start}, {times}"


def describe_auto_save(h: song.Header) -> str:
    if not h.auto_save:
        return "off"

    return f"every {h.auto_save_duration} minutes"


def describe_layer(layer: song.Layer) -> str:
    name = lossy_text(layer.name) or "(unnamed)"
    lock = ", locked" if layer.lock else ""
    return (
        f"{layer.id}: {name} (volume {layer.volume}%, "
        f"panning {layer.panning:+d}{lock})"
    )


def describe_notes(s: song.Song) -> str:
    custom = 0
    missing = 0
    for note in s.notes:
        try:
            if s.custom_instrument_of(note) is not None:
                custom += 1
        except ValueError:
            missing += 1

    res = f"{len(s.notes)}, {custom} using custom instruments"
    if missing:
        res += f", {missing} using undefined instruments"

    return res
