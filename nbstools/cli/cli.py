"""Command Line Interface"""

from pathlib import Path
from typing import Any, Dict, Optional

import click

from nbstools.formats import DUMPERS, LOADERS
from nbstools.formats.enum import Format
from nbstools.formats.guess import guess_format
from nbstools.formats.nbs import NBSOptions, PanningEncoding, decode, encode
from nbstools.song import Song
from nbstools.version import __version__

from .helpers import describe_song, dumper_option, loader_option

PANNING_ENCODINGS = click.Choice([p.value for p in PanningEncoding])


@click.group()
@click.version_option(__version__)
def nbstools() -> None:
    """Convert and inspect Note Block Studio songs"""


@nbstools.command()
@click.argument("src", type=click.Path(exists=True, dir_okay=False))
@click.argument("dst", type=click.Path())
@click.option(
    "--input-format",
    "input_format",
    type=click.Choice(list(f.value for f in LOADERS.keys())),
    help="Input file format",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    required=True,
    prompt="Choose an output format",
    type=click.Choice(list(f.value for f in DUMPERS.keys())),
    help="Output file format",
)
@click.option(
    "--normalize",
    is_flag=True,
    help="Recompute the song length and layer count before writing",
)
@loader_option(
    "--input-panning",
    kwarg="panning",
    type=PANNING_ENCODINGS,
    help="How panning values are stored in the input file (nbs only)",
)
@dumper_option(
    "--output-panning",
    kwarg="panning",
    type=PANNING_ENCODINGS,
    help="How panning values should be stored in the output file (nbs only)",
)
def convert(
    src: str,
    dst: str,
    input_format: Optional[Format],
    output_format: Format,
    normalize: bool,
    loader_options: Optional[Dict[str, Any]] = None,
    dumper_options: Optional[Dict[str, Any]] = None,
) -> None:
    """Convert SRC to DST using the format specified by -f"""
    song = load_song(Path(src), input_format, loader_options or {})
    if normalize:
        song.normalize_header()

    try:
        dumper = DUMPERS[output_format]
    except KeyError:
        raise ValueError(f"Unsupported output format : {output_format}")

    try:
        files = dumper(song, Path(dst), **(dumper_options or {}))
    except ValueError as e:
        raise click.ClickException(f"Could not write {dst} : {e}")

    for path, contents in files.items():
        with path.open("wb") as f:
            f.write(contents)
        click.echo(f"Wrote {path}")


@nbstools.command()
@click.argument("src", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--input-format",
    "input_format",
    type=click.Choice(list(f.value for f in LOADERS.keys())),
    help="Input file format",
)
@loader_option(
    "--panning",
    type=PANNING_ENCODINGS,
    help="How panning values are stored in the file (nbs only)",
)
def info(
    src: str,
    input_format: Optional[Format],
    loader_options: Optional[Dict[str, Any]] = None,
) -> None:
    """Show what's inside SRC"""
    song = load_song(Path(src), input_format, loader_options or {})
    for line in describe_song(song):
        click.echo(line)


@nbstools.command()
@click.argument("src", type=click.Path(exists=True, dir_okay=False))
@click.argument("dst", type=click.Path(dir_okay=False), required=False)
@click.option(
    "--panning",
    type=PANNING_ENCODINGS,
    default=PanningEncoding.SIGNED.value,
    show_default=True,
    help="How panning values are stored in the file",
)
def normalize(src: str, dst: Optional[str], panning: str) -> None:
    """Recompute the song length and layer count declared in the header of
    the nbs file SRC. The result is written to DST, or back to SRC if DST is
    not given"""
    options = NBSOptions(panning=PanningEncoding(panning))
    try:
        song = decode(Path(src).read_bytes(), options)
    except ValueError as e:
        raise click.ClickException(f"Could not load {src} : {e}")

    song.normalize_header()
    try:
        bytes_ = encode(song, options)
    except ValueError as e:
        raise click.ClickException(f"Could not write {dst or src} : {e}")

    Path(dst or src).write_bytes(bytes_)


def load_song(
    path: Path, input_format: Optional[Format], loader_options: Dict[str, Any]
) -> Song:
    if input_format is None:
        try:
            input_format = guess_format(path)
        except ValueError as e:
            raise click.ClickException(str(e))
        click.echo(f"Detected input file format : {input_format.value}", err=True)

    try:
        loader = LOADERS[input_format]
    except KeyError:
        raise ValueError(f"Unsupported input format : {input_format}")

    try:
        return loader(path, **loader_options)
    except ValueError as e:
        raise click.ClickException(f"Could not load {path} : {e}")


if __name__ == "__main__":
    nbstools()
