from itertools import count
from pathlib import Path
from typing import Any, Dict, Iterator, TypedDict

from nbstools.formats.filetypes import SongFile
from nbstools.formats.typing import Dumper, SongFileDumper
from nbstools.song import Song
from nbstools.utils import lossy_text


def make_dumper_from_song_file_dumper(
    internal_dumper: SongFileDumper,
    file_name_template: Path,
) -> Dumper:
    """Adapt a SongFileDumper to the Dumper protocol. The resulting function
    uses the file name template if it receives an existing directory as an
    output path"""

    def dumper(song: Song, path: Path, **kwargs: Any) -> Dict[Path, bytes]:
        name_format = FileNameFormat(file_name_template, suggestion=path)
        songfile = internal_dumper(song, **kwargs)
        filepath = name_format.available_filename_for(songfile)
        return {filepath: songfile.contents}

    return dumper


class FormatParameters(TypedDict, total=False):
    title: str
    dedup: str


class FileNameFormat:
    def __init__(self, file_name_template: Path, suggestion: Path):
        if suggestion.is_dir():
            file_path = file_name_template
            self.parent = suggestion
        else:
            file_path = suggestion
            self.parent = suggestion.parent

        # Path.stem only strips the last suffix, "{title}.nbs.json" has two
        stem, _, suffixes = file_path.name.partition(".")
        if suffixes:
            self.name_format = f"{stem}{{dedup}}.{suffixes}"
        else:
            self.name_format = f"{stem}{{dedup}}"

    def available_filename_for(self, file: SongFile) -> Path:
        fixed_params = extract_format_params(file)
        return next(self.iter_possible_paths(fixed_params))

    def iter_possible_paths(self, fixed_params: FormatParameters) -> Iterator[Path]:
        all_paths = self.iter_deduped_paths(fixed_params)
        yield from (p for p in all_paths if not p.exists())

    def iter_deduped_paths(self, params: FormatParameters) -> Iterator[Path]:
        for dedup_index in count(start=0):
            params["dedup"] = "" if dedup_index == 0 else f"-{dedup_index}"
            filename = self.name_format.format(**params).strip()
            yield self.parent / filename


def extract_format_params(songfile: SongFile) -> FormatParameters:
    title = slugify(lossy_text(songfile.song.header.song_name)).strip()
    return FormatParameters(title=title or "untitled")


SLASHES = str.maketrans({"/": "", "\\": ""})


def slugify(s: str) -> str:
    """Make a string safe to use as a file name"""
    s = s.translate(SLASHES)
    return "".join(char for char in s if char.isprintable())
