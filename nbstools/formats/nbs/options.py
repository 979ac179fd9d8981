"""Codec configuration

The nbs format went through several revisions, and files found in the wild
(or written by other tools) disagree on a couple of details. Rather than
guessing from the data, the codec is told explicitly what to expect."""

from dataclasses import dataclass
from enum import Enum

from nbstools.song import CURRENT_VERSION, NBSVersion

from .errors import UnsupportedFormatVariant

SUPPORTED_VERSIONS = frozenset({NBSVersion.V5})


class PanningEncoding(str, Enum):
    # raw two's complement byte, -100 to 100
    SIGNED = "signed"
    # unsigned byte, 0 to 200 with 100 as center
    BIASED = "biased"


class LayerFraming(str, Enum):
    """How the number of layer records is known.

    HEADER_COUNT : the header's layer count is authoritative
    EMPTY_NAME_SENTINEL : layers are read until a record with an empty name,
        some writers have been seen doing this, it is not supported here"""

    HEADER_COUNT = "header-count"
    EMPTY_NAME_SENTINEL = "empty-name-sentinel"


@dataclass(frozen=True)
class NBSOptions:
    version: NBSVersion = CURRENT_VERSION
    panning: PanningEncoding = PanningEncoding.SIGNED
    layer_framing: LayerFraming = LayerFraming.HEADER_COUNT

    def __post_init__(self) -> None:
        if self.version not in SUPPORTED_VERSIONS:
            raise UnsupportedFormatVariant(
                f"nbs version {self.version} is not supported, supported "
                f"versions are : {sorted(int(v) for v in SUPPORTED_VERSIONS)}"
            )
        if self.layer_framing != LayerFraming.HEADER_COUNT:
            raise NotImplementedError(
                f"Layer framing {self.layer_framing.value} is not implemented"
            )


def panning_from_wire(raw: int, encoding: PanningEncoding) -> int:
    """Convert a panning byte as found in a file to a signed value"""
    if encoding == PanningEncoding.SIGNED:
        return raw - 0x100 if raw >= 0x80 else raw
    elif encoding == PanningEncoding.BIASED:
        return raw - 100
    else:
        raise ValueError(f"Unknown panning encoding : {encoding}")


def panning_to_wire(value: int, encoding: PanningEncoding) -> int:
    """Convert a signed panning value to the byte to write in a file"""
    if encoding == PanningEncoding.SIGNED:
        if not -0x80 <= value < 0x80:
            raise ValueError(f"Panning value does not fit a signed byte : {value}")
        return value & 0xFF
    elif encoding == PanningEncoding.BIASED:
        raw = value + 100
        if not 0 <= raw <= 0xFF:
            raise ValueError(
                f"Panning value does not fit a byte once biased : {value}"
            )
        return raw
    else:
        raise ValueError(f"Unknown panning encoding : {encoding}")
