"""
Note Block Studio song files (.nbs)

https://opennbs.org/nbs
"""

from .dump import dump_nbs, encode
from .errors import NBSError, UnexpectedEndOfData, UnsupportedFormatVariant
from .load import decode, load_nbs
from .options import LayerFraming, NBSOptions, PanningEncoding
