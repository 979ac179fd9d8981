"""
nbs-json, a text rendition of nbs songs meant for inspection, diffing and
hand editing. Converting back and forth with the binary format is lossless.
"""

from .dump import dump_nbs_json
from .load import load_nbs_json
