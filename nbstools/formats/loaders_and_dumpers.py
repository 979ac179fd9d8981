from typing import Dict

from . import nbs, nbs_json
from .enum import Format
from .typing import Dumper, Loader

LOADERS: Dict[Format, Loader] = {
    Format.NBS: nbs.load_nbs,
    Format.NBS_JSON: nbs_json.load_nbs_json,
}

DUMPERS: Dict[Format, Dumper] = {
    Format.NBS: nbs.dump_nbs,
    Format.NBS_JSON: nbs_json.dump_nbs_json,
}
