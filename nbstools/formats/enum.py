from enum import Enum


class Format(str, Enum):
    NBS = "nbs"
    NBS_JSON = "nbs-json"
