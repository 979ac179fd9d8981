"""
Module containing all the load/dump code for all file formats
"""
from .enum import Format
from .loaders_and_dumpers import DUMPERS, LOADERS
