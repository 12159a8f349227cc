"""Utility helpers used across ovntopo.

This package contains small, self-contained utilities that do not depend on
project internals. Keep modules minimal and focused.
"""

from ovntopo.utils.mappings import as_list, as_mapping, as_str, as_str_dict, dig

__all__ = [
    "as_list",
    "as_mapping",
    "as_str",
    "as_str_dict",
    "dig",
]
