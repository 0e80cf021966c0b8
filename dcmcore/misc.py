# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Miscellaneous helper functions"""

from pathlib import Path
from typing import Optional, Union


_size_factors = {
    "KB": 1000, "MB": 1000 * 1000, "GB": 1000 * 1000 * 1000,
    "KIB": 1024, "MIB": 1024 * 1024, "GIB": 1024 * 1024 * 1024,
}


def size_in_bytes(expr: Union[None, int, float, str]) -> Optional[int]:
    """Return the number of bytes for a `defer_size` argument.

    Parameters
    ----------
    expr : int, float, str or None
        A number of bytes, or a string such as ``"512 KB"``, ``"2 MiB"``.
        ``None`` or infinity mean no limit.

    Returns
    -------
    int or None
        The size in bytes, or ``None`` for no limit.
    """
    if expr is None or expr == float('inf'):
        return None

    if isinstance(expr, (int, float)):
        return int(expr)

    try:
        return int(expr)
    except ValueError:
        pass

    number = expr.rstrip("BbIi").rstrip("KkMmGg")
    unit = expr[len(number):].strip().upper()
    if unit in _size_factors:
        return int(float(number) * _size_factors[unit])

    raise ValueError(f"Unable to parse length with unit '{unit}'")


def is_dicom(file_path: Union[str, Path]) -> bool:
    """Return ``True`` if the file at `file_path` has a Part 10 preamble
    followed by the ``DICM`` prefix.
    """
    with open(file_path, 'rb') as fp:
        fp.read(128)  # preamble
        return fp.read(4) == b"DICM"
