# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Conversion between encoded attribute values and their Python values."""

from struct import Struct, error as struct_error
from typing import Any, List, Optional, Sequence

import numpy as np

from dcmcore.charset import (
    default_encoding, decode_string, encode_string, TEXT_DELIMS, PN_DELIMS
)
from dcmcore.errors import DicomFormatError, EncodingError
from dcmcore.tag import BaseTag, Tag
from dcmcore.valuerep import policy_for
from dcmcore.vr import VR, BYTES_VR, CHARSET_VR, NUMERIC_VR, TEXT_VR


def pad_byte(vr: str) -> bytes:
    """Return the byte used to pad a value of `vr` to even length."""
    if vr in NUMERIC_VR or vr in BYTES_VR or vr == VR.AT:
        return b"\x00"
    return policy_for(vr).padding


def pad_value(vr: str, value: bytes) -> bytes:
    """Return `value` padded to even length with the pad byte for `vr`."""
    if len(value) % 2:
        return value + pad_byte(vr)
    return value


def swap_bytes(value: bytes, unit: int) -> bytes:
    """Return `value` with the byte order of each `unit` sized word
    reversed.
    """
    if unit == 1 or not value:
        return value
    if len(value) % unit:
        raise DicomFormatError(
            f"A value of {len(value)} bytes cannot be byte swapped in "
            f"{unit} byte words"
        )
    return np.frombuffer(value, dtype=f"u{unit}").byteswap().tobytes()


def convert_string(
    byte_string: bytes, vr: str, encodings: Optional[Sequence[str]] = None
) -> List[str]:
    """Return the decoded values of a string or text VR.

    Only the final pad character is removed, any other leading or trailing
    spaces are kept so that the value encodes back to the same bytes.
    Values of the text VRs **LT**, **ST**, **UT** and **UR** are never
    split on the backslash.
    """
    if not byte_string:
        return []

    pad = policy_for(vr).padding
    if byte_string[-1:] in (pad, b" ", b"\x00") and len(byte_string) % 2 == 0:
        byte_string = byte_string[:-1]

    if vr in CHARSET_VR and encodings:
        delimiters = PN_DELIMS if vr == VR.PN else TEXT_DELIMS
        text = decode_string(byte_string, encodings, delimiters)
    else:
        text = byte_string.decode(default_encoding)

    if vr in TEXT_VR:
        return [text]
    return text.split("\\")


def convert_numbers(
    byte_string: bytes, is_little_endian: bool, struct_format: str
) -> List[Any]:
    """Return the decoded values of a binary numeric VR.

    Raises
    ------
    DicomFormatError
        If the length of `byte_string` isn't a multiple of the size of a
        single value.
    """
    endianness = "<" if is_little_endian else ">"
    item_size = Struct(endianness + struct_format).size
    if len(byte_string) % item_size:
        raise DicomFormatError(
            f"Expected a multiple of {item_size} bytes for a value with "
            f"struct format '{struct_format}', got {len(byte_string)} bytes"
        )

    count = len(byte_string) // item_size
    return list(Struct(f"{endianness}{count}{struct_format}").unpack(byte_string))


def convert_tags(byte_string: bytes, is_little_endian: bool) -> List[BaseTag]:
    """Return the decoded values of an **AT** attribute."""
    values = convert_numbers(byte_string, is_little_endian, "H")
    if len(values) % 2:
        raise DicomFormatError(
            f"Expected a multiple of 4 bytes for VR AT, got {len(byte_string)}"
        )
    return [
        BaseTag(values[i] << 16 | values[i + 1])
        for i in range(0, len(values), 2)
    ]


def convert_other(byte_string: bytes, vr: str, is_little_endian: bool) -> bytes:
    """Return the value of an other-binary VR as little endian bytes."""
    if is_little_endian:
        return byte_string
    return swap_bytes(byte_string, BYTES_VR[vr])


def convert_value(
    vr: str,
    byte_string: bytes,
    is_little_endian: bool,
    encodings: Optional[Sequence[str]] = None
) -> Any:
    """Return the decoded value of `byte_string` for `vr`.

    Returns
    -------
    list or bytes
        A list of values for string, text, numeric and **AT** VRs, little
        endian :class:`bytes` for the other-binary VRs.
    """
    if vr in BYTES_VR:
        return convert_other(byte_string, vr, is_little_endian)
    if vr in NUMERIC_VR:
        return convert_numbers(byte_string, is_little_endian, NUMERIC_VR[vr])
    if vr == VR.AT:
        return convert_tags(byte_string, is_little_endian)

    return convert_string(byte_string, vr, encodings)


def encode_strings(
    values: Sequence[str], vr: str, encodings: Optional[Sequence[str]] = None
) -> bytes:
    """Return the unpadded encoding of the string `values` for `vr`.

    Raises
    ------
    EncodingError
        If a value uses characters outside the default repertoire for a VR
        that doesn't use the Specific Character Set.
    """
    if vr in TEXT_VR:
        text = "".join(values)
    else:
        text = "\\".join(values)

    if vr in CHARSET_VR and encodings:
        return encode_string(text, encodings)

    try:
        return text.encode(default_encoding)
    except UnicodeError as exc:
        raise EncodingError(
            f"The value '{text}' cannot be encoded for VR {vr}: {exc}"
        )


def encode_numbers(
    values: Sequence[Any], is_little_endian: bool, struct_format: str
) -> bytes:
    """Return the encoding of the binary numeric `values`."""
    endianness = "<" if is_little_endian else ">"
    try:
        return Struct(f"{endianness}{len(values)}{struct_format}").pack(*values)
    except struct_error as exc:
        raise EncodingError(
            f"{list(values)} cannot be packed with struct format "
            f"'{struct_format}': {exc}"
        )


def encode_tags(values: Sequence[Any], is_little_endian: bool) -> bytes:
    """Return the encoding of the **AT** `values`."""
    words = []
    for value in values:
        tag = Tag(value)
        words.extend((tag.group, tag.element))
    return encode_numbers(words, is_little_endian, "H")


def encode_value(
    vr: str,
    value: Any,
    is_little_endian: bool,
    encodings: Optional[Sequence[str]] = None
) -> bytes:
    """Return the unpadded encoding of `value` for `vr`.

    `value` is a list of values, or little endian :class:`bytes` for the
    other-binary VRs.
    """
    if vr in BYTES_VR:
        return convert_other(value, vr, is_little_endian)
    if vr in NUMERIC_VR:
        return encode_numbers(value, is_little_endian, NUMERIC_VR[vr])
    if vr == VR.AT:
        return encode_tags(value, is_little_endian)

    return encode_strings(value, vr, encodings)
