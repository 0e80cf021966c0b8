# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Resolve Specific Character Set values and decode/encode text with them."""
import re
import warnings
from typing import List, Sequence, Union, Set

from dcmcore import config
from dcmcore.errors import EncodingError

# default encoding if no encoding defined - corresponds to ISO IR 6 / ASCII
default_encoding = "iso8859"

# Map DICOM Specific Character Set to python equivalent
python_encoding = {
    # default character set for DICOM
    '': default_encoding,

    'ISO_IR 6': default_encoding,
    'ISO_IR 13': 'shift_jis',
    'ISO_IR 100': 'latin_1',
    'ISO_IR 101': 'iso8859_2',
    'ISO_IR 109': 'iso8859_3',
    'ISO_IR 110': 'iso8859_4',
    'ISO_IR 126': 'iso_ir_126',  # Greek
    'ISO_IR 127': 'iso_ir_127',  # Arabic
    'ISO_IR 138': 'iso_ir_138',  # Hebrew
    'ISO_IR 144': 'iso_ir_144',  # Russian
    'ISO_IR 148': 'iso_ir_148',  # Turkish
    'ISO_IR 166': 'iso_ir_166',  # Thai
    'ISO 2022 IR 6': 'iso8859',
    'ISO 2022 IR 13': 'shift_jis',
    'ISO 2022 IR 87': 'iso2022_jp',
    'ISO 2022 IR 100': 'latin_1',
    'ISO 2022 IR 101': 'iso8859_2',
    'ISO 2022 IR 109': 'iso8859_3',
    'ISO 2022 IR 110': 'iso8859_4',
    'ISO 2022 IR 126': 'iso_ir_126',
    'ISO 2022 IR 127': 'iso_ir_127',
    'ISO 2022 IR 138': 'iso_ir_138',
    'ISO 2022 IR 144': 'iso_ir_144',
    'ISO 2022 IR 148': 'iso_ir_148',
    'ISO 2022 IR 149': 'euc_kr',
    'ISO 2022 IR 159': 'iso2022_jp_2',
    'ISO 2022 IR 166': 'iso_ir_166',
    'ISO 2022 IR 58': 'iso_ir_58',
    'ISO_IR 192': 'UTF8',
    'GB18030': 'GB18030',
    'ISO 2022 GBK': 'GBK',
    'ISO 2022 58': 'GB2312',
    'GBK': 'GBK',
}

# these encodings cannot be used with code extensions
# see DICOM Standard, Part 3, Table C.12-5
STAND_ALONE_ENCODINGS = ('ISO_IR 192', 'GBK', 'GB18030')

# the escape character used to mark the start of escape sequences
ESC = b'\x1b'

# Escape sequences from PS3.3 tables C.12-3 and C.12-4
CODES_TO_ENCODINGS = {
    ESC + b'(B': default_encoding,
    ESC + b'-A': 'latin_1',
    ESC + b')I': 'shift_jis',
    ESC + b'(J': 'shift_jis',
    ESC + b'$B': 'iso2022_jp',
    ESC + b'-B': 'iso8859_2',
    ESC + b'-C': 'iso8859_3',
    ESC + b'-D': 'iso8859_4',
    ESC + b'-F': 'iso_ir_126',
    ESC + b'-G': 'iso_ir_127',
    ESC + b'-H': 'iso_ir_138',
    ESC + b'-L': 'iso_ir_144',
    ESC + b'-M': 'iso_ir_148',
    ESC + b'-T': 'iso_ir_166',
    ESC + b'$)C': 'euc_kr',
    ESC + b'$(D': 'iso2022_jp_2',
    ESC + b'$)A': 'iso_ir_58',
}

ENCODINGS_TO_CODES = {v: k for k, v in CODES_TO_ENCODINGS.items()}

# Python keeps the escape sequences of these encodings itself
handled_encodings = ('iso2022_jp', 'iso2022_jp_2', 'iso_ir_58')

# characters that switch back to the first encoding after a code extension
TEXT_DELIMS = {0x0d, 0x0a, 0x09, 0x0c}
PN_DELIMS = TEXT_DELIMS | {0x5e, 0x3d}


def decode_string(
    value: bytes, encodings: Sequence[str], delimiters: Set[int] = TEXT_DELIMS
) -> str:
    """Convert a raw byte string into a unicode string using the given
    list of encodings.

    Parameters
    ----------
    value : bytes
        The raw string as encoded in the attribute value.
    encodings : list of str
        The Python encodings converted from the Specific Character Set.
    delimiters : set of int
        Character codes each of which resets the encoding to the first one.

    Returns
    -------
    str
        The decoded string. If the value could not be decoded, and
        :attr:`config.enforce_valid_values` is not set, a warning is issued
        and the value is decoded using the first encoding with replacement
        characters.

    Raises
    ------
    UnicodeDecodeError
        If :attr:`config.enforce_valid_values` is set and `value` could not be
        decoded with the given encodings.
    """
    if ESC not in value:
        return _decode_fragment(value, encodings, delimiters)

    # Split into the part before the first escape and the escaped parts
    fragments = re.findall(b'(^[^\x1b]+|[\x1b][^\x1b]*)', value)
    return ''.join(
        _decode_fragment(fragment, encodings, delimiters)
        for fragment in fragments
    )


def _decode_fragment(
    byte_str: bytes, encodings: Sequence[str], delimiters: Set[int]
) -> str:
    try:
        if byte_str.startswith(ESC):
            return _decode_escaped_fragment(byte_str, encodings, delimiters)
        return byte_str.decode(encodings[0])
    except UnicodeError:
        if config.enforce_valid_values:
            raise
        warnings.warn(
            "Failed to decode byte string with encodings: "
            f"{', '.join(encodings)} - using replacement characters in "
            "decoded string"
        )
        return byte_str.decode(encodings[0], errors='replace')


def _decode_escaped_fragment(
    byte_str: bytes, encodings: Sequence[str], delimiters: Set[int]
) -> str:
    seq_length = 4 if byte_str.startswith((b'\x1b$(', b'\x1b$)')) else 3
    encoding = CODES_TO_ENCODINGS.get(byte_str[:seq_length], '')
    if encoding in encodings or encoding == default_encoding:
        if encoding in handled_encodings:
            return byte_str.decode(encoding)

        byte_str = byte_str[seq_length:]
        index = next(
            (i for i, ch in enumerate(byte_str) if ch in delimiters), None
        )
        if index is not None:
            return (
                byte_str[:index].decode(encoding)
                + byte_str[index:].decode(encodings[0])
            )
        return byte_str.decode(encoding)

    msg = "Found unknown escape sequence in encoded string value"
    if config.enforce_valid_values:
        raise ValueError(msg)
    warnings.warn(f"{msg} - using encoding {encodings[0]}")
    return byte_str.decode(encodings[0], errors='replace')


def encode_string(value: str, encodings: Sequence[str]) -> bytes:
    """Convert a unicode string into a byte string using the given
    list of encodings.

    The first encoding able to encode the whole of `value` is used, with the
    escape sequence for that encoding prepended when it isn't the first one.

    Raises
    ------
    EncodingError
        If :attr:`config.enforce_valid_values` is set and `value` could not be
        encoded with the given encodings.
    """
    for i, encoding in enumerate(encodings):
        try:
            encoded = value.encode(encoding)
        except UnicodeError:
            continue

        if i > 0 and encoding not in handled_encodings:
            return ENCODINGS_TO_CODES.get(encoding, b'') + encoded
        return encoded

    if config.enforce_valid_values:
        raise EncodingError(
            f"Failed to encode '{value}' with encodings: "
            f"{', '.join(encodings)}"
        )

    warnings.warn(
        f"Failed to encode value with encodings: {', '.join(encodings)} - "
        "using replacement characters in encoded string"
    )
    return value.encode(encodings[0], errors='replace')


def convert_encodings(encodings: Union[None, str, Sequence[str]]) -> List[str]:
    """Convert DICOM Specific Character Set values into Python encodings.

    Common spelling mistakes are corrected with a warning. A stand-alone
    encoding as the first value causes later values to be ignored, and one
    that appears as a later value is itself ignored, both with a warning.

    Parameters
    ----------
    encodings : str or list of str or None
        The value(s) of Specific Character Set, ``None`` for the default.

    Returns
    -------
    list of str
        The Python encodings. A value that cannot be converted is passed
        through, assuming it already names a Python encoding.
    """
    if not encodings:
        encodings = ['']
    elif isinstance(encodings, str):
        encodings = [encodings]
    encodings = [x.strip() for x in encodings]
    if not encodings[0]:
        encodings[0] = 'ISO_IR 6'

    py_encodings = []
    for x in encodings:
        if x in python_encoding:
            py_encodings.append(python_encoding[x])
            continue

        patched = x
        if re.match('^ISO[^_]IR', x) is not None:
            patched = 'ISO_IR' + x[6:]
        elif re.match('^(?=ISO.2022.IR.)(?!ISO 2022 IR )', x) is not None:
            patched = 'ISO 2022 IR ' + x[12:]

        if patched in python_encoding:
            warnings.warn(
                f"Incorrect value for Specific Character Set '{x}' - "
                f"assuming '{patched}'",
                stacklevel=2
            )
            py_encodings.append(python_encoding[patched])
        else:
            py_encodings.append(x)

    if len(encodings) > 1:
        if encodings[0] in STAND_ALONE_ENCODINGS:
            warnings.warn(
                f"Value '{encodings[0]}' for Specific Character Set does not "
                f"allow code extensions, ignoring: {', '.join(encodings[1:])}",
                stacklevel=2
            )
            py_encodings = py_encodings[:1]
        else:
            for i in reversed(range(1, len(encodings))):
                if encodings[i] in STAND_ALONE_ENCODINGS:
                    warnings.warn(
                        f"Value '{encodings[i]}' cannot be used as code "
                        "extension, ignoring it",
                        stacklevel=2
                    )
                    del py_encodings[i]

    return py_encodings
