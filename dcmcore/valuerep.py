# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Per-VR rules for string values: length limits, allowed characters,
well-formedness and how a value may be repaired.
"""
import re
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from dcmcore.vr import VR, STRING_VR, TEXT_VR, UID_VR


def _default_char(c: str) -> bool:
    # ESC is allowed so that code extensions survive
    cp = ord(c)
    if c == "\\":
        return False
    if cp == 0x1B:
        return True
    return not (cp < 0x20 or 0x7F <= cp < 0xA0)


def _text_char(c: str) -> bool:
    # backslash and format effectors are ordinary text in LT, ST and UT
    return c in "\\\r\n\t\f\x1b" or _default_char(c)


def _chars(allowed: str) -> Callable[[str], bool]:
    allowed_set = frozenset(allowed)

    def is_valid(c: str) -> bool:
        return c in allowed_set

    return is_valid


def _always(value: str) -> bool:
    return True


_DIGITS = "0123456789"
_AGE_STRING = re.compile(r"^\d\d\d[DWMY]$")


class VRPolicy(NamedTuple):
    """The value rules for one string VR.

    Attributes
    ----------
    max_length : int or None
        Maximum length of a single value in characters, ``None`` if
        unlimited.
    padding : bytes
        The byte used to pad an encoded value to even length.
    is_valid_char : callable
        Returns ``True`` if a character may appear in a value.
    is_well_formed : callable
        Returns ``True`` if a (valid character) value has the form required
        by the VR.
    allow_truncation : bool
        If ``True`` a value that is too long may be truncated.
    allow_char_replacement : bool
        If ``True`` invalid characters may be replaced during repair.
    replacement : str or None
        The character invalid characters are replaced with, ``None`` to
        remove them.
    strip_leading : bool
        If ``True`` leading spaces are insignificant padding.
    """
    max_length: Optional[int]
    padding: bytes = b" "
    is_valid_char: Callable[[str], bool] = _default_char
    is_well_formed: Callable[[str], bool] = _always
    allow_truncation: bool = True
    allow_char_replacement: bool = True
    replacement: Optional[str] = " "
    strip_leading: bool = True


POLICIES: Dict[str, VRPolicy] = {
    VR.AE: VRPolicy(16),
    VR.AS: VRPolicy(
        4,
        is_valid_char=_chars(_DIGITS + "DWMY"),
        is_well_formed=lambda v: _AGE_STRING.match(v) is not None,
        allow_truncation=False,
        allow_char_replacement=False,
    ),
    VR.CS: VRPolicy(
        16,
        is_valid_char=_chars("ABCDEFGHIJKLMNOPQRSTUVWXYZ" + _DIGITS + " _"),
        allow_truncation=False,
        allow_char_replacement=False,
    ),
    # Invalid characters are removed from dates and times, which turns the
    #   ACR-NEMA form "1994.01.01" into "19940101"
    VR.DA: VRPolicy(
        8,
        is_valid_char=_chars(_DIGITS),
        is_well_formed=lambda v: len(v) == 8,
        allow_truncation=False,
        replacement=None,
    ),
    VR.TM: VRPolicy(
        14,
        is_valid_char=_chars(_DIGITS + ". "),
        is_well_formed=lambda v: len(v) >= 2,
        allow_truncation=False,
        replacement=None,
    ),
    VR.DT: VRPolicy(
        26,
        is_valid_char=_chars(_DIGITS + " +-."),
        allow_truncation=False,
        allow_char_replacement=False,
    ),
    VR.DS: VRPolicy(16, is_valid_char=_chars(_DIGITS + " +-.eE")),
    VR.IS: VRPolicy(12, is_valid_char=_chars(_DIGITS + " +-")),
    VR.LO: VRPolicy(64),
    VR.PN: VRPolicy(64 + 1 + 64 + 1 + 64),
    VR.SH: VRPolicy(16),
    VR.UC: VRPolicy(None),
    VR.LT: VRPolicy(10240, is_valid_char=_text_char, strip_leading=False),
    VR.ST: VRPolicy(1024, is_valid_char=_text_char, strip_leading=False),
    VR.UT: VRPolicy(None, is_valid_char=_text_char, strip_leading=False),
    VR.UR: VRPolicy(None, strip_leading=False),
    VR.UI: VRPolicy(64, padding=b"\x00", is_valid_char=_chars(_DIGITS + ".")),
}

_missing = ", ".join(sorted((STRING_VR | TEXT_VR | UID_VR) - set(POLICIES)))
if _missing:
    raise RuntimeError(f"Value policy missing for {_missing}")


def policy_for(vr: str) -> VRPolicy:
    """Return the :class:`VRPolicy` for the string VR `vr`."""
    return POLICIES[vr]


def strip_padding(vr: str, value: str) -> str:
    """Return `value` without the padding that is insignificant for `vr`.

    Trailing spaces and NULs are always padding, leading spaces are padding
    except for the text VRs **LT**, **ST**, **UT** and **UR**.
    """
    value = value.rstrip(" \x00")
    if POLICIES[vr].strip_leading:
        value = value.lstrip(" ")
    return value


def validate_vr_length(vr: str, value: str) -> Tuple[bool, str]:
    """Validate the length of a single string `value` for `vr`.

    Returns
    -------
        A tuple of a boolean validation result and the error message.
    """
    max_length = POLICIES[vr].max_length
    if max_length is not None:
        length = len(strip_padding(vr, value))
        if length > max_length:
            return False, (
                f"The value length ({length}) exceeds the maximum length of "
                f"{max_length} allowed for VR {vr}"
            )
    return True, ""


def validate_characters(vr: str, value: str) -> Tuple[bool, str]:
    """Validate that every character of `value` is allowed for `vr`."""
    is_valid_char = POLICIES[vr].is_valid_char
    invalid = [c for c in value if not is_valid_char(c)]
    if invalid:
        return False, f"Invalid character(s) {''.join(invalid)!r} for VR {vr}"
    return True, ""


def validate_format(vr: str, value: str) -> Tuple[bool, str]:
    """Validate that `value` has the form required for `vr`."""
    if value and not POLICIES[vr].is_well_formed(value):
        return False, f"Invalid value for VR {vr}: {value!r}"
    return True, ""


def validate_value(vr: str, value: str) -> Tuple[bool, str]:
    """Validate a single string value for length, allowed characters and
    form, returning the first failure found.
    """
    for validator in (validate_vr_length, validate_characters, validate_format):
        valid, msg = validator(vr, value)
        if not valid:
            return valid, msg
    return True, ""


def truncate_value(vr: str, value: str) -> str:
    """Return `value` truncated to the maximum length for `vr`, stripped of
    any padding exposed by the truncation.
    """
    max_length = POLICIES[vr].max_length
    value = strip_padding(vr, value)
    if max_length is not None and len(value) > max_length:
        value = strip_padding(vr, value[:max_length])
    return value


def repair_value(vr: str, value: str) -> str:
    """Return `value` repaired as far as the rules for `vr` allow.

    Padding is always stripped. Invalid characters are then replaced (or
    removed) if the VR allows it, and finally the value is truncated to the
    maximum length if the VR allows it. No characters are ever invented.
    """
    policy = POLICIES[vr]
    value = strip_padding(vr, value)
    if policy.allow_char_replacement:
        replacement = policy.replacement or ""
        value = "".join(
            c if policy.is_valid_char(c) else replacement for c in value
        )
        value = strip_padding(vr, value)
    if policy.allow_truncation:
        value = truncate_value(vr, value)
    return value
