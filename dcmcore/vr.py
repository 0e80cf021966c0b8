# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Value Representation (VR) registry.

The set of VRs is closed: every VR belongs to exactly one structural
:class:`VRKind`, and the sets below are checked for consistency with each
other and with the data dictionary at import time.
"""

from enum import Enum, unique
from itertools import chain

from dcmcore._dicom_dict import DicomDictionary, RepeatersDictionary


@unique
class VR(str, Enum):
    """DICOM Value Representation (VR)"""
    # Standard VRs from Table 6.2-1 in Part 5
    AE = "AE"
    AS = "AS"
    AT = "AT"
    CS = "CS"
    DA = "DA"
    DS = "DS"
    DT = "DT"
    FD = "FD"
    FL = "FL"
    IS = "IS"
    LO = "LO"
    LT = "LT"
    OB = "OB"
    OD = "OD"
    OF = "OF"
    OL = "OL"
    OW = "OW"
    OV = "OV"
    PN = "PN"
    SH = "SH"
    SL = "SL"
    SQ = "SQ"
    SS = "SS"
    ST = "ST"
    SV = "SV"
    TM = "TM"
    UC = "UC"
    UI = "UI"
    UL = "UL"
    UN = "UN"
    UR = "UR"
    US = "US"
    UT = "UT"
    UV = "UV"
    # Ambiguous VRs from Tables 6-1, 7-1 and 8-1 in Part 6
    US_SS_OW = "US or SS or OW"
    US_SS = "US or SS"
    US_OW = "US or OW"
    OB_OW = "OB or OW"

    def __str__(self) -> str:
        return str.__str__(self)


@unique
class VRKind(Enum):
    """The structural kind of a VR, which decides how its value is held."""
    STRING = "string"
    TEXT = "text"
    UNIQUE_IDENTIFIER = "unique identifier"
    BINARY_NUMERIC = "binary numeric"
    ATTRIBUTE_TAG = "attribute tag"
    OTHER = "other"
    SEQUENCE = "sequence"


STANDARD_VR = {
    VR.AE, VR.AS, VR.AT, VR.CS, VR.DA, VR.DS, VR.DT, VR.FD, VR.FL, VR.IS,
    VR.LO, VR.LT, VR.OB, VR.OD, VR.OF, VR.OL, VR.OW, VR.OV, VR.PN, VR.SH,
    VR.SL, VR.SQ, VR.SS, VR.ST, VR.SV, VR.TM, VR.UC, VR.UI, VR.UL, VR.UN,
    VR.UR, VR.US, VR.UT, VR.UV,
}
AMBIGUOUS_VR = {VR.US_SS_OW, VR.US_SS, VR.US_OW, VR.OB_OW}

# Backslash separated, space padded strings of limited length
STRING_VR = {
    VR.AE, VR.AS, VR.CS, VR.DA, VR.DS, VR.DT, VR.IS, VR.LO, VR.PN, VR.SH,
    VR.TM, VR.UC,
}
# Single valued text, the backslash is an ordinary character
TEXT_VR = {VR.LT, VR.ST, VR.UT, VR.UR}
UID_VR = {VR.UI}
# Fixed width binary numbers, value is the struct format character
NUMERIC_VR = {
    VR.FD: "d", VR.FL: "f", VR.SL: "l", VR.SS: "h", VR.SV: "q", VR.UL: "L",
    VR.US: "H", VR.UV: "Q",
}
TAG_VR = {VR.AT}
# Opaque bulk data, value is the byte swapping unit
BYTES_VR = {
    VR.OB: 1, VR.OD: 8, VR.OF: 4, VR.OL: 4, VR.OV: 8, VR.OW: 2, VR.UN: 1,
}
SEQUENCE_VR = {VR.SQ}

KIND = {}
for _kind, _vrs in (
    (VRKind.STRING, STRING_VR),
    (VRKind.TEXT, TEXT_VR),
    (VRKind.UNIQUE_IDENTIFIER, UID_VR),
    (VRKind.BINARY_NUMERIC, NUMERIC_VR),
    (VRKind.ATTRIBUTE_TAG, TAG_VR),
    (VRKind.OTHER, BYTES_VR),
    (VRKind.SEQUENCE, SEQUENCE_VR),
):
    for _vr in _vrs:
        if _vr in KIND:
            raise RuntimeError(f"VR {_vr} has more than one structural kind")
        KIND[_vr] = _kind

_missing = ", ".join(sorted(STANDARD_VR - set(KIND)))
if _missing:
    raise RuntimeError(f"Structural kind missing for {_missing}")

# Ensure we have all possible VRs accounted for
_elements = chain(DicomDictionary.values(), RepeatersDictionary.values())
_reference = {v[0] for v in _elements} - {"NONE"}
_missing = ", ".join(sorted(_reference - (STANDARD_VR | AMBIGUOUS_VR)))
if _missing:
    raise RuntimeError(f"VR configuration missing for {_missing}")

# VRs whose text is decoded using the Specific Character Set, all others
#   are restricted to the default repertoire
CHARSET_VR = {VR.LO, VR.LT, VR.PN, VR.SH, VR.ST, VR.UC, VR.UT}

# VRs that use 2 byte length fields for Explicit VR from Table 7.1-2 in Part 5
#   All other explicit VRs and all implicit VRs use 4 byte length fields
EXPLICIT_VR_LENGTH_16 = {
    VR.AE, VR.AS, VR.AT, VR.CS, VR.DA, VR.DS, VR.DT, VR.FL, VR.FD, VR.IS,
    VR.LO, VR.LT, VR.PN, VR.SH, VR.SL, VR.SS, VR.ST, VR.TM, VR.UI, VR.UL,
    VR.US,
}
EXPLICIT_VR_LENGTH_32 = STANDARD_VR - EXPLICIT_VR_LENGTH_16


def kind_of(vr: str) -> VRKind:
    """Return the :class:`VRKind` of the standard VR `vr`.

    Raises
    ------
    KeyError
        If `vr` is not a standard VR.
    """
    return KIND[VR(vr)]


def is_standard_vr(vr: str) -> bool:
    """Return ``True`` if `vr` is one of the standard two-letter VRs."""
    return vr in STANDARD_VR


def has_long_length(vr: str) -> bool:
    """Return ``True`` if an explicit VR header for `vr` uses 2 reserved
    bytes and a 4 byte length instead of a 2 byte length.
    """
    return vr not in EXPLICIT_VR_LENGTH_16
