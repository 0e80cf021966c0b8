# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Functions for handling DICOM unique identifiers (UIDs) and the transfer
syntaxes they name.
"""

import re
from typing import Dict, Tuple, Type, TypeVar
import uuid

from dcmcore._version import __version__


# Regexes for valid UIDs and valid UID prefixes
RE_VALID_UID = r'^(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))*$'
"""Regex for a valid UID"""
RE_VALID_UID_PREFIX = r'^(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))*\.$'
"""Regex for a valid UID prefix"""
RE_UID_SHAPE = r'^[0-9.][0-9.]*$'
"""Regex for a string that looks like a UID, used as a fallback when a
transfer syntax name is not known.
"""

# {UID: (name, keyword)}
TRANSFER_SYNTAXES: Dict[str, Tuple[str, str]] = {
    '1.2.840.10008.1.2': (
        'Implicit VR Little Endian', 'ImplicitVRLittleEndian'
    ),
    '1.2.840.10008.1.2.1': (
        'Explicit VR Little Endian', 'ExplicitVRLittleEndian'
    ),
    '1.2.840.10008.1.2.1.99': (
        'Deflated Explicit VR Little Endian', 'DeflatedExplicitVRLittleEndian'
    ),
    '1.2.840.10008.1.2.2': (
        'Explicit VR Big Endian', 'ExplicitVRBigEndian'
    ),
    '1.2.840.10008.1.2.4.50': (
        'JPEG Baseline (Process 1)', 'JPEGBaseline'
    ),
    '1.2.840.10008.1.2.4.51': (
        'JPEG Extended (Process 2 and 4)', 'JPEGExtended'
    ),
    '1.2.840.10008.1.2.4.57': (
        'JPEG Lossless, Non-Hierarchical (Process 14)', 'JPEGLossless'
    ),
    '1.2.840.10008.1.2.4.70': (
        'JPEG Lossless, Non-Hierarchical, First-Order Prediction',
        'JPEGLosslessSV1'
    ),
    '1.2.840.10008.1.2.4.80': ('JPEG-LS Lossless', 'JPEGLS'),
    '1.2.840.10008.1.2.4.81': ('JPEG-LS Near Lossless', 'JPEGNLS'),
    '1.2.840.10008.1.2.4.90': (
        'JPEG 2000 Image Compression (Lossless Only)', 'JPEG2000Lossless'
    ),
    '1.2.840.10008.1.2.4.91': ('JPEG 2000 Image Compression', 'JPEG2000'),
    '1.2.840.10008.1.2.4.100': ('MPEG2 Main Profile / Main Level', 'MPEG2MPML'),
    '1.2.840.10008.1.2.4.101': ('MPEG2 Main Profile / High Level', 'MPEG2MPHL'),
    '1.2.840.10008.1.2.4.102': ('MPEG-4 AVC/H.264 High Profile', 'MPEG4HP41'),
    '1.2.840.10008.1.2.4.103': (
        'MPEG-4 AVC/H.264 BD-compatible High Profile', 'MPEG4HP41BD'
    ),
    '1.2.840.10008.1.2.4.104': (
        'MPEG-4 AVC/H.264 High Profile For 2D Video', 'MPEG4HP422D'
    ),
    '1.2.840.10008.1.2.4.105': (
        'MPEG-4 AVC/H.264 High Profile For 3D Video', 'MPEG4HP423D'
    ),
    '1.2.840.10008.1.2.4.106': (
        'MPEG-4 AVC/H.264 Stereo High Profile', 'MPEG4HP42ST'
    ),
    '1.2.840.10008.1.2.5': ('RLE Lossless', 'RLE'),
}

# Transfer syntaxes that aren't encapsulated
_NATIVE = {
    '1.2.840.10008.1.2', '1.2.840.10008.1.2.1', '1.2.840.10008.1.2.1.99',
    '1.2.840.10008.1.2.2',
}

_UID = TypeVar("_UID", bound="UID")


class UID(str):
    """Human friendly UIDs as a Python :class:`str` subclass.

    Examples
    --------

    >>> from dcmcore.uid import UID
    >>> uid = UID('1.2.840.10008.1.2.5')
    >>> uid.is_implicit_VR
    False
    >>> uid.is_little_endian
    True
    >>> uid.name
    'RLE Lossless'
    """
    def __new__(cls: Type[_UID], val: str) -> _UID:
        if isinstance(val, str):
            # UI values may be padded with a trailing NUL
            return super().__new__(cls, val.strip(" \x00"))

        raise TypeError("A UID must be created from a string")

    @property
    def is_transfer_syntax(self) -> bool:
        """Return ``True`` if a transfer syntax UID."""
        return str(self) in TRANSFER_SYNTAXES

    def _check_transfer_syntax(self) -> None:
        if not self.is_transfer_syntax:
            raise ValueError('UID is not a transfer syntax.')

    @property
    def is_implicit_VR(self) -> bool:
        """Return ``True`` if an implicit VR transfer syntax UID."""
        self._check_transfer_syntax()
        return self == ImplicitVRLittleEndian

    @property
    def is_little_endian(self) -> bool:
        """Return ``True`` if a little endian transfer syntax UID."""
        self._check_transfer_syntax()
        return self != ExplicitVRBigEndian

    @property
    def is_deflated(self) -> bool:
        """Return ``True`` if a deflated transfer syntax UID."""
        self._check_transfer_syntax()
        return self == DeflatedExplicitVRLittleEndian

    @property
    def is_encapsulated(self) -> bool:
        """Return ``True`` if an encapsulated transfer syntax UID."""
        self._check_transfer_syntax()
        return str(self) not in _NATIVE

    @property
    def name(self) -> str:
        """Return the transfer syntax name, or the UID itself if unknown."""
        if str(self) in TRANSFER_SYNTAXES:
            return TRANSFER_SYNTAXES[self][0]

        return str(self)

    @property
    def keyword(self) -> str:
        """Return the transfer syntax keyword, or ``''`` if unknown."""
        if str(self) in TRANSFER_SYNTAXES:
            return TRANSFER_SYNTAXES[self][1]

        return ''

    @property
    def is_valid(self) -> bool:
        """Return ``True`` if `self` is a valid UID, ``False`` otherwise."""
        return len(self) <= 64 and re.match(RE_VALID_UID, self) is not None

    @property
    def is_private(self) -> bool:
        """Return ``True`` if the UID isn't an officially registered DICOM
        UID.
        """
        return not self.startswith('1.2.840.10008')


ImplicitVRLittleEndian = UID('1.2.840.10008.1.2')
"""1.2.840.10008.1.2"""
ExplicitVRLittleEndian = UID('1.2.840.10008.1.2.1')
"""1.2.840.10008.1.2.1"""
DeflatedExplicitVRLittleEndian = UID('1.2.840.10008.1.2.1.99')
"""1.2.840.10008.1.2.1.99"""
ExplicitVRBigEndian = UID('1.2.840.10008.1.2.2')
"""1.2.840.10008.1.2.2"""
JPEGBaseline = UID('1.2.840.10008.1.2.4.50')
"""1.2.840.10008.1.2.4.50"""
RLELossless = UID('1.2.840.10008.1.2.5')
"""1.2.840.10008.1.2.5"""

DEFAULT_TRANSFER_SYNTAX = ImplicitVRLittleEndian

_NAMES: Dict[str, str] = {
    keyword: uid for uid, (_, keyword) in TRANSFER_SYNTAXES.items()
}
_NAMES["Default"] = DEFAULT_TRANSFER_SYNTAX


def uid_from_name(name: str) -> UID:
    """Return the transfer syntax UID for the symbolic `name`.

    Parameters
    ----------
    name : str
        A transfer syntax keyword such as ``"ExplicitVRBigEndian"``,
        ``"Default"`` or ``"RLE"``, or a literal UID.

    Returns
    -------
    UID
        The corresponding UID. A `name` that isn't known but consists only of
        digits and dots is returned unchanged as a :class:`UID`.

    Raises
    ------
    ValueError
        If `name` is neither a known name nor shaped like a UID.
    """
    if name in _NAMES:
        return UID(_NAMES[name])

    if re.match(RE_UID_SHAPE, name):
        return UID(name)

    raise ValueError(f"Unrecognized transfer syntax name '{name}'")


# A UUID derived root, see Part 5, Section B.2
DCMCORE_IMPLEMENTATION_UID = UID(
    f"2.25.{uuid.uuid5(uuid.NAMESPACE_URL, 'dcmcore-' + __version__).int}"
)
"""The (0002,0012) *Implementation Class UID* written by dcmcore."""
DCMCORE_IMPLEMENTATION_VERSION_NAME = f"DCMCORE_{__version__.replace('.', '')}"
"""The (0002,0013) *Implementation Version Name* written by dcmcore."""
