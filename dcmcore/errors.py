# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Module for dcmcore exception and warning classes"""


class DicomException(Exception):
    """Base class for all errors raised by dcmcore."""


class DecodingError(DicomException, EOFError):
    """Raised when the stream ends before a header, a declared-length value,
    an undefined-length value's delimiter or a run-length pair is complete.
    """


class DicomFormatError(DicomException, ValueError):
    """Raised when the encoded content is structurally invalid.

    e.g. an unexpected tag inside a sequence, an insane value length, pixel
    data frames that mix **OB** and **OW**.
    """


class EncodingError(DicomException, ValueError):
    """Raised when a value cannot be stored in or encoded for an attribute.

    e.g. a value longer than the maximum allowed for its VR when the VR does
    not permit truncation.
    """


class ValidationWarning(UserWarning):
    """Warning issued for invalid characters, lengths or format of a value."""


class InvalidDicomError(DicomException):
    """Exception that is raised when the the file does not appear to be DICOM.

    Usually raised when the "DICM" prefix is not present at position 128 in
    the file.

    To force reading the file (because maybe it is a DICOM file without
    a header), use ``dcmread(..., force=True)``.
    """

    def __init__(self, *args):
        if not args:
            args = ('The specified file is not a valid DICOM file.', )
        super().__init__(*args)
