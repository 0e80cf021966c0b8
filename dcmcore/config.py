# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""dcmcore configuration options."""

# doc strings following items are picked up by sphinx for documentation

import logging


defer_size = None
"""Default threshold above which the values of bulk data attributes
(**OB**, **OD**, **OF**, **OL**, **OV**, **OW** and **UN**) are left on disk
and only read when first accessed.

May be an :class:`int` number of bytes, a :class:`str` such as ``"512 KB"``
or ``"2 MB"``, or ``None`` (the default) to always read values immediately.
"""

enforce_valid_values = False
"""Raise exceptions if any value is not allowed by DICOM Standard.

When ``True``, setting a value with invalid characters raises
:class:`~dcmcore.errors.EncodingError` (values that are too long always
do, unless the VR allows truncation) and a mismatch between the expected and
the actual VR encoding of a data set raises instead of warning.

Default ``False``.
"""

replace_un_with_known_vr = True
""" If ``True``, and the VR of a known attribute is encoded as **UN** in
an explicit encoding, the VR is changed to the known value.
Can be set to ``False`` where the content of the tag shown as **UN** is
not DICOM conformant and would lead to a failure if accessing it.
"""

maximum_short_vr_value_length = 0xFFFF
"""The largest value length accepted on read for a VR whose explicit VR
encoding uses a 16-bit length field. A few attributes that are known to
exceed it in the wild (such as *Contour Data*) are exempt.
"""

# Logging system and debug function to change logging level
logger = logging.getLogger('dcmcore')
logger.addHandler(logging.NullHandler())

debugging: bool


def debug(debug_on=True, default_handler=True):
    """Turn on/off debugging of DICOM file reading and writing.

    When debugging is on, file location and details about the attributes read
    at that location are logged to the 'dcmcore' logger using Python's
    :mod:`logging` module.

    Parameters
    ----------
    debug_on : bool, optional
        If ``True`` (default) then turn on debugging, ``False`` to turn off.
    default_handler : bool, optional
        If ``True`` (default) then use :class:`logging.StreamHandler` as the
        handler for log messages.
    """
    global logger, debugging

    if default_handler:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if debug_on:
        logger.setLevel(logging.DEBUG)
        debugging = True
    else:
        logger.setLevel(logging.WARNING)
        debugging = False


# force level=WARNING, in case logging default is set differently
debug(False, False)
