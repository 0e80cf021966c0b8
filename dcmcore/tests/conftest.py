# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Fixtures used in different tests."""

import pytest

from dcmcore import config
from dcmcore.attribute import new_attribute
from dcmcore.attributelist import AttributeList


@pytest.fixture
def enforce_valid_values():
    value = config.enforce_valid_values
    config.enforce_valid_values = True
    yield
    config.enforce_valid_values = value


@pytest.fixture
def keep_un_values():
    value = config.replace_un_with_known_vr
    config.replace_un_with_known_vr = False
    yield
    config.replace_un_with_known_vr = value


@pytest.fixture
def no_defer_size():
    value = config.defer_size
    config.defer_size = None
    yield
    config.defer_size = value


@pytest.fixture
def image_list():
    """Return a small 8-bit monochrome image data set."""
    attributes = [
        new_attribute("SOPClassUID", value="1.2.840.10008.5.1.4.1.1.7"),
        new_attribute("SOPInstanceUID", value="1.2.3.4.5"),
        new_attribute("Modality", value="OT"),
        new_attribute("PatientName", value="Doe^John"),
        new_attribute("PatientID", value="12345"),
        new_attribute("SamplesPerPixel", value=1),
        new_attribute("PhotometricInterpretation", value="MONOCHROME2"),
        new_attribute("Rows", value=2),
        new_attribute("Columns", value=3),
        new_attribute("BitsAllocated", value=8),
        new_attribute("BitsStored", value=8),
        new_attribute("HighBit", value=7),
        new_attribute("PixelRepresentation", value=0),
        new_attribute("PixelData", "OB", bytes(range(6))),
    ]
    return AttributeList(attributes)
