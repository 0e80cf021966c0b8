# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Tests for dcmcore.pixels.multiframe"""

import pytest

from dcmcore.attribute import new_attribute
from dcmcore.errors import DicomFormatError
from dcmcore.pixels.multiframe import MultiFramePixelData
from dcmcore.tag import PixelDataTag


def ob_frame(value):
    return new_attribute(PixelDataTag, "OB", value)


def ow_frame(value):
    return new_attribute(PixelDataTag, "OW", value)


class TestMultiFramePixelData:
    def test_byte_frames(self):
        pixels = MultiFramePixelData(1, 3, 1, 3)
        for value in (b"\x01\x02\x03", b"\x04\x05\x06", b"\x07\x08\x09"):
            pixels.add_frame(ob_frame(value))

        assert pixels.has_byte_pixels
        assert not pixels.has_word_pixels
        attribute = pixels.get_pixel_data_attribute()
        assert "OB" == attribute.VR
        assert 9 == attribute.value_length
        assert bytes(range(1, 10)) == attribute.value

    def test_word_frames(self):
        pixels = MultiFramePixelData(1, 2, 1, 2)
        pixels.add_frame(ow_frame(b"\x01\x00\x02\x00"))
        pixels.add_frame(ow_frame(b"\x03\x00\x04\x01"))

        assert pixels.has_word_pixels
        attribute = pixels.get_pixel_data_attribute()
        assert "OW" == attribute.VR
        assert b"\x01\x00\x02\x00\x03\x00\x04\x01" == attribute.value

    def test_short_frame_zero_filled(self):
        """Test a frame with fewer values leaves the rest of it zero."""
        pixels = MultiFramePixelData(2, 2, 1, 2)
        pixels.add_frame(ob_frame(b"\x01\x02"))
        pixels.add_frame(ob_frame(b"\x03\x04\x05\x06"))
        attribute = pixels.get_pixel_data_attribute()
        assert b"\x01\x02\x00\x00\x03\x04\x05\x06" == attribute.value

    def test_missing_frames_zero_filled(self):
        pixels = MultiFramePixelData(1, 2, 1, 2)
        pixels.add_frame(ob_frame(b"\x01\x02"))
        assert 1 == pixels.frames_added
        assert b"\x01\x02\x00\x00" == pixels.get_pixel_data_attribute().value

    def test_no_frames(self):
        pixels = MultiFramePixelData(1, 2, 1, 2)
        assert pixels.get_pixel_data_attribute() is None
        assert not pixels.has_byte_pixels
        assert not pixels.has_word_pixels

    def test_mixed_vr_raises(self):
        """Test OB and OW frames can't be mixed."""
        pixels = MultiFramePixelData(1, 2, 1, 2)
        pixels.add_frame(ob_frame(b"\x01\x02"))
        with pytest.raises(DicomFormatError, match="Cannot mix OB and OW"):
            pixels.add_frame(ow_frame(b"\x01\x00\x02\x00"))

        pixels = MultiFramePixelData(1, 2, 1, 2)
        pixels.add_frame(ow_frame(b"\x01\x00\x02\x00"))
        with pytest.raises(DicomFormatError, match="Cannot mix OB and OW"):
            pixels.add_frame(ob_frame(b"\x01\x02"))

    def test_missing_raises(self):
        with pytest.raises(DicomFormatError, match="Missing Pixel Data"):
            MultiFramePixelData(1, 1, 1, 1).add_frame(None)

    def test_wrong_vr_raises(self):
        frame = new_attribute(PixelDataTag, "UN", b"\x01\x02")
        with pytest.raises(DicomFormatError, match="Incorrect Pixel Data VR 'UN'"):
            MultiFramePixelData(1, 2, 1, 1).add_frame(frame)

    def test_too_many_frames_raises(self):
        pixels = MultiFramePixelData(1, 2, 1, 1)
        pixels.add_frame(ob_frame(b"\x01\x02"))
        with pytest.raises(DicomFormatError, match="more than 1 frames"):
            pixels.add_frame(ob_frame(b"\x03\x04"))

    def test_oversized_frame_raises(self):
        pixels = MultiFramePixelData(1, 2, 1, 2)
        with pytest.raises(DicomFormatError, match="frames are only 2 values"):
            pixels.add_frame(ob_frame(b"\x01\x02\x03\x04"))
        assert 0 == pixels.frames_added
