# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Test for encaps.py"""

import logging

import pytest

from dcmcore.encaps import (
    EncapsulatedPixelData, encapsulate, encapsulate_frames,
    generate_pixel_data_fragment, generate_pixel_data_frame,
    get_frame_offsets, itemise_fragment, read_encapsulated_pixel_data
)
from dcmcore.errors import DecodingError, DicomFormatError
from dcmcore.tests._helpers import buffer, ITEM, SEQUENCE_DELIMITER


class TestGetFrameOffsets:
    """Test encaps.get_frame_offsets"""
    def test_bad_tag(self):
        """Test raises exception if no item tag."""
        fp = buffer(data=b"\xfe\xff\x00\xe1\x00\x00\x00\x00")
        with pytest.raises(DicomFormatError, match="Basic Offset Table"):
            get_frame_offsets(fp)

    def test_bad_length_multiple(self):
        """Test raises exception if the item length is not a multiple of 4."""
        fp = buffer(data=ITEM + b"\x0A\x00\x00\x00" + b"\x01" * 10)
        with pytest.raises(DicomFormatError, match="not a multiple of 4"):
            get_frame_offsets(fp)

    def test_zero_length(self):
        """Test reading BOT with zero length"""
        fp = buffer(data=ITEM + b"\x00\x00\x00\x00")
        assert [] == get_frame_offsets(fp)
        assert 8 == fp.tell()

    def test_multi_frame(self):
        """Test reading multi-frame BOT item"""
        fp = buffer(
            data=(
                ITEM + b"\x0C\x00\x00\x00"
                b"\x00\x00\x00\x00\x66\x13\x00\x00\xF4\x25\x00\x00"
            )
        )
        assert [0, 4966, 9716] == get_frame_offsets(fp)

    def test_not_little_endian(self):
        fp = buffer(is_little_endian=False, data=ITEM + b"\x00" * 4)
        with pytest.raises(ValueError, match="'fp.is_little_endian' must be"):
            get_frame_offsets(fp)


class TestGeneratePixelDataFragment:
    """Test encaps.generate_pixel_data_fragment"""
    def test_item_undefined_length(self):
        """Test exception raised if item length undefined."""
        fp = buffer(data=ITEM + b"\xFF\xFF\xFF\xFF\x00\x00\x00\x01")
        fragments = generate_pixel_data_fragment(fp)
        with pytest.raises(DicomFormatError, match="Undefined item length"):
            next(fragments)

    def test_item_sequence_delimiter(self, caplog):
        """Test the sequence delimiter ends the fragments."""
        fp = buffer(
            data=(
                ITEM + b"\x04\x00\x00\x00\x01\x00\x00\x00"
                + b"\xfe\xff\xdd\xe0\x04\x00\x00\x00"
                + ITEM + b"\x04\x00\x00\x00\x02\x00\x00\x00"
            )
        )
        with caplog.at_level(logging.WARNING, logger="dcmcore"):
            fragments = list(generate_pixel_data_fragment(fp))

        assert [b"\x01\x00\x00\x00"] == fragments
        assert "Expected 0x00000000 after delimiter" in caplog.text

    def test_item_bad_tag(self):
        """Test exception raised if item has unexpected tag"""
        fp = buffer(
            data=(
                ITEM + b"\x04\x00\x00\x00\x01\x00\x00\x00"
                + b"\x10\x00\x10\x00\x00\x00\x00\x00"
            )
        )
        fragments = generate_pixel_data_fragment(fp)
        assert b"\x01\x00\x00\x00" == next(fragments)
        with pytest.raises(DicomFormatError, match=r"Unexpected tag '\(0010,0010\)'"):
            next(fragments)

    def test_end_of_data(self):
        """Test the end of the data ends the fragments."""
        fp = buffer(data=ITEM + b"\x02\x00\x00\x00\x01\x02")
        assert [b"\x01\x02"] == list(generate_pixel_data_fragment(fp))

    def test_end_of_data_requires_delimiter(self):
        fp = buffer(data=ITEM + b"\x02\x00\x00\x00\x01\x02")
        with pytest.raises(DecodingError, match="before the Sequence Delimiter"):
            list(generate_pixel_data_fragment(fp, require_delimiter=True))

    def test_truncated_fragment(self):
        fp = buffer(data=ITEM + b"\x08\x00\x00\x00\x01\x02")
        with pytest.raises(DecodingError, match="Unexpected end of file"):
            list(generate_pixel_data_fragment(fp))


class TestReadEncapsulatedPixelData:
    def test_read(self):
        data = (
            ITEM + b"\x04\x00\x00\x00\x00\x00\x00\x00"
            + ITEM + b"\x02\x00\x00\x00\x01\x02"
            + ITEM + b"\x02\x00\x00\x00\x03\x04"
            + SEQUENCE_DELIMITER
            + b"\x10\x00\x10\x00"
        )
        fp = buffer(data=data)
        pixel_data = read_encapsulated_pixel_data(fp)
        assert [0] == pixel_data.offsets
        assert [b"\x01\x02", b"\x03\x04"] == pixel_data.fragments
        # positioned after the delimiter
        assert len(data) - 4 == fp.tell()


class TestEncapsulatedPixelData:
    def test_equality(self):
        assert EncapsulatedPixelData([0], [b"\x01\x02"]) == (
            EncapsulatedPixelData([0], [b"\x01\x02"])
        )
        assert EncapsulatedPixelData([], [b"\x01\x02"]) != (
            EncapsulatedPixelData([0], [b"\x01\x02"])
        )
        assert EncapsulatedPixelData([], []) != b""

    def test_len_repr(self):
        pixel_data = EncapsulatedPixelData([0, 10], [b"\x01\x02", b"\x03\x04"])
        assert 2 == len(pixel_data)
        assert "EncapsulatedPixelData(2 offsets, 2 fragments)" == repr(pixel_data)

    def test_encoded_length(self):
        pixel_data = EncapsulatedPixelData([0], [b"\x01\x02\x03", b""])
        assert 8 + 4 + 8 + 4 + 8 == pixel_data.encoded_length

    def test_frames_without_offsets(self):
        """Test each fragment is a frame without a Basic Offset Table."""
        pixel_data = EncapsulatedPixelData([], [b"\x01\x02", b"\x03\x04"])
        assert [b"\x01\x02", b"\x03\x04"] == list(pixel_data.frames())

    def test_frames_with_offsets(self):
        """Test fragments are grouped into frames using the offsets."""
        fragments = [b"\x01\x02", b"\x03\x04", b"\x05\x06"]
        pixel_data = EncapsulatedPixelData([0, 20], fragments)
        assert [b"\x01\x02\x03\x04", b"\x05\x06"] == list(pixel_data.frames())

    def test_write(self):
        fp = buffer()
        EncapsulatedPixelData([0], [b"\x01\x02\x03"]).write(fp)
        expected = (
            ITEM + b"\x04\x00\x00\x00\x00\x00\x00\x00"
            + ITEM + b"\x04\x00\x00\x00\x01\x02\x03\x00"
            + SEQUENCE_DELIMITER
        )
        assert expected == fp.getvalue()


class TestGeneratePixelDataFrames:
    def test_multi_frame_one_to_one(self):
        """Test a multi-frame image where each frame is one fragment"""
        data = encapsulate([b"\x01\x00\x00\x00", b"\x02\x00\x00\x00"])
        frames = generate_pixel_data_frame(data)
        assert b"\x01\x00\x00\x00" == next(frames)
        assert b"\x02\x00\x00\x00" == next(frames)
        pytest.raises(StopIteration, next, frames)

    def test_multi_frame_three_to_two(self):
        """Test a multi-frame image with fragments split over frames"""
        data = (
            ITEM + b"\x08\x00\x00\x00\x00\x00\x00\x00\x18\x00\x00\x00"
            + ITEM + b"\x04\x00\x00\x00\x01\x00\x00\x00"
            + ITEM + b"\x04\x00\x00\x00\x02\x00\x00\x00"
            + ITEM + b"\x04\x00\x00\x00\x03\x00\x00\x00"
        )
        frames = list(generate_pixel_data_frame(data))
        assert [
            b"\x01\x00\x00\x00\x02\x00\x00\x00", b"\x03\x00\x00\x00"
        ] == frames


class TestItemiseFragment:
    def test_item_even(self):
        assert ITEM + b"\x02\x00\x00\x00\x01\x02" == itemise_fragment(b"\x01\x02")

    def test_item_odd(self):
        """Test an odd length fragment is padded with a null."""
        assert ITEM + b"\x04\x00\x00\x00\x01\x02\x03\x00" == itemise_fragment(
            b"\x01\x02\x03"
        )


class TestEncapsulate:
    def test_encapsulate_single_fragment_per_frame_bot(self):
        """Test encapsulating a multi-frame image with a BOT"""
        frames = [b"\x01" * 10, b"\x02" * 11]
        data = encapsulate(frames)
        fp = buffer(data=data)
        assert [0, 18] == get_frame_offsets(fp)
        assert [b"\x01" * 10, b"\x02" * 11 + b"\x00"] == list(
            generate_pixel_data_fragment(fp, require_delimiter=True)
        )
        assert data.endswith(SEQUENCE_DELIMITER)

    def test_encapsulate_no_bot(self):
        data = encapsulate([b"\x01\x02"], has_bot=False)
        assert data.startswith(ITEM + b"\x00\x00\x00\x00" + ITEM)

    def test_encapsulate_frames(self):
        pixel_data = encapsulate_frames([b"\x01\x02\x03", b"\x04\x05"])
        assert [0, 12] == pixel_data.offsets
        assert [b"\x01\x02\x03\x00", b"\x04\x05"] == pixel_data.fragments
        assert [b"\x01\x02\x03\x00", b"\x04\x05"] == list(pixel_data.frames())
