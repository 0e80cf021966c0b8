# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Unit tests for the dcmcore.attribute module."""

from io import BytesIO

import numpy as np
import pytest

from dcmcore.attribute import (
    Attribute, StringAttribute, BinaryNumericAttribute, AttributeTagAttribute,
    OtherAttribute, SequenceAttribute, RawAttribute, DeferredValue,
    attribute_class, new_attribute, attribute_from_raw, resolve_ambiguous_vr
)
from dcmcore.attributelist import AttributeList
from dcmcore.encaps import EncapsulatedPixelData
from dcmcore.errors import EncodingError, DicomFormatError, ValidationWarning
from dcmcore.sequence import Sequence, SequenceItem
from dcmcore.tag import Tag
from dcmcore.tests._helpers import buffer


def raw(tag, VR, value, is_implicit_VR=False, is_little_endian=True):
    return RawAttribute(
        Tag(tag), VR, len(value), value, 0, is_implicit_VR, is_little_endian
    )


class TestNewAttribute:
    """Test new_attribute() and the attribute classes."""
    def test_class_by_VR(self):
        """Test the class is chosen by the VR's structural kind."""
        assert isinstance(new_attribute("PatientName"), StringAttribute)
        assert isinstance(new_attribute("PatientComments"), StringAttribute)
        assert isinstance(new_attribute("SOPClassUID"), StringAttribute)
        assert isinstance(new_attribute("Rows"), BinaryNumericAttribute)
        assert isinstance(
            new_attribute("FrameIncrementPointer"), AttributeTagAttribute
        )
        assert isinstance(new_attribute("PixelData", "OB"), OtherAttribute)
        assert isinstance(
            new_attribute("ReferencedSeriesSequence"), SequenceAttribute
        )

    def test_VR_from_dictionary(self):
        assert "PN" == new_attribute(0x00100010).VR
        assert "US or SS" == new_attribute("SmallestImagePixelValue").VR

    def test_private_and_unknown(self):
        """Test private creators are LO and unknown tags UN."""
        assert "LO" == new_attribute(0x00090010).VR
        assert "UN" == new_attribute(0x00091001).VR
        assert "UN" == new_attribute(0x00100011).VR

    def test_wrong_class_raises(self):
        with pytest.raises(ValueError, match="cannot hold a value with VR"):
            StringAttribute(0x00280010, "US")

    def test_attribute_class(self):
        assert StringAttribute is attribute_class("DA")
        assert BinaryNumericAttribute is attribute_class("US or SS")
        assert OtherAttribute is attribute_class("OB or OW")
        assert OtherAttribute is attribute_class("UN")

    def test_VR_fixed(self):
        """Test the VR can't be changed."""
        attribute = new_attribute("PatientName")
        with pytest.raises(AttributeError):
            attribute.VR = "LO"


class TestStringAttribute:
    """Test StringAttribute values, validation and repair."""
    def test_multiple_values(self):
        attribute = new_attribute("ImageType", value="ORIGINAL\\PRIMARY")
        assert ["ORIGINAL", "PRIMARY"] == attribute.values
        assert 2 == attribute.VM
        assert ["ORIGINAL", "PRIMARY"] == attribute.value

    def test_text_not_split(self):
        attribute = new_attribute("PatientComments", value="A\\B")
        assert ["A\\B"] == attribute.values

    def test_single_value(self):
        attribute = new_attribute("PatientID", value="12345")
        assert "12345" == attribute.value
        assert 1 == attribute.VM
        assert not attribute.is_empty

    def test_empty(self):
        attribute = new_attribute("PatientID")
        assert attribute.value is None
        assert attribute.is_empty
        assert [] == attribute.get_string_values()
        assert "N/A" == attribute.get_single_string_value_or_default("N/A")

    def test_add_and_remove(self):
        attribute = new_attribute("ImageType", value="ORIGINAL")
        attribute.add_value("PRIMARY")
        assert "ORIGINAL\\PRIMARY" == (
            attribute.get_delimited_string_values_or_default()
        )
        attribute.remove_values()
        assert attribute.is_empty

    def test_truncated_with_warning(self):
        """Test a value too long for a truncatable VR is truncated."""
        attribute = new_attribute("PatientID")
        with pytest.warns(ValidationWarning, match="truncating"):
            attribute.set_values("A" * 70)
        assert "A" * 64 == attribute.value

    def test_too_long_raises(self):
        """Test a value too long for a non-truncatable VR raises."""
        with pytest.raises(EncodingError, match="exceeds the maximum length"):
            new_attribute("PatientAge", value="0035Y")
        with pytest.raises(EncodingError):
            new_attribute("StudyDate", value="2020-01-01")

    def test_invalid_characters_allowed(self):
        attribute = new_attribute("Modality", value="mr")
        assert not attribute.is_valid
        assert not attribute.is_character_in_value_valid("m")
        assert attribute.is_character_in_value_valid("M")
        assert attribute.is_character_in_value_valid("_")

    def test_invalid_characters_enforced(self, enforce_valid_values):
        with pytest.raises(EncodingError, match="Invalid character"):
            new_attribute("Modality", value="mr")

    def test_numbers_as_strings(self):
        """Test numbers can be used for IS and DS."""
        assert "12" == new_attribute("InstanceNumber", value=12).value
        assert "1.5" == new_attribute("SliceThickness", value=1.5).value
        assert "12" == new_attribute("InstanceNumber", value=12.0).value
        with pytest.raises(EncodingError, match="is not an integer"):
            new_attribute("InstanceNumber", value=1.5)

    def test_long_float_DS(self):
        value = new_attribute("SliceThickness", value=1 / 3).value
        assert len(value) <= 16
        assert value.startswith("0.33333")

    def test_bad_type_raises(self):
        with pytest.raises(TypeError):
            new_attribute("PatientID", value=True)
        with pytest.raises(TypeError):
            new_attribute("PatientID", value=1.5)

    def test_accessors(self):
        attribute = new_attribute("ImagePositionPatient", value="1.5\\-2\\3")
        assert [1.5, -2.0, 3.0] == attribute.get_float_values()
        assert [1, -2, 3] == attribute.get_integer_values()
        assert [1.5, -2.0, 3.0] == attribute.get_double_values()
        with pytest.raises(TypeError):
            attribute.get_short_values()

    def test_bad_number_raises(self):
        attribute = new_attribute("InstanceNumber", value="A")
        with pytest.raises(DicomFormatError, match="cannot be read as"):
            attribute.get_integer_values()

    def test_padding_kept_until_read(self):
        """Test a decoded value keeps its spaces but the accessors strip
        them.
        """
        attribute = attribute_from_raw(raw(0x00100020, "LO", b" ID1  "))
        assert [" ID1 "] == attribute.values
        assert ["ID1"] == attribute.get_string_values()
        assert b" ID1 " == attribute.encode_value()

    def test_validate(self):
        attribute = attribute_from_raw(raw(0x00101010, "AS", b"35Y "))
        assert not attribute.are_values_well_formed()
        with pytest.warns(ValidationWarning, match="Invalid value for VR AS"):
            messages = attribute.validate()
        assert 1 == len(messages)
        assert [] == new_attribute("PatientAge", value="035Y").validate()

    def test_repair_age(self):
        """Test an age string is repaired only by stripping padding."""
        attribute = attribute_from_raw(raw(0x00101010, "AS", b" 035Y "))
        assert attribute.repair_values()
        assert ["035Y"] == attribute.values
        assert attribute.is_valid

        attribute = attribute_from_raw(raw(0x00101010, "AS", b"35Y "))
        assert not attribute.repair_values()
        assert ["35Y"] == attribute.values

    def test_repair_date(self):
        """Test the separators are removed from a date."""
        attribute = attribute_from_raw(raw(0x00080020, "DA", b"2020-01-01"))
        assert not attribute.is_valid
        assert attribute.repair_values()
        assert ["20200101"] == attribute.values

    def test_uid_repval(self):
        """Test a transfer syntax UID is shown by name."""
        attribute = new_attribute(0x00020010, value="1.2.840.10008.1.2.1")
        assert "Explicit VR Little Endian" == attribute.repval
        assert "'1.2.3'" == new_attribute("SOPClassUID", value="1.2.3").repval


class TestBinaryNumericAttribute:
    def test_values(self):
        attribute = new_attribute("Rows", value=512)
        assert 512 == attribute.value
        assert ["512"] == attribute.get_string_values()
        assert [512] == attribute.get_integer_values()
        assert [512.0] == attribute.get_float_values()

    def test_out_of_range_raises(self):
        with pytest.raises(EncodingError, match="out of range for VR US"):
            new_attribute("Rows", value=70000)
        with pytest.raises(EncodingError, match="out of range"):
            new_attribute("Rows", value=-1)

    def test_long_range(self):
        """Test UL and SL are limited to 32-bit values."""
        assert 2**32 - 1 == new_attribute(0x00020000, "UL", 2**32 - 1).value
        with pytest.raises(EncodingError, match="out of range for VR UL"):
            new_attribute(0x00020000, "UL", 2**40)
        assert -2**31 == new_attribute(0x00091001, "SL", -2**31).value
        with pytest.raises(EncodingError, match="out of range for VR SL"):
            new_attribute(0x00091001, "SL", 2**31)
        assert b"\x07\x00\x00\x00" == (
            new_attribute(0x00020000, "UL", 7).encode_value(True)
        )

    def test_not_integer_raises(self):
        with pytest.raises(EncodingError, match="is not an integer"):
            new_attribute("Rows", value=1.5)

    def test_bad_type_raises(self):
        with pytest.raises(TypeError):
            new_attribute("Rows", value="512")
        with pytest.raises(TypeError):
            new_attribute("Rows", value=True)

    def test_float(self):
        attribute = new_attribute(0x00186054, value=[1, 2.5])
        assert [1.0, 2.5] == attribute.values

    def test_encode(self):
        attribute = new_attribute("Rows", value=[1, 512])
        assert b"\x01\x00\x00\x02" == attribute.encode_value(True)
        assert b"\x00\x01\x02\x00" == attribute.encode_value(False)
        assert 4 == attribute.value_length

    def test_short_values(self):
        attribute = new_attribute(0x00280106, "SS", [-1, 2])
        values = attribute.get_short_values()
        assert np.int16 == values.dtype
        assert [-1, 2] == values.tolist()

    def test_ambiguous_not_encoded(self):
        """Test an ambiguous VR must be resolved before encoding."""
        attribute = new_attribute("SmallestImagePixelValue", value=-1)
        assert -1 == attribute.value
        with pytest.raises(EncodingError, match="must be resolved"):
            attribute.encode_value()


class TestAttributeTagAttribute:
    def test_values(self):
        attribute = new_attribute(
            "FrameIncrementPointer", value=["PatientName", 0x00100020]
        )
        assert [0x00100010, 0x00100020] == attribute.get_integer_values()
        assert ["(0010,0010)", "(0010,0020)"] == attribute.get_string_values()
        assert b"\x10\x00\x10\x00\x10\x00\x20\x00" == attribute.encode_value()

    def test_bad_value_raises(self):
        with pytest.raises(EncodingError, match="invalid value for VR AT"):
            new_attribute("FrameIncrementPointer", value="NotAKeyword")


class TestOtherAttribute:
    """Test OtherAttribute bulk values."""
    def test_bytes(self):
        attribute = new_attribute("PixelData", "OW", b"\x01\x02\x03\x04")
        assert b"\x01\x02\x03\x04" == attribute.value
        assert 1 == attribute.VM
        assert 4 == attribute.value_length
        assert [0x0201, 0x0403] == attribute.get_short_values().tolist()
        assert [0x0201, 0x0403] == attribute.get_integer_values()

    def test_big_endian_encoding(self):
        attribute = new_attribute("PixelData", "OW", b"\x01\x02\x03\x04")
        assert b"\x02\x01\x04\x03" == attribute.encode_value(False)
        assert b"\x01\x02\x03\x04" == attribute.get_byte_values()

    def test_array(self):
        """Test an array is stored as little endian bytes."""
        arr = np.array([1, 2], dtype=">u2")
        attribute = new_attribute("PixelData", "OW", arr)
        assert b"\x01\x00\x02\x00" == attribute.value

    def test_float_values(self):
        attribute = new_attribute(
            "FloatPixelData", value=np.array([1.5], dtype="<f4")
        )
        assert [1.5] == attribute.get_float_values()

    def test_bad_length_raises(self):
        attribute = new_attribute("PixelData", "OW", b"\x01\x02\x03")
        with pytest.raises(DicomFormatError, match="odd length"):
            attribute.get_short_values()
        with pytest.raises(DicomFormatError, match="multiple of 2"):
            attribute.get_integer_values()

    def test_bad_type_raises(self):
        attribute = new_attribute("PixelData", "OB")
        with pytest.raises(TypeError):
            attribute.set_values([1, 2])
        with pytest.raises(TypeError, match="single bulk value"):
            attribute.add_value(b"\x00")

    def test_padded_length(self):
        attribute = new_attribute("PixelData", "OB", b"\x01\x02\x03")
        assert 3 == attribute.value_length
        assert 4 == attribute.padded_value_length

    def test_encapsulated(self):
        value = EncapsulatedPixelData([0], [b"\x01\x02"])
        attribute = new_attribute("PixelData", "OB", value)
        assert attribute.is_encapsulated
        assert attribute.is_undefined_length
        assert 0xFFFFFFFF == attribute.value_length
        assert b"\x01\x02" == attribute.get_byte_values()
        with pytest.raises(EncodingError, match="written as Items"):
            attribute.encode_value()

    def test_undefined_length_not_encapsulated_raises(self):
        attribute = new_attribute(0x00281201, "OW", b"\x00\x00")
        attribute.is_undefined_length = True
        fp = buffer()
        with pytest.raises(EncodingError, match="Only encapsulated"):
            attribute.write(fp)

    def test_deferred(self):
        """Test a deferred value is read on first access."""
        data = b"\x00\x01\x02\x03\x04\x05\x06\x07"
        fp = BytesIO(data)
        deferred = DeferredValue(fp, 2, 4, True)
        attribute = OtherAttribute(
            0x00281201, "OW", deferred, already_converted=True
        )
        assert attribute.is_deferred
        assert 4 == attribute.value_length
        assert "Deferred read: 4 bytes" == attribute.repval
        assert b"\x02\x03\x04\x05" == attribute.value
        assert not attribute.is_deferred

    def test_deferred_big_endian(self):
        fp = BytesIO(b"\x00\x01\x02\x03")
        deferred = DeferredValue(fp, 0, 4, False)
        attribute = OtherAttribute(
            0x00281201, "OW", deferred, already_converted=True
        )
        assert b"\x01\x00\x03\x02" == attribute.value

    def test_repval(self):
        assert "Array of 20 bytes" == (
            new_attribute("PixelData", "OB", b"\x00" * 20).repval
        )
        assert "b'\\x01'" == new_attribute("PixelData", "OB", b"\x01").repval


class TestSequenceAttribute:
    def test_add_item(self):
        attribute = new_attribute("ReferencedSeriesSequence")
        assert attribute.is_empty
        item = attribute.add_item(
            AttributeList([new_attribute("PatientID", value="ID1")])
        )
        assert isinstance(item, SequenceItem)
        assert 1 == attribute.number_of_items
        assert 1 == attribute.VM
        assert isinstance(attribute.value, Sequence)
        assert 0xFFFFFFFF == attribute.value_length

    def test_encode_raises(self):
        attribute = new_attribute("ReferencedSeriesSequence")
        with pytest.raises(EncodingError, match="written as Items"):
            attribute.encode_value()


class TestDisplay:
    def test_str(self):
        attribute = new_attribute("PatientName", value="Doe^John")
        assert str(attribute).startswith("(0010,0010) Patient's Name")
        assert "PN: 'Doe^John'" in str(attribute)

    def test_keyword_and_name(self):
        attribute = new_attribute("PatientName")
        assert "PatientName" == attribute.keyword
        assert "Patient's Name" == attribute.name
        assert "" == new_attribute(0x00100011, "LO").keyword

    def test_private_description(self):
        """Test a known private attribute is named from its creator."""
        attribute = new_attribute(0x00091001, "LO", "x")
        assert "Private tag data" == attribute.description()
        attribute.private_creator = "GEMS_IDEN_01"
        assert "[Full Fidelity]" == attribute.description()
        assert "Private Creator" == new_attribute(0x00090010).description()

    def test_group_length(self):
        assert "Group Length" == new_attribute(0x00100000, "UL").description()


class TestEquality:
    def test_equal(self):
        assert new_attribute("PatientID", value="A") == (
            new_attribute("PatientID", value="A")
        )
        assert new_attribute("PatientID", value="A") != (
            new_attribute("PatientID", value="B")
        )
        assert new_attribute("PatientID", value="A") != (
            new_attribute(0x00100020, "SH", "A")
        )

    def test_not_implemented(self):
        assert new_attribute("PatientID") != "PatientID"


class TestResolveAmbiguousVR:
    """Test resolve_ambiguous_vr()."""
    def test_not_ambiguous(self):
        assert "US" == resolve_ambiguous_vr(Tag(0x00280010), "US")

    def test_pixel_representation(self):
        attribute_list = AttributeList(
            [new_attribute("PixelRepresentation", value=1)]
        )
        tag = Tag(0x00280106)
        assert "SS" == resolve_ambiguous_vr(tag, "US or SS", attribute_list)
        attribute_list["PixelRepresentation"].set_values(0)
        assert "US" == resolve_ambiguous_vr(tag, "US or SS", attribute_list)
        assert "US" == resolve_ambiguous_vr(tag, "US or SS")

    def test_pixel_data(self):
        attribute_list = AttributeList([new_attribute("BitsAllocated", value=8)])
        tag = Tag(0x7FE00010)
        assert "OB" == resolve_ambiguous_vr(
            tag, "OB or OW", attribute_list, is_implicit_VR=False
        )
        assert "OW" == resolve_ambiguous_vr(
            tag, "OB or OW", attribute_list, is_implicit_VR=True
        )
        attribute_list["BitsAllocated"].set_values(16)
        assert "OW" == resolve_ambiguous_vr(
            tag, "OB or OW", attribute_list, is_implicit_VR=False
        )

    def test_lut_data(self):
        tag = Tag(0x00283006)
        assert "OW" == resolve_ambiguous_vr(tag, "US or OW", None, True)
        assert "US" == resolve_ambiguous_vr(tag, "US or OW", None, False)


class TestAttributeFromRaw:
    """Test attribute_from_raw()."""
    def test_implicit_VR_from_dictionary(self):
        attribute = attribute_from_raw(
            raw(0x00100020, None, b"ID1 ", is_implicit_VR=True)
        )
        assert "LO" == attribute.VR
        assert "ID1" == attribute.value

    def test_unknown_implicit_tag(self):
        """Test an unknown tag read as implicit VR is UN."""
        with pytest.warns(UserWarning, match="setting VR to 'UN'"):
            attribute = attribute_from_raw(
                raw(0x00100011, None, b"ab", is_implicit_VR=True)
            )
        assert "UN" == attribute.VR
        assert b"ab" == attribute.value

    def test_unknown_implicit_tag_enforced(self, enforce_valid_values):
        with pytest.raises(KeyError, match="can't look up VR"):
            attribute_from_raw(
                raw(0x00100011, None, b"ab", is_implicit_VR=True)
            )

    def test_implicit_group_length(self):
        attribute = attribute_from_raw(
            raw(0x00100000, None, b"\x04\x00\x00\x00", is_implicit_VR=True)
        )
        assert "UL" == attribute.VR
        assert 4 == attribute.value

    def test_un_replaced(self):
        """Test an explicit UN value is decoded with the dictionary VR."""
        attribute = attribute_from_raw(raw(0x00100020, "UN", b"ID1 "))
        assert "LO" == attribute.VR
        assert "ID1" == attribute.value

    def test_un_kept(self, keep_un_values):
        attribute = attribute_from_raw(raw(0x00100020, "UN", b"ID1 "))
        assert "UN" == attribute.VR
        assert b"ID1 " == attribute.value

    def test_private_VR(self):
        """Test the VR of a known private tag comes from its creator."""
        attribute_list = AttributeList(
            [new_attribute(0x00090010, value="GEMS_IDEN_01")]
        )
        attribute = attribute_from_raw(
            raw(0x00091001, None, b"ABCD", is_implicit_VR=True),
            attribute_list=attribute_list
        )
        assert "LO" == attribute.VR
        assert "GEMS_IDEN_01" == attribute.private_creator
        assert "[Full Fidelity]" == attribute.description()

        attribute = attribute_from_raw(
            raw(0x00091001, None, b"ABCD", is_implicit_VR=True)
        )
        assert "UN" == attribute.VR

    def test_ambiguous_resolved(self):
        attribute_list = AttributeList(
            [new_attribute("PixelRepresentation", value=1)]
        )
        attribute = attribute_from_raw(
            raw(0x00280106, None, b"\xff\xff", is_implicit_VR=True),
            attribute_list=attribute_list
        )
        assert "SS" == attribute.VR
        assert -1 == attribute.value

    def test_big_endian_bulk(self):
        attribute = attribute_from_raw(
            raw(0x00281201, "OW", b"\x00\x01", is_little_endian=False)
        )
        assert b"\x01\x00" == attribute.value

    def test_un_sequence(self):
        """Test a UN sequence is decoded as implicit VR little endian."""
        value = (
            b"\xfe\xff\x00\xe0\x0c\x00\x00\x00"
            b"\x10\x00\x20\x00\x04\x00\x00\x00ID1 "
        )
        attribute = attribute_from_raw(
            raw(0x00081115, "UN", value, is_little_endian=False)
        )
        assert "SQ" == attribute.VR
        assert 1 == attribute.number_of_items
        item = attribute.value[0]
        assert "ID1" == item.attribute_list["PatientID"].value

    def test_encodings_recorded(self):
        attribute = attribute_from_raw(
            raw(0x00100010, "PN", b"M\xfcller^H"), encodings=["latin_1"]
        )
        assert "Müller^H" == attribute.value
        assert ["latin_1"] == attribute.encodings


class TestWrite:
    def test_write_explicit(self):
        fp = buffer()
        new_attribute("Modality", value="MR").write(fp)
        assert b"\x08\x00\x60\x00CS\x02\x00MR" == fp.getvalue()

    def test_write_padded(self):
        fp = buffer()
        new_attribute("SOPClassUID", value="1.2.3").write(fp)
        assert b"\x08\x00\x16\x00UI\x06\x001.2.3\x00" == fp.getvalue()

    def test_write_implicit_big_endian(self):
        fp = buffer(is_little_endian=False, is_implicit_VR=True)
        new_attribute("Rows", value=512).write(fp)
        assert b"\x00\x28\x00\x10\x00\x00\x00\x02\x02\x00" == fp.getvalue()
