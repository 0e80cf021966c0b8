# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Test suite for uid.py"""

import pytest

from dcmcore.uid import (
    UID, uid_from_name, DCMCORE_IMPLEMENTATION_UID,
    DCMCORE_IMPLEMENTATION_VERSION_NAME, DEFAULT_TRANSFER_SYNTAX,
    ImplicitVRLittleEndian, ExplicitVRLittleEndian, ExplicitVRBigEndian,
    DeflatedExplicitVRLittleEndian, JPEGBaseline, RLELossless
)


class TestUID:
    """Test DICOM UIDs"""
    def test_padding_stripped(self):
        """Test trailing NUL and space padding is removed."""
        assert "1.2.840.10008.1.2" == UID("1.2.840.10008.1.2\x00")
        assert "1.2.3" == UID("1.2.3 ")

    def test_not_string_raises(self):
        with pytest.raises(TypeError, match="from a string"):
            UID(1.2)

    def test_equality(self):
        assert ImplicitVRLittleEndian == "1.2.840.10008.1.2"
        assert "1.2.840.10008.1.2" == ImplicitVRLittleEndian
        assert ImplicitVRLittleEndian != ExplicitVRLittleEndian
        assert {ImplicitVRLittleEndian: 1}["1.2.840.10008.1.2"] == 1

    def test_is_implicit_VR(self):
        assert ImplicitVRLittleEndian.is_implicit_VR
        assert not ExplicitVRLittleEndian.is_implicit_VR
        assert not ExplicitVRBigEndian.is_implicit_VR
        assert not RLELossless.is_implicit_VR

    def test_is_little_endian(self):
        assert ImplicitVRLittleEndian.is_little_endian
        assert DeflatedExplicitVRLittleEndian.is_little_endian
        assert not ExplicitVRBigEndian.is_little_endian
        assert JPEGBaseline.is_little_endian

    def test_is_deflated(self):
        assert DeflatedExplicitVRLittleEndian.is_deflated
        assert not ExplicitVRLittleEndian.is_deflated

    def test_is_encapsulated(self):
        assert not ImplicitVRLittleEndian.is_encapsulated
        assert not ExplicitVRBigEndian.is_encapsulated
        assert not DeflatedExplicitVRLittleEndian.is_encapsulated
        assert JPEGBaseline.is_encapsulated
        assert RLELossless.is_encapsulated

    def test_not_transfer_syntax_raises(self):
        """Test the transfer syntax properties require a transfer syntax."""
        uid = UID("1.2.840.10008.5.1.4.1.1.2")
        assert not uid.is_transfer_syntax
        for name in (
            "is_implicit_VR", "is_little_endian", "is_deflated",
            "is_encapsulated"
        ):
            with pytest.raises(ValueError, match="not a transfer syntax"):
                getattr(uid, name)

    def test_name_and_keyword(self):
        assert "RLE Lossless" == RLELossless.name
        assert "RLE" == RLELossless.keyword
        assert "Explicit VR Big Endian" == ExplicitVRBigEndian.name
        assert "1.2.3" == UID("1.2.3").name
        assert "" == UID("1.2.3").keyword

    def test_is_valid(self):
        assert UID("1.2.840.10008.1.2").is_valid
        assert UID("0.1.2").is_valid
        assert not UID("1.02.3").is_valid
        assert not UID("1.2..3").is_valid
        assert not UID("1.2.3.").is_valid
        assert not UID("1." + "1" * 63).is_valid
        assert not UID("1.2.abc").is_valid

    def test_is_private(self):
        assert not ExplicitVRLittleEndian.is_private
        assert UID("9.9.999.90009.1.2").is_private


class TestUIDFromName:
    @pytest.mark.parametrize(
        "name, uid",
        [
            ("ImplicitVRLittleEndian", ImplicitVRLittleEndian),
            ("ExplicitVRLittleEndian", ExplicitVRLittleEndian),
            ("ExplicitVRBigEndian", ExplicitVRBigEndian),
            ("DeflatedExplicitVRLittleEndian", DeflatedExplicitVRLittleEndian),
            ("RLE", RLELossless),
            ("JPEGBaseline", JPEGBaseline),
            ("Default", DEFAULT_TRANSFER_SYNTAX),
        ]
    )
    def test_known(self, name, uid):
        result = uid_from_name(name)
        assert uid == result
        assert isinstance(result, UID)

    def test_default_is_implicit(self):
        assert ImplicitVRLittleEndian == uid_from_name("Default")

    def test_literal_uid(self):
        """Test an unknown name shaped like a UID is returned as a UID."""
        assert "1.2.3.4" == uid_from_name("1.2.3.4")
        assert RLELossless == uid_from_name("1.2.840.10008.1.2.5")

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unrecognized transfer syntax"):
            uid_from_name("ExplicitLittle")


class TestImplementation:
    def test_implementation_uid(self):
        assert DCMCORE_IMPLEMENTATION_UID.startswith("2.25.")
        assert DCMCORE_IMPLEMENTATION_UID.is_valid

    def test_version_name(self):
        assert DCMCORE_IMPLEMENTATION_VERSION_NAME.startswith("DCMCORE_")
        assert len(DCMCORE_IMPLEMENTATION_VERSION_NAME) <= 16
