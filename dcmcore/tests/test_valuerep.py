# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Test suite for valuerep.py"""

import pytest

from dcmcore.valuerep import (
    POLICIES, policy_for, strip_padding, validate_vr_length,
    validate_characters, validate_format, validate_value, truncate_value,
    repair_value
)


class TestPolicies:
    """Test the per-VR value rules."""
    def test_lengths(self):
        """Test the maximum value lengths of some VRs."""
        assert 16 == policy_for("AE").max_length
        assert 4 == policy_for("AS").max_length
        assert 64 == policy_for("LO").max_length
        assert 64 == policy_for("UI").max_length
        assert 10240 == policy_for("LT").max_length
        assert policy_for("UT").max_length is None
        assert policy_for("UC").max_length is None

    def test_padding(self):
        """Test UI is padded with NUL and other VRs with space."""
        assert b"\x00" == policy_for("UI").padding
        assert b" " == policy_for("LO").padding

    def test_truncation_allowed(self):
        """Test which VRs may be truncated."""
        assert policy_for("LO").allow_truncation
        assert policy_for("PN").allow_truncation
        for vr in ("AS", "CS", "DA", "TM", "DT"):
            assert not policy_for(vr).allow_truncation

    def test_unknown_vr_raises(self):
        with pytest.raises(KeyError):
            policy_for("OB")

    def test_string_vrs_covered(self):
        """Test every string VR has a policy."""
        for vr in ("AE", "AS", "CS", "DA", "DS", "DT", "IS", "LO", "LT",
                   "PN", "SH", "ST", "TM", "UC", "UI", "UR", "UT"):
            assert vr in POLICIES


class TestStripPadding:
    def test_trailing(self):
        assert "ABC" == strip_padding("LO", "ABC  ")
        assert "1.2.3" == strip_padding("UI", "1.2.3\x00")

    def test_leading(self):
        """Test leading spaces are kept for the text VRs."""
        assert "ABC" == strip_padding("LO", "  ABC")
        assert "  ABC" == strip_padding("LT", "  ABC ")


class TestValidate:
    """Test the validation functions."""
    def test_length(self):
        assert validate_vr_length("SH", "A" * 16) == (True, "")
        valid, msg = validate_vr_length("SH", "A" * 17)
        assert not valid
        assert "exceeds the maximum length of 16" in msg

    def test_length_ignores_padding(self):
        assert validate_vr_length("SH", "A" * 16 + "  ")[0]

    def test_length_unlimited(self):
        assert validate_vr_length("UT", "A" * 100000)[0]

    def test_characters(self):
        assert validate_characters("CS", "ORIGINAL_1")[0]
        valid, msg = validate_characters("CS", "original")
        assert not valid
        assert "Invalid character" in msg
        assert validate_characters("UI", "1.2.3")[0]
        assert not validate_characters("UI", "1.2.a")[0]
        assert validate_characters("LT", "Line 1\r\nLine 2")[0]

    def test_age_string(self):
        """Test the AS form is three digits and a unit."""
        assert validate_value("AS", "035Y")[0]
        assert validate_value("AS", "002D")[0]
        assert not validate_value("AS", "35Y")[0]
        assert not validate_value("AS", "035X")[0]
        assert not validate_format("AS", "0035")[0]

    def test_date(self):
        assert validate_value("DA", "20200101")[0]
        assert not validate_value("DA", "2020010")[0]
        assert not validate_value("DA", "2020-01-01")[0]

    def test_time(self):
        assert validate_value("TM", "12")[0]
        assert validate_value("TM", "120000.5")[0]
        assert not validate_value("TM", "1")[0]

    def test_empty_is_well_formed(self):
        assert validate_format("DA", "")[0]
        assert validate_format("AS", "")[0]

    def test_first_failure_reported(self):
        """Test the length failure is reported before the characters."""
        valid, msg = validate_value("CS", "a" * 17)
        assert not valid
        assert "exceeds the maximum length" in msg


class TestTruncateValue:
    def test_truncate(self):
        assert "A" * 64 == truncate_value("LO", "A" * 70)

    def test_exposed_padding_stripped(self):
        """Test padding exposed by the truncation is removed."""
        assert "ABC" == truncate_value("SH", "ABC" + " " * 13 + "D")

    def test_short_value_unchanged(self):
        assert "ABC" == truncate_value("SH", "ABC")


class TestRepairValue:
    """Test repair_value."""
    def test_age_string_padding(self):
        """Test only the padding of an age string is repaired."""
        assert "035Y" == repair_value("AS", " 035Y ")
        assert validate_value("AS", repair_value("AS", " 035Y "))[0]

    def test_age_string_not_invented(self):
        """Test a malformed age string is left malformed."""
        assert "35Y" == repair_value("AS", "35Y")
        assert not validate_value("AS", "35Y")[0]

    def test_date_separators_removed(self):
        """Test invalid date characters are removed."""
        assert "20200101" == repair_value("DA", "2020-01-01")
        assert "19940101" == repair_value("DA", "1994.01.01")
        assert validate_value("DA", "20200101")[0]

    def test_code_string_not_replaced(self):
        """Test invalid code string characters are kept."""
        assert "abc" == repair_value("CS", "abc")

    def test_long_string_replaced_and_truncated(self):
        """Test control characters are replaced, then the value truncated."""
        assert "A B" == repair_value("LO", "A\x01B")
        assert "A" * 64 == repair_value("LO", "A" * 80)

    def test_uid(self):
        assert "1.2.3" == repair_value("UI", "1.2.3\x00")
