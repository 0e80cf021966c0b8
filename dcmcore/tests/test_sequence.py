# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Unit tests for the dcmcore.sequence module."""

import pytest

from dcmcore.attribute import new_attribute
from dcmcore.attributelist import AttributeList
from dcmcore.sequence import Sequence, SequenceItem


class TestSequence:
    def test_invalid_initializer(self):
        """Test a string is not an iterable of items."""
        with pytest.raises(TypeError, match="requires an iterable"):
            Sequence("abc")
        with pytest.raises(TypeError, match="must be 'SequenceItem'"):
            Sequence([1])

    def test_attribute_lists_wrapped(self):
        """Test attribute lists are wrapped in items."""
        attribute_list = AttributeList([new_attribute("PatientID")])
        sequence = Sequence([attribute_list])
        assert isinstance(sequence[0], SequenceItem)
        assert attribute_list is sequence[0].attribute_list

    def test_append_extend_insert(self):
        sequence = Sequence()
        sequence.append(AttributeList())
        sequence.extend([SequenceItem(), AttributeList()])
        sequence.insert(0, AttributeList([new_attribute("PatientID")]))
        assert 4 == len(sequence)
        assert all(isinstance(item, SequenceItem) for item in sequence)
        assert "PatientID" in sequence[0].attribute_list

        with pytest.raises(TypeError):
            sequence.append("item")

    def test_setitem(self):
        sequence = Sequence([AttributeList(), AttributeList()])
        sequence[0] = AttributeList([new_attribute("PatientID")])
        assert "PatientID" in sequence[0].attribute_list
        sequence[0:2] = [AttributeList()]
        assert 1 == len(sequence)
        assert isinstance(sequence[0], SequenceItem)
        with pytest.raises(TypeError):
            sequence[0] = 1

    def test_repr(self):
        assert "<Sequence, length 2>" == repr(Sequence([SequenceItem()] * 2))


class TestSequenceItem:
    def test_str(self):
        item = SequenceItem(
            AttributeList([new_attribute("PatientID", value="A")]), 0x10
        )
        lines = str(item).splitlines()
        assert "%item [starts at 0x10]" == lines[0]
        assert lines[1].startswith("   (0010,0020) Patient ID")

    def test_empty_str(self):
        assert "%item" == str(SequenceItem())

    def test_equality(self):
        assert SequenceItem() == SequenceItem(AttributeList(), 8)
        assert SequenceItem() != AttributeList()
