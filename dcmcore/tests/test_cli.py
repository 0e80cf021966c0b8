# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Tests for command-line interface"""

from argparse import ArgumentTypeError

import pytest

from dcmcore.attribute import Attribute, new_attribute
from dcmcore.attributelist import AttributeList
from dcmcore.cli.main import filespec_parser, eval_element, main
from dcmcore.sequence import Sequence, SequenceItem

bad_elem_specs = (
    "extra:colon",
    "no_callable()",
    "no_equals = ",
    "ReferencedSeriesSequence[0]extra",  # must match to end of string
    "ReferencedSeriesSequence[x]",  # index must an int
)

missing_elements = (
    "NotThere",
    "ReferencedSeriesSequenceXX",
    "StudyID",
)

bad_indexes = (
    "ReferencedSeriesSequence[42]",
    "ReferencedSeriesSequence[-42]",
    "PatientID[0]",
)


@pytest.fixture
def dicom_file(tmp_path, image_list):
    """Return the path to an image file with a sequence and private data."""
    item = AttributeList([new_attribute("PatientID", value="ID2")])
    image_list.put(new_attribute("ReferencedSeriesSequence", value=[item]))
    image_list.put(new_attribute(0x00090010, value="ACME 1.0"))
    image_list.put(new_attribute(0x00091001, "LO", "acme data"))
    path = tmp_path / "image.dcm"
    image_list.write(path, "ExplicitVRLittleEndian", False)
    return str(path)


class TestFileSpec:
    @pytest.mark.parametrize("bad_spec", bad_elem_specs)
    def test_syntax(self, dicom_file, bad_spec):
        """Invalid syntax for for CLI file:element spec raises error"""
        with pytest.raises(ArgumentTypeError, match=r".* syntax .*"):
            filespec_parser(f"{dicom_file}:{bad_spec}")

    @pytest.mark.parametrize("missing_element", missing_elements)
    def test_elem_not_exists(self, dicom_file, missing_element):
        """CLI filespec elements not in the data set raise an error"""
        with pytest.raises(ArgumentTypeError, match=r".* is not in the dataset"):
            filespec_parser(f"{dicom_file}:{missing_element}")

    @pytest.mark.parametrize("bad_index", bad_indexes)
    def test_bad_index(self, dicom_file, bad_index):
        """CLI filespec elements with an invalid index raise an error"""
        with pytest.raises(ArgumentTypeError, match=r".* index error"):
            filespec_parser(f"{dicom_file}:{bad_index}")

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.dcm"
        with pytest.raises(ArgumentTypeError, match="not found"):
            filespec_parser(str(path))

    def test_whole_file(self, dicom_file):
        attribute_list, element = filespec_parser(dicom_file)
        assert element is None
        assert "Doe^John" == attribute_list["PatientName"].value


class TestFilespecElementEval:
    def test_correct_values(self, dicom_file):
        """CLI produces correct evaluation of requested attribute"""
        attribute_list, _ = filespec_parser(dicom_file)

        # A nested attribute
        elem_val = eval_element(attribute_list, "ReferencedSeriesSequence[0].PatientID")
        assert isinstance(elem_val, Attribute)
        assert "ID2" == elem_val.value

        # A nested Sequence item
        elem_val = eval_element(attribute_list, "ReferencedSeriesSequence[-1]")
        assert isinstance(elem_val, SequenceItem)
        assert "ID2" == elem_val.attribute_list["PatientID"].value

        # A Sequence itself
        elem_val = eval_element(attribute_list, "ReferencedSeriesSequence")
        assert isinstance(elem_val, Sequence)
        assert 1 == len(elem_val)

        # A non-nested attribute
        assert "12345" == eval_element(attribute_list, "PatientID").value

        # The file_meta or a file_meta attribute
        elem_val = eval_element(attribute_list, "file_meta")
        assert "TransferSyntaxUID" in elem_val

        elem_val = eval_element(attribute_list, "file_meta.TransferSyntaxUID")
        assert "1.2.840.10008.1.2.1" == elem_val.value


class TestCLIcall:
    def test_show_command(self, dicom_file, capsys):
        """CLI `show` command prints correct output"""
        main(["show", dicom_file])
        out, err = capsys.readouterr()

        # Check a couple of things to make sure output okay
        assert "PN: 'Doe^John'" in out
        assert "%item" in out
        assert "LO: 'ID2'" in out
        assert "OB: b'\\x00\\x01\\x02\\x03\\x04\\x05'" in out
        assert err == ""

    def test_show_top(self, dicom_file, capsys):
        main(["show", "-t", dicom_file])
        out, err = capsys.readouterr()
        assert "PN: 'Doe^John'" in out
        assert "%item" not in out
        assert "'ID2'" not in out

    def test_show_exclude_private(self, dicom_file, capsys):
        main(["show", dicom_file])
        out, _ = capsys.readouterr()
        assert "'acme data'" in out

        main(["show", "-x", dicom_file])
        out, _ = capsys.readouterr()
        assert "'acme data'" not in out
        assert "'ACME 1.0'" not in out

    def test_show_options(self, dicom_file, capsys):
        """CLI `show` command with options prints correct output"""
        main(["show", "-q", dicom_file])
        out, err = capsys.readouterr()

        # Check a couple of things to make sure output okay
        assert out.startswith("SOPClassUID: 1.2.840.10008.5.1.4.1.1.7\n")
        assert "Transfer Syntax: Explicit VR Little Endian\n" in out
        assert "PatientName: Doe^John\n" in out
        assert "StudyID: N/A\n" in out
        assert out.endswith(
            "Image: 8-bit OT 2x3 pixels Slice location: N/A\n"
        )
        assert err == ""

    def test_show_element(self, dicom_file, capsys):
        main(["show", f"{dicom_file}:ReferencedSeriesSequence[0].PatientID"])
        out, _ = capsys.readouterr()
        assert out.startswith("(0010,0020) Patient ID")
        assert out.endswith("LO: 'ID2'\n")

    def test_show_item(self, dicom_file, capsys):
        main(["show", f"{dicom_file}:ReferencedSeriesSequence[0]"])
        out, _ = capsys.readouterr()
        assert out.startswith("(0010,0020) Patient ID")

    def test_show_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["show", str(tmp_path / "missing.dcm")])
        _, err = capsys.readouterr()
        assert "not found" in err

    def test_help(self, capsys):
        main(["help", "show"])
        out, err = capsys.readouterr()
        assert out.startswith("usage: dcmcore show [-h] [")

    def test_help_no_subcommand(self, capsys):
        main(["help"])
        out, _ = capsys.readouterr()
        assert "Available subcommands: show" in out
