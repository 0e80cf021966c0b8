# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""dcmcore package -- read, validate and write DICOM attribute lists.
   See Quick Start below.

-----------
Quick Start
-----------

1. A simple program to read a DICOM file, change a value, and write to a new
   file::

    from dcmcore import dcmread
    attribute_list = dcmread("file1.dcm")
    attribute_list["PatientName"].set_values("anonymous")
    attribute_list.write("file2.dcm")

2. Learn the methods of the AttributeList and Attribute classes; those are
   the ones you will work with most directly.

"""

from dcmcore.attribute import Attribute, new_attribute
from dcmcore.attributelist import AttributeList, FileAttributeList
from dcmcore.filereader import dcmread
from dcmcore.filewriter import dcmwrite
from dcmcore.sequence import Sequence, SequenceItem

from ._version import __version__, __version_info__

__all__ = [
    "Attribute",
    "AttributeList",
    "FileAttributeList",
    "Sequence",
    "SequenceItem",
    "dcmread",
    "dcmwrite",
    "new_attribute",
    "__version__",
    "__version_info__",
]
