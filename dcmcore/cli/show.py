# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""dcmcore command line interface program for `dcmcore show`"""

import argparse
from typing import Any, Callable, List, Optional, Union

from dcmcore.attributelist import AttributeList
from dcmcore.cli.main import filespec_help, filespec_parser
from dcmcore.sequence import SequenceItem
from dcmcore.uid import UID


def add_subparser(subparsers: argparse._SubParsersAction) -> None:
    subparser = subparsers.add_parser(
        "show", description="Display all or part of a DICOM file"
    )
    subparser.add_argument(
        "filespec",
        help=filespec_help,
        type=filespec_parser
    )
    subparser.add_argument(
        "-x",
        "--exclude-private",
        help="Don't show private attributes",
        action="store_true",
    )
    subparser.add_argument(
        "-t", "--top", help="Only show top level", action="store_true"
    )
    subparser.add_argument(
        "-q",
        "--quiet",
        help="Only show basic information",
        action="store_true",
    )

    subparser.set_defaults(func=do_command)


def do_command(args: argparse.Namespace) -> None:
    attribute_list, element = args.filespec
    if element is None:
        element = attribute_list
    if isinstance(element, SequenceItem):
        element = element.attribute_list

    if args.exclude_private:
        attribute_list.remove_private_attributes()

    if args.quiet and isinstance(element, AttributeList):
        show_quiet(element)
    elif args.top and isinstance(element, AttributeList):
        print(element.top())
    else:
        print(str(element))


def _string(attribute_list: AttributeList, keyword: str) -> str:
    attribute = attribute_list.get(keyword)
    if attribute is None or attribute.is_empty:
        return "N/A"
    return "\\".join(attribute.get_string_values())


def SOPClassname(attribute_list: AttributeList) -> Optional[str]:
    class_uid = attribute_list.get("SOPClassUID")
    if class_uid is None or class_uid.is_empty:
        return None
    return f"SOPClassUID: {class_uid.get_string_values()[0]}"


def transfer_syntax(attribute_list: AttributeList) -> Optional[str]:
    tsyntax = getattr(attribute_list, "transfer_syntax", None)
    if tsyntax is None:
        return None
    return f"Transfer Syntax: {UID(tsyntax).name}"


def quiet_image(attribute_list: AttributeList) -> Optional[str]:
    if "Rows" not in attribute_list or "Columns" not in attribute_list:
        return None

    s = "Image: {}-bit {} {}x{} pixels Slice location: {}"
    results = [
        _string(attribute_list, name)
        for name in [
            "BitsStored",
            "Modality",
            "Rows",
            "Columns",
            "SliceLocation",
        ]
    ]
    return s.format(*results)


# Items to show in quiet mode
# Item can be a callable or a DICOM keyword
quiet_items: List[Union[str, Callable[[AttributeList], Any]]] = [
    SOPClassname,
    transfer_syntax,
    "PatientName",
    "PatientID",
    # Images
    "StudyID",
    "StudyDate",
    "StudyTime",
    "StudyDescription",
    quiet_image,
]


def show_quiet(attribute_list: AttributeList) -> None:
    for item in quiet_items:
        if callable(item):
            result = item(attribute_list)
            if result:
                print(result)
        else:
            print(f"{item}: {_string(attribute_list, item)}")
