# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""dcmcore command line interface program

Each subcommand is a module within dcmcore.cli, which
defines an add_subparser(subparsers) function to set argparse
attributes, and does a set_defaults(func=callback_function)

"""

import argparse
from importlib.metadata import entry_points
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from dcmcore.attribute import Attribute, SequenceAttribute
from dcmcore.attributelist import AttributeList
from dcmcore.filereader import dcmread
from dcmcore.sequence import Sequence, SequenceItem

subparsers: Optional[argparse._SubParsersAction] = None


re_kywd_or_item = (
    r"\w+"  # Keyword (\w allows underscore, needed for file_meta)
    r"(\[(-)?\d+\])?"  # Optional [index] or [-index]
)

re_file_spec_object = re.compile(
    re_kywd_or_item + r"(\." + re_kywd_or_item + r")*$"
)

re_component = re.compile(r"(?P<keyword>\w+)(\[(?P<index>-?\d+)\])?$")

filespec_help = (
    "filename[:subobject]\n"
    "DICOM file and optional attribute within it.\n"
    "Examples:\n"
    "   path/to/your_file.dcm\n"
    "   rtplan.dcm:BeamSequence[0].BeamNumber\n"
)

ElementType = Union[AttributeList, Sequence, SequenceItem, Attribute]


def eval_element(attribute_list: AttributeList, element: str) -> ElementType:
    """Return the attribute, sequence or item at the dotted path `element`.

    Each component of the path is a keyword, optionally followed by an index
    into the items of a sequence. The component ``file_meta`` selects the
    File Meta Information of a file.

    Raises
    ------
    argparse.ArgumentTypeError
        If a component is not in its list or an index is out of range.
    """
    current: Any = attribute_list
    for component in element.split("."):
        match = re_component.match(component)
        if match is None:
            raise argparse.ArgumentTypeError(
                f"Component '{component}' is not valid syntax"
            )

        keyword = match.group("keyword")
        if isinstance(current, SequenceItem):
            current = current.attribute_list

        if keyword == "file_meta" and hasattr(current, "file_meta"):
            current = current.file_meta
        elif isinstance(current, AttributeList) and keyword in current:
            current = current[keyword]
        else:
            raise argparse.ArgumentTypeError(
                f"Attribute '{element}' is not in the dataset"
            )

        index = match.group("index")
        if index is None:
            continue

        if not isinstance(current, SequenceAttribute):
            raise argparse.ArgumentTypeError(
                f"'{element}' has an index error: '{keyword}' is not a "
                "sequence"
            )
        try:
            current = current.value[int(index)]
        except IndexError as e:
            raise argparse.ArgumentTypeError(
                f"'{element}' has an index error: {str(e)}"
            )

    if isinstance(current, SequenceAttribute):
        return current.value
    return current


def filespec_parser(filespec: str) -> Tuple[AttributeList, Optional[ElementType]]:
    """Utility to return an attribute list and an optional attribute, item or
    sequence within it

    Note: this is used as an argparse 'type' for adding parsing arguments.

    Parameters
    ----------
    filespec: str
        A filename with an optional attribute path, in format
        ``<filename>[:<element>]``. If an element is specified, it must be a
        path to an attribute, sequence item or a sequence.
        Examples:
            your_file.dcm
            your_file.dcm:StudyDate
            rtplan.dcm:BeamSequence[0]
            rtplan.dcm:BeamSequence[0].BeamLimitingDeviceSequence

    Returns
    -------
    attribute_list: FileAttributeList
        The entire data set read from the file.
    element: Sequence, SequenceItem, Attribute or None
        The specified part of the data set.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file does not exist, or if the optional element is not a valid
        expression, or if it does not exist within the data set
    """
    # A Windows drive letter is part of the filename
    drive = ""
    if len(filespec) > 1 and filespec[1] == ":" and filespec[0].isalpha():
        drive, filespec = filespec[:2], filespec[2:]

    splitup = filespec.split(":", 1)
    filename = drive + splitup[0]

    # If optional :element there, get it, else blank
    element = splitup[1] if len(splitup) == 2 else ""

    # Check element syntax first to avoid unnecessary load of file
    if element and not re_file_spec_object.match(element):
        raise argparse.ArgumentTypeError(
            f"Component '{element}' is not valid syntax for an "
            "attribute, sequence, or sequence item"
        )

    try:
        attribute_list = dcmread(filename, force=True)
    except FileNotFoundError:
        raise argparse.ArgumentTypeError(f"File '{filename}' not found")
    except Exception as e:
        raise argparse.ArgumentTypeError(
            f"Error reading '{filename}': {str(e)}"
        )

    if not element:
        return attribute_list, None

    return attribute_list, eval_element(attribute_list, element)


def help_command(args: argparse.Namespace) -> None:
    assert subparsers is not None
    subcommands = list(subparsers.choices.keys())
    if args.subcommand and args.subcommand in subcommands:
        subparsers.choices[args.subcommand].print_help()
    else:
        print("Use dcmcore help [subcommand] to show help for a subcommand")
        subcommands.remove("help")
        print(f"Available subcommands: {', '.join(subcommands)}")


def get_subcommand_entry_points() -> Dict[str, Callable[..., None]]:
    from dcmcore.cli.show import add_subparser

    subcommands: Dict[str, Callable[..., None]] = {"show": add_subparser}
    for entry_point in entry_points(group="dcmcore_subcommands"):
        subcommands[entry_point.name] = entry_point.load()
    return subcommands


def main(args: Optional[List[str]] = None) -> None:
    """Entry point for 'dcmcore' command line interface

    args: list
        Command-line arguments to parse.  If None, then sys.argv is used
    """
    global subparsers

    parser = argparse.ArgumentParser(
        prog="dcmcore", description="dcmcore command line utilities"
    )
    subparsers = parser.add_subparsers(help="subcommand help")

    help_parser = subparsers.add_parser(
        "help", help="display help for subcommands"
    )
    help_parser.add_argument(
        "subcommand", nargs="?", help="Subcommand to show help for"
    )
    help_parser.set_defaults(func=help_command)

    # Get subcommands to register themselves as a subparser
    subcommands = get_subcommand_entry_points()
    for subcommand in subcommands.values():
        subcommand(subparsers)

    parsed = parser.parse_args(args)
    if not len(parsed.__dict__):
        parser.print_help()
    else:
        parsed.func(parsed)
