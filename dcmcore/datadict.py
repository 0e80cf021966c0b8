# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Access DICOM dictionary information"""
from typing import Optional, Tuple, Dict

from dcmcore.config import logger
from dcmcore.tag import Tag, BaseTag, TagType

# the actual dict of {tag: (VR, VM, name, is_retired, keyword), ...}
from dcmcore._dicom_dict import DicomDictionary

# those with tags like "(50xx, 0005)"
from dcmcore._dicom_dict import RepeatersDictionary
from dcmcore._private_dict import private_dictionaries


# Map each repeater mask to a (value, mask) pair so that a tag matches when
#   all of its non-"x" nibbles equal the mask's
masks: Dict[str, Tuple[int, int]] = {}
for mask_x in RepeatersDictionary:
    mask1 = int(mask_x.replace("x", "0"), 16)
    mask2 = int("".join(["F0"[c == "x"] for c in mask_x]), 16)
    masks[mask_x] = (mask1, mask2)


def mask_match(tag: int) -> Optional[str]:
    """Return the repeaters tag mask for `tag`, or ``None`` if `tag` is not
    a repeating group tag.
    """
    for mask_x, (mask1, mask2) in masks.items():
        if (tag ^ mask1) & mask2 == 0:
            return mask_x
    return None


def get_entry(tag: TagType) -> Tuple[str, str, str, str, str]:
    """Return an entry from the DICOM dictionary as a tuple.

    If the `tag` is not in the main DICOM dictionary, then the repeating
    group dictionary will also be checked.

    Parameters
    ----------
    tag : int
        The tag for the attribute whose entry is to be retrieved. Only entries
        in the official DICOM dictionary will be checked, not entries in the
        private dictionary.

    Returns
    -------
    tuple of str
        The (VR, VM, name, is_retired, keyword) from the DICOM dictionary.

    Raises
    ------
    KeyError
        If the tag is not present in the DICOM data dictionary.
    """
    if not isinstance(tag, BaseTag):
        tag = Tag(tag)
    try:
        return DicomDictionary[tag]
    except KeyError:
        if not tag.is_private:
            mask_x = mask_match(tag)
            if mask_x:
                return RepeatersDictionary[mask_x]
        raise KeyError(f"Tag {tag} not found in DICOM dictionary")


def dictionary_has_tag(tag: TagType) -> bool:
    """Return ``True`` if `tag` is in the official DICOM data dictionary."""
    try:
        get_entry(tag)
    except (KeyError, ValueError, OverflowError):
        return False
    return True


def dictionary_VR(tag: TagType) -> str:
    """Return the VR of the attribute corresponding to `tag`.

    Raises
    ------
    KeyError
        If the tag is not present in the DICOM data dictionary.
    """
    return get_entry(tag)[0]


def dictionary_VM(tag: TagType) -> str:
    """Return the VM of the attribute corresponding to `tag`."""
    return get_entry(tag)[1]


def dictionary_description(tag: TagType) -> str:
    """Return the name of the attribute corresponding to `tag`."""
    return get_entry(tag)[2]


def dictionary_is_retired(tag: TagType) -> bool:
    """Return ``True`` if the attribute corresponding to `tag` is retired."""
    return 'retired' in get_entry(tag)[3].lower()


def dictionary_keyword(tag: TagType) -> str:
    """Return the keyword of the attribute corresponding to `tag`."""
    return get_entry(tag)[4]


# Provide for the 'reverse' lookup. Given the keyword, what is the tag?
logger.debug("Reversing DICOM dictionary so can look up tag from a keyword...")
keyword_dict = {
    entry[4]: tag for tag, entry in DicomDictionary.items() if entry[4]
}


def tag_for_keyword(keyword: str) -> Optional[int]:
    """Return the tag of the attribute corresponding to `keyword`, or
    ``None`` if the keyword is not in the dictionary.
    """
    return keyword_dict.get(keyword)


def keyword_for_tag(tag: TagType) -> str:
    """Return the keyword of the attribute corresponding to `tag`, or an
    empty string if the tag is not in the dictionary.
    """
    try:
        return dictionary_keyword(tag)
    except KeyError:
        return ""


# PRIVATE DICTIONARY handling
# functions in analogy with those of main DICOM dict
def get_private_entry(
    tag: TagType, private_creator: str
) -> Tuple[str, str, str, str]:
    """Return an entry from the private dictionary corresponding to `tag`.

    Parameters
    ----------
    tag : int
        The tag for the attribute whose entry is to be retrieved. Only entries
        in the private dictionary will be checked.
    private_creator : str
        The name of the private creator.

    Returns
    -------
    tuple of str
        The (VR, VM, name, is_retired) from the private dictionary.

    Raises
    ------
    KeyError
        If the tag or private creator is not present in the private dictionary.
    """
    if not isinstance(tag, BaseTag):
        tag = Tag(tag)
    try:
        private_dict = private_dictionaries[private_creator]
    except KeyError:
        raise KeyError(
            f"Private creator '{private_creator}' not in private dictionary"
        )

    # private attributes don't depend on the reserved block, so the
    #   dictionary keys have "xx" in the block position
    key = f"{tag.group:04x}xx{tag.element & 0xFF:02x}"
    try:
        return private_dict[key]
    except KeyError:
        raise KeyError(
            f"Tag {key} not in private dictionary for private creator "
            f"'{private_creator}'"
        )


def private_dictionary_VR(tag: TagType, private_creator: str) -> str:
    """Return the VR of the private attribute corresponding to `tag`.

    Raises
    ------
    KeyError
        If the tag is not present in the private dictionary.
    """
    return get_private_entry(tag, private_creator)[0]


def private_dictionary_description(tag: TagType, private_creator: str) -> str:
    """Return the name of the private attribute corresponding to `tag`."""
    return get_private_entry(tag, private_creator)[2]


def add_private_dict_entry(
    private_creator: str, tag: int, VR: str, description: str, VM: str = '1'
) -> None:
    """Update the private dictionary with a new entry.

    Parameters
    ----------
    private_creator : str
        The private creator for the new entry.
    tag : int
        The tag number for the new entry; only the group and the low byte
        of the element are significant.
    VR : str
        DICOM value representation.
    description : str
        The descriptive name used in printing the entry.
    VM : str, optional
        DICOM value multiplicity. If not specified, then ``'1'`` is used.
    """
    tag = Tag(tag)
    key = f"{tag.group:04x}xx{tag.element & 0xFF:02x}"
    private_dictionaries.setdefault(private_creator, {})[key] = (
        VR, VM, description, ''
    )
