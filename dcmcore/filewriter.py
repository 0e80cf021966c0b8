# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Functions related to writing DICOM data."""

from typing import TYPE_CHECKING, BinaryIO, List, Optional, Union
import zlib

from dcmcore.config import logger
from dcmcore.errors import EncodingError
from dcmcore.filebase import DicomBytesIO, DicomFile, DicomFileLike, DicomIO
from dcmcore.fileutil import PathType, path_from_pathlike
from dcmcore.tag import (
    BaseTag, ItemTag, ItemDelimiterTag, SequenceDelimiterTag,
    TransferSyntaxUIDTag, tag_in_exception
)
from dcmcore.uid import (
    UID, DEFAULT_TRANSFER_SYNTAX, DCMCORE_IMPLEMENTATION_UID,
    DCMCORE_IMPLEMENTATION_VERSION_NAME, uid_from_name
)
from dcmcore.vr import VR, AMBIGUOUS_VR, has_long_length

if TYPE_CHECKING:  # pragma: no cover
    from dcmcore.attribute import Attribute, SequenceAttribute
    from dcmcore.attributelist import AttributeList
    from dcmcore.sequence import SequenceItem


UNDEFINED_LENGTH = 0xFFFFFFFF


def write_attribute_header(
    fp: DicomIO, tag: BaseTag, vr: str, length: int
) -> None:
    """Write the tag, VR (explicit VR only) and length of an attribute.

    In explicit VR a value that is too long for the 16-bit length field of
    its VR is written as **UN** instead, see Part 5, Section 6.2.2.
    """
    fp.write_tag(tag)
    if fp.is_implicit_VR:
        fp.write_UL(length)
        return

    if length != UNDEFINED_LENGTH and not has_long_length(vr) and length > 0xFFFF:
        logger.warning(
            f"The value for the attribute {tag} exceeds the size of 64 kByte "
            "and cannot be written in an explicit transfer syntax. The VR "
            f"is changed from '{vr}' to 'UN' to allow saving the data."
        )
        vr = VR.UN

    fp.write(vr.encode("ascii"))
    if has_long_length(vr):
        fp.write_US(0)  # reserved 2 bytes
        fp.write_UL(length)
    else:
        fp.write_US(length)


def _correct_ambiguous_vr(
    attribute: "Attribute",
    attribute_list: "AttributeList",
    is_implicit_VR: bool
) -> "Attribute":
    """Return a copy of `attribute` with its ambiguous VR resolved."""
    from dcmcore.attribute import (
        BinaryNumericAttribute, attribute_class, resolve_ambiguous_vr
    )
    from dcmcore.values import encode_numbers

    vr = resolve_ambiguous_vr(
        attribute.tag, attribute.VR, attribute_list, is_implicit_VR
    )
    cls = attribute_class(vr)
    value = attribute.values
    if isinstance(attribute, BinaryNumericAttribute):
        if cls is not BinaryNumericAttribute:
            # US or OW data written as OW
            value = encode_numbers(value, True, "H")
    else:
        value = attribute.value

    corrected = cls(attribute.tag, vr, value)
    corrected.encodings = attribute.encodings
    corrected.private_creator = attribute.private_creator
    return corrected


def write_attribute_list(
    fp: DicomIO,
    attribute_list: "AttributeList",
    parent_encodings: Optional[List[str]] = None
) -> int:
    """Write the attributes of `attribute_list` to `fp` in tag order.

    Returns
    -------
    int
        The number of bytes written.
    """
    encodings = attribute_list.get_encodings(parent_encodings)

    fpStart = fp.tell()
    for attribute in attribute_list:
        tag = attribute.tag
        # do not write retired Group Length (see PS3.5, 7.2)
        if tag.element == 0 and tag.group > 6:
            continue
        with tag_in_exception(tag):
            if attribute.VR in AMBIGUOUS_VR:
                attribute = _correct_ambiguous_vr(
                    attribute, attribute_list, fp.is_implicit_VR
                )
            attribute.write(fp, encodings)

    return fp.tell() - fpStart


def write_sequence(
    fp: DicomIO,
    attribute: "SequenceAttribute",
    encodings: Optional[List[str]] = None
) -> None:
    """Write a Sequence attribute and its items to `fp`.

    The sequence and each of its items are written with an undefined
    length, followed by the corresponding delimitation item.
    """
    write_attribute_header(fp, attribute.tag, VR.SQ, UNDEFINED_LENGTH)
    for item in attribute.value:
        write_sequence_item(fp, item, encodings)

    fp.write_tag(SequenceDelimiterTag)
    fp.write_UL(0)  # 4-byte 'length' of delimiter data item


def write_sequence_item(
    fp: DicomIO, item: "SequenceItem", encodings: Optional[List[str]] = None
) -> None:
    """Write a sequence `item` to `fp`, recording its start offset in
    ``item.byte_offset``.

    See DICOM Standard, Part 5, :dcm:`Section 7.5<sect_7.5.html>`.
    """
    item.byte_offset = fp.tell()
    fp.write_tag(ItemTag)  # marker for start of Sequence Item
    fp.write_UL(UNDEFINED_LENGTH)
    write_attribute_list(fp, item.attribute_list, parent_encodings=encodings)
    fp.write_tag(ItemDelimiterTag)
    fp.write_UL(0)  # 4-bytes 'length' field for delimiter item


def validate_file_meta(
    file_meta: "AttributeList", enforce_standard: bool = True
) -> None:
    """Validate the *File Meta Information* attributes in `file_meta`.

    Parameters
    ----------
    file_meta : AttributeList
        The *File Meta Information* attributes.
    enforce_standard : bool, optional
        If ``True`` (default) then (0002,0001) *File Meta Information Version*
        and (0002,0012)/(0002,0013) *Implementation Class UID*/*Version
        Name* are added if missing, and the other Type 1 attributes must be
        present.

    Raises
    ------
    ValueError
        If any non-group 2 attributes are present, or if `enforce_standard`
        is ``True`` and a required attribute is missing or empty.
    """
    from dcmcore.attribute import new_attribute

    for attribute in file_meta:
        if attribute.tag.group != 0x0002:
            raise ValueError(
                "Only File Meta Information group (0002,eeee) attributes may "
                "be present in the File Meta Information"
            )

    if not enforce_standard:
        return

    if 0x00020001 not in file_meta:
        file_meta.put(new_attribute(0x00020001, VR.OB, b"\x00\x01"))
    if 0x00020012 not in file_meta:
        file_meta.put(
            new_attribute(0x00020012, VR.UI, DCMCORE_IMPLEMENTATION_UID)
        )
    if 0x00020013 not in file_meta:
        file_meta.put(
            new_attribute(0x00020013, VR.SH, DCMCORE_IMPLEMENTATION_VERSION_NAME)
        )

    missing = []
    for tag, keyword in (
        (0x00020002, "MediaStorageSOPClassUID"),
        (0x00020003, "MediaStorageSOPInstanceUID"),
        (0x00020010, "TransferSyntaxUID"),
    ):
        attribute = file_meta.get(tag)
        if attribute is None or attribute.is_empty:
            missing.append(f"{BaseTag(tag)} {keyword}")

    if missing:
        msg = ", ".join(missing)
        raise ValueError(
            "Missing required File Meta Information attributes from "
            f"'file_meta': {msg}"
        )


def write_file_meta_info(
    fp: DicomIO, file_meta: "AttributeList", enforce_standard: bool = True
) -> None:
    """Write the File Meta Information attributes in `file_meta` to `fp`.

    The attributes are always encoded as *Explicit VR Little Endian*. If
    (0002,0000) *File Meta Information Group Length* is present, or
    `enforce_standard` is ``True``, its value is set to the encoded length
    of the attributes that follow it.

    Parameters
    ----------
    fp : dcmcore.filebase.DicomIO
        The stream to write to, positioned after the preamble and prefix.
    file_meta : AttributeList
        The File Meta Information attributes, which may be updated.
    enforce_standard : bool, optional
        If ``False`` only the attributes already in `file_meta` are written.
    """
    from dcmcore.attribute import new_attribute

    validate_file_meta(file_meta, enforce_standard)
    if enforce_standard and 0x00020000 not in file_meta:
        # Will be updated with the actual length later
        file_meta.put(new_attribute(0x00020000, VR.UL, 0))

    # first write into a buffer to avoid seeking back, that can be
    # expansive and is not allowed if writing into a zip file
    buffer = DicomBytesIO()
    buffer.is_little_endian = True
    buffer.is_implicit_VR = False
    write_attribute_list(buffer, file_meta)

    # If the group length is present it is the first attribute written and
    #   is always 12 bytes long when encoded as explicit VR
    if 0x00020000 in file_meta:
        group_length = new_attribute(0x00020000, VR.UL, buffer.tell() - 12)
        file_meta.put(group_length)
        buffer.seek(0)
        group_length.write(buffer)

    fp.write(buffer.getvalue())


def dcmwrite(
    filename: Union[PathType, BinaryIO],
    attribute_list: "AttributeList",
    transfer_syntax: Optional[str] = None,
    write_like_original: bool = True
) -> None:
    """Write `attribute_list` to `filename` as a DICOM file.

    **Preamble and prefix**

    +-------------------------+-------------------------------------+
    |                         | write_like_original                 |
    +-------------------------+-----------------+-------------------+
    | attribute_list.preamble | True            | False             |
    +=========================+=================+===================+
    | None                    | no preamble     | 128 0x00 bytes    |
    +-------------------------+-----------------+-------------------+
    | 128 bytes               | attribute_list.preamble             |
    +-------------------------+-------------------------------------+

    The ``b'DICM'`` prefix is written if and only if the preamble is.

    **File Meta Information**

    The group 0x0002 attributes are taken from ``attribute_list.file_meta``
    for a :class:`~dcmcore.attributelist.FileAttributeList`, and from the
    list itself otherwise. If `write_like_original` is ``False`` the required
    attributes are added, with the *Media Storage SOP Class/Instance UID*
    taken from the *SOP Class/Instance UID* of the data set.

    Parameters
    ----------
    filename : str or PathLike or file-like
        Name of file or the file-like to write the new DICOM file to.
    attribute_list : AttributeList
        The data set to write.
    transfer_syntax : str, optional
        The transfer syntax UID or name (see
        :func:`~dcmcore.uid.uid_from_name`) to encode the data set with.
        If not used then the *Transfer Syntax UID* of the File Meta
        Information or the list's ``transfer_syntax`` is used, otherwise
        *Implicit VR Little Endian*.
    write_like_original : bool, optional
        If ``True`` (default) the preamble and File Meta Information are
        written only where the list has them.

    Raises
    ------
    ValueError
        If the preamble isn't 128 bytes long, the File Meta Information is
        incomplete when it must be written, or the transfer syntax is unknown.
    EncodingError
        If the transfer syntax is encapsulated but *Pixel Data* isn't.
    """
    from dcmcore.attribute import OtherAttribute, new_attribute
    from dcmcore.attributelist import AttributeList

    file_meta = AttributeList(
        a for a in attribute_list if a.tag.group == 0x0002
    )
    for attribute in getattr(attribute_list, "file_meta", None) or []:
        file_meta.put(attribute)

    tsyntax = _transfer_syntax_for(transfer_syntax, attribute_list, file_meta)

    preamble = getattr(attribute_list, "preamble", None)
    if preamble is None and not write_like_original:
        preamble = b"\x00" * 128
    if preamble is not None and len(preamble) != 128:
        raise ValueError("'attribute_list.preamble' must be 128-bytes long")

    if not write_like_original:
        for meta_tag, tag in ((0x00020002, 0x00080016), (0x00020003, 0x00080018)):
            if meta_tag not in file_meta and tag in attribute_list:
                file_meta.put(
                    new_attribute(meta_tag, VR.UI, attribute_list[tag].value)
                )

    if file_meta or not write_like_original:
        file_meta.put(new_attribute(TransferSyntaxUIDTag, VR.UI, tsyntax))

    dataset = AttributeList(
        a for a in attribute_list if a.tag.group != 0x0002
    )
    dataset.parent_encodings = getattr(attribute_list, "parent_encodings", None)

    pixel_data = dataset.get_pixel_data()
    if (
        tsyntax.is_encapsulated
        and isinstance(pixel_data, OtherAttribute)
        and not pixel_data.is_encapsulated
        and not pixel_data.is_empty
    ):
        raise EncodingError(
            f"The transfer syntax '{tsyntax.name}' is encapsulated but the "
            "Pixel Data isn't, see dcmcore.encaps.encapsulate()"
        )

    filename = path_from_pathlike(filename)
    caller_owns_file = not isinstance(filename, str)
    if caller_owns_file:
        fp: DicomIO = DicomFileLike(filename)
    else:
        fp = DicomFile(filename, 'wb')

    try:
        # WRITE FILE META INFORMATION
        if preamble is not None:
            fp.write(preamble)
            fp.write(b'DICM')

        if file_meta:
            write_file_meta_info(
                fp, file_meta, enforce_standard=not write_like_original
            )

        # WRITE DATASET
        logger.debug(f"Writing the data set as '{tsyntax.name}'")
        if tsyntax.is_deflated:
            buffer = DicomBytesIO()
            buffer.is_little_endian = True
            buffer.is_implicit_VR = False
            write_attribute_list(buffer, dataset)
            # compress the encoded data and write to file
            compressor = zlib.compressobj(wbits=-zlib.MAX_WBITS)
            deflated = compressor.compress(buffer.getvalue())
            deflated += compressor.flush()
            if len(deflated) % 2:
                deflated += b"\x00"
            fp.write(deflated)
        else:
            fp.is_little_endian = tsyntax.is_little_endian
            fp.is_implicit_VR = tsyntax.is_implicit_VR
            write_attribute_list(fp, dataset)
    finally:
        if not caller_owns_file:
            fp.close()


def _transfer_syntax_for(
    transfer_syntax: Optional[str],
    attribute_list: "AttributeList",
    file_meta: "AttributeList"
) -> UID:
    """Return the transfer syntax to write `attribute_list` with."""
    if transfer_syntax is not None:
        tsyntax = uid_from_name(transfer_syntax)
    elif TransferSyntaxUIDTag in file_meta:
        tsyntax = UID(file_meta[TransferSyntaxUIDTag].value)
    elif getattr(attribute_list, "transfer_syntax", None):
        tsyntax = UID(attribute_list.transfer_syntax)
    else:
        tsyntax = DEFAULT_TRANSFER_SYNTAX

    if not tsyntax.is_transfer_syntax:
        raise ValueError(
            f"Unable to write using the unknown transfer syntax '{tsyntax}'"
        )
    return tsyntax
