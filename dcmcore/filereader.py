# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Read a DICOM file into an AttributeList."""

from struct import Struct, unpack
from typing import (
    Any, BinaryIO, Callable, Iterable, Iterator, List, Optional, Union
)
import warnings
import zlib

from dcmcore import config
from dcmcore.attribute import (
    Attribute, DeferredValue, RawAttribute, SequenceAttribute,
    attribute_from_raw
)
from dcmcore.attributelist import AttributeList, FileAttributeList
from dcmcore.charset import convert_encodings
from dcmcore.config import logger
from dcmcore.datadict import dictionary_VR
from dcmcore.encaps import read_encapsulated_pixel_data
from dcmcore.errors import DecodingError, DicomFormatError, InvalidDicomError
from dcmcore.filebase import DicomBytesIO, DicomFileLike, DicomIO
from dcmcore.fileutil import PathType, path_from_pathlike, read_undefined_length_value
from dcmcore.misc import size_in_bytes
from dcmcore.sequence import Sequence, SequenceItem
from dcmcore.tag import (
    BaseTag, Tag, TupleTag, ItemTag, ItemDelimiterTag, SequenceDelimiterTag,
    PIXEL_DATA_TAGS, SpecificCharacterSetTag, TransferSyntaxUIDTag,
    tag_in_exception
)
from dcmcore.uid import (
    UID, DeflatedExplicitVRLittleEndian, ExplicitVRBigEndian,
    ExplicitVRLittleEndian, ImplicitVRLittleEndian
)
from dcmcore.util.hexutil import bytes2hex
from dcmcore.values import convert_string
from dcmcore.vr import VR as VR_, BYTES_VR, has_long_length


UNDEFINED_LENGTH = 0xFFFFFFFF

# Attributes known to have values that exceed the 16-bit length limit of
#   their VR when encoded as implicit VR
_LONG_VALUE_TAGS = {
    0x30040058,  # DVHData, DS
    0x30060050,  # ContourData, DS
    0x300A00EB,  # CompensatorTransmissionData, DS
    0x300A00EC,  # CompensatorThicknessData, DS
    0x300A0106,  # BlockData, DS
    0x00603020,  # HistogramData, UL
    0x00186054,  # TableOfYBreakPoints, FD
}

StopWhenType = Callable[[BaseTag, Optional[str], int], bool]


def _as_dicom_io(fp: Any) -> DicomIO:
    if isinstance(fp, DicomIO):
        return fp
    return DicomFileLike(fp)


def _check_value_length(tag: BaseTag, VR: Optional[str], length: int) -> None:
    """Raise a DicomFormatError if `length` is insane for `VR`."""
    if length == UNDEFINED_LENGTH:
        return

    if VR == VR_.UN and length > 0x7FFFFFFF:
        raise DicomFormatError(
            f"The value length {length} of {tag} is too large for VR UN"
        )

    if (
        VR is not None
        and VR in VR_.__members__.values()
        and not has_long_length(VR)
        and length > config.maximum_short_vr_value_length
        and tag not in _LONG_VALUE_TAGS
    ):
        raise DicomFormatError(
            f"The value length {length} of {tag} exceeds the maximum of "
            f"{config.maximum_short_vr_value_length} for VR {VR}"
        )


def data_element_generator(
    fp: DicomIO,
    is_implicit_VR: bool,
    is_little_endian: bool,
    stop_when: Optional[StopWhenType] = None,
    defer_size: Union[None, str, int, float] = None,
    encodings: Optional[List[str]] = None,
    specific_tags: Optional[Iterable[Any]] = None,
    deferred_source: Union[None, str, BinaryIO] = None,
    offset: int = 0
) -> Iterator[Union[RawAttribute, SequenceAttribute]]:
    """Create a generator to efficiently return the raw attributes.

    .. note::

        This function is used internally - usually there is no need to call it
        from user code. To read data from a DICOM file, :func:`dcmread`
        shall be used instead.

    Parameters
    ----------
    fp : dcmcore.filebase.DicomIO
        The stream to read from.
    is_implicit_VR : bool
        ``True`` if the data is encoded as implicit VR, ``False`` otherwise.
    is_little_endian : bool
        ``True`` if the data is encoded as little endian, ``False`` otherwise.
    stop_when : None, callable, optional
        If ``None`` (default), then the whole file is read. A callable which
        takes tag, VR, length, and returns ``True`` or ``False``. If it
        returns ``True``, the stream is rewound to the start of the header
        and the generator returns.
    defer_size : int, str, None, optional
        See :func:`dcmread` for parameter info.
    encodings : list of str, optional
        The Python encodings in effect, updated when (0008,0005) *Specific
        Character Set* is read, and passed on to nested sequences.
    specific_tags : list or None
        See :func:`dcmread` for parameter info.
    deferred_source : str or file-like, optional
        The source recorded for values whose reading is deferred, the stream
        itself if not used.
    offset : int, optional
        The position of `fp` within the source stream, for a stream holding
        only part of it. Added to the value positions and item byte offsets.

    Yields
    ------
    RawAttribute or SequenceAttribute
        A :class:`RawAttribute` for each attribute other than a sequence,
        which is decoded as it is read. An Item Delimiter is yielded as a
        :class:`RawAttribute` with the tag (FFFE,E00D).

    Raises
    ------
    DecodingError
        If the stream ends part way through a header or a value.
    DicomFormatError
        If a value length is insane for its VR.
    """
    # Summary of DICOM standard PS3.5-2008 chapter 7:
    # If Implicit VR, attribute is:
    #    tag, 4-byte length, value.
    #        The 4-byte length can be FFFFFFFF (undefined length)*
    #
    # If Explicit VR:
    #    if OB, OW, OF, SQ, UN, UT and the other long VRs:
    #       tag, VR, 2-bytes reserved (both zero), 4-byte length, value
    #   else: (any other VR)
    #       tag, VR, (2 byte length), value
    # * for undefined length, a Sequence Delimitation Item marks the end
    #        of the Value Field.

    endian_chr = "<" if is_little_endian else ">"
    if is_implicit_VR:
        element_struct = Struct(endian_chr + "HHL")
    else:  # Explicit VR
        # tag, VR, 2-byte length (or 0 if long VRs)
        element_struct = Struct(endian_chr + "HH2sH")
        extra_length_unpack = Struct(endian_chr + "L").unpack
    delimiter_unpack = Struct(endian_chr + "L").unpack

    # Make local variables so have faster lookup
    fp_read = fp.read
    fp_tell = fp.tell
    logger_debug = logger.debug
    debugging = config.debugging
    element_struct_unpack = element_struct.unpack
    defer_size = size_in_bytes(defer_size)
    if deferred_source is None:
        deferred_source = fp.parent

    tag_set = set()
    if specific_tags is not None:
        for tag in specific_tags:
            tag_set.add(Tag(tag))
        tag_set.add(SpecificCharacterSetTag)
    has_tag_set = len(tag_set) > 0

    while True:
        # Read tag, VR, length, get ready to read value
        bytes_read = fp_read(8)
        if len(bytes_read) == 0:
            return  # at end of file
        if len(bytes_read) < 8:
            raise DecodingError(
                f"Unexpected end of file: only {len(bytes_read)} bytes of an "
                f"attribute header at position 0x{fp_tell() - len(bytes_read):x}"
            )
        if debugging:
            debug_msg = f"{fp_tell() - 8:08x}: {bytes2hex(bytes_read)}"

        VR: Optional[str]
        unknown_vr: Optional[bytes] = None
        if is_implicit_VR:
            # must reset VR each time; could have set last iteration (e.g. SQ)
            VR = None
            group, elem, length = element_struct_unpack(bytes_read)
        else:  # explicit VR
            group, elem, vr_bytes, length = element_struct_unpack(bytes_read)
            if group == 0xFFFE:
                # delimiters and items have no VR in explicit VR
                VR = None
                length = delimiter_unpack(bytes_read[4:])[0]
            else:
                try:
                    VR = VR_(vr_bytes.decode("ascii"))
                except (UnicodeDecodeError, ValueError):
                    # may be the start of a data set in another encoding,
                    #   so only an error if stop_when doesn't end the read
                    VR = None
                    unknown_vr = vr_bytes
                if VR is not None and has_long_length(VR):
                    bytes_read = fp.read_exact(4)
                    length = extra_length_unpack(bytes_read)[0]
                    if debugging:
                        debug_msg += " " + bytes2hex(bytes_read)

        if debugging:
            debug_msg = "%-47s  (%04x, %04x)" % (debug_msg, group, elem)
            if VR is not None and not is_implicit_VR:
                debug_msg += " %s " % VR
            if length != UNDEFINED_LENGTH:
                debug_msg += "Length: %d" % length
            else:
                debug_msg += "Length: Undefined length (FFFFFFFF)"
            logger_debug(debug_msg)

        # Positioned to read the value, but may not want to -- check stop_when
        value_tell = fp_tell()
        tag = TupleTag((group, elem))

        if tag == ItemDelimiterTag:
            yield RawAttribute(
                tag, None, length, None, value_tell, is_implicit_VR,
                is_little_endian
            )
            continue

        if tag.is_delimiter:
            logger.warning(
                f"Unexpected tag {tag} at position 0x{value_tell - 8:x} "
                "outside a sequence, skipping"
            )
            if length not in (0, UNDEFINED_LENGTH):
                fp.seek(value_tell + length)
            continue

        if stop_when is not None:
            if stop_when(tag, VR, length):
                if debugging:
                    logger_debug("Reading ended by stop_when callback. "
                                 "Rewinding to start of attribute.")
                rewind_length = 8
                if VR is not None and not is_implicit_VR and has_long_length(VR):
                    rewind_length += 4
                fp.seek(value_tell - rewind_length)
                return

        if unknown_vr is not None:
            raise DicomFormatError(
                f"Unknown VR '{unknown_vr!r}' for tag {tag} at position "
                f"0x{value_tell - 8:x}"
            )

        known_VR = VR
        if known_VR is None:
            try:
                known_VR = dictionary_VR(tag)
            except KeyError:
                pass
        with tag_in_exception(tag):
            _check_value_length(tag, known_VR, length)

        # Reading the value
        # First case (most common): reading a value with a defined length
        if length != UNDEFINED_LENGTH and known_VR != VR_.SQ:
            if has_tag_set and tag not in tag_set:
                # skip the tag if not in specific tags
                fp.seek(value_tell + length)
                continue

            is_bulk = known_VR is None or known_VR in BYTES_VR or (
                known_VR == VR_.OB_OW
            )
            value: Union[bytes, DeferredValue, Any]
            # don't defer loading of Specific Character Set value as it is
            # needed immediately to get the character encoding for other tags
            if (
                defer_size is not None
                and length > defer_size
                and is_bulk
                and tag != SpecificCharacterSetTag
            ):
                value = DeferredValue(
                    deferred_source, value_tell, length, is_little_endian
                )
                logger_debug("Defer size exceeded. "
                             "Skipping forward to next attribute.")
                fp.seek(value_tell + length)
            else:
                with tag_in_exception(tag):
                    value = fp.read_exact(length)
                if debugging:
                    dotdot = "..." if length > 12 else "   "
                    displayed_value = value[:12] if value else b''
                    logger_debug("%08x: %-34s %s %r %s" %
                                 (value_tell, bytes2hex(displayed_value),
                                  dotdot, displayed_value, dotdot))

            # If the tag is (0008,0005) Specific Character Set, then store it
            if tag == SpecificCharacterSetTag:
                encodings = convert_encodings(
                    convert_string(value or b"", VR_.CS)
                )

            yield RawAttribute(tag, VR, length, value, value_tell + offset,
                               is_implicit_VR, is_little_endian)
            continue

        # Second case: undefined length, or a sequence of either length.
        #   Undefined length sequences and items can be nested so they are
        #   parsed rather than searched for the outer delimiter
        sq_implicit_VR = is_implicit_VR
        sq_little_endian = is_little_endian
        if known_VR is None or (known_VR == VR_.UN and length == UNDEFINED_LENGTH):
            # Look ahead to see if it consists of items and is thus a SQ
            next_tag = TupleTag(unpack(endian_chr + "HH", fp.read_exact(4)))
            # Rewind the file
            fp.seek(fp_tell() - 4)
            if next_tag == ItemTag:
                if known_VR == VR_.UN:
                    # the items of a UN sequence are implicit VR little endian
                    sq_implicit_VR = True
                    sq_little_endian = True
                known_VR = VR_.SQ

        if known_VR == VR_.SQ:
            if debugging:
                logger_debug(
                    f"{fp_tell():08x}: Reading/parsing "
                    f"{'undefined' if length == UNDEFINED_LENGTH else 'defined'} "
                    "length sequence"
                )
            with tag_in_exception(tag):
                seq = read_sequence(
                    fp, sq_implicit_VR, sq_little_endian, length, encodings,
                    offset
                )
            if has_tag_set and tag not in tag_set:
                continue
            yield SequenceAttribute(tag, VR_.SQ, seq, already_converted=True)
        elif tag in PIXEL_DATA_TAGS and is_little_endian:
            if debugging:
                logger_debug("Reading encapsulated pixel data")
            fp.is_little_endian = True
            with tag_in_exception(tag):
                value = read_encapsulated_pixel_data(fp)
            if has_tag_set and tag not in tag_set:
                continue
            yield RawAttribute(tag, VR, length, value, value_tell + offset,
                               is_implicit_VR, is_little_endian)
        else:
            if debugging:
                logger_debug("Reading undefined length attribute")
            with tag_in_exception(tag):
                value = read_undefined_length_value(
                    fp, is_little_endian, SequenceDelimiterTag
                )
            # tags with undefined length are skipped after read
            if has_tag_set and tag not in tag_set:
                continue
            yield RawAttribute(tag, VR, len(value), value, value_tell + offset,
                               is_implicit_VR, is_little_endian)


def _is_implicit_vr(
    fp: DicomIO,
    implicit_vr_is_assumed: bool,
    is_little_endian: bool,
    stop_when: Optional[StopWhenType]
) -> bool:
    """Check if the real VR is explicit or implicit.

    Parameters
    ----------
    fp : an opened file object
    implicit_vr_is_assumed : bool
        True if implicit VR is assumed.
        If this does not match with the real transfer syntax, a user warning
        will be issued.
    is_little_endian : bool
        True if file has little endian transfer syntax.
        Needed to interpret the first tag.
    stop_when : None, optional
        Optional call_back function which can terminate reading.
        Needed to check if the next tag still belongs to the read data set.

    Returns
    -------
    True if implicit VR is used, False otherwise.
    """
    tag_bytes = fp.read(4)
    vr = fp.read(2)
    if len(vr) < 2:
        return implicit_vr_is_assumed

    # it is sufficient to check if the VR is in valid ASCII range, as it is
    # extremely unlikely that the tag length accidentally has such a
    # representation - this would need the first tag to be longer than 16kB
    # (e.g. it should be > 0x4141 = 16705 bytes)
    found_implicit = not (0x40 < vr[0] < 0x5B and 0x40 < vr[1] < 0x5B)

    if found_implicit != implicit_vr_is_assumed:
        # first check if the tag still belongs to the data set if stop_when
        # is given - if not, the data set is empty and we just return
        endian_chr = "<" if is_little_endian else ">"
        tag = TupleTag(unpack(endian_chr + "HH", tag_bytes))
        if stop_when is not None and stop_when(tag, None, 0):
            return found_implicit

        # got to the real problem - warn or raise depending on config
        found_vr = 'implicit' if found_implicit else 'explicit'
        expected_vr = 'implicit' if not found_implicit else 'explicit'
        message = (f"Expected {expected_vr} VR, but found {found_vr} VR - "
                   f"using {found_vr} VR for reading")
        if config.enforce_valid_values:
            raise InvalidDicomError(message)
        warnings.warn(message, UserWarning)
    return found_implicit


def read_attribute_list(
    fp: Any,
    is_implicit_VR: bool,
    is_little_endian: bool,
    bytelength: Optional[int] = None,
    stop_when: Optional[StopWhenType] = None,
    defer_size: Union[None, str, int, float] = None,
    parent_encodings: Optional[List[str]] = None,
    specific_tags: Optional[Iterable[Any]] = None,
    at_top_level: bool = True,
    deferred_source: Union[None, str, BinaryIO] = None,
    offset: int = 0
) -> AttributeList:
    """Return an :class:`AttributeList` holding the next data set in `fp`.

    Parameters
    ----------
    fp : file-like
        An opened file-like object.
    is_implicit_VR : bool
        ``True`` if file transfer syntax is implicit VR.
    is_little_endian : bool
        ``True`` if file has little endian transfer syntax.
    bytelength : int, None, optional
        ``None`` to read until end of file or an Item Delimiter, else a fixed
        number of bytes to read.
    stop_when : None, optional
        Optional call_back function which can terminate reading. See help for
        :func:`data_element_generator` for details
    defer_size : int, None, optional
        Size to avoid loading large values in memory. See :func:`dcmread` for
        more parameter info.
    parent_encodings : list of str, optional
        The Python encodings to use when the data set has no (0008,0005)
        *Specific Character Set* of its own.
    specific_tags : list or None
        See :func:`dcmread` for parameter info.
    at_top_level: bool
        If the data set is top level (not within a sequence).
        Used to turn off explicit VR heuristic within sequences.
    deferred_source : str or file-like, optional
        The source recorded for deferred values.
    offset : int, optional
        See :func:`data_element_generator`.

    Raises
    ------
    DecodingError
        If the stream ends before the data set is complete.
    DicomFormatError
        If the data set is structurally invalid.
    """
    fp = _as_dicom_io(fp)
    attribute_list = AttributeList()
    attribute_list.parent_encodings = parent_encodings
    encodings = attribute_list.get_encodings(parent_encodings)

    fp_start = fp.tell()
    if at_top_level:
        is_implicit_VR = _is_implicit_vr(
            fp, is_implicit_VR, is_little_endian, stop_when)
    fp.seek(fp_start)
    de_gen = data_element_generator(fp, is_implicit_VR, is_little_endian,
                                    stop_when, defer_size, encodings,
                                    specific_tags, deferred_source, offset)

    while (bytelength is None) or (fp.tell() - fp_start < bytelength):
        try:
            raw = next(de_gen)
        except StopIteration:
            break

        tag = raw.tag
        # Check for ItemDelimiterTag -- data set is an item in a sequence
        if tag == ItemDelimiterTag:
            break

        with tag_in_exception(tag):
            if isinstance(raw, Attribute):
                attribute = raw
                attribute.encodings = encodings
                if tag.is_private:
                    attribute.private_creator = (
                        attribute_list.get_private_creator(tag)
                    )
            else:
                attribute = attribute_from_raw(raw, encodings, attribute_list)

        attribute_list.put(attribute)
        if tag == SpecificCharacterSetTag:
            encodings = attribute_list.get_encodings(parent_encodings)

    if bytelength is not None and fp.tell() - fp_start > bytelength:
        raise DicomFormatError(
            f"The data set starting at 0x{fp_start:x} is "
            f"{fp.tell() - fp_start} bytes long, which overruns its "
            f"declared length of {bytelength} bytes"
        )

    return attribute_list


def read_sequence(
    fp: Any,
    is_implicit_VR: bool,
    is_little_endian: bool,
    bytelength: int,
    encodings: Optional[List[str]] = None,
    offset: int = 0
) -> Sequence:
    """Read and return a :class:`~dcmcore.sequence.Sequence` of items.

    Parameters
    ----------
    fp : file-like
        The stream, positioned at the first item.
    is_implicit_VR : bool
        ``True`` if the items are encoded as implicit VR.
    is_little_endian : bool
        ``True`` if the items are encoded as little endian.
    bytelength : int
        The length of the sequence value, ``0xFFFFFFFF`` if undefined.
    encodings : list of str, optional
        The Python encodings in effect in the enclosing list.
    offset : int, optional
        Added to the stream position when recording the item byte offsets,
        for a stream holding only the value of a sequence.
    """
    fp = _as_dicom_io(fp)
    seq = Sequence()
    if bytelength == 0:  # SQ of length 0 possible (PS 3.5-2008 7.5.1a (p.40)
        return seq

    length: Optional[int] = bytelength
    if bytelength == UNDEFINED_LENGTH:
        length = None

    fp_tell = fp.tell  # for speed in loop
    fpStart = fp_tell()
    while (length is None) or (fp_tell() - fpStart < length):
        item = read_sequence_item(
            fp, is_implicit_VR, is_little_endian, encodings, offset
        )
        if item is None:  # None is returned if hit Sequence Delimiter
            break
        seq.append(item)

    if length is not None and fp_tell() - fpStart != length:
        raise DicomFormatError(
            f"The items of the sequence at 0x{fpStart + offset:x} are "
            f"{fp_tell() - fpStart} bytes long but the sequence length is "
            f"{length} bytes"
        )

    return seq


def read_sequence_item(
    fp: DicomIO,
    is_implicit_VR: bool,
    is_little_endian: bool,
    encodings: Optional[List[str]] = None,
    offset: int = 0
) -> Optional[SequenceItem]:
    """Read and return a single sequence item, or ``None`` at the Sequence
    Delimiter.

    Raises
    ------
    DecodingError
        If the stream ends before the item header is complete.
    DicomFormatError
        If the header isn't an Item, Item Delimiter or Sequence Delimiter.
    """
    tag_length_format = "<HHL" if is_little_endian else ">HHL"
    while True:
        seq_item_tell = fp.tell() + offset
        try:
            bytes_read = fp.read_exact(8)
        except DecodingError:
            raise DecodingError(
                f"No tag to read at file position 0x{seq_item_tell:05x}"
            )
        group, element, length = unpack(tag_length_format, bytes_read)
        tag = TupleTag((group, element))

        if tag == SequenceDelimiterTag:  # No more items, time to stop reading
            logger.debug(f"{seq_item_tell:08x}: End of Sequence")
            if length != 0:
                logger.warning(
                    f"Expected 0x00000000 after delimiter, found 0x{length:x}, "
                    f"at position 0x{fp.tell() - 4 + offset:x}"
                )
            return None

        if tag == ItemDelimiterTag:
            logger.warning(
                f"Expected sequence item with tag {ItemTag} at file position "
                f"0x{seq_item_tell:x}, found an Item Delimiter, skipping"
            )
            continue

        if tag != ItemTag:
            if tag.group != 0xFFFE:
                raise DicomFormatError(
                    f"Expected sequence item with tag {ItemTag} at file "
                    f"position 0x{seq_item_tell:x}, found {tag}"
                )
            logger.warning(
                f"Expected sequence item with tag {ItemTag} at file position "
                f"0x{seq_item_tell:x}, found {tag}"
            )
        else:
            logger.debug(
                f"{seq_item_tell:08x}: {bytes2hex(bytes_read)}  "
                "Found Item tag (start of item)"
            )
        break

    if length == UNDEFINED_LENGTH:
        attribute_list = read_attribute_list(
            fp, is_implicit_VR, is_little_endian, bytelength=None,
            parent_encodings=encodings, at_top_level=False, offset=offset
        )
    else:
        attribute_list = read_attribute_list(
            fp, is_implicit_VR, is_little_endian, length,
            parent_encodings=encodings, at_top_level=False, offset=offset
        )
        logger.debug(f"{fp.tell() + offset:08x}: Finished sequence item")

    return SequenceItem(attribute_list, byte_offset=seq_item_tell)


def read_preamble(fp: DicomIO, force: bool) -> Optional[bytes]:
    """Return the 128-byte DICOM preamble in `fp` if present.

    `fp` should be positioned at the start of the file-like. If the preamble
    and prefix are found then after reading `fp` will be positioned at the
    first byte after the prefix (byte offset 132). If either the preamble or
    prefix are missing and `force` is ``True`` then after reading `fp` will be
    positioned at the start of the file-like.

    Raises
    ------
    InvalidDicomError
        If `force` is ``False`` and no appropriate header information found.
    """
    logger.debug("Reading File Meta Information preamble...")
    preamble = fp.read(128)
    if config.debugging:
        sample = bytes2hex(preamble[:8]) + "..." + bytes2hex(preamble[-8:])
        logger.debug(f"{fp.tell() - len(preamble):08x}: {sample}")

    logger.debug("Reading File Meta Information prefix...")
    magic = fp.read(4)
    if magic != b"DICM" and force:
        logger.info(
            "File is not conformant with the DICOM File Format: 'DICM' "
            "prefix is missing from the File Meta Information header "
            "or the header itself is missing. Assuming no header and "
            "continuing."
        )
        fp.seek(0)
        return None

    if magic != b"DICM":
        raise InvalidDicomError(
            "File is missing DICOM File Meta Information header or the 'DICM' "
            "prefix is missing from the header. Use force=True to force "
            "reading."
        )

    logger.debug(f"{fp.tell() - 4:08x}: 'DICM' prefix found")
    return preamble


def _not_group_0002(tag: BaseTag, VR: Optional[str], length: int) -> bool:
    """Return True if the tag is not in group 0x0002, False otherwise."""
    return tag.group != 2


def _read_file_meta_info(fp: DicomIO) -> AttributeList:
    """Return an AttributeList containing any File Meta (0002,eeee)
    attributes in `fp`.

    File Meta attributes are always Explicit VR Little Endian (DICOM Standard,
    Part 10, :dcm:`Section 7<part10/chapter_7.html>`), but an implicit VR
    header is tolerated. Once any File Meta attributes are read `fp` will be
    positioned at the start of the next group of attributes.
    """
    start_file_meta = fp.tell()
    first = fp.read(6)
    fp.seek(start_file_meta)
    if len(first) < 6 or first[:2] != b"\x02\x00":
        return AttributeList()

    # The VR of an implicit VR header is the first half of a length field
    is_implicit_VR = not (0x40 < first[4] < 0x5B and 0x40 < first[5] < 0x5B)
    if is_implicit_VR:
        logger.warning(
            "The File Meta Information is encoded as implicit VR, expected "
            "explicit VR little endian"
        )

    file_meta = read_attribute_list(
        fp, is_implicit_VR=is_implicit_VR, is_little_endian=True,
        stop_when=_not_group_0002, at_top_level=False
    )

    # Log if the Group Length doesn't match actual length
    group_length = file_meta.get(0x00020000)
    if group_length is not None and not group_length.is_empty:
        # FileMetaInformationGroupLength must be 12 bytes long and its value
        #   counts from the beginning of the next attribute to the end of the
        #   file meta attributes
        length_file_meta = fp.tell() - (start_file_meta + 12)
        if group_length.value != length_file_meta:
            logger.info(
                "_read_file_meta_info: (0002,0000) 'File Meta Information "
                "Group Length' value doesn't match the actual File Meta "
                f"Information length ({group_length.value} vs "
                f"{length_file_meta} bytes)."
            )

    return file_meta


def guess_transfer_syntax(header: bytes) -> UID:
    """Return the transfer syntax of a data set that starts with the 8
    bytes `header` and has no File Meta Information.

    The group number's byte order decides the endianness and upper-case
    letters in bytes 4 and 5 indicate an explicit VR.

    Raises
    ------
    InvalidDicomError
        If the data set looks like implicit VR big endian, which isn't a
        DICOM transfer syntax.
    """
    if len(header) < 8:
        return ImplicitVRLittleEndian

    if header[0] == 0 and header[1] == 0:
        # group 0x0000, use the length or VR bytes instead
        is_big_endian = header[4] < header[7]
    else:
        is_big_endian = header[0] < header[1]

    is_explicit_VR = (
        0x41 <= header[4] <= 0x5A and 0x41 <= header[5] <= 0x5A
    )

    if is_big_endian and not is_explicit_VR:
        raise InvalidDicomError(
            "Not a DICOM file (masquerades as explicit VR big endian)"
        )

    if is_big_endian:
        return ExplicitVRBigEndian
    if is_explicit_VR:
        return ExplicitVRLittleEndian
    return ImplicitVRLittleEndian


def _at_pixel_data(tag: BaseTag, VR: Optional[str], length: int) -> bool:
    return tag in PIXEL_DATA_TAGS


def read_partial(
    fileobj: Any,
    stop_when: Optional[StopWhenType] = None,
    defer_size: Union[None, str, int, float] = None,
    force: bool = False,
    specific_tags: Optional[Iterable[Any]] = None,
    deferred_source: Union[None, str, BinaryIO] = None
) -> FileAttributeList:
    """Parse a DICOM file until a condition is met.

    Parameters
    ----------
    fileobj : a file-like object
        Note that the file will not close when the function returns.
    stop_when :
        Stop condition. See :func:`read_attribute_list` for more info.
    defer_size : int, str, None, optional
        See :func:`dcmread` for parameter info.
    force : bool
        See :func:`dcmread` for parameter info.
    specific_tags : list or None
        See :func:`dcmread` for parameter info.
    deferred_source : str or file-like, optional
        The source recorded for deferred values, `fileobj` if not used.

    Notes
    -----
    Use :func:`dcmread` unless you need to stop on some condition other than
    reaching pixel data.
    """
    fp = _as_dicom_io(fileobj)
    if deferred_source is None:
        deferred_source = fp.parent

    # Read File Meta Information
    # Read preamble (if present)
    preamble = read_preamble(fp, force)
    # Read any File Meta Information group (0002,eeee) attributes (if present)
    file_meta = _read_file_meta_info(fp)

    # `fp` should be positioned at the start of the data set by this point.
    start = fp.tell()
    header = fp.read(8)
    fp.seek(start)

    transfer_syntax_attribute = file_meta.get(TransferSyntaxUIDTag)
    if transfer_syntax_attribute is None or transfer_syntax_attribute.is_empty:
        # If no TransferSyntaxUID attribute then we have to try and figure
        #   out the encoding from the start of the data set
        transfer_syntax = guess_transfer_syntax(header)
        logger.debug(f"Guessed the transfer syntax '{transfer_syntax.name}'")
    else:
        transfer_syntax = UID(transfer_syntax_attribute.value)

    is_implicit_VR = transfer_syntax == ImplicitVRLittleEndian
    is_little_endian = transfer_syntax != ExplicitVRBigEndian
    if transfer_syntax == DeflatedExplicitVRLittleEndian:
        # See PS3.5 section A.5
        # when written, the entire data set following
        #     the file metadata was prepared the normal way,
        #     then "deflate" compression applied.
        #  All that is needed here is to decompress and then
        #     use as normal in a file-like object
        zipped = fp.read()
        # -MAX_WBITS part is from comp.lang.python answer:
        # groups.google.com/group/comp.lang.python/msg/e95b3b38a71e6799
        unzipped = zlib.decompressobj(-zlib.MAX_WBITS).decompress(zipped)
        fp = DicomBytesIO(unzipped)
        deferred_source = fp.parent
    elif not transfer_syntax.is_transfer_syntax:
        # Any other syntax should be Explicit VR Little Endian,
        #   e.g. all Encapsulated (JPEG etc) are ExplVR-LE
        #        by Standard PS 3.5-2008 A.4 (p63)
        logger.warning(
            f"Unknown transfer syntax '{transfer_syntax}', assuming explicit "
            "VR little endian"
        )
        is_implicit_VR = False
    elif transfer_syntax.is_encapsulated:
        is_implicit_VR = False

    attribute_list = read_attribute_list(
        fp, is_implicit_VR, is_little_endian, stop_when=stop_when,
        defer_size=defer_size, specific_tags=specific_tags,
        deferred_source=deferred_source
    )

    return FileAttributeList(
        fileobj, attribute_list, preamble, file_meta, transfer_syntax
    )


def dcmread(
    fp: Union[PathType, BinaryIO],
    defer_size: Union[None, str, int, float] = None,
    stop_before_pixels: bool = False,
    force: bool = False,
    specific_tags: Optional[Iterable[Any]] = None
) -> FileAttributeList:
    """Read and parse a DICOM data set stored in the DICOM File Format.

    Read a DICOM data set stored in accordance with the :dcm:`DICOM File
    Format <part10/chapter_7.html>`. If the data set is not stored in
    accordance with the File Format (i.e. the preamble and prefix are missing,
    there are missing required Type 1 *File Meta Information Group* attributes
    or the entire *File Meta Information* is missing) then you will have to
    set `force` to ``True``.

    Parameters
    ----------
    fp : str or PathLike or file-like
        Either a file-like object, or a string containing the file name. If a
        file-like object, the caller is responsible for closing it.
    defer_size : int or str or None, optional
        If ``None`` (default), :attr:`config.defer_size` is used. If a bulk
        value is larger than `defer_size`, it is not read into memory until
        it is accessed in code. Specify an integer (bytes), or a string value
        with units, e.g. "512 KB", "2 MB".
    stop_before_pixels : bool, optional
        If ``False`` (default), the full file will be read and parsed. Set
        ``True`` to stop before reading *Pixel Data* (and all subsequent
        attributes).
    force : bool, optional
        If ``False`` (default), raises an
        :class:`~dcmcore.errors.InvalidDicomError` if the file is
        missing the *File Meta Information* header. Set to ``True`` to force
        reading even if no *File Meta Information* header is found.
    specific_tags : list or None, optional
        If not ``None``, only the tags in the list are returned. The list
        elements can be tags or keywords. Note that the attribute (0008,0005)
        *Specific Character Set* is always returned if present - this ensures
        correct decoding of returned text values.

    Returns
    -------
    FileAttributeList
        The data set, with the preamble, File Meta Information and transfer
        syntax.

    Raises
    ------
    InvalidDicomError
        If `force` is ``False`` and the file is not a valid DICOM file.
    DecodingError
        If the file ends part way through an attribute.
    DicomFormatError
        If the file's content is structurally invalid.
    """
    # Open file if not already a file object
    caller_owns_file = True
    fp = path_from_pathlike(fp)
    if isinstance(fp, str):
        # caller provided a file name; we own the file handle
        caller_owns_file = False
        logger.debug(f"Reading file '{fp}'")
        filename = fp
        fileobj: BinaryIO = open(fp, 'rb')
        deferred_source: Union[str, BinaryIO] = filename
    else:
        fileobj = fp
        deferred_source = fp

    if config.debugging:
        logger.debug("\n" + "-" * 80)
        logger.debug("Call to dcmread()")
        logger.debug(
            f"filename:'{getattr(fileobj, 'name', '<none>')}', "
            f"defer_size='{defer_size}', "
            f"stop_before_pixels={stop_before_pixels}, force={force}, "
            f"specific_tags={specific_tags}"
        )
        if caller_owns_file:
            logger.debug("Caller passed file object")
        else:
            logger.debug("Caller passed file name")
        logger.debug("-" * 80)

    if defer_size is None:
        defer_size = config.defer_size
    # Convert size to defer reading into bytes
    defer_size = size_in_bytes(defer_size)

    # Iterate through all items and store them --include file meta if present
    stop_when = None
    if stop_before_pixels:
        stop_when = _at_pixel_data
    try:
        attribute_list = read_partial(
            fileobj, stop_when, defer_size=defer_size, force=force,
            specific_tags=specific_tags, deferred_source=deferred_source
        )
    finally:
        if not caller_owns_file:
            fileobj.close()

    if not caller_owns_file:
        attribute_list.filename = deferred_source
    return attribute_list


def read_deferred(attribute: Attribute) -> Attribute:
    """Read the value of `attribute` if it was deferred and return the
    attribute.
    """
    # Accessing the value reads it
    attribute.value
    return attribute
