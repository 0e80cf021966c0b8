# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Functions for working with encapsulated (compressed) pixel data.

Encapsulated Pixel Data has an undefined length and holds a Basic Offset
Table Item followed by one Item per fragment and a Sequence Delimiter. The
codec hands the fragments on as raw bytes without decoding them.
"""

from struct import pack
from typing import Iterator, List, Sequence

from dcmcore.config import logger
from dcmcore.errors import DecodingError, DicomFormatError
from dcmcore.filebase import DicomBytesIO, DicomIO
from dcmcore.tag import ItemTag, SequenceDelimiterTag


class EncapsulatedPixelData:
    """The value of an undefined length *Pixel Data* attribute.

    Attributes
    ----------
    offsets : list of int
        The Basic Offset Table, byte offsets to the first fragment of each
        frame measured from the first fragment Item. Empty if the table has
        no value.
    fragments : list of bytes
        The fragment values, in stream order.
    """

    def __init__(self, offsets: Sequence[int], fragments: Sequence[bytes]):
        self.offsets = list(offsets)
        self.fragments = list(fragments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncapsulatedPixelData):
            return NotImplemented
        return (
            self.offsets == other.offsets and self.fragments == other.fragments
        )

    def __len__(self) -> int:
        return len(self.fragments)

    def __repr__(self) -> str:
        return (
            f"EncapsulatedPixelData({len(self.offsets)} offsets, "
            f"{len(self.fragments)} fragments)"
        )

    @property
    def encoded_length(self) -> int:
        """Return the number of bytes of the Items, excluding the Sequence
        Delimiter.
        """
        return (
            8 + 4 * len(self.offsets)
            + sum(8 + len(f) + len(f) % 2 for f in self.fragments)
        )

    def frames(self) -> Iterator[bytes]:
        """Yield each frame as the concatenation of its fragments.

        Without a Basic Offset Table each fragment is taken as one frame.
        """
        if not self.offsets:
            yield from self.fragments
            return

        boundaries = self.offsets[1:] + [self.encoded_length]
        frame: List[bytes] = []
        position = 0
        frame_number = 0
        for fragment in self.fragments:
            if position >= boundaries[frame_number]:
                yield b"".join(frame)
                frame = []
                frame_number += 1
            frame.append(fragment)
            position += 8 + len(fragment) + len(fragment) % 2
        yield b"".join(frame)

    def write(self, fp: DicomIO) -> None:
        """Write the Items and the Sequence Delimiter to `fp`, which must be
        little endian.
        """
        fp.write_tag(ItemTag)
        fp.write_UL(4 * len(self.offsets))
        for offset in self.offsets:
            fp.write_UL(offset)

        for fragment in self.fragments:
            fp.write(itemise_fragment(fragment))

        fp.write_tag(SequenceDelimiterTag)
        fp.write_UL(0)


# Functions for parsing encapsulated data
def get_frame_offsets(fp: DicomIO) -> List[int]:
    """Return a list of the fragment offsets from the Basic Offset Table.

    Parameters
    ----------
    fp : dcmcore.filebase.DicomIO
        The encapsulated pixel data positioned at the start of the Basic Offset
        Table. ``fp.is_little_endian`` should be set to True.

    Returns
    -------
    list of int
        The byte offsets to the first fragment of each frame, as measured from
        the start of the first item following the Basic Offset Table item.
        Empty if the Basic Offset Table has no value.

    Raises
    ------
    DicomFormatError
        If the Basic Offset Table item's tag is not (FFFE,E000) or if the
        length in bytes of the item's value is not a multiple of 4.
    """
    if not fp.is_little_endian:
        raise ValueError("'fp.is_little_endian' must be True")

    tag = fp.read_tag()
    if tag != ItemTag:
        raise DicomFormatError(
            f"Unexpected tag '{tag}' when parsing the Basic Offset Table item"
        )

    length = fp.read_UL()
    if length % 4:
        raise DicomFormatError(
            "The length of the Basic Offset Table item is not a multiple of 4"
        )

    return [fp.read_UL() for _ in range(length // 4)]


def generate_pixel_data_fragment(
    fp: DicomIO, require_delimiter: bool = False
) -> Iterator[bytes]:
    """Yield the encapsulated pixel data fragments as bytes.

    `fp` must be positioned after the Basic Offset Table item. Reading stops
    at the Sequence Delimiter Item (which is consumed) or, unless
    `require_delimiter` is ``True``, at the end of `fp`.

    Raises
    ------
    DicomFormatError
        If the data contains an item with an undefined length or an unknown
        tag.
    DecodingError
        If `require_delimiter` is ``True`` and the end of `fp` is reached
        first, or if a fragment is truncated.
    """
    if not fp.is_little_endian:
        raise ValueError("'fp.is_little_endian' must be True")

    while True:
        try:
            tag = fp.read_tag()
        except DecodingError:
            if require_delimiter:
                raise DecodingError(
                    "End of file reached before the Sequence Delimiter of "
                    "the encapsulated pixel data"
                )
            break

        if tag == ItemTag:
            length = fp.read_UL()
            if length == 0xFFFFFFFF:
                raise DicomFormatError(
                    f"Undefined item length at offset 0x{fp.tell() - 4:x} "
                    "when parsing the encapsulated pixel data fragments"
                )
            yield fp.read_exact(length)
        elif tag == SequenceDelimiterTag:
            length = fp.read_UL()
            if length != 0:
                logger.warning(
                    "Expected 0x00000000 after delimiter, found "
                    f"0x{length:x}, at position 0x{fp.tell() - 4:x}"
                )
            break
        else:
            raise DicomFormatError(
                f"Unexpected tag '{tag}' at offset 0x{fp.tell() - 4:x} when "
                "parsing the encapsulated pixel data fragment items"
            )


def read_encapsulated_pixel_data(fp: DicomIO) -> EncapsulatedPixelData:
    """Read the Items of an undefined length *Pixel Data* value from `fp`,
    which is left positioned after the Sequence Delimiter.
    """
    offsets = get_frame_offsets(fp)
    fragments = list(generate_pixel_data_fragment(fp, require_delimiter=True))
    return EncapsulatedPixelData(offsets, fragments)


def generate_pixel_data_frame(bytestream: bytes) -> Iterator[bytes]:
    """Yield each frame of the encoded encapsulated *Pixel Data* value
    `bytestream` as bytes. The Sequence Delimiter Item may or may not be
    present.
    """
    fp = DicomBytesIO(bytestream)
    fp.is_little_endian = True
    offsets = get_frame_offsets(fp)
    fragments = list(generate_pixel_data_fragment(fp))
    yield from EncapsulatedPixelData(offsets, fragments).frames()


def itemise_fragment(fragment: bytes) -> bytes:
    """Return an itemised `fragment`, padded to even length with ``0x00``.

    Parameters
    ----------
    fragment : bytes
        The fragment to itemise.

    Returns
    -------
    bytes
        The itemised fragment: the Item tag (FFFE,E000), the 4 byte little
        endian length and the (padded) fragment.
    """
    if len(fragment) % 2:
        fragment += b"\x00"

    return b"\xFE\xFF\x00\xE0" + pack("<I", len(fragment)) + fragment


def encapsulate(frames: Sequence[bytes], has_bot: bool = True) -> bytes:
    """Return encapsulated `frames`, one fragment per frame.

    Parameters
    ----------
    frames : list of bytes
        The frame data to encapsulate.
    has_bot : bool, optional
        ``True`` (default) to include values in the Basic Offset Table.

    Returns
    -------
    bytes
        The encapsulated data, Basic Offset Table Item and fragment Items
        followed by the Sequence Delimiter Item.
    """
    pixel_data = encapsulate_frames(frames, has_bot)
    fp = DicomBytesIO()
    fp.is_little_endian = True
    pixel_data.write(fp)
    return fp.getvalue()


def encapsulate_frames(
    frames: Sequence[bytes], has_bot: bool = True
) -> EncapsulatedPixelData:
    """Return an :class:`EncapsulatedPixelData` holding `frames`, one
    fragment per frame.
    """
    offsets: List[int] = []
    fragments: List[bytes] = []
    position = 0
    for frame in frames:
        offsets.append(position)
        if len(frame) % 2:
            frame += b"\x00"
        fragments.append(frame)
        position += 8 + len(frame)

    return EncapsulatedPixelData(offsets if has_bot else [], fragments)

