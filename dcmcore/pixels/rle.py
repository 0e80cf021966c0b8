# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Decode and encode RLE Lossless *Pixel Data*.

**Supported transfer syntaxes**

* 1.2.840.10008.1.2.5 : RLE Lossless

Each frame starts with a 64-byte header giving the number of segments and the
offset of each segment. A segment holds one byte of every sample of one
sample plane, packed with the PackBits scheme described in the DICOM
Standard, Part 5, :dcm:`Annex G<part05/chapter_G.html>`.

+-------------+---------------------------+------+--------------+----------+
| Tag         | Keyword                   | Type | Supported    |          |
+=============+===========================+======+==============+==========+
| (0028,0002) | SamplesPerPixel           | 1    | N            | Required |
+-------------+---------------------------+------+--------------+----------+
| (0028,0008) | NumberOfFrames            | 1C   | N            | Optional |
+-------------+---------------------------+------+--------------+----------+
| (0028,0010) | Rows                      | 1    | N            | Required |
+-------------+---------------------------+------+--------------+----------+
| (0028,0011) | Columns                   | 1    | N            | Required |
+-------------+---------------------------+------+--------------+----------+
| (0028,0100) | BitsAllocated             | 1    | 8, 16, 32    | Required |
+-------------+---------------------------+------+--------------+----------+
| (0028,0103) | PixelRepresentation       | 1    | 0, 1         | Required |
+-------------+---------------------------+------+--------------+----------+
"""

from itertools import groupby
from struct import pack, unpack
import sys
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union

import numpy as np

from dcmcore.attribute import OtherAttribute, new_attribute
from dcmcore.config import logger
from dcmcore.encaps import EncapsulatedPixelData
from dcmcore.errors import DecodingError, DicomFormatError
from dcmcore.pixels.multiframe import MultiFramePixelData
from dcmcore.tag import PixelDataTag, TransferSyntaxUIDTag
from dcmcore.uid import RLELossless, UID

if TYPE_CHECKING:  # pragma: no cover
    from dcmcore.attributelist import AttributeList


SUPPORTED_TRANSFER_SYNTAXES = [RLELossless]


def supports_transfer_syntax(transfer_syntax: str) -> bool:
    """Return ``True`` if `transfer_syntax` is RLE Lossless."""
    return transfer_syntax in SUPPORTED_TRANSFER_SYNTAXES


# PackBits
def rle_decode_into(
    data: Union[bytes, bytearray],
    destination: Union[bytearray, memoryview],
) -> int:
    """Decode the run-length encoded `data` into `destination`.

    Decoding stops when `destination` is full or `data` is exhausted. A run
    that would overflow `destination` is written up to its capacity and the
    rest of the run is discarded.

    Parameters
    ----------
    data : bytes
        The encoded data.
    destination : bytearray
        The buffer to decode into, starting at its first byte.

    Returns
    -------
    int
        The number of bytes written to `destination`.

    Raises
    ------
    DecodingError
        If a run is missing its payload.
    """
    capacity = len(destination)
    nr_data = len(data)
    pos = 0
    produced = 0
    while produced < capacity and pos < nr_data:
        count = data[pos]
        pos += 1
        if count < 128:
            # Literal run of count + 1 bytes
            length = count + 1
            if pos + length > nr_data:
                raise DecodingError(
                    f"The literal run at offset {pos - 1} needs {length} "
                    f"bytes but only {nr_data - pos} remain"
                )
            length = min(length, capacity - produced)
            destination[produced:produced + length] = data[pos:pos + length]
            pos += count + 1
            produced += length
        elif count > 128:
            # Replicate run of 257 - count copies of the next byte
            if pos >= nr_data:
                raise DecodingError(
                    f"The replicate run at offset {pos - 1} is missing the "
                    "byte to be replicated"
                )
            length = min(257 - count, capacity - produced)
            destination[produced:produced + length] = data[pos:pos + 1] * length
            pos += 1
            produced += length
        # count == 128 is a no-op

    return produced


def rle_decode_segment(data: Union[bytes, bytearray]) -> bytearray:
    """Return the run-length encoded `data` decoded in full.

    Raises
    ------
    DecodingError
        If a run is missing its payload.
    """
    result = bytearray()
    result_extend = result.extend
    nr_data = len(data)
    pos = 0
    while pos < nr_data:
        count = data[pos]
        pos += 1
        if count < 128:
            if pos + count + 1 > nr_data:
                raise DecodingError(
                    f"The literal run at offset {pos - 1} needs {count + 1} "
                    f"bytes but only {nr_data - pos} remain"
                )
            result_extend(data[pos:pos + count + 1])
            pos += count + 1
        elif count > 128:
            if pos >= nr_data:
                raise DecodingError(
                    f"The replicate run at offset {pos - 1} is missing the "
                    "byte to be replicated"
                )
            result_extend(data[pos:pos + 1] * (257 - count))
            pos += 1

    return result


# RLE frames
def parse_rle_header(header: bytes) -> List[int]:
    """Return a list of byte offsets for the segments in RLE data.

    The RLE Header contains the number of segments for the image and the
    starting offset of each segment. Each of these numbers is represented as
    an unsigned long stored in little-endian. The RLE Header is 16 long words
    in length (i.e. 64 bytes) which allows it to describe a compressed image
    with up to 15 segments. All unused segment offsets shall be set to zero.

    Parameters
    ----------
    header : bytes
        The RLE header data (i.e. the first 64 bytes of an RLE frame).

    Returns
    -------
    list of int
        The byte offsets for each segment in the RLE data.

    Raises
    ------
    DicomFormatError
        If there are more than 15 segments or if the header is not 64 bytes
        long.
    """
    if len(header) != 64:
        raise DicomFormatError("The RLE header can only be 64 bytes long")

    nr_segments = unpack('<L', header[:4])[0]
    if nr_segments > 15:
        raise DicomFormatError(
            f"The RLE header specifies an invalid number of segments "
            f"({nr_segments})"
        )

    offsets = unpack(f'<{nr_segments}L', header[4:4 * (nr_segments + 1)])

    return list(offsets)


def decode_rle_frame(
    data: bytes,
    rows: int,
    columns: int,
    nr_samples: int,
    nr_bits: int
) -> bytearray:
    """Decode a single frame of RLE encoded data.

    Parameters
    ----------
    data : bytes
        The RLE frame data, header included.
    rows : int
        The number of output rows.
    columns : int
        The number of output columns.
    nr_samples : int
        Number of samples per pixel (e.g. 3 for RGB data).
    nr_bits : int
        Number of bits per sample - must be a multiple of 8.

    Returns
    -------
    bytearray
        The frame's decoded data in big endian and planar configuration 1
        byte ordering (i.e. for RGB data this is all red pixels then all
        green then all blue, with the bytes for each pixel ordered from
        MSB to LSB when reading left to right).

    Raises
    ------
    DicomFormatError
        If the number of segments or the decoded length of a segment is not
        as expected.
    DecodingError
        If a segment is truncated.
    """
    if nr_bits % 8:
        raise NotImplementedError(
            "Unable to decode RLE encoded pixel data with a (0028,0100) "
            f"'Bits Allocated' value of {nr_bits}"
        )

    offsets = parse_rle_header(data[:64])
    nr_segments = len(offsets)

    bytes_per_sample = nr_bits // 8
    if nr_segments != nr_samples * bytes_per_sample:
        raise DicomFormatError(
            "The number of RLE segments in the pixel data doesn't match the "
            f"expected amount ({nr_segments} vs. "
            f"{nr_samples * bytes_per_sample} segments)"
        )

    # Ensure the last segment gets decoded
    offsets.append(len(data))

    nr_pixels = rows * columns
    decoded = bytearray(nr_pixels * nr_samples * bytes_per_sample)
    segment = bytearray(nr_pixels)

    # Segments are ordered sample plane by sample plane, MSB first, and are
    #   interleaved into planes of big endian samples:
    #    Segment: 1     | 2     | 3     | 4     | 5     | 6
    #             R MSB | R LSB | G MSB | G LSB | B MSB | B LSB
    stride = bytes_per_sample * nr_pixels
    for sample_number in range(nr_samples):
        for byte_offset in range(bytes_per_sample):
            ii = sample_number * bytes_per_sample + byte_offset
            # Decoding is bounded so an odd length segment's pad is ignored
            produced = rle_decode_into(data[offsets[ii]:offsets[ii + 1]], segment)
            if produced != nr_pixels:
                raise DicomFormatError(
                    "The amount of decoded RLE segment data doesn't match the "
                    f"expected amount ({produced} vs. {nr_pixels} bytes)"
                )

            start = byte_offset + sample_number * stride
            decoded[start:start + stride:bytes_per_sample] = segment

    return decoded


def _frame_parameters(attribute_list: "AttributeList") -> Tuple[int, ...]:
    required = [
        'PixelData', 'BitsAllocated', 'Rows', 'Columns',
        'PixelRepresentation', 'SamplesPerPixel'
    ]
    missing = [keyword for keyword in required if keyword not in attribute_list]
    if missing:
        raise AttributeError(
            "Unable to convert the pixel data as the following required "
            "attributes are missing from the list: " + ", ".join(missing)
        )

    def single(keyword: str, default: int = 0) -> int:
        attribute = attribute_list.get(keyword)
        if attribute is None or attribute.is_empty:
            return default
        return int(attribute.get_integer_values()[0])

    return (
        single('Rows'),
        single('Columns'),
        single('SamplesPerPixel'),
        single('BitsAllocated'),
        single('PixelRepresentation'),
        single('NumberOfFrames', 1) or 1,
    )


def _transfer_syntax(attribute_list: "AttributeList") -> Optional[UID]:
    transfer_syntax = getattr(attribute_list, 'transfer_syntax', None)
    if transfer_syntax:
        return UID(transfer_syntax)

    for meta in (getattr(attribute_list, 'file_meta', None), attribute_list):
        if meta is None:
            continue
        attribute = meta.get(TransferSyntaxUIDTag)
        if attribute is not None and not attribute.is_empty:
            return UID(attribute.get_single_string_value_or_default())
    return None


def _encoded_frames(
    attribute_list: "AttributeList", nr_frames: int
) -> Iterator[bytes]:
    value = attribute_list[PixelDataTag].value
    if not isinstance(value, EncapsulatedPixelData):
        raise DicomFormatError(
            "Unable to decode the pixel data as it isn't encapsulated"
        )

    if nr_frames == 1:
        # A single frame may be split over several fragments
        return iter([b"".join(value.fragments)])
    return value.frames()


def _check_transfer_syntax(attribute_list: "AttributeList") -> None:
    transfer_syntax = _transfer_syntax(attribute_list)
    if transfer_syntax not in SUPPORTED_TRANSFER_SYNTAXES:
        raise NotImplementedError(
            "Unable to convert the pixel data as the transfer syntax "
            f"'{transfer_syntax}' is not RLE Lossless"
        )


def get_pixeldata(
    attribute_list: "AttributeList", rle_segment_order: str = '>'
) -> np.ndarray:
    """Return a :class:`numpy.ndarray` of the decoded *Pixel Data*.

    Parameters
    ----------
    attribute_list : AttributeList
        The list containing an Image Pixel module and the RLE encoded
        *Pixel Data* to be converted.
    rle_segment_order : str
        The order of segments used by the RLE decoder when dealing with *Bits
        Allocated* > 8. Each RLE segment contains 8-bits of the pixel data,
        and segments are supposed to be ordered from MSB to LSB. A value of
        ``'>'`` means interpret the segments as being in big endian order
        (default) while a value of ``'<'`` means interpret the segments as
        being in little endian order which may be possible if the encoded data
        is non-conformant.

    Returns
    -------
    numpy.ndarray
        The decoded pixels, shaped (frames, rows, columns) with a trailing
        samples axis when there is more than one sample per pixel.

    Raises
    ------
    AttributeError
        If `attribute_list` is missing a required attribute.
    NotImplementedError
        If the transfer syntax isn't RLE Lossless.
    DicomFormatError
        If the encoded data is inconsistent with the Image Pixel module.
    """
    _check_transfer_syntax(attribute_list)
    rows, columns, nr_samples, nr_bits, pixel_repr, nr_frames = (
        _frame_parameters(attribute_list)
    )

    pixel_data = bytearray()
    for ii, frame in enumerate(_encoded_frames(attribute_list, nr_frames)):
        if ii == nr_frames:
            logger.warning(
                f"The pixel data has more than the {nr_frames} frames given "
                "by (0028,0008) 'Number of Frames', ignoring the rest"
            )
            break
        pixel_data.extend(
            decode_rle_frame(frame, rows, columns, nr_samples, nr_bits)
        )

    dtype = np.dtype(f"{'i' if pixel_repr else 'u'}{nr_bits // 8}")
    arr = np.frombuffer(pixel_data, dtype.newbyteorder(rle_segment_order))

    # Each frame is decoded in planar configuration 1
    arr = arr.reshape(-1, nr_samples, rows, columns)
    if nr_samples > 1:
        arr = arr.transpose(0, 2, 3, 1)
    else:
        arr = arr.reshape(-1, rows, columns)

    return arr.astype(dtype.newbyteorder('='))


def decompress(attribute_list: "AttributeList") -> OtherAttribute:
    """Return a native **OB** or **OW** *Pixel Data* attribute holding the
    decoded frames of the RLE Lossless *Pixel Data* in `attribute_list`.

    Samples are left in planar configuration 1.

    Raises
    ------
    NotImplementedError
        If the transfer syntax isn't RLE Lossless or *Bits Allocated* isn't 8
        or 16.
    """
    _check_transfer_syntax(attribute_list)
    rows, columns, nr_samples, nr_bits, _, nr_frames = (
        _frame_parameters(attribute_list)
    )
    if nr_bits not in (8, 16):
        raise NotImplementedError(
            f"Unable to decompress pixel data with {nr_bits} bits allocated"
        )

    assembly = MultiFramePixelData(rows, columns, nr_samples, nr_frames)
    for ii, frame in enumerate(_encoded_frames(attribute_list, nr_frames)):
        if ii == nr_frames:
            break

        decoded = decode_rle_frame(frame, rows, columns, nr_samples, nr_bits)
        if nr_bits == 8:
            assembly.add_frame(new_attribute(PixelDataTag, "OB", bytes(decoded)))
        else:
            words = np.frombuffer(decoded, dtype='>u2')
            assembly.add_frame(new_attribute(PixelDataTag, "OW", words))

    attribute = assembly.get_pixel_data_attribute()
    if attribute is None:
        raise DicomFormatError("The pixel data has no frames")
    return attribute


# RLE encoding
def rle_encode_frame(arr: np.ndarray) -> bytearray:
    """Return a :class:`numpy.ndarray` image frame as RLE encoded
    :class:`bytearray`.

    Parameters
    ----------
    arr : numpy.ndarray
        A 2D (if *Samples Per Pixel* = 1) or 3D (if *Samples Per Pixel* = 3)
        ndarray containing a single frame of the image to be RLE encoded.

    Returns
    -------
    bytearray
        An RLE encoded frame, including the RLE header.
    """
    shape = arr.shape
    if len(shape) > 3:
        raise ValueError(
            "Unable to encode multiple frames at once, please encode one "
            "frame at a time"
        )

    # Check the expected number of segments
    nr_segments = arr.dtype.itemsize
    if len(shape) == 3:
        # Number of samples * bytes per sample
        nr_segments *= shape[-1]

    if nr_segments > 15:
        raise ValueError(
            "Unable to encode as the DICOM standard only allows "
            "a maximum of 15 segments in RLE encoded data"
        )

    rle_data = bytearray()
    seg_lengths = []
    planes = [arr[..., ii].copy() for ii in range(shape[-1])] if len(shape) == 3 else [arr]
    for plane in planes:
        for segment in _rle_encode_plane(plane):
            rle_data.extend(segment)
            seg_lengths.append(len(segment))

    # Add the number of segments to the header
    rle_header = bytearray(pack('<L', len(seg_lengths)))

    # Add the segment offsets, starting at 64 for the first segment
    offsets = [64]
    for ii, length in enumerate(seg_lengths[:-1]):
        offsets.append(offsets[ii] + length)
    rle_header.extend(pack(f'<{len(offsets)}L', *offsets))

    # Add trailing padding to make up the rest of the header (if required)
    rle_header.extend(b'\x00' * (64 - len(rle_header)))

    return rle_header + rle_data


def _rle_encode_plane(arr: np.ndarray) -> Iterator[bytearray]:
    """Yield the RLE encoded segments of an image plane, MSB first."""
    byte_order = arr.dtype.byteorder
    if byte_order == '=':
        byte_order = '<' if sys.byteorder == 'little' else '>'

    arr8 = arr.view(np.uint8)
    bytes_per_sample = arr.dtype.itemsize
    for ii in range(bytes_per_sample):
        # Little endian samples are segmented in reverse order
        if byte_order == '<':
            ii = bytes_per_sample - ii - 1
        segment = arr8.ravel()[ii::bytes_per_sample].reshape(arr.shape)

        yield rle_encode_segment(segment)


def rle_encode_segment(arr: np.ndarray) -> bytearray:
    """Return an array of 8-bit values as an RLE encoded segment.

    Each row of a 2D `arr` is encoded separately. Odd length segments are
    padded by a trailing ``0x00`` to be even length.
    """
    out = bytearray()
    if len(arr.shape) > 1:
        for row in arr:
            out.extend(_rle_encode_row(row))
    else:
        out.extend(_rle_encode_row(arr))

    # Pad odd length data with a trailing 0x00 byte
    out.extend(b'\x00' * (len(out) % 2))

    return out


def _rle_encode_row(arr: np.ndarray) -> bytes:
    """Return a 1D array of 8-bit values as RLE encoded bytes.

    2-byte repeats are always encoded as replicate runs.
    """
    out: List[int] = []
    out_append = out.append
    out_extend = out.extend

    def flush_literal(literal: List[int]) -> None:
        for ii in range(0, len(literal), 128):
            run = literal[ii:ii + 128]
            out_append(len(run) - 1)
            out_extend(run)

    literal: List[int] = []
    for key, group in groupby(arr.astype('uint8').tolist()):
        values = list(group)
        if len(values) == 1:
            literal.append(key)
            continue

        flush_literal(literal)
        literal = []
        for ii in range(0, len(values), 128):
            length = len(values[ii:ii + 128])
            if length > 1:
                out_append(257 - length)
            else:
                # A single trailing value is a literal run
                out_append(0)
            out_append(key)

    flush_literal(literal)

    return bytes(out)
