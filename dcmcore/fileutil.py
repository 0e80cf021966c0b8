# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Functions for reading to certain bytes, e.g. delimiters."""
import os
import pathlib
from struct import pack
from typing import Optional, Union, Any, BinaryIO

from dcmcore.config import logger
from dcmcore.errors import DecodingError
from dcmcore.tag import BaseTag


PathType = Union[str, bytes, os.PathLike]


def find_bytes(
    fp: BinaryIO, bytes_to_find: bytes, read_size: int = 128,
    rewind: bool = True
) -> Optional[int]:
    """Read in the file until a specific byte sequence found.

    Parameters
    ----------
    fp : file-like
        The file-like to search.
    bytes_to_find : bytes
        Contains the bytes to find. Must be in correct endian order already.
    read_size : int
        Number of bytes to read at a time.
    rewind : bool
        Flag to rewind file reading position.

    Returns
    -------
    found_at : int or None
        Position where byte sequence was found, else ``None``.
    """
    data_start = fp.tell()
    search_rewind = len(bytes_to_find) - 1

    while True:
        chunk_start = fp.tell()
        bytes_read = fp.read(read_size)
        eof = len(bytes_read) < read_size
        index = bytes_read.find(bytes_to_find)
        if index != -1:
            break
        if eof:
            if rewind:
                fp.seek(data_start)
            return None
        # rewind a bit in case the sequence crossed the read_size boundary
        fp.seek(fp.tell() - search_rewind)

    found_at = chunk_start + index
    if rewind:
        fp.seek(data_start)
    else:
        fp.seek(found_at + len(bytes_to_find))
    return found_at


def find_delimiter(
    fp: BinaryIO, delimiter: BaseTag, is_little_endian: bool,
    read_size: int = 128, rewind: bool = True
) -> Optional[int]:
    """Return file position where 4-byte `delimiter` is located, or ``None``
    if it isn't found.
    """
    struct_format = "<HH" if is_little_endian else ">HH"
    delimiter_bytes = pack(struct_format, delimiter.group, delimiter.element)
    return find_bytes(fp, delimiter_bytes, read_size=read_size, rewind=rewind)


def read_undefined_length_value(
    fp: BinaryIO,
    is_little_endian: bool,
    delimiter_tag: BaseTag,
    read_size: int = 1024 * 8
) -> bytes:
    """Read until `delimiter_tag` and return the value up to that point.

    On completion, the file will be set to the first byte after the delimiter
    and its following four zero bytes.

    Parameters
    ----------
    fp : file-like
        The file-like to read.
    is_little_endian : bool
        ``True`` if file transfer syntax is little endian, else ``False``.
    delimiter_tag : BaseTag
        Tag used as end marker for reading
    read_size : int, optional
        Number of bytes to read at one time.

    Returns
    -------
    bytes
        The value preceding the delimiter.

    Raises
    ------
    DecodingError
        If EOF is reached before delimiter found.
    """
    data_start = fp.tell()
    delimiter_at = find_delimiter(
        fp, delimiter_tag, is_little_endian, read_size=read_size
    )
    if delimiter_at is None:
        raise DecodingError(
            f"End of file reached before delimiter {delimiter_tag} found"
        )

    value = fp.read(delimiter_at - data_start)
    fp.seek(delimiter_at + 4)
    length = fp.read(4)
    if length != b"\0\0\0\0":
        logger.warning(
            "Expected 4 zero bytes after undefined length delimiter at pos "
            f"0x{fp.tell() - 4:04x}"
        )
    return value


def path_from_pathlike(
    file_object: Union[PathType, BinaryIO]
) -> Union[str, BinaryIO]:
    """Return the path if `file_object` is a path-like object, otherwise the
    object itself.
    """
    if isinstance(file_object, pathlib.PurePath):
        return str(file_object)
    if isinstance(file_object, bytes):
        return os.fsdecode(file_object)
    try:
        return os.fspath(file_object)  # type: ignore[arg-type]
    except TypeError:
        return file_object  # type: ignore[return-value]


def is_filename(file_object: Any) -> bool:
    """Return ``True`` if `file_object` refers to a file by name."""
    return isinstance(path_from_pathlike(file_object), str)
