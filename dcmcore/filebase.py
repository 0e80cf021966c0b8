# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Endian-aware primitive reads and writes over a file-like buffer."""

from io import BytesIO
import os
from struct import Struct
from types import TracebackType
from typing import (
    TYPE_CHECKING, cast, Any, Callable, Optional, Tuple, Type, TypeVar, Union
)

from dcmcore.errors import DecodingError
from dcmcore.tag import BaseTag

if TYPE_CHECKING:  # pragma: no cover
    from typing import BinaryIO


Self = TypeVar("Self", bound="DicomIO")


class DicomIO:
    """Wrapper for managing buffer-like objects used when reading or writing
    DICOM data sets.

    The buffer's own ``read()``, ``write()``, ``seek()`` and ``tell()`` are
    used directly; the wrapper adds tag, **US** and **UL** reads and writes in
    the byte order set by :attr:`is_little_endian`. The buffer position is the
    running byte offset used to record where sequence items begin.
    """

    def __init__(self, buffer: "BinaryIO") -> None:
        """Create a new ``DicomIO`` instance.

        Parameters
        ----------
        buffer : buffer-like object
            A buffer-like object that implements ``seek()`` and ``tell()``
            and one or both of ``read()`` and ``write()``.
        """
        self._us_unpacker: Callable[[bytes], Tuple[Any, ...]]
        self._us_packer: Callable[[int], bytes]
        self._ul_unpacker: Callable[[bytes], Tuple[Any, ...]]
        self._ul_packer: Callable[[int], bytes]
        self._tag_unpacker: Callable[[bytes], Tuple[Any, ...]]
        self._tag_packer: Callable[[int, int], bytes]

        self._implicit_vr: bool
        self._little_endian: bool

        self._buffer = buffer
        self._name: Optional[str] = getattr(self._buffer, "name", None)

        # It's more efficient to replace the existing class methods
        #   instead of wrapping them
        if hasattr(buffer, "read"):
            self.read = buffer.read  # type: ignore[assignment]

        if hasattr(buffer, "write"):
            self.write = buffer.write  # type: ignore[assignment]

        if hasattr(buffer, "close"):
            self.close = buffer.close  # type: ignore[assignment]

        # seek() and tell() are always required
        self.seek = buffer.seek  # type: ignore[assignment]
        self.tell = buffer.tell  # type: ignore[assignment]

    def close(self, *args: Any, **kwargs: Any) -> Any:
        """Close the buffer (if possible)"""
        pass

    def __enter__(self: Self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType]
    ) -> None:
        self.close()

    @property
    def is_little_endian(self) -> bool:
        """Get/set the endianness for encoding/decoding, ``True`` for little
        endian and ``False`` for big endian.
        """
        if not hasattr(self, "_little_endian"):
            raise AttributeError(
                f"{type(self).__name__}.is_little_endian' has not been set"
            )

        return self._little_endian

    @is_little_endian.setter
    def is_little_endian(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(
                f"'{type(self).__name__}.is_little_endian' must be bool"
            )

        self._little_endian = value

        endianness = "><"[value]
        self._us_packer = Struct(f"{endianness}H").pack
        self._us_unpacker = Struct(f"{endianness}H").unpack
        self._ul_packer = Struct(f"{endianness}L").pack
        self._ul_unpacker = Struct(f"{endianness}L").unpack
        self._tag_packer = Struct(f"{endianness}2H").pack
        self._tag_unpacker = Struct(f"{endianness}2H").unpack

    @property
    def is_implicit_VR(self) -> bool:
        """Get/set the VR mode for encoding/decoding. ``True`` for implicit VR
        and ``False`` for explicit VR.
        """
        if not hasattr(self, "_implicit_vr"):
            raise AttributeError(
                f"{type(self).__name__}.is_implicit_VR' has not been set"
            )

        return self._implicit_vr

    @is_implicit_VR.setter
    def is_implicit_VR(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(
                f"'{type(self).__name__}.is_implicit_VR' must be bool"
            )

        self._implicit_vr = value

    @property
    def name(self) -> Optional[str]:
        """Return the ``name`` of the wrapped buffer, or ``None``."""
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def parent(self) -> "BinaryIO":
        """Return the buffer object being wrapped."""
        return self._buffer

    def read(self, size: int = -1) -> bytes:
        """Read up to `size` bytes from the buffer and return them."""
        raise TypeError(
            f"'{type(self).__name__}' cannot be used with "
            f"'{type(self._buffer).__name__}': object has no read() method"
        )

    def read_exact(self, length: int, nr_retries: int = 3) -> bytes:
        """Return exactly `length` bytes read from the buffer.

        Parameters
        ----------
        length : int
            The number of bytes to be read.
        nr_retries : int, optional
            The number of tries to read data when the number of bytes read
            from the buffer is less than `length`. Default ``3``.

        Raises
        ------
        DecodingError
            If unable to read `length` bytes.
        """
        bytes_read = self.read(length)
        if len(bytes_read) == length:
            return bytes_read

        # Use a bytearray because concatenating bytes is expensive
        buffer = bytearray(bytes_read)
        attempts = 0
        while len(buffer) < length and attempts < nr_retries:
            buffer += self.read(length - len(buffer))
            attempts += 1

        num_bytes = len(buffer)
        if num_bytes == length:
            return bytes(buffer)

        raise DecodingError(
            f"Unexpected end of file. Read {num_bytes} bytes of {length} "
            f"expected starting at position 0x{self.tell() - num_bytes:x}"
        )

    def read_tag(self) -> BaseTag:
        """Return a tag read from the buffer."""
        group, elem = self._tag_unpacker(self.read_exact(4))
        return BaseTag(group << 16 | elem)

    def read_UL(self) -> int:
        """Return a UL value read from the buffer."""
        return cast(int, self._ul_unpacker(self.read_exact(4))[0])

    def read_US(self) -> int:
        """Return a US value read from the buffer."""
        return cast(int, self._us_unpacker(self.read_exact(2))[0])

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Change the buffer position to the given byte `offset`."""
        raise NotImplementedError()  # pragma: no cover

    def tell(self) -> int:
        """Return the current stream position of the buffer"""
        raise NotImplementedError()  # pragma: no cover

    def write(self, b: Union[bytes, bytearray, memoryview]) -> int:
        """Write the bytes-like object `b` to the buffer."""
        raise TypeError(
            f"'{type(self).__name__}' cannot be used with "
            f"'{type(self._buffer).__name__}': object has no write() method"
        )

    def write_tag(self, tag: int) -> None:
        """Write a tag to the buffer."""
        self.write(self._tag_packer(tag >> 16, tag & 0xFFFF))

    def write_UL(self, val: int) -> None:
        """Write a UL value to the buffer."""
        self.write(self._ul_packer(val))

    def write_US(self, val: int) -> None:
        """Write a US value to the buffer."""
        self.write(self._us_packer(val))


class DicomFileLike(DicomIO):
    """Wrapper for file-likes to simplify encoding/decoding DICOM data sets."""

    pass


def DicomFile(*args: Any, **kwargs: Any) -> DicomFileLike:
    """Return an opened :class:`DicomFileLike` from a file path."""
    return DicomFileLike(open(*args, **kwargs))


class DicomBytesIO(DicomIO):
    """Wrapper for :class:`io.BytesIO` to simplify encoding/decoding DICOM
    data sets.
    """

    def __init__(self, initial_bytes: Union[bytes, bytearray] = b"") -> None:
        buffer = BytesIO(initial_bytes)
        super().__init__(buffer)

        self.getvalue = buffer.getvalue
