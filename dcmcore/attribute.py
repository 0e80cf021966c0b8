# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Define the Attribute family of classes.

An attribute is a tag, a fixed VR and the decoded value(s). Each
structural kind of VR has its own class, the set of classes is closed and
:func:`new_attribute` and :func:`attribute_from_raw` choose between them
using :data:`dcmcore.vr.KIND`.
"""

from struct import Struct, error as struct_error
from typing import (
    TYPE_CHECKING, Any, BinaryIO, Dict, Iterable, List, NamedTuple, Optional,
    Sequence as SequenceType, Type, Union
)
import warnings

import numpy as np

from dcmcore import config
from dcmcore.config import logger
from dcmcore.datadict import (
    dictionary_has_tag, dictionary_description, dictionary_keyword,
    dictionary_VR, private_dictionary_description, private_dictionary_VR
)
from dcmcore.encaps import EncapsulatedPixelData
from dcmcore.errors import DicomFormatError, EncodingError, ValidationWarning
from dcmcore.filebase import DicomBytesIO, DicomFileLike
from dcmcore.filewriter import write_attribute_header, write_sequence
from dcmcore.fileutil import path_from_pathlike
from dcmcore.sequence import Sequence, SequenceItem
from dcmcore.tag import BaseTag, Tag, TagType, PIXEL_DATA_TAGS
from dcmcore.uid import UID
from dcmcore.valuerep import (
    policy_for, repair_value, strip_padding, truncate_value,
    validate_characters, validate_format, validate_value, validate_vr_length
)
from dcmcore.values import convert_other, convert_value, encode_value, pad_value
from dcmcore.vr import (
    VR as VR_, VRKind, AMBIGUOUS_VR, KIND, NUMERIC_VR, TEXT_VR
)

if TYPE_CHECKING:  # pragma: no cover
    from dcmcore.attributelist import AttributeList
    from dcmcore.filebase import DicomIO


UNDEFINED_LENGTH = 0xFFFFFFFF


class DeferredValue(NamedTuple):
    """The location of a bulk value that has been left unread.

    Attributes
    ----------
    filename_or_fp : str or file-like
        The path of the file to reopen, or the (still open) file-like the
        value is in.
    value_tell : int
        The offset of the first byte of the value.
    length : int
        The length of the value in bytes.
    is_little_endian : bool
        The byte order of the encoded value.
    """
    filename_or_fp: Union[str, BinaryIO]
    value_tell: int
    length: int
    is_little_endian: bool

    def read(self) -> bytes:
        """Return the encoded value bytes, read from the source."""
        source = path_from_pathlike(self.filename_or_fp)
        if isinstance(source, str):
            with DicomFileLike(open(source, "rb")) as fp:
                fp.seek(self.value_tell)
                return fp.read_exact(self.length)

        fp = DicomFileLike(source)
        position = fp.tell()
        try:
            fp.seek(self.value_tell)
            return fp.read_exact(self.length)
        finally:
            fp.seek(position)


class RawAttribute(NamedTuple):
    """Container for the data from a raw (mostly) undecoded attribute."""
    tag: BaseTag
    VR: Optional[str]
    length: int
    value: Union[None, bytes, DeferredValue, EncapsulatedPixelData]
    value_tell: int
    is_implicit_VR: bool
    is_little_endian: bool


class Attribute:
    """Base class for all attributes.

    The VR is fixed when the attribute is created. Values are replaced
    through :meth:`set_values`, which enforces the length rules of the VR,
    and read through :attr:`value`, :attr:`values` or one of the
    ``get_*_values()`` accessors.

    Attributes
    ----------
    descripWidth : int
        For string display, this is the maximum width of the description
        field (default ``35``).
    maxBytesToDisplay : int
        For string display, attributes with more values than this display
        ``"Array of # elements"`` (default ``16``).
    showVR : bool
        For string display, include the attribute's VR just before its value
        (default ``True``).
    encodings : list of str or None
        The Python encodings used for the character set dependent VRs when
        no encodings are given explicitly.
    private_creator : str or None
        The private creator of a private attribute, if known.
    """

    descripWidth = 35
    maxBytesToDisplay = 16
    showVR = True

    kinds: SequenceType[VRKind] = ()

    def __init__(
        self,
        tag: TagType,
        VR: str,
        value: Any = None,
        already_converted: bool = False
    ) -> None:
        """Create a new attribute.

        Parameters
        ----------
        tag : int or str or 2-tuple of int
            The (group, element) tag in any form accepted by
            :func:`~dcmcore.tag.Tag`.
        VR : str
            The attribute's VR, which must belong to one of the structural
            kinds of the class.
        value : optional
            The initial value(s), set using :meth:`set_values`.
        already_converted : bool, optional
            If ``True`` then `value` is stored as it is, without any checks.
            Used when decoding.
        """
        self._tag = Tag(tag)
        self._VR = VR_(VR)
        if _kind_of(self._VR) not in self.kinds:
            raise ValueError(
                f"'{type(self).__name__}' cannot hold a value with VR "
                f"{self._VR}"
            )

        self.encodings: Optional[List[str]] = None
        self.private_creator: Optional[str] = None
        self._values: Any = self._empty()
        if already_converted:
            self._values = value
        elif value is not None:
            self.set_values(value)

    def _empty(self) -> Any:
        return []

    @property
    def tag(self) -> BaseTag:
        """Return the attribute's tag."""
        return self._tag

    @property
    def VR(self) -> str:
        """Return the attribute's VR, which never changes."""
        return self._VR

    @property
    def values(self) -> List[Any]:
        """Return a copy of the list of values."""
        return list(self._values)

    @property
    def value(self) -> Any:
        """Return the value: ``None`` if empty, the single value if the VM is
        1, otherwise the list of values.
        """
        if not self._values:
            return None
        if len(self._values) == 1:
            return self._values[0]
        return list(self._values)

    @property
    def VM(self) -> int:
        """Return the value multiplicity of the attribute."""
        return len(self._values)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` if the attribute has no value."""
        return self.VM == 0

    def set_values(self, values: Any) -> None:
        """Replace the attribute's value(s).

        Parameters
        ----------
        values
            A single value or a list of values.

        Raises
        ------
        EncodingError
            If a value isn't allowed for the VR.
        """
        if values is None:
            self._values = self._empty()
            return

        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            values = [values]

        self._values = [self._checked_value(v) for v in values]

    def _checked_value(self, value: Any) -> Any:
        return value

    def add_value(self, value: Any) -> None:
        """Append a single `value` to the attribute's values."""
        self._values.append(self._checked_value(value))

    def remove_values(self) -> None:
        """Remove all values from the attribute."""
        self._values = self._empty()

    # Encoding
    def encode_value(
        self,
        is_little_endian: bool = True,
        encodings: Optional[List[str]] = None
    ) -> bytes:
        """Return the encoded value, without padding."""
        return encode_value(
            self._encoding_VR(),
            self._values,
            is_little_endian,
            encodings or self.encodings
        )

    def _encoding_VR(self) -> str:
        if self.VR in AMBIGUOUS_VR:
            raise EncodingError(
                f"The ambiguous VR '{self.VR}' of {self.tag} must be resolved "
                "before the attribute can be encoded"
            )
        return self.VR

    @property
    def value_length(self) -> int:
        """Return the length of the encoded value in bytes."""
        return len(self.encode_value())

    @property
    def padded_value_length(self) -> int:
        """Return the length of the encoded value rounded up to even."""
        length = self.value_length
        if length == UNDEFINED_LENGTH:
            return length
        return length + length % 2

    def write(
        self, fp: "DicomIO", encodings: Optional[List[str]] = None
    ) -> None:
        """Write the attribute's header and padded value to `fp`.

        Parameters
        ----------
        fp : dcmcore.filebase.DicomIO
            The stream to write to, with ``is_little_endian`` and
            ``is_implicit_VR`` set.
        encodings : list of str, optional
            The Python encodings for the character set dependent VRs.
        """
        vr = self._encoding_VR()
        value = pad_value(vr, self.encode_value(fp.is_little_endian, encodings))
        write_attribute_header(fp, self.tag, vr, len(value))
        fp.write(value)

    # Validation and repair
    def is_character_in_value_valid(self, c: str) -> bool:
        """Return ``True`` if the character `c` may appear in a value."""
        return True

    def are_values_well_formed(self) -> bool:
        """Return ``True`` if every value has the form required by the VR."""
        return True

    def validate(self, warn: bool = True) -> List[str]:
        """Return a list of the problems with the attribute's values.

        Parameters
        ----------
        warn : bool, optional
            If ``True`` (default) issue a
            :class:`~dcmcore.errors.ValidationWarning` for each problem.
        """
        messages = self._problems()
        if warn:
            for msg in messages:
                warnings.warn(f"{self.tag}: {msg}", ValidationWarning)
        return messages

    def _problems(self) -> List[str]:
        return []

    @property
    def is_valid(self) -> bool:
        """Return ``True`` if the values have no problems."""
        return not self._problems()

    def repair_values(self) -> bool:
        """Repair the values as far as the VR allows and return ``True`` if
        the attribute is then valid.
        """
        return self.is_valid

    # Value accessors
    def get_string_values(self) -> List[str]:
        """Return the values as a list of :class:`str`."""
        raise TypeError(
            f"The values of an attribute with VR {self.VR} are not strings"
        )

    def get_single_string_value_or_default(self, default: str = "") -> str:
        """Return the first value as :class:`str`, or `default` if the
        attribute is empty.
        """
        values = self.get_string_values()
        return values[0] if values else default

    def get_delimited_string_values_or_default(
        self, default: str = "", delimiter: str = "\\"
    ) -> str:
        """Return all values as one :class:`str` joined by `delimiter`, or
        `default` if the attribute is empty.
        """
        values = self.get_string_values()
        return delimiter.join(values) if values else default

    def get_integer_values(self) -> List[int]:
        """Return the values as a list of :class:`int`."""
        raise TypeError(
            f"The values of an attribute with VR {self.VR} are not numbers"
        )

    def get_float_values(self) -> List[float]:
        """Return the values as a list of :class:`float`."""
        raise TypeError(
            f"The values of an attribute with VR {self.VR} are not numbers"
        )

    def get_double_values(self) -> List[float]:
        """Return the values as a list of :class:`float`."""
        return self.get_float_values()

    def get_short_values(self) -> np.ndarray:
        """Return the values as a :class:`numpy.ndarray` of 16-bit words."""
        raise TypeError(
            f"The values of an attribute with VR {self.VR} are not words"
        )

    def get_byte_values(self) -> bytes:
        """Return the little endian encoded value."""
        return self.encode_value(True)

    # Description
    @property
    def name(self) -> str:
        """Return the dictionary name of the attribute as :class:`str`."""
        return self.description()

    def description(self) -> str:
        """Return the dictionary name of the attribute as :class:`str`.

        Private attributes known to the private dictionary have their name
        in square brackets, other private attributes are described as
        ``'Private Creator'`` or ``'Private tag data'``.
        """
        if self.tag.is_private:
            name = "Private tag data"
            if self.private_creator:
                try:
                    name = private_dictionary_description(
                        self.tag, self.private_creator
                    )
                    name = f"[{name}]"
                except KeyError:
                    pass
            elif self.tag.is_private_creator:
                name = "Private Creator"
        elif dictionary_has_tag(self.tag):
            name = dictionary_description(self.tag)
        # implied Group Length dicom versions < 3
        elif self.tag.element == 0:
            name = "Group Length"
        else:
            name = ""
        return name

    @property
    def keyword(self) -> str:
        """Return the attribute's keyword, or ``''`` if unknown."""
        if dictionary_has_tag(self.tag):
            return dictionary_keyword(self.tag)
        return ""

    @property
    def repval(self) -> str:
        """Return a :class:`str` representation of the attribute's value."""
        if self.VM > self.maxBytesToDisplay:
            return f"Array of {self.VM} elements"
        return repr(self.value)

    def __str__(self) -> str:
        """Return :class:`str` representation of the attribute."""
        repVal = self.repval or ''
        if self.showVR:
            s = "%s %-*s %s: %s" % (str(self.tag), self.descripWidth,
                                    self.description()[:self.descripWidth],
                                    self.VR, repVal)
        else:
            s = "%s %-*s %s" % (str(self.tag), self.descripWidth,
                                self.description()[:self.descripWidth], repVal)
        return s

    __repr__ = __str__

    def __eq__(self, other: Any) -> Any:
        if not isinstance(other, Attribute):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.tag == other.tag
            and self.VR == other.VR
            and self._compare_value() == other._compare_value()
        )

    def __ne__(self, other: Any) -> Any:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def _compare_value(self) -> Any:
        return self._values


class StringAttribute(Attribute):
    """An attribute with a string, text or unique identifier VR.

    Values are held as :class:`str`. A value read from a stream keeps any
    leading or trailing spaces apart from the final padding byte, so that it
    encodes to the same bytes; :meth:`get_string_values` returns the values
    without their insignificant padding.
    """

    kinds = (VRKind.STRING, VRKind.TEXT, VRKind.UNIQUE_IDENTIFIER)

    def set_values(self, values: Any) -> None:
        if isinstance(values, str) and self.VR not in TEXT_VR:
            values = values.split("\\")

        super().set_values(values)

    def _checked_value(self, value: Any) -> str:
        value = self._as_string(value)

        valid, msg = validate_vr_length(self.VR, value)
        if not valid:
            if not policy_for(self.VR).allow_truncation:
                raise EncodingError(f"{self.tag}: {msg}")

            truncated = truncate_value(self.VR, value)
            warnings.warn(
                f"{self.tag}: {msg}, truncating '{value}' to '{truncated}'",
                ValidationWarning
            )
            value = truncated

        if config.enforce_valid_values:
            valid, msg = validate_characters(
                self.VR, strip_padding(self.VR, value)
            )
            if not valid:
                raise EncodingError(f"{self.tag}: {msg}")

        return value

    def _as_string(self, value: Any) -> str:
        if isinstance(value, str):
            return str(value)

        if isinstance(value, bool):
            raise TypeError(f"Cannot use a bool as a value for VR {self.VR}")

        if self.VR == VR_.IS and isinstance(value, (int, float)):
            if int(value) != value:
                raise EncodingError(
                    f"{self.tag}: {value} is not an integer and cannot be "
                    "used for VR IS"
                )
            return str(int(value))

        if self.VR == VR_.DS and isinstance(value, (int, float)):
            text = repr(float(value)) if isinstance(value, float) else str(value)
            if len(text) > 16:
                text = f"{value:.10g}"
                if len(text) > 16:
                    text = f"{value:.8g}"
            return text

        raise TypeError(
            f"A value of type '{type(value).__name__}' cannot be used for "
            f"VR {self.VR}"
        )

    def is_character_in_value_valid(self, c: str) -> bool:
        return policy_for(self.VR).is_valid_char(c)

    def are_values_well_formed(self) -> bool:
        return all(
            validate_format(self.VR, strip_padding(self.VR, v))[0]
            for v in self._values
        )

    def _problems(self) -> List[str]:
        messages = []
        for value in self._values:
            valid, msg = validate_value(self.VR, value.rstrip(" \x00"))
            if not valid:
                messages.append(msg)
        return messages

    def repair_values(self) -> bool:
        self._values = [repair_value(self.VR, v) for v in self._values]
        return self.is_valid

    def get_string_values(self) -> List[str]:
        return [strip_padding(self.VR, v) for v in self._values]

    def get_integer_values(self) -> List[int]:
        try:
            return [int(float(v)) for v in self.get_string_values()]
        except ValueError as exc:
            raise DicomFormatError(
                f"The values of {self.tag} cannot be read as integers: {exc}"
            )

    def get_float_values(self) -> List[float]:
        try:
            return [float(v) for v in self.get_string_values()]
        except ValueError as exc:
            raise DicomFormatError(
                f"The values of {self.tag} cannot be read as numbers: {exc}"
            )

    @property
    def repval(self) -> str:
        if self.VM > self.maxBytesToDisplay:
            return f"Array of {self.VM} elements"

        values = self.get_string_values()
        if self.VR == VR_.UI and len(values) == 1:
            uid = UID(values[0])
            if uid.is_transfer_syntax:
                return uid.name
        if len(values) == 1:
            return repr(values[0])
        return repr(values)


class BinaryNumericAttribute(Attribute):
    """An attribute with a fixed width binary number VR such as **US**,
    **SL** or **FD**.
    """

    kinds = (VRKind.BINARY_NUMERIC, )

    def _struct_format(self) -> str:
        if self.VR in NUMERIC_VR:
            return NUMERIC_VR[self.VR]
        # ambiguous VRs are held using their first alternative
        return NUMERIC_VR[self.VR.split(" or ")[0]]

    def _checked_value(self, value: Any) -> Any:
        fmt = self._struct_format()
        if isinstance(value, bool) or not isinstance(
            value, (int, float, np.integer, np.floating)
        ):
            raise TypeError(
                f"A value of type '{type(value).__name__}' cannot be used "
                f"for VR {self.VR}"
            )

        if fmt in "fd":
            return float(value)

        if int(value) != value:
            raise EncodingError(
                f"{self.tag}: {value} is not an integer and cannot be used "
                f"for VR {self.VR}"
            )
        value = int(value)
        if self.VR not in AMBIGUOUS_VR:
            try:
                Struct("<" + fmt).pack(value)
            except struct_error:
                raise EncodingError(
                    f"{self.tag}: {value} is out of range for VR {self.VR}"
                )
        return value

    def get_string_values(self) -> List[str]:
        return [str(v) for v in self._values]

    def get_integer_values(self) -> List[int]:
        return [int(v) for v in self._values]

    def get_float_values(self) -> List[float]:
        return [float(v) for v in self._values]

    def get_short_values(self) -> np.ndarray:
        dtype = np.int16 if self._struct_format() == "h" else np.uint16
        return np.array(self._values, dtype=dtype)


class AttributeTagAttribute(Attribute):
    """An attribute with VR **AT**, whose values are tags."""

    kinds = (VRKind.ATTRIBUTE_TAG, )

    def _checked_value(self, value: Any) -> BaseTag:
        try:
            return Tag(value)
        except (ValueError, OverflowError, TypeError) as exc:
            raise EncodingError(f"{self.tag}: invalid value for VR AT: {exc}")

    def get_string_values(self) -> List[str]:
        return [str(v) for v in self._values]

    def get_integer_values(self) -> List[int]:
        return [int(v) for v in self._values]


# numpy dtypes of the little endian encoded bulk values
_BULK_DTYPES = {
    VR_.OB: "<u1", VR_.OD: "<f8", VR_.OF: "<f4", VR_.OL: "<u4",
    VR_.OV: "<u8", VR_.OW: "<u2", VR_.UN: "<u1",
}


class OtherAttribute(Attribute):
    """An attribute with an opaque bulk VR such as **OB** or **OW**.

    The value is a single little endian :class:`bytes` whatever the byte
    order of the stream it was read from, an :class:`EncapsulatedPixelData`
    for undefined length *Pixel Data*, or a :class:`DeferredValue` when it
    was left unread. A deferred value is read on first access.

    Attributes
    ----------
    is_undefined_length : bool
        ``True`` if the value is written with an undefined length, which is
        only allowed for encapsulated *Pixel Data*.
    """

    kinds = (VRKind.OTHER, )

    def __init__(
        self,
        tag: TagType,
        VR: str,
        value: Any = None,
        already_converted: bool = False
    ) -> None:
        super().__init__(tag, VR, value, already_converted)
        self.is_undefined_length = isinstance(
            self._values, EncapsulatedPixelData
        )

    def _empty(self) -> Any:
        return b""

    def set_values(self, values: Any) -> None:
        if values is None:
            values = b""

        if isinstance(values, (DeferredValue, EncapsulatedPixelData)):
            self._values = values
        elif isinstance(values, np.ndarray):
            dtype = values.dtype.newbyteorder("<")
            self._values = values.astype(dtype).tobytes()
        elif isinstance(values, (bytes, bytearray, memoryview)):
            self._values = bytes(values)
        else:
            raise TypeError(
                f"A value of type '{type(values).__name__}' cannot be used "
                f"for VR {self.VR}"
            )

        self.is_undefined_length = isinstance(
            self._values, EncapsulatedPixelData
        )

    def add_value(self, value: Any) -> None:
        raise TypeError(
            f"An attribute with VR {self.VR} holds a single bulk value"
        )

    @property
    def is_deferred(self) -> bool:
        """Return ``True`` if the value has been left unread."""
        return isinstance(self._values, DeferredValue)

    @property
    def is_encapsulated(self) -> bool:
        """Return ``True`` if the value is encapsulated *Pixel Data*."""
        return isinstance(self._values, EncapsulatedPixelData)

    def _materialize(self) -> Any:
        if isinstance(self._values, DeferredValue):
            deferred = self._values
            logger.debug(
                f"Reading deferred value of {self.tag}: {deferred.length} "
                f"bytes at 0x{deferred.value_tell:x}"
            )
            self._values = convert_other(
                deferred.read(), self._encoding_VR(), deferred.is_little_endian
            )
        return self._values

    @property
    def value(self) -> Union[bytes, EncapsulatedPixelData]:
        """Return the bulk value, reading it first if it was deferred."""
        return self._materialize()

    @property
    def values(self) -> List[Any]:
        value = self.value
        return [value] if value else []

    @property
    def VM(self) -> int:
        if isinstance(self._values, DeferredValue):
            return 1 if self._values.length else 0
        return 1 if self._values else 0

    def encode_value(
        self,
        is_little_endian: bool = True,
        encodings: Optional[List[str]] = None
    ) -> bytes:
        value = self._materialize()
        if isinstance(value, EncapsulatedPixelData):
            raise EncodingError(
                f"The encapsulated value of {self.tag} has an undefined "
                "length and is written as Items"
            )
        return convert_other(value, self._encoding_VR(), is_little_endian)

    @property
    def value_length(self) -> int:
        if isinstance(self._values, DeferredValue):
            return self._values.length
        if isinstance(self._values, EncapsulatedPixelData):
            return UNDEFINED_LENGTH
        return len(self._values)

    def write(
        self, fp: "DicomIO", encodings: Optional[List[str]] = None
    ) -> None:
        value = self._materialize()
        if isinstance(value, EncapsulatedPixelData):
            write_attribute_header(fp, self.tag, self.VR, UNDEFINED_LENGTH)
            value.write(fp)
            return

        if self.is_undefined_length:
            if self.tag in PIXEL_DATA_TAGS:
                raise EncodingError(
                    f"The value of {self.tag} has an undefined length but "
                    "isn't encapsulated"
                )
            raise EncodingError(
                f"Only encapsulated Pixel Data may have an undefined length, "
                f"not {self.tag}"
            )

        super().write(fp, encodings)

    def get_byte_values(self) -> bytes:
        value = self._materialize()
        if isinstance(value, EncapsulatedPixelData):
            return b"".join(value.fragments)
        return value

    def _array(self) -> np.ndarray:
        value = self.get_byte_values()
        vr = self._encoding_VR()
        itemsize = np.dtype(_BULK_DTYPES[vr]).itemsize
        if len(value) % itemsize:
            raise DicomFormatError(
                f"The value of {self.tag} has a length of {len(value)} bytes, "
                f"which isn't a multiple of {itemsize} for VR {vr}"
            )
        return np.frombuffer(value, dtype=_BULK_DTYPES[vr])

    def get_integer_values(self) -> List[int]:
        return [int(v) for v in self._array()]

    def get_float_values(self) -> List[float]:
        return [float(v) for v in self._array()]

    def get_short_values(self) -> np.ndarray:
        value = self.get_byte_values()
        if len(value) % 2:
            raise DicomFormatError(
                f"The value of {self.tag} has an odd length and cannot be "
                "read as 16-bit words"
            )
        return np.frombuffer(value, dtype="<u2")

    def _compare_value(self) -> Any:
        return self._materialize()

    @property
    def repval(self) -> str:
        # Bulk values are not dumped
        if isinstance(self._values, DeferredValue):
            return f"Deferred read: {self._values.length} bytes"
        if isinstance(self._values, EncapsulatedPixelData):
            return (
                f"Encapsulated: {len(self._values.offsets)} offsets, "
                f"{len(self._values)} fragments"
            )
        if len(self._values) > self.maxBytesToDisplay:
            return f"Array of {len(self._values)} bytes"
        return repr(self._values)


class SequenceAttribute(Attribute):
    """An attribute with VR **SQ**, whose value is a :class:`Sequence` of
    :class:`SequenceItem`. Always written with an undefined length.
    """

    kinds = (VRKind.SEQUENCE, )

    def _empty(self) -> Sequence:
        return Sequence()

    def set_values(self, values: Any) -> None:
        if values is None:
            values = []
        self._values = Sequence(values)

    def add_value(self, value: Any) -> None:
        """Append an item or attribute list to the sequence."""
        self._values.append(value)

    def add_item(self, value: Any) -> SequenceItem:
        """Append an item or attribute list to the sequence and return the
        appended item.
        """
        self._values.append(value)
        return self._values[-1]

    @property
    def value(self) -> Sequence:
        """Return the :class:`Sequence` of items."""
        return self._values

    @property
    def VM(self) -> int:
        return 1 if self._values else 0

    @property
    def number_of_items(self) -> int:
        """Return the number of items in the sequence."""
        return len(self._values)

    def encode_value(
        self,
        is_little_endian: bool = True,
        encodings: Optional[List[str]] = None
    ) -> bytes:
        raise EncodingError(
            f"The value of sequence {self.tag} is written as Items"
        )

    @property
    def value_length(self) -> int:
        return UNDEFINED_LENGTH

    def write(
        self, fp: "DicomIO", encodings: Optional[List[str]] = None
    ) -> None:
        write_sequence(fp, self, encodings or self.encodings)

    @property
    def repval(self) -> str:
        return repr(self._values)


_CLASSES: Dict[VRKind, Type[Attribute]] = {
    VRKind.STRING: StringAttribute,
    VRKind.TEXT: StringAttribute,
    VRKind.UNIQUE_IDENTIFIER: StringAttribute,
    VRKind.BINARY_NUMERIC: BinaryNumericAttribute,
    VRKind.ATTRIBUTE_TAG: AttributeTagAttribute,
    VRKind.OTHER: OtherAttribute,
    VRKind.SEQUENCE: SequenceAttribute,
}


def _kind_of(vr: str) -> VRKind:
    if vr in (VR_.US_SS, VR_.US_SS_OW, VR_.US_OW):
        return VRKind.BINARY_NUMERIC
    if vr == VR_.OB_OW:
        return VRKind.OTHER
    return KIND[vr]


def attribute_class(vr: str) -> Type[Attribute]:
    """Return the attribute class that holds values with VR `vr`."""
    return _CLASSES[_kind_of(VR_(vr))]


def resolve_ambiguous_vr(
    tag: BaseTag,
    vr: str,
    attribute_list: Optional["AttributeList"] = None,
    is_implicit_VR: bool = True
) -> str:
    """Return the VR to use for `tag` in place of the ambiguous `vr`.

    Parameters
    ----------
    tag : BaseTag
        The attribute's tag.
    vr : str
        The VR, returned unchanged if it isn't ambiguous.
    attribute_list : AttributeList, optional
        The list the attribute belongs to, used for *Pixel Representation*
        and *Bits Allocated*.
    is_implicit_VR : bool, optional
        The VR encoding of the data being read or written.
    """
    if vr not in AMBIGUOUS_VR:
        return vr

    def _get_int(keyword_tag: int) -> Optional[int]:
        if attribute_list is None:
            return None
        attribute = attribute_list.get(keyword_tag)
        if attribute is None or attribute.is_empty:
            return None
        return attribute.get_integer_values()[0]

    if vr == VR_.OB_OW:
        if is_implicit_VR:
            return VR_.OW
        bits_allocated = _get_int(0x00280100)
        if bits_allocated is None or bits_allocated > 8:
            return VR_.OW
        return VR_.OB

    if vr == VR_.US_OW:
        return VR_.OW if is_implicit_VR else VR_.US

    # US or SS, and US or SS or OW
    pixel_representation = _get_int(0x00280103)
    if pixel_representation == 1:
        return VR_.SS
    return VR_.US


def _private_vr_for_tag(
    attribute_list: Optional["AttributeList"], tag: BaseTag
) -> str:
    """Return the VR for a known private tag, otherwise "UN"."""
    if tag.is_private_creator:
        return VR_.LO
    # invalid private tags are handled as UN
    if attribute_list is not None and tag.private_creator_tag is not None:
        creator = attribute_list.get_private_creator(tag)
        if creator:
            try:
                return private_dictionary_VR(tag, creator)
            except KeyError:
                pass
    return VR_.UN


def new_attribute(
    tag: TagType,
    VR: Optional[str] = None,
    value: Any = None,
    encodings: Optional[List[str]] = None
) -> Attribute:
    """Return a new attribute of the class for its VR.

    Parameters
    ----------
    tag : int or str or 2-tuple of int
        The attribute's tag or keyword.
    VR : str, optional
        The attribute's VR. If not used then the VR is taken from the
        dictionary, a private creator is **LO** and an unknown tag is
        **UN**.
    value : optional
        The initial value(s).
    encodings : list of str, optional
        The Python encodings for the character set dependent VRs.
    """
    tag = Tag(tag)
    if VR is None:
        try:
            VR = dictionary_VR(tag)
        except KeyError:
            VR = VR_.LO if tag.is_private_creator else VR_.UN

    attribute = attribute_class(VR)(tag, VR, value)
    attribute.encodings = encodings
    return attribute


def attribute_from_raw(
    raw: RawAttribute,
    encodings: Optional[List[str]] = None,
    attribute_list: Optional["AttributeList"] = None
) -> Attribute:
    """Return an :class:`Attribute` created from `raw`.

    Parameters
    ----------
    raw : RawAttribute
        The raw data to convert.
    encodings : list of str, optional
        The Python encodings in effect for the attribute list.
    attribute_list : AttributeList, optional
        The list being read, used to resolve private and ambiguous VRs.

    Raises
    ------
    KeyError
        If `raw` belongs to an unknown non-private tag read with implicit VR
        and :attr:`config.enforce_valid_values` is set.
    """
    vr = raw.VR
    if vr is None:  # Can be if was implicit VR
        try:
            vr = dictionary_VR(raw.tag)
        except KeyError:
            # just read the bytes, no way to know what they mean
            if raw.tag.is_private:
                vr = _private_vr_for_tag(attribute_list, raw.tag)
            # group length tag implied in versions < 3.0
            elif raw.tag.element == 0:
                vr = VR_.UL
            else:
                msg = f"Unknown DICOM tag {raw.tag}"
                if config.enforce_valid_values:
                    raise KeyError(f"{msg} can't look up VR")
                vr = VR_.UN
                warnings.warn(f"{msg} - setting VR to 'UN'")
    elif vr == VR_.UN and config.replace_un_with_known_vr:
        # handle rare case of incorrectly set 'UN' in explicit encoding
        if raw.tag.is_private:
            vr = _private_vr_for_tag(attribute_list, raw.tag)
        elif raw.length < 0xFFFF:
            try:
                vr = dictionary_VR(raw.tag)
            except KeyError:
                pass

    value = raw.value
    if isinstance(value, EncapsulatedPixelData):
        # encapsulated data is always OB
        vr = VR_.OB
    else:
        vr = resolve_ambiguous_vr(
            raw.tag, vr, attribute_list, raw.is_implicit_VR
        )

    if vr != raw.VR and raw.VR is not None:
        logger.debug(f"{raw.tag}: decoding the UN value with VR {vr}")

    cls = attribute_class(vr)
    if cls is OtherAttribute:
        if isinstance(value, bytes):
            value = convert_other(value, vr, raw.is_little_endian)
        elif value is None:
            value = b""
        attribute: Attribute = OtherAttribute(
            raw.tag, vr, value, already_converted=True
        )
    else:
        if isinstance(value, DeferredValue):
            value = value.read()

        if cls is SequenceAttribute:
            from dcmcore.filereader import read_sequence
            # the value of a UN sequence is encoded as implicit VR
            #   little endian
            is_implicit_VR = raw.is_implicit_VR or raw.VR == VR_.UN
            is_little_endian = raw.is_little_endian or raw.VR == VR_.UN
            attribute = SequenceAttribute(
                raw.tag,
                vr,
                read_sequence(
                    DicomBytesIO(value or b""), is_implicit_VR,
                    is_little_endian, len(value or b""), encodings,
                    offset=raw.value_tell
                ),
                already_converted=True
            )
        else:
            attribute = cls(
                raw.tag,
                vr,
                convert_value(
                    vr, value or b"", raw.is_little_endian, encodings
                ),
                already_converted=True
            )

    attribute.encodings = encodings
    if raw.tag.is_private and attribute_list is not None:
        attribute.private_creator = attribute_list.get_private_creator(raw.tag)

    return attribute
