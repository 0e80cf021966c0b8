# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Define the Tag class holding a DICOM (group, element) attribute tag.

The 4 bytes of the tag are stored as a single :class:`int` and split into
(group, element) on demand, so tags sort numerically in (group, element)
order.
"""
from contextlib import contextmanager
from typing import Tuple, Any, Union, Optional, Iterator


@contextmanager
def tag_in_exception(tag: "BaseTag") -> Iterator[None]:
    """Use `tag` within a context.

    Any exception raised within the context is re-raised as the same type
    with the tag prepended to its message, so a failure deep inside a nested
    data set still names the attribute being decoded or encoded.

    Parameters
    ----------
    tag : BaseTag
        The tag to use in the context.
    """
    try:
        yield
    except Exception as ex:
        if str(ex).startswith("With tag "):
            raise
        msg = f"With tag {tag} got exception: {ex}"
        try:
            new_ex = type(ex)(msg)
        except Exception:
            raise ex
        raise new_ex from ex


TagType = Union[int, str, Tuple[int, int], Tuple[str, str]]


def Tag(arg: TagType, arg2: Optional[int] = None) -> "BaseTag":
    """Create a :class:`BaseTag`.

    General function for creating a :class:`BaseTag` in any of the standard
    forms:

    * ``Tag(0x00100015)``
    * ``Tag('0x00100015')``
    * ``Tag((0x10, 0x50))``
    * ``Tag(('0x10', '0x50'))``
    * ``Tag(0x0010, 0x0015)``
    * ``Tag("PatientName")``

    Parameters
    ----------
    arg : int or str or 2-tuple
        If :class:`int` or :class:`str`, then either the group or the combined
        group/element number of the tag, or an attribute keyword. If
        :class:`tuple` then the (group, element) numbers as :class:`!int` or
        :class:`!str`.
    arg2 : int, optional
        The element number of the tag, required when `arg` only contains
        the group number of the tag.

    Returns
    -------
    BaseTag
    """
    if isinstance(arg, BaseTag):
        return arg

    if arg2 is not None:
        arg = (arg, arg2)  # type: ignore

    if isinstance(arg, (tuple, list)):
        if len(arg) != 2:
            raise ValueError("Tag must be created using an int or 2-tuple")

        group, elem = arg
        if isinstance(group, str) and isinstance(elem, str):
            group, elem = int(group, 16), int(elem, 16)
        elif not (isinstance(group, int) and isinstance(elem, int)):
            raise ValueError(
                "Both arguments for Tag must be the same type, either "
                "string or int."
            )

        if group > 0xFFFF or elem > 0xFFFF:
            raise OverflowError(
                "Groups and elements of tags must each be <=2 byte integers"
            )
        if group < 0 or elem < 0:
            raise ValueError("Tags must be positive.")

        return BaseTag((group << 16) | elem)

    if isinstance(arg, str):
        try:
            long_value = int(arg, 16)
        except ValueError:
            from dcmcore.datadict import tag_for_keyword
            keyword_tag = tag_for_keyword(arg)
            if keyword_tag is None:
                raise ValueError(
                    f"'{arg}' is not a valid int or DICOM keyword"
                )
            long_value = keyword_tag
    elif isinstance(arg, int):
        long_value = arg
    else:
        raise TypeError(f"Cannot create a Tag from '{type(arg).__name__}'")

    if long_value > 0xFFFFFFFF:
        raise OverflowError(
            f"Tags are limited to 32-bit length; tag {long_value!r}"
        )
    if long_value < 0:
        raise ValueError("Tags must be positive.")

    return BaseTag(long_value)


class BaseTag(int):
    """Represents a DICOM attribute (group, element) tag.

    Ordering is lexicographic on (group, element), which for the packed
    32-bit representation is plain integer ordering.
    """

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, BaseTag):
            try:
                other = Tag(other)
            except Exception:
                raise TypeError("Cannot compare Tag with non-Tag item")

        return int(self) < int(other)

    def __le__(self, other: Any) -> bool:
        return self == other or self < other

    def __gt__(self, other: Any) -> bool:
        return not self <= other

    def __ge__(self, other: Any) -> bool:
        return not self < other

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, int):
            try:
                other = Tag(other)
            except Exception:
                return NotImplemented

        return int(self) == int(other)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = int.__hash__

    def __str__(self) -> str:
        """Return the tag value as a hex string '(gggg,eeee)'."""
        return f"({self.group:04x},{self.element:04x})"

    __repr__ = __str__

    @property
    def group(self) -> int:
        """Return the tag's group number as :class:`int`."""
        return self >> 16

    @property
    def element(self) -> int:
        """Return the tag's element number as :class:`int`."""
        return self & 0xFFFF

    elem = element

    @property
    def is_private(self) -> bool:
        """Return ``True`` if the tag is private (has an odd group number)."""
        return self.group % 2 == 1

    @property
    def is_private_creator(self) -> bool:
        """Return ``True`` if the tag is a private creator, (gggg,0010) to
        (gggg,00FF) in an odd group.
        """
        return self.is_private and 0x0010 <= self.element < 0x0100

    @property
    def private_creator_tag(self) -> Optional["BaseTag"]:
        """Return the tag of the private creator reserving the block this
        private tag lies in, or ``None`` if the tag is not a private data
        tag.
        """
        if not self.is_private or self.element < 0x1000:
            return None

        return TupleTag((self.group, self.element >> 8))

    @property
    def is_group_length(self) -> bool:
        """Return ``True`` if the tag is a group length tag (gggg,0000)."""
        return self.element == 0

    @property
    def is_delimiter(self) -> bool:
        """Return ``True`` for the Item and the two delimitation tags."""
        return self.group == 0xFFFE


def TupleTag(group_elem: Tuple[int, int]) -> BaseTag:
    """Fast factory for :class:`BaseTag` object with known safe (group, elem)
    :class:`tuple`
    """
    return BaseTag(group_elem[0] << 16 | group_elem[1])


# Special tags, see DICOM Standard Part 5, Section 7.5

# start of Sequence Item
ItemTag = TupleTag((0xFFFE, 0xE000))

# end of Sequence Item
ItemDelimiterTag = TupleTag((0xFFFE, 0xE00D))

# end of Sequence of undefined length
SequenceDelimiterTag = TupleTag((0xFFFE, 0xE0DD))

# Pixel Data and its float/double variants
PixelDataTag = TupleTag((0x7FE0, 0x0010))
FloatPixelDataTag = TupleTag((0x7FE0, 0x0008))
DoubleFloatPixelDataTag = TupleTag((0x7FE0, 0x0009))

PIXEL_DATA_TAGS = (PixelDataTag, FloatPixelDataTag, DoubleFloatPixelDataTag)

SpecificCharacterSetTag = TupleTag((0x0008, 0x0005))
TransferSyntaxUIDTag = TupleTag((0x0002, 0x0010))
