# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Define the Sequence and SequenceItem classes, which hold the nested
attribute lists that are the value of a Sequence (**SQ**) attribute.
"""
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from dcmcore.attributelist import AttributeList


class SequenceItem:
    """One Item of a sequence: a nested :class:`AttributeList` and the byte
    offset at which its encoding starts.

    Attributes
    ----------
    attribute_list : AttributeList
        The nested data set.
    byte_offset : int
        The offset of the Item tag in the stream the item was read from or
        last written to, ``0`` if unset.
    """

    def __init__(
        self,
        attribute_list: Optional["AttributeList"] = None,
        byte_offset: int = 0
    ) -> None:
        if attribute_list is None:
            from dcmcore.attributelist import AttributeList
            attribute_list = AttributeList()

        self.attribute_list = attribute_list
        self.byte_offset = byte_offset

    def __eq__(self, other: Any) -> Any:
        # The byte offset is an artifact of reading and writing
        if not isinstance(other, SequenceItem):
            return NotImplemented
        return self.attribute_list == other.attribute_list

    def __ne__(self, other: Any) -> Any:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __str__(self) -> str:
        return self.to_string()

    def to_string(self, indent: int = 0) -> str:
        """Return the item marker line followed by the indented nested list."""
        marker = "%item"
        if self.byte_offset:
            marker += f" [starts at 0x{self.byte_offset:x}]"
        lines = [self.attribute_list.indent_chars * indent + marker]
        nested = self.attribute_list.to_string(indent + 1)
        if nested:
            lines.append(nested)
        return "\n".join(lines)


def _as_item(value: Any) -> SequenceItem:
    if isinstance(value, SequenceItem):
        return value

    from dcmcore.attributelist import AttributeList
    if isinstance(value, AttributeList):
        return SequenceItem(value)

    raise TypeError(
        "Sequence contents must be 'SequenceItem' or 'AttributeList' "
        f"instances, not '{type(value).__name__}'"
    )


class Sequence(List[SequenceItem]):
    """Class to hold the Items of a Sequence (**SQ**) attribute.

    A list of :class:`SequenceItem`. An :class:`AttributeList` that is added
    is wrapped in a new item.
    """

    def __init__(
        self,
        iterable: Optional[Iterable[Union[SequenceItem, "AttributeList"]]] = None
    ) -> None:
        if isinstance(iterable, (str, bytes)):
            raise TypeError("The Sequence constructor requires an iterable")

        super().__init__(_as_item(x) for x in (iterable or []))

    def append(self, value: Any) -> None:
        """Append an item or attribute list to the end of the sequence."""
        super().append(_as_item(value))

    def extend(self, values: Iterable[Any]) -> None:
        """Extend the sequence with the items or attribute lists in
        `values`.
        """
        super().extend(_as_item(x) for x in values)

    def insert(self, index: int, value: Any) -> None:  # type: ignore[override]
        super().insert(index, _as_item(value))

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            super().__setitem__(index, [_as_item(x) for x in value])
        else:
            super().__setitem__(index, _as_item(value))

    def __repr__(self) -> str:
        return f"<Sequence, length {len(self)}>"
