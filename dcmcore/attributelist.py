# Copyright 2008-2024 dcmcore authors. See LICENSE file for details.
"""Define the AttributeList and FileAttributeList classes.

An :class:`AttributeList` is the recursive unit of a DICOM data set: a
mapping of tag to :class:`~dcmcore.attribute.Attribute` that always iterates
in ascending tag order, whatever the order the attributes were added in.
Sequence attributes hold further lists in their items.
"""

from typing import (
    TYPE_CHECKING, Any, BinaryIO, Callable, Dict, Iterable, Iterator, List,
    Optional, Union
)

from dcmcore.attribute import Attribute, SequenceAttribute
from dcmcore.charset import convert_encodings
from dcmcore.tag import (
    BaseTag, Tag, TagType, PIXEL_DATA_TAGS, SpecificCharacterSetTag
)
from dcmcore.uid import UID

if TYPE_CHECKING:  # pragma: no cover
    from dcmcore.fileutil import PathType


class AttributeList:
    """A collection of attributes, at most one per tag.

    Attributes
    ----------
    parent_encodings : list of str or None
        The Python encodings in effect in the enclosing list, used when the
        list has no *Specific Character Set* of its own.
    """

    indent_chars = "   "

    def __init__(self, attributes: Optional[Iterable[Attribute]] = None) -> None:
        self._dict: Dict[BaseTag, Attribute] = {}
        self.parent_encodings: Optional[List[str]] = None
        for attribute in attributes or []:
            self.put(attribute)

    # Mapping interface
    def put(self, attribute: Attribute) -> Optional[Attribute]:
        """Add `attribute`, replacing any attribute with the same tag.

        Returns
        -------
        Attribute or None
            The replaced attribute, if any.
        """
        if not isinstance(attribute, Attribute):
            raise TypeError(
                "Only 'Attribute' instances can be added to an AttributeList"
            )

        previous = self._dict.get(attribute.tag)
        self._dict[attribute.tag] = attribute
        return previous

    def get(
        self, tag: TagType, creator: Optional[str] = None
    ) -> Optional[Attribute]:
        """Return the attribute for `tag`, or ``None`` if it isn't present.

        Parameters
        ----------
        tag : int or str or 2-tuple of int
            The tag or keyword of the attribute.
        creator : str, optional
            The private creator reserving the block of a private `tag`. Only
            the group and the low byte of the element of `tag` are used, so
            (gggg,xxee) is found wherever the creator's block (gggg,00xx)
            lies.
        """
        try:
            tag = Tag(tag)
        except (ValueError, OverflowError, TypeError):
            return None

        if creator is None:
            return self._dict.get(tag)

        block = self.private_block_for(tag.group, creator)
        if block is None:
            return None
        return self._dict.get(BaseTag(tag.group << 16 | block << 8 | tag.element & 0xFF))

    def private_block_for(self, group: int, creator: str) -> Optional[int]:
        """Return the block number reserved by `creator` in the private
        `group`, or ``None`` if it isn't reserved.
        """
        for element in range(0x10, 0x100):
            attribute = self._dict.get(BaseTag(group << 16 | element))
            if attribute is not None and creator == _creator_value(attribute):
                return element
        return None

    def get_private_creator(self, tag: TagType) -> Optional[str]:
        """Return the private creator reserving the block of the private
        `tag`, or ``None`` if it can't be found.
        """
        creator_tag = Tag(tag).private_creator_tag
        if creator_tag is None:
            return None

        attribute = self._dict.get(creator_tag)
        if attribute is None:
            return None
        return _creator_value(attribute) or None

    def __getitem__(self, tag: TagType) -> Attribute:
        return self._dict[Tag(tag)]

    def __setitem__(self, tag: TagType, attribute: Attribute) -> None:
        if Tag(tag) != attribute.tag:
            raise ValueError(
                f"The tag {Tag(tag)} doesn't match the attribute's tag "
                f"{attribute.tag}"
            )
        self.put(attribute)

    def __delitem__(self, tag: TagType) -> None:
        del self._dict[Tag(tag)]

    def __contains__(self, tag: Any) -> bool:
        try:
            return Tag(tag) in self._dict
        except (ValueError, OverflowError, TypeError):
            return False

    def __len__(self) -> int:
        return len(self._dict)

    def __bool__(self) -> bool:
        return bool(self._dict)

    def __iter__(self) -> Iterator[Attribute]:
        """Iterate through the attributes in ascending tag order."""
        for tag in self.keys():
            yield self._dict[tag]

    def keys(self) -> List[BaseTag]:
        """Return the tags in ascending order."""
        return sorted(self._dict)

    def values(self) -> List[Attribute]:
        """Return the attributes in ascending tag order."""
        return list(self)

    def items(self) -> List[Any]:
        """Return the (tag, attribute) pairs in ascending tag order."""
        return [(tag, self._dict[tag]) for tag in self.keys()]

    def __eq__(self, other: Any) -> Any:
        if not isinstance(other, AttributeList):
            return NotImplemented
        return self._dict == other._dict

    def __ne__(self, other: Any) -> Any:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    # Removal
    def remove(self, tag: TagType) -> Optional[Attribute]:
        """Remove and return the attribute for `tag`, or ``None`` if it
        isn't present.
        """
        return self._dict.pop(Tag(tag), None)

    def remove_group(self, group: int) -> None:
        """Remove all attributes in `group`."""
        self._remove_where(lambda tag: tag.group == group)

    def remove_private_attributes(self) -> None:
        """Remove all private attributes, including those of nested lists."""
        self._remove_where(lambda tag: tag.is_private, recursive=True)

    def remove_group_length_attributes(self) -> None:
        """Remove all group length (gggg,0000) attributes, including those of
        nested lists.
        """
        self._remove_where(lambda tag: tag.is_group_length, recursive=True)

    def remove_meta_information_header(self) -> None:
        """Remove the File Meta Information, group 0x0002, attributes."""
        self.remove_group(0x0002)

    def _remove_where(
        self, predicate: Callable[[BaseTag], bool], recursive: bool = False
    ) -> None:
        for tag in [t for t in self._dict if predicate(t)]:
            del self._dict[tag]

        if recursive:
            for attribute in self._dict.values():
                if isinstance(attribute, SequenceAttribute):
                    for item in attribute.value:
                        item.attribute_list._remove_where(predicate, recursive)

    # Character sets
    @property
    def specific_character_set(self) -> Optional[List[str]]:
        """Return the values of the list's own *Specific Character Set*, or
        ``None`` if it has none.
        """
        attribute = self._dict.get(SpecificCharacterSetTag)
        if attribute is None:
            return None
        return attribute.get_string_values()

    def get_encodings(
        self, parent_encodings: Optional[List[str]] = None
    ) -> List[str]:
        """Return the Python encodings in effect for the list's attributes.

        The list's own *Specific Character Set* takes precedence, then
        `parent_encodings`, then :attr:`parent_encodings`, then the default
        character repertoire.
        """
        charset = self.specific_character_set
        if charset is not None:
            return convert_encodings(charset)
        if parent_encodings:
            return list(parent_encodings)
        if self.parent_encodings:
            return list(self.parent_encodings)
        return convert_encodings(None)

    @property
    def encodings(self) -> List[str]:
        """Return the Python encodings in effect for the list's attributes."""
        return self.get_encodings()

    # Pixel data
    def get_pixel_data(self) -> Optional[Attribute]:
        """Return the *Pixel Data*, *Float Pixel Data* or *Double Float Pixel
        Data* attribute, or ``None`` if there isn't one.
        """
        for tag in PIXEL_DATA_TAGS:
            attribute = self._dict.get(tag)
            if attribute is not None:
                return attribute
        return None

    # Traversal and display
    def walk(
        self,
        callback: Callable[["AttributeList", Attribute], None],
        recursive: bool = True
    ) -> None:
        """Iterate through the attributes and run `callback` on each.

        Visit all attributes in the list, possibly recursing into sequences
        and their items. The callback function is called for each
        :class:`~dcmcore.attribute.Attribute` (including attributes with a
        VR of 'SQ'). Can be used to perform an operation on certain types of
        attributes.

        Parameters
        ----------
        callback
            A callable function that takes two arguments:

            * an :class:`AttributeList`
            * an :class:`~dcmcore.attribute.Attribute` belonging to it
        recursive : bool, optional
            Flag to indicate whether to recurse into sequences (default
            ``True``).
        """
        for tag in self.keys():
            # the callback may have removed the attribute
            attribute = self._dict.get(tag)
            if attribute is None:
                continue

            callback(self, attribute)
            if recursive and isinstance(attribute, SequenceAttribute):
                for item in attribute.value:
                    item.attribute_list.walk(callback)

    def to_string(self, indent: int = 0, top_level_only: bool = False) -> str:
        """Return a string representation of the list, one attribute per
        line in tag order, with the items of sequences indented beneath
        them.
        """
        indent_str = self.indent_chars * indent
        lines = []
        for attribute in self:
            lines.append(indent_str + str(attribute))
            if top_level_only or not isinstance(attribute, SequenceAttribute):
                continue
            for item in attribute.value:
                lines.append(item.to_string(indent + 1))

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_string()

    def top(self) -> str:
        """Return a string of the top-level attributes only."""
        return self.to_string(top_level_only=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}, {len(self)} attributes>"

    # Input and output
    def read(
        self,
        source: Union["PathType", BinaryIO],
        force: bool = False,
        defer_size: Union[None, str, int, float] = None,
        stop_before_pixels: bool = False
    ) -> "AttributeList":
        """Read the DICOM file `source` into the list, replacing attributes
        with the same tags. The File Meta Information attributes are included.

        Returns
        -------
        AttributeList
            The list itself.
        """
        from dcmcore.filereader import dcmread

        file_list = dcmread(
            source,
            force=force,
            defer_size=defer_size,
            stop_before_pixels=stop_before_pixels
        )
        for attribute in file_list.file_meta:
            self.put(attribute)
        for attribute in file_list:
            self.put(attribute)
        return self

    def write(
        self,
        sink: Union["PathType", BinaryIO],
        transfer_syntax: Optional[str] = None,
        write_like_original: bool = True
    ) -> None:
        """Write the list to the DICOM file `sink`.

        See :func:`~dcmcore.filewriter.dcmwrite` for the parameters.
        """
        from dcmcore.filewriter import dcmwrite

        dcmwrite(sink, self, transfer_syntax, write_like_original)


def _creator_value(attribute: Attribute) -> str:
    try:
        return attribute.get_single_string_value_or_default("")
    except TypeError:
        return ""


class FileAttributeList(AttributeList):
    """An attribute list read from a DICOM file.

    Attributes
    ----------
    preamble : bytes or None
        The 128 byte preamble, ``None`` if the file had none.
    file_meta : AttributeList
        The File Meta Information (group 0x0002) attributes.
    filename : str or file-like or None
        The path of the file, or the file-like it was read from.
    transfer_syntax : UID or None
        The transfer syntax of the data set.
    """

    def __init__(
        self,
        filename_or_obj: Union[str, BinaryIO, None],
        attribute_list: AttributeList,
        preamble: Optional[bytes] = None,
        file_meta: Optional[AttributeList] = None,
        transfer_syntax: Optional[UID] = None
    ) -> None:
        super().__init__(attribute_list)
        self.parent_encodings = attribute_list.parent_encodings
        self.preamble = preamble
        self.file_meta = file_meta if file_meta is not None else AttributeList()
        self.filename = filename_or_obj
        self.transfer_syntax = transfer_syntax
