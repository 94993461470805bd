"""Node types for driver XML trees.

A tree is made of four persisted node kinds: ``Tag``, ``EmptyTag``,
``CharData`` and ``ProcessingInstruction``. Elements own their attribute
list and (for ``Tag``) their child list. Every node belongs to at most one
``NodeList`` at a time and knows which one through ``owner``; membership is
by identity, so two equal-looking nodes are still distinct entries.
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    TypeVar,
    Union,
)

from driver_xml.character.classifier import is_valid_name
from driver_xml.shared.errors import InvalidArgument

T = TypeVar("T")


def _check_name(name: str, what: str) -> None:
    if not is_valid_name(name):
        raise InvalidArgument(f"Invalid {what} name: {name!r}")


def _check_bytes(value: Any, what: str) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if not isinstance(value, bytes):
        raise InvalidArgument(f"{what} must be bytes, got {type(value).__name__}")
    return value


class NodeList(Generic[T]):
    """Ordered list that owns the nodes in it.

    Appending a node sets its ``owner``; removing clears it. A node that
    already has an owner has to be removed from that list before it can be
    added to another one.
    """

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: List[T] = []
        for item in items or ():
            self.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __contains__(self, node: object) -> bool:
        return any(item is node for item in self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"NodeList({self._items!r})"

    @property
    def count(self) -> int:
        """Number of nodes currently held."""
        return len(self._items)

    def index(self, node: T) -> int:
        """Position of ``node`` in this list, compared by identity."""
        for position, item in enumerate(self._items):
            if item is node:
                return position
        raise InvalidArgument("Node is not a member of this list")

    def append(self, node: T) -> T:
        """Take ownership of ``node`` and add it at the end."""
        if not hasattr(node, "owner"):
            raise InvalidArgument(f"Cannot add {type(node).__name__} to a node list")
        if node.owner is not None:
            raise InvalidArgument(
                f"{type(node).__name__} already belongs to another list; remove it first"
            )
        node.owner = self
        self._items.append(node)
        return node

    def remove(self, node: T) -> None:
        """Detach ``node`` without touching anything it owns."""
        del self._items[self.index(node)]
        node.owner = None


@dataclass(eq=False)
class Attribute:
    """A ``name="value"`` pair on an element.

    ``value`` is None when the attribute has no value at all; an empty quoted
    value is ``b""``.
    """

    name: str
    value: Optional[bytes] = None
    owner: Optional[NodeList] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _check_name(self.name, "attribute")
        self.value = _check_bytes(self.value, "Attribute value")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": None if self.value is None else self.value.decode("latin-1"),
        }


@dataclass(eq=False)
class CharData:
    """A run of character data, kept byte for byte."""

    data: bytes
    owner: Optional[NodeList] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.data = _check_bytes(self.data, "Character data")
        if self.data is None:
            raise InvalidArgument("Character data cannot be None")

    @property
    def length(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "chardata", "data": self.data.decode("latin-1")}


@dataclass(eq=False)
class ProcessingInstruction:
    """A ``<?target data?>`` node; ``data`` is None when the PI has none."""

    target: str
    data: Optional[bytes] = None
    owner: Optional[NodeList] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _check_name(self.target, "processing instruction target")
        self.data = _check_bytes(self.data, "Processing instruction data")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "pi",
            "target": self.target,
            "data": None if self.data is None else self.data.decode("latin-1"),
        }


def _attribute_list(attributes: Any) -> NodeList:
    if isinstance(attributes, NodeList):
        return attributes
    if isinstance(attributes, dict):
        return NodeList(Attribute(name, value) for name, value in attributes.items())
    return NodeList(attributes)


@dataclass(eq=False)
class EmptyTag:
    """An element written as ``<name/>``; it never has children."""

    name: str
    attributes: NodeList = field(default_factory=NodeList)
    owner: Optional[NodeList] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _check_name(self.name, "tag")
        self.attributes = _attribute_list(self.attributes)

    def add_attribute(self, name: str, value: Optional[bytes] = None) -> Attribute:
        """Append a new attribute and return it."""
        return self.attributes.append(Attribute(name, value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "empty_tag",
            "name": self.name,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
        }


@dataclass(eq=False)
class Tag:
    """An element with explicit open and close tags.

    ``synthetic`` marks the container the parser wraps a document in. It
    never appeared in the source, so the canonical writer emits only its
    children.
    """

    name: str
    attributes: NodeList = field(default_factory=NodeList)
    children: NodeList = field(default_factory=NodeList)
    synthetic: bool = False
    owner: Optional[NodeList] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _check_name(self.name, "tag")
        self.attributes = _attribute_list(self.attributes)
        if not isinstance(self.children, NodeList):
            initial, self.children = self.children, NodeList()
            for child in initial:
                self.append(child)

    def add_attribute(self, name: str, value: Optional[bytes] = None) -> Attribute:
        """Append a new attribute and return it."""
        return self.attributes.append(Attribute(name, value))

    def append(self, child: "Node") -> "Node":
        """Append a child node and return it."""
        if not isinstance(child, NODE_TYPES):
            raise InvalidArgument(f"Cannot add {type(child).__name__} as a child")
        return self.children.append(child)

    @property
    def text(self) -> bytes:
        """Concatenated character data of the direct children."""
        return b"".join(
            child.data for child in self.children if isinstance(child, CharData)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "tag",
            "name": self.name,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[Tag, EmptyTag, CharData, ProcessingInstruction]
NODE_TYPES = (Tag, EmptyTag, CharData, ProcessingInstruction)
ELEMENT_TYPES = (Tag, EmptyTag)
