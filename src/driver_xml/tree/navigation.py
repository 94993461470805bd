"""Navigation, search and deletion over driver XML node lists.

Lookups return None when nothing matches and raise ``InvalidArgument`` when
they are handed something that is not a node list.
"""

from typing import Iterator, List, Optional, Union

from driver_xml.shared.errors import InvalidArgument, TreeIntegrityError
from driver_xml.tree.nodes import (
    ELEMENT_TYPES,
    Attribute,
    EmptyTag,
    Node,
    NodeList,
    Tag,
)


def _require_list(node_list: object, what: str = "node list") -> NodeList:
    if node_list is None:
        raise InvalidArgument(f"A {what} is required")
    if not isinstance(node_list, NodeList):
        raise InvalidArgument(f"Expected a {what}, got {type(node_list).__name__}")
    return node_list


def next_node(node_list: NodeList, current: Optional[Node] = None) -> Optional[Node]:
    """Return the sibling after ``current``.

    With ``current`` None the first node in the list is returned. None means
    the end of the list was reached.

    Raises:
        InvalidArgument: ``node_list`` is missing or ``current`` is not in it
    """
    _require_list(node_list)
    if current is None:
        return node_list[0] if len(node_list) else None
    position = node_list.index(current) + 1
    return node_list[position] if position < len(node_list) else None


def find_attribute(attributes: NodeList, name: str) -> Optional[Attribute]:
    """First attribute called ``name`` (case-sensitive), or None."""
    _require_list(attributes, "attribute list")
    if not name:
        raise InvalidArgument("An attribute name is required")
    for attribute in attributes:
        if attribute.name == name:
            return attribute
    return None


def iter_elements(nodes: NodeList) -> Iterator[Union[Tag, EmptyTag]]:
    """Yield every element below ``nodes`` in depth-first pre-order."""
    _require_list(nodes)
    stack: List[Iterator[Node]] = [iter(nodes)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        if isinstance(node, ELEMENT_TYPES):
            yield node
        if isinstance(node, Tag):
            stack.append(iter(node.children))


def find_tag(nodes: NodeList, name: str) -> Optional[Union[Tag, EmptyTag]]:
    """First element called ``name`` anywhere below ``nodes``, or None.

    The search is depth-first: a match inside an earlier sibling's subtree
    wins over a later sibling.
    """
    if not name:
        raise InvalidArgument("A tag name is required")
    for element in iter_elements(nodes):
        if element.name == name:
            return element
    return None


def find_all_tags(nodes: NodeList, name: str) -> List[Union[Tag, EmptyTag]]:
    """Every element called ``name`` below ``nodes``, in document order."""
    if not name:
        raise InvalidArgument("A tag name is required")
    return [element for element in iter_elements(nodes) if element.name == name]


def _release_contents(node: Node) -> None:
    pending: List[Node] = [node]
    while pending:
        current = pending.pop()
        if not isinstance(current, ELEMENT_TYPES):
            continue
        for attribute in current.attributes:
            current.attributes.remove(attribute)
        if len(current.attributes):
            raise TreeIntegrityError(
                f"<{current.name}> still holds {len(current.attributes)} attributes after deletion"
            )
        if isinstance(current, Tag):
            for child in current.children:
                current.children.remove(child)
                pending.append(child)
            if len(current.children):
                raise TreeIntegrityError(
                    f"<{current.name}> still holds {len(current.children)} children after deletion"
                )


def delete(owning_list: NodeList, node: Union[Node, Attribute]) -> None:
    """Remove ``node`` from ``owning_list`` along with everything it owns.

    Attributes go first, then every descendant, then the node itself is
    detached. Deleting a node that is not in ``owning_list`` (including one
    that was already deleted) raises ``InvalidArgument``.
    """
    _require_list(owning_list)
    if node is None:
        raise InvalidArgument("A node to delete is required")
    if node not in owning_list:
        raise InvalidArgument(f"{type(node).__name__} is not a member of the given list")

    _release_contents(node)
    owning_list.remove(node)
