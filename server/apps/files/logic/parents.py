"""Parent references of file nodes.

A node's parent is either the root sentinel or an existing folder.
Raw request values are parsed into a ``ParentRef`` once, at the edge
of ``create`` and ``list``, and never compared as raw strings or ints.
"""

from dataclasses import dataclass
from typing import Final, final

# Wire representation of the root sentinel
ROOT_WIRE_VALUE: Final = 0


@final
@dataclass(frozen=True, slots=True)
class Root:
    """No parent folder: the node lives at the top level."""


@final
@dataclass(frozen=True, slots=True)
class NodeId:
    """Reference to a parent folder by id."""

    value: int


ParentRef = Root | NodeId

ROOT: Final = Root()


class MalformedParentError(ValueError):
    """Raised when a raw parent id is neither the root nor a node id."""


def parse_parent_ref(raw: object) -> ParentRef:
    """Parse a parent id received from a client.

    Args:
        raw: ``parentId`` from a request body or query string.

    Returns:
        ``ROOT`` for missing, empty and ``0`` values, ``NodeId`` otherwise.

    Raises:
        MalformedParentError: If the value cannot be a node id.
    """
    if raw is None or raw is False or raw in ('', '0', 0):
        return ROOT
    if isinstance(raw, bool):
        raise MalformedParentError(repr(raw))
    if isinstance(raw, int):
        node_id = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        node_id = int(raw)
    else:
        raise MalformedParentError(repr(raw))

    if node_id <= 0:
        raise MalformedParentError(repr(raw))
    return NodeId(node_id)


def parent_ref_of(parent_id: int | None) -> ParentRef:
    """Build the reference stored in a node's ``parent_id`` column.

    Args:
        parent_id: Foreign key value, None for the root.

    Returns:
        Matching parent reference.
    """
    if parent_id is None:
        return ROOT
    return NodeId(parent_id)


def to_wire(parent: ParentRef) -> int | str:
    """Render a parent reference for JSON responses.

    Args:
        parent: Parent reference.

    Returns:
        ``0`` for the root, the folder id as a string otherwise.
    """
    if isinstance(parent, NodeId):
        return str(parent.value)
    return ROOT_WIRE_VALUE
