"""Labelled tree holding the structure of one project.

The tree owns every node through the ``children`` lists. Parents are held
through weak references so a node never keeps its ancestors alive on its own.
"""

import weakref
from typing import Iterator, List, Optional

from .block import Block
from .errors import TreeAttachmentError


class Node:
    """A tree node wrapping one block label."""

    def __init__(self, payload: Block, parent: Optional["Node"] = None) -> None:
        self.payload = payload
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: List[Node] = []

    @property
    def parent(self) -> Optional["Node"]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and its descendants in pre-order."""
        pending: List[Node] = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"Node({self.payload.label!r}, children={len(self.children)})"


class Tree:
    """The structure of one project description, named after its source file."""

    def __init__(self, root_payload: Block, name: str = "") -> None:
        self.name = name
        self.root = Node(root_payload)
        self._nodes: List[Node] = [self.root]
        self._sealed = False

    @classmethod
    def create(cls, payload: Block, name: str = "") -> "Tree":
        return cls(payload, name)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Freeze the tree; further attachments are rejected."""
        self._sealed = True

    def contains(self, node: Node) -> bool:
        top: Optional[Node] = node
        while top is not None and top.parent is not None:
            top = top.parent
        return top is self.root

    def add_leaf(self, parent: Node, payload: Block) -> Node:
        """Append a new node wrapping ``payload`` under ``parent`` and return it."""
        if self._sealed:
            raise TreeAttachmentError("Tree is sealed", f"cannot attach '{payload.label}' to '{self.name}'")
        if not self.contains(parent):
            raise TreeAttachmentError(
                "Parent node is not part of this tree",
                f"parent '{parent.payload.label}', child '{payload.label}'",
            )
        node = Node(payload, parent)
        parent.children.append(node)
        self._nodes.append(node)
        return node

    def find_node(self, payload: Block) -> Optional[Node]:
        """Return the most recently inserted node whose payload equals ``payload``."""
        for node in reversed(self._nodes):
            if node.payload == payload:
                return node
        return None

    def parent_of(self, node: Node) -> Optional[Node]:
        return node.parent

    def render(self, base_indent: int = 1) -> Iterator[str]:
        # Import here to avoid circular dependency
        from .serializer import render

        return render(self.root, base_indent)

    def __iter__(self) -> Iterator[Node]:
        return self.root.iter_nodes()

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Tree({self.name!r}, root={self.root.payload.label!r}, nodes={len(self._nodes)})"
