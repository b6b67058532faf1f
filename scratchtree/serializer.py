"""Indented text rendering of structure trees."""

from typing import Iterator, List, Tuple

from .constants import INDENT
from .tree import Node, Tree


def render(node: Node, depth: int, indent: str = INDENT) -> Iterator[str]:
    """Yield one line per node, pre-order, indented ``depth`` units for ``node``."""
    pending: List[Tuple[Node, int]] = [(node, depth)]
    while pending:
        current, level = pending.pop()
        yield f"{indent * level}{current.payload.label}\n"
        pending.extend((child, level + 1) for child in reversed(current.children))


def render_text(tree: Tree, base_indent: int = 1) -> str:
    return "".join(render(tree.root, base_indent))
