"""Character-level reconstruction of block call trees from a scripts section.

A Scratch 2 scripts section is a bracketed list of scripts, each script being
``[x, y, [block, block, ...]]`` and each block ``["opcode", arg, ...]`` where an
argument may itself be a block or a nested stack of blocks::

    [[10, 10, [["whenGreenFlagClicked"], ["doIf", ["=", ["answer"], 5], [["say:", "hi"]]]]]]

The scanner walks the text once and never builds intermediate lists. A list
whose first element is a quoted string is a call headed by that opcode; any
other list (script wrappers, stacks, argument lists) is transparent and its
calls attach to the enclosing call. Operator calls such as ``=`` do not open a
level of their own: their operands sit beside them under the enclosing call.
"""

from dataclasses import dataclass
from typing import List, Optional

from .block import Block
from .constants import CLOSE_SCOPE, ESCAPE, OPEN_SCOPE, QUOTE
from .errors import UnbalancedScriptError
from .tree import Node, Tree


@dataclass
class _Frame:
    """One open ``[`` scope."""
    attach: Node
    head: Optional[Node] = None
    started: bool = False

    @property
    def child_attach(self) -> Node:
        """Attachment point for calls found in lists nested inside this one."""
        if self.head is not None and not self.head.payload.is_primitive:
            return self.head
        return self.attach


class ScriptScanner:
    """Attach the calls of one balanced scripts buffer under an object node."""

    def __init__(self, tree: Tree, attach_to: Node) -> None:
        self.tree = tree
        self.attach_to = attach_to
        self.frames: List[_Frame] = []
        self.created: List[Node] = []
        self.consumed = 0
        self._opened = 0
        self._in_string = False
        self._in_name = False
        self._escaped = False
        self._name: List[str] = []

    @property
    def top_level(self) -> List[Node]:
        """Calls attached directly under the object node by this scan."""
        return [node for node in self.created if node.parent is self.attach_to]

    def scan(self, text: str) -> List[Node]:
        """Scan ``text`` up to the bracket closing its first scope.

        Returns the created call nodes in document order. ``consumed`` holds
        the number of characters read; the remainder is ignored.
        """
        for index, ch in enumerate(text):
            if self._in_string:
                self._string_char(ch)
            elif ch == OPEN_SCOPE:
                self._open_scope()
            elif ch == CLOSE_SCOPE:
                if not self.frames:
                    raise UnbalancedScriptError("Unexpected ']' in scripts section", f"offset {index}")
                self.frames.pop()
                if not self.frames:
                    self.consumed = index + 1
                    return self.created
            elif ch == QUOTE:
                self._in_string = True
                if self.frames and not self.frames[-1].started:
                    self._in_name = True
                    self._name = []
                self._mark_started()
            elif not ch.isspace():
                self._mark_started()

        self.consumed = len(text)
        if self._opened == 0:
            raise UnbalancedScriptError("Scripts section has no opening '['")
        raise UnbalancedScriptError(
            "Scripts section never closes",
            f"{len(self.frames)} scope{'s' if len(self.frames) != 1 else ''} still open",
        )

    def _open_scope(self) -> None:
        if self.frames:
            parent = self.frames[-1]
            attach = parent.child_attach
            parent.started = True
        else:
            attach = self.attach_to
        self.frames.append(_Frame(attach=attach))
        self._opened += 1

    def _mark_started(self) -> None:
        if self.frames:
            self.frames[-1].started = True

    def _string_char(self, ch: str) -> None:
        if self._escaped:
            self._escaped = False
        elif ch == ESCAPE:
            self._escaped = True
        elif ch == QUOTE:
            self._in_string = False
            if self._in_name:
                self._in_name = False
                self._add_call("".join(self._name))
            return
        if self._in_name:
            self._name.append(ch)

    def _add_call(self, opcode: str) -> None:
        frame = self.frames[-1]
        node = self.tree.add_leaf(frame.attach, Block.for_call(opcode))
        frame.head = node
        self.created.append(node)


def attach_scripts(tree: Tree, attach_to: Node, text: str) -> List[Node]:
    """Scan one scripts buffer and return the call nodes it created."""
    return ScriptScanner(tree, attach_to).scan(text)
