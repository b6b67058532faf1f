"""Line-level scanning of a Scratch 2 project description.

The description is read one line at a time. Three markers drive the scan:

* ``"objName": "...`` declares a stage or sprite;
* ``"children": `` makes the current object the parent of the objects that follow;
* ``"scripts": `` starts a bracketed scripts section, buffered until its
  brackets balance and then handed to :class:`ScriptScanner`.
"""

from enum import Enum
from typing import Iterable, List, Optional

from .block import Block
from .brackets import BracketCounter
from .constants import CHILDREN_MARKER, OBJECT_MARKER, OPEN_SCOPE, QUOTE, SCRIPTS_MARKER
from .diagnostics import DiagnosticContext
from .errors import MalformedProjectError, UnbalancedScriptError
from .script_scanner import ScriptScanner
from .tree import Node, Tree


class ScanState(Enum):
    AWAITING_OBJECT = "awaiting object"
    IN_OBJECT = "in object"
    IN_SCRIPT = "in script"


def extract_object_name(line: str) -> str:
    start = line.index(OBJECT_MARKER) + len(OBJECT_MARKER)
    end = line.rfind(QUOTE)
    if end < start:
        raise MalformedProjectError("Object name is not terminated", line.strip())
    return line[start:end]


class ProjectScanner:
    """Build the structure tree of one project description, line by line."""

    def __init__(self, project_name: str, diag: Optional[DiagnosticContext] = None) -> None:
        self.project_name = project_name
        self.diag = diag
        self.state = ScanState.AWAITING_OBJECT
        self.tree: Optional[Tree] = None
        self.current_object: Optional[Node] = None
        self.parent_object: Optional[Node] = None
        self.line_number = 0
        self._script: List[str] = []
        self._counter = BracketCounter()

    def feed_line(self, line: str) -> None:
        self.line_number += 1
        if self.diag is not None:
            self.diag.set_location(self.line_number, line.strip())

        if self.state is ScanState.IN_SCRIPT:
            if OBJECT_MARKER in line:
                raise UnbalancedScriptError(
                    "Scripts section is still open when the next object starts",
                    f"object '{self._object_label()}'",
                )
            self._buffer(line)
            return

        if OBJECT_MARKER in line:
            self._declare_object(extract_object_name(line))
        elif CHILDREN_MARKER in line:
            self.parent_object = self._require_object(CHILDREN_MARKER)
        elif SCRIPTS_MARKER in line:
            self._require_object(SCRIPTS_MARKER)
            self.state = ScanState.IN_SCRIPT
            self._script = []
            self._counter = BracketCounter()
            self._buffer(line[line.index(SCRIPTS_MARKER) + len(SCRIPTS_MARKER):])

    def feed(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.feed_line(line)

    def finish(self) -> Optional[Tree]:
        """End the scan and return the sealed tree, or None if no object was declared."""
        if self.state is ScanState.IN_SCRIPT:
            raise UnbalancedScriptError(
                "Scripts section never closes",
                f"object '{self._object_label()}'",
            )
        if self.tree is not None:
            self.tree.seal()
        return self.tree

    def _declare_object(self, name: str) -> None:
        block = Block.for_object(name)
        if self.tree is None:
            self.tree = Tree.create(block, self.project_name)
            self.current_object = self.tree.root
        else:
            if self.parent_object is None:
                raise MalformedProjectError(
                    f"Object '{name}' declared outside a children section",
                    f"root object '{self.tree.root.payload.label}'",
                )
            self.current_object = self.tree.add_leaf(self.parent_object, block)
        self.state = ScanState.IN_OBJECT
        self._script = []

    def _require_object(self, marker: str) -> Node:
        if self.current_object is None:
            raise MalformedProjectError(
                "Section found before any object declaration",
                marker.strip().rstrip(":"),
            )
        return self.current_object

    def _buffer(self, text: str) -> None:
        if self._counter.opened == 0:
            head = ("".join(self._script) + text).lstrip()
            if head and not head.startswith(OPEN_SCOPE):
                raise MalformedProjectError(
                    "Scripts section is not a list",
                    f"object '{self._object_label()}'",
                )
        self._script.append(text)
        if self._counter.feed(text):
            self._attach_scripts("".join(self._script))

    def _attach_scripts(self, text: str) -> None:
        owner = self._require_object(SCRIPTS_MARKER)
        scanner = ScriptScanner(self.tree, owner)
        scanner.scan(text)
        trailing = text[scanner.consumed:].strip().rstrip(",").strip()
        if trailing and self.diag is not None:
            self.diag.warning(f"Ignored text after scripts section of '{self._object_label()}'")
        self._script = []
        self.state = ScanState.IN_OBJECT

    def _object_label(self) -> str:
        if self.current_object is None:
            return "?"
        return self.current_object.payload.label


def scan_lines(
    lines: Iterable[str],
    project_name: str,
    diag: Optional[DiagnosticContext] = None,
) -> Optional[Tree]:
    """Scan a whole project description and return its tree."""
    scanner = ProjectScanner(project_name, diag)
    scanner.feed(lines)
    return scanner.finish()


def scan_text(text: str, project_name: str = "", diag: Optional[DiagnosticContext] = None) -> Optional[Tree]:
    return scan_lines(text.splitlines(), project_name, diag)
