"""Quote-aware bracket balance tracking for buffered scripts sections."""

from .constants import CLOSE_SCOPE, ESCAPE, OPEN_SCOPE, QUOTE
from .errors import UnbalancedScriptError


class BracketCounter:
    """Track ``[``/``]`` nesting over text fed in chunks.

    Brackets inside quoted strings are ignored, and a backslash inside a
    string escapes the next character.
    """

    def __init__(self) -> None:
        self.depth = 0
        self.opened = 0
        self.closed = 0
        self.in_quotes = False
        self._escaped = False

    @property
    def balanced(self) -> bool:
        return self.opened > 0 and self.depth == 0

    def feed(self, text: str) -> bool:
        """Consume ``text`` and report whether the outermost scope has closed.

        Characters after the balancing bracket are not inspected.
        """
        for ch in text:
            if self.balanced:
                break
            if self.in_quotes:
                if self._escaped:
                    self._escaped = False
                elif ch == ESCAPE:
                    self._escaped = True
                elif ch == QUOTE:
                    self.in_quotes = False
                continue
            if ch == QUOTE:
                self.in_quotes = True
            elif ch == OPEN_SCOPE:
                self.depth += 1
                self.opened += 1
            elif ch == CLOSE_SCOPE:
                if self.depth == 0:
                    raise UnbalancedScriptError("Unexpected ']' before any open scope")
                self.depth -= 1
                self.closed += 1
        return self.balanced
