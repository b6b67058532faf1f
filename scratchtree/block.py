"""Block labels carried by structure tree nodes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import ESCAPE, OPERATOR_TOKENS


class BlockKind(Enum):
    """What a tree node stands for."""
    OBJECT = "object"
    CALL = "call"
    PRIMITIVE = "primitive"


def is_operator_token(opcode: str) -> bool:
    """Check whether an opcode is a symbolic operator such as ``=`` or ``\\/``.

    Escapes are passed through verbatim by the scanner, so ``"\\/"`` arrives
    as two characters and is unescaped here before classification.
    """
    token = opcode.replace(ESCAPE, "")
    if token in OPERATOR_TOKENS:
        return True
    return bool(token) and not any(ch.isalnum() for ch in token)


@dataclass(frozen=True)
class Block:
    """A stage/sprite name or a block opcode.

    Objects only set ``name``. Call-level blocks keep the opcode text in both
    ``name`` and ``block_name``. The kind follows from ``block_name``.
    """
    name: str
    block_name: Optional[str] = None

    @classmethod
    def for_object(cls, name: str) -> "Block":
        return cls(name=name)

    @classmethod
    def for_call(cls, opcode: str) -> "Block":
        return cls(name=opcode, block_name=opcode)

    @property
    def kind(self) -> BlockKind:
        if self.block_name is None:
            return BlockKind.OBJECT
        if is_operator_token(self.block_name):
            return BlockKind.PRIMITIVE
        return BlockKind.CALL

    @property
    def label(self) -> str:
        return self.block_name if self.block_name is not None else self.name

    @property
    def is_object(self) -> bool:
        return self.kind is BlockKind.OBJECT

    @property
    def is_primitive(self) -> bool:
        return self.kind is BlockKind.PRIMITIVE

    def __str__(self) -> str:
        return self.label
