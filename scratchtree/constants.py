"""Constants used throughout the project-to-structure extraction."""

from typing import FrozenSet

# Line markers recognised in a Scratch 2 project.json (exact, case-sensitive substrings)
OBJECT_MARKER = '"objName": "'
CHILDREN_MARKER = '"children": '
SCRIPTS_MARKER = '"scripts": '

OPEN_SCOPE = "["
CLOSE_SCOPE = "]"
QUOTE = '"'
ESCAPE = "\\"

# One indentation level in the rendered output
INDENT = "    "

# File extensions handled by the extractor
ARCHIVE_EXTENSION = ".sb2"
DESCRIPTION_EXTENSION = ".json"
OUTPUT_EXTENSION = ".se"

# Suffix of the sibling directories used for unpacked archives and pending output
STAGING_SUFFIX = "-tmp"

# Scratch 2 operator opcodes that sit flat beside their operands
OPERATOR_TOKENS: FrozenSet[str] = frozenset({
    "+",
    "-",
    "*",
    "/",
    "%",
    "<",
    ">",
    "=",
    "&",
    "|",
})
