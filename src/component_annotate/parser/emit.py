"""
Source Emitter

Writes inserted attributes back into the original source text. Nothing else
is re-printed, so formatting, comments and untouched code stay byte-for-byte
identical.
"""

import json
from typing import List, Tuple

from component_annotate.parser.nodes import JSXAttribute, JSXElement, Program, walk

# Bytes that are not valid UTF-8 survive a decode/encode round trip as
# lone surrogates instead of raising
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"


def format_attribute(attr: JSXAttribute) -> str:
    """Render an inserted attribute, with a leading space."""
    value = attr.value or ""
    if '"' in value or "\\" in value or "\n" in value:
        # JSX string attributes have no escapes; use an expression instead
        return f" {attr.name}={{{json.dumps(value)}}}"
    return f' {attr.name}="{value}"'


def collect_insertions(program: Program) -> List[Tuple[int, int, str]]:
    """Gather (offset, order, text) for every inserted attribute."""
    insertions = []
    order = 0
    for node in walk(program):
        if not isinstance(node, JSXElement) or node.insert_offset is None:
            continue
        for attr in node.attributes:
            if isinstance(attr, JSXAttribute) and attr.inserted:
                insertions.append((node.insert_offset, order, format_attribute(attr)))
                order += 1
    return insertions


def render_source(program: Program) -> str:
    """Return the program's source with all inserted attributes applied."""
    source = program.source
    insertions = sorted(collect_insertions(program))
    if not insertions:
        return decode_source(source)

    parts = []
    pos = 0
    for offset, _, text in insertions:
        parts.append(source[pos:offset])
        parts.append(encode_source(text))
        pos = offset
    parts.append(source[pos:])
    return decode_source(b"".join(parts))


def decode_source(data: bytes) -> str:
    return data.decode(SOURCE_ENCODING, errors=SOURCE_ERRORS)


def encode_source(text: str) -> bytes:
    """Inverse of decode_source; restores the original bytes exactly."""
    return text.encode(SOURCE_ENCODING, errors=SOURCE_ERRORS)
