"""
Fragment detection and node classification.

Every JSX-position node the walker looks at is classified exactly once into
a NodeKind. Fragments group children without rendering markup and are never
annotated.
"""

from enum import Enum, auto
from typing import Optional

from component_annotate.annotate.aliases import FragmentContext
from component_annotate.annotate.names import element_name
from component_annotate.constants import DEFAULT_NAMESPACE, FRAGMENT_NAME
from component_annotate.parser.nodes import (
    ASTNode,
    JSXElement,
    JSXFragment,
    JSXIdentifier,
    JSXMemberExpression,
    JSXText,
)

# Matched even when the file never imports them
LITERAL_FRAGMENT_NAMES = frozenset({FRAGMENT_NAME, f"{DEFAULT_NAMESPACE}.{FRAGMENT_NAME}"})


class NodeKind(Enum):
    """What a JSX-position node is, for annotation purposes."""
    ELEMENT = auto()
    FRAGMENT = auto()
    TEXT = auto()
    OTHER = auto()


def is_fragment(node: Optional[ASTNode], fragments: Optional[FragmentContext] = None) -> bool:
    """True if the node is a shorthand fragment or a (possibly aliased) Fragment element."""
    if isinstance(node, JSXFragment):
        return True
    if not isinstance(node, JSXElement):
        return False

    name = element_name(node.name)
    if name in LITERAL_FRAGMENT_NAMES:
        return True

    if fragments is None:
        return False

    if name in fragments.fragment_aliases:
        return True

    tag = node.name
    if isinstance(tag, JSXMemberExpression) and isinstance(tag.object, JSXIdentifier):
        if tag.property != FRAGMENT_NAME:
            return False
        # <R.Fragment> where R is a React namespace alias
        if tag.object.name in fragments.namespace_aliases:
            return True
        # <F.Fragment> where F is itself a fragment alias
        if tag.object.name in fragments.fragment_aliases:
            return True

    return False


def classify_node(node: Optional[ASTNode], fragments: Optional[FragmentContext] = None) -> NodeKind:
    """Decide the NodeKind of a node."""
    if is_fragment(node, fragments):
        return NodeKind.FRAGMENT
    if isinstance(node, JSXElement):
        return NodeKind.ELEMENT
    if isinstance(node, JSXText):
        return NodeKind.TEXT
    return NodeKind.OTHER
