"""
Element name resolution.

Turns a JSX tag name into the display string used in attributes, ignore
lists and fragment checks.
"""

from typing import Optional

from component_annotate.constants import UNKNOWN_ELEMENT_NAME
from component_annotate.parser.nodes import (
    ASTNode,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    TagName,
)


def element_name(name: Optional[TagName]) -> str:
    """
    Canonical string for a tag name.

        "div"                      -> "div"
        <Foo>                      -> "Foo"
        <svg:rect>                 -> "rect"
        <Components.UI.Card>       -> "Components.UI.Card"
        anything else              -> "unknown"
    """
    if isinstance(name, str):
        return name
    if isinstance(name, JSXIdentifier):
        return name.name
    if isinstance(name, JSXNamespacedName):
        return name.name
    if isinstance(name, JSXMemberExpression):
        return f"{_member_object_name(name.object)}.{name.property}"
    return UNKNOWN_ELEMENT_NAME


def _member_object_name(obj: Optional[ASTNode]) -> str:
    # Recurses for nested paths such as Components.UI.Header
    if isinstance(obj, JSXIdentifier):
        return obj.name
    if isinstance(obj, JSXMemberExpression):
        return f"{_member_object_name(obj.object)}.{obj.property}"
    return UNKNOWN_ELEMENT_NAME
