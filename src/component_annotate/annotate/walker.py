"""
Tree walking from a component root.

Two traversal policies exist:

FULL (default)
    Every element under the root is visited. Only the root gets the
    component name, except that with fragment annotation enabled the first
    element child of a root fragment takes it instead.

LEGACY
    Only the component-name attribute is written. The component name stays
    in scope all the way down, and descent along a path stops at the first
    host element.
"""

from typing import Callable, Dict, Optional

from component_annotate.annotate.context import ProcessingContext
from component_annotate.annotate.fragments import NodeKind, classify_node
from component_annotate.annotate.injector import apply_attributes, apply_component_attribute
from component_annotate.config import TraversalPolicy
from component_annotate.parser.nodes import ASTNode

WALKABLE = (NodeKind.ELEMENT, NodeKind.FRAGMENT)


def process_jsx(node: Optional[ASTNode], context: ProcessingContext) -> int:
    """
    Annotate a JSX subtree. Returns the number of attributes added.

    `context.component_name` is the name given to the root. A component
    whose own name is ignored is skipped as a whole.
    """
    kind = classify_node(node, context.fragments)
    if kind not in WALKABLE:
        return 0
    if context.component_name and context.component_name in context.config.ignored_components:
        return 0
    walker = _WALKERS[context.config.policy]
    return walker(node, kind, context)


def _walk_full(node: ASTNode, kind: NodeKind, context: ProcessingContext) -> int:
    added = 0
    if kind is NodeKind.ELEMENT:
        added += len(apply_attributes(node, context, kind).added)

    # A root fragment hands its component name to its first element child
    pass_name = (
        kind is NodeKind.FRAGMENT
        and context.config.annotate_fragments
        and bool(context.component_name)
    )
    unnamed = context.with_component("")

    for child in node.children:
        child_kind = classify_node(child, context.fragments)
        if child_kind not in WALKABLE:
            continue
        if pass_name and child_kind is NodeKind.ELEMENT:
            pass_name = False
            added += _walk_full(child, child_kind, context)
        else:
            added += _walk_full(child, child_kind, unnamed)
    return added


def _walk_legacy(node: ASTNode, kind: NodeKind, context: ProcessingContext) -> int:
    added = 0
    if kind is NodeKind.ELEMENT:
        result = apply_component_attribute(node, context, kind)
        if result.target:
            return len(result.added)

    for child in node.children:
        child_kind = classify_node(child, context.fragments)
        if child_kind in WALKABLE:
            added += _walk_legacy(child, child_kind, context)
    return added


_WALKERS: Dict[TraversalPolicy, Callable[[ASTNode, NodeKind, ProcessingContext], int]] = {
    TraversalPolicy.FULL: _walk_full,
    TraversalPolicy.LEGACY: _walk_legacy,
}
