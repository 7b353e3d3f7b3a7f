"""
Attribute injection for a single element.

The decision order matters:

1. Nothing to annotate (no element)            -> no-op
2. The element is a fragment                   -> no-op, always
3. Resolve the element name
4. Element or component name is ignored        -> no attributes at all
5. Element-name attribute, unless the tag is in the default-suppressed set
6. Component-name attribute, when a component name is in scope
7. Source-file attribute, when the element is a root or was not suppressed
   in step 5

Every attribute is presence-checked by name first, which makes the pass
idempotent.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from component_annotate.annotate.context import ProcessingContext
from component_annotate.annotate.fragments import NodeKind, classify_node
from component_annotate.annotate.names import element_name
from component_annotate.constants import REACT_NATIVE_ELEMENTS, UNKNOWN_ELEMENT_NAME
from component_annotate.parser.nodes import ASTNode, JSXElement


@dataclass
class InjectionResult:
    """What happened at one element."""
    element_name: str = ""
    added: List[str] = field(default_factory=list)
    ignored: bool = False
    # Element-name attribute skipped because of the default-suppressed set
    suppressed_element: bool = False
    # The element was an annotation target (legacy policy stops here)
    target: bool = False


def is_ignored(name: str, component_name: str, ignored_components) -> bool:
    """
    Exact string match of the element or component name against the ignore list.

    An empty component name means "no name here" and never matches.
    """
    return any(
        entry == name or (component_name and entry == component_name)
        for entry in ignored_components
    )


def apply_attributes(element: Optional[ASTNode], context: ProcessingContext,
                     kind: Optional[NodeKind] = None) -> InjectionResult:
    """Add the tracking attributes to one element. Returns what was done."""
    if kind is None:
        kind = classify_node(element, context.fragments)
    if element is None or kind is not NodeKind.ELEMENT or not isinstance(element, JSXElement):
        return InjectionResult()

    config = context.config
    names = config.attribute_names
    component_name = context.component_name
    result = InjectionResult(element_name=element_name(element.name), target=True)

    if is_ignored(result.element_name, component_name, config.ignored_components):
        result.ignored = True
        return result

    if not element.has_attribute(names.element):
        if result.element_name in config.ignored_elements:
            result.suppressed_element = True
        else:
            element.append_attribute(names.element, result.element_name)
            result.added.append(names.element)

    if component_name and not element.has_attribute(names.component):
        element.append_attribute(names.component, component_name)
        result.added.append(names.component)

    if (
        config.source_file_name
        and (component_name or not result.suppressed_element)
        and not element.has_attribute(names.source_file)
    ):
        element.append_attribute(names.source_file, config.source_file_name)
        result.added.append(names.source_file)

    return result


# =============================================================================
# Legacy Policy
# =============================================================================

def is_host_element(name: str) -> bool:
    """
    Check if an element name is a host element rather than a component.

    Lower-case names are DOM tags; React Native primitives are PascalCase
    but still count. Unresolvable names never do.
    """
    if name == UNKNOWN_ELEMENT_NAME:
        return False
    if name and name[0] == name[0].lower():
        return True
    return name in REACT_NATIVE_ELEMENTS


def apply_component_attribute(element: Optional[ASTNode], context: ProcessingContext,
                              kind: Optional[NodeKind] = None) -> InjectionResult:
    """
    Legacy injection: only the component-name attribute, only on host elements.

    `target` is set for every host element, including ignored ones and ones
    already carrying the attribute, so a repeated run stops at the same place.
    """
    if kind is None:
        kind = classify_node(element, context.fragments)
    if element is None or kind is not NodeKind.ELEMENT or not isinstance(element, JSXElement):
        return InjectionResult()

    names = context.config.attribute_names
    result = InjectionResult(element_name=element_name(element.name))
    if not is_host_element(result.element_name):
        return result
    result.target = True

    if is_ignored(result.element_name, context.component_name, context.config.ignored_components):
        result.ignored = True
        return result

    if context.component_name and not element.has_attribute(names.component):
        element.append_attribute(names.component, context.component_name)
        result.added.append(names.component)
    return result
