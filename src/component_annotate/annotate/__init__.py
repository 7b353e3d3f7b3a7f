"""
component_annotate.annotate - The Annotation Pass

Adds component, element and source-file tracking attributes to the JSX
rendered by each component in a file.

Stages, run once per file:
- collect_fragment_context: local aliases of Fragment and React
- discover_components: components and their JSX roots
- process_jsx: walk each root, applying attributes per element
"""

from component_annotate.annotate.aliases import FragmentContext, collect_fragment_context
from component_annotate.annotate.names import element_name
from component_annotate.annotate.fragments import NodeKind, classify_node, is_fragment
from component_annotate.annotate.components import (
    Component,
    ComponentKind,
    discover_components,
    function_roots,
    is_known_incompatible,
    render_roots,
)
from component_annotate.annotate.context import ProcessingContext
from component_annotate.annotate.injector import (
    InjectionResult,
    apply_attributes,
    apply_component_attribute,
    is_host_element,
)
from component_annotate.annotate.walker import process_jsx
from component_annotate.annotate.pipeline import (
    AnnotationResult,
    annotate_file,
    annotate_program,
    annotate_source,
)

__all__ = [
    # Aliases
    "FragmentContext",
    "collect_fragment_context",
    # Names and fragments
    "element_name",
    "NodeKind",
    "classify_node",
    "is_fragment",
    # Discovery
    "Component",
    "ComponentKind",
    "discover_components",
    "function_roots",
    "render_roots",
    "is_known_incompatible",
    # Injection and walking
    "ProcessingContext",
    "InjectionResult",
    "apply_attributes",
    "apply_component_attribute",
    "is_host_element",
    "process_jsx",
    # Pipeline
    "AnnotationResult",
    "annotate_program",
    "annotate_source",
    "annotate_file",
]
