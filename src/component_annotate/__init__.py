"""
component_annotate - Build-time JSX Component Annotation

Stamps rendered markup with the component, element and source file it came
from, so session replay and error tooling can map the DOM back to code.
"""

__version__ = "0.1.0"
__author__ = "component-annotate contributors"

from component_annotate.config import AnnotationConfig, TraversalPolicy
from component_annotate.parser import parse_file, parse_source
from component_annotate.annotate import annotate_file, annotate_program, annotate_source
