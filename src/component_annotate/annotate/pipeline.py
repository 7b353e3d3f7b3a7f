"""
Annotation pipeline for one file.

Usage:
    from component_annotate.annotate import annotate_source

    result = annotate_source(code, filename="src/App.tsx")
    print(result.code)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from component_annotate.annotate.aliases import collect_fragment_context
from component_annotate.annotate.components import discover_components, is_known_incompatible
from component_annotate.annotate.context import ProcessingContext
from component_annotate.annotate.walker import process_jsx
from component_annotate.config import AnnotationConfig
from component_annotate.parser.emit import encode_source
from component_annotate.parser.nodes import Program
from component_annotate.parser.tsx import ParseError, parse_source

logger = logging.getLogger(__name__)


@dataclass
class AnnotationResult:
    """Outcome of annotating one file."""
    code: str = ""
    components: List[str] = field(default_factory=list)
    attributes_added: int = 0
    # True when the file was skipped entirely (known incompatible package)
    skipped: bool = False

    def summary(self) -> str:
        if self.skipped:
            return "skipped"
        return f"{len(self.components)} components, {self.attributes_added} attributes added"


def annotate_program(program: Program, config: Optional[AnnotationConfig] = None,
                     file_path: Optional[str] = None) -> AnnotationResult:
    """
    Annotate a parsed program in place.

    `config.source_file_name` is used as given; use `config.for_file(path)`
    or `annotate_source` to derive it from a path.
    """
    config = config or AnnotationConfig()
    file_path = file_path if file_path is not None else program.filename
    result = AnnotationResult()

    if is_known_incompatible(file_path, config.incompatible_packages):
        logger.debug(f"Skipping {file_path}: inside a known incompatible package")
        result.skipped = True
        return result

    # Package guard already applied above
    components = discover_components(program, file_path, incompatible_packages=())

    fragments = collect_fragment_context(program)
    base = ProcessingContext(config=config, fragments=fragments)

    for component in components:
        context = base.with_component(component.name)
        added = 0
        for root in component.roots:
            added += process_jsx(root, context)
        logger.debug(f"{component.name}: {added} attributes on {len(component.roots)} roots")
        result.components.append(component.name)
        result.attributes_added += added

    return result


def annotate_source(source: Union[str, bytes], filename: Optional[str] = None,
                    config: Optional[AnnotationConfig] = None) -> AnnotationResult:
    """Parse, annotate and re-serialize a source string."""
    config = (config or AnnotationConfig()).for_file(filename)
    program = parse_source(source, filename=filename or "<unknown>")
    result = annotate_program(program, config, file_path=filename)
    result.code = program.to_source()
    logger.info(f"{filename or '<source>'}: {result.summary()}")
    return result


def annotate_file(path: Union[str, Path], config: Optional[AnnotationConfig] = None,
                  inplace: bool = False) -> AnnotationResult:
    """Annotate a file on disk, optionally writing the result back."""
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        raise ParseError(str(path), str(e)) from e

    result = annotate_source(source, filename=str(path), config=config)
    if inplace and result.attributes_added:
        path.write_bytes(encode_source(result.code))
    return result
