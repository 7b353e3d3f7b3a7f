from dataclasses import dataclass, field, replace

from component_annotate.annotate.aliases import FragmentContext
from component_annotate.config import AnnotationConfig


@dataclass(frozen=True)
class ProcessingContext:
    """Everything the walker and injector need at one node."""
    config: AnnotationConfig
    fragments: FragmentContext = field(default_factory=FragmentContext)
    # Empty means "do not assign a component name here"
    component_name: str = ""

    def with_component(self, name: str) -> "ProcessingContext":
        if name == self.component_name:
            return self
        return replace(self, component_name=name)
