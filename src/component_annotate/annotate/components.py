"""
Component discovery.

Finds the component definitions in a file and the JSX root(s) each one
renders:

- Function-style: `function Foo() { return <div/> }`
- Arrow-style:    `const Foo = () => <div/>` or with a block body
- Class-style:    `class Foo extends Component { render() { return <div/> } }`

Function and arrow components use the first direct `return` of their body
(unwrapping a ternary into both branches). Class components use every
`return` of JSX anywhere inside `render`, without ternary unwrapping. The
two rules differ on purpose and are kept as they are.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from component_annotate.constants import KNOWN_INCOMPATIBLE_PACKAGES
from component_annotate.parser.nodes import (
    ArrowFunction,
    ASTNode,
    BlockStatement,
    ClassDeclaration,
    ConditionalExpression,
    FunctionDeclaration,
    Identifier,
    JSXElement,
    JSXFragment,
    Program,
    ReturnStatement,
    VariableDeclarator,
    walk,
)

logger = logging.getLogger(__name__)

RENDER_METHOD = "render"


class ComponentKind(Enum):
    FUNCTION = auto()
    ARROW = auto()
    CLASS = auto()


@dataclass
class Component:
    """A discovered component and the JSX roots to annotate from."""
    name: str
    kind: ComponentKind
    roots: List[ASTNode] = field(default_factory=list)
    line: int = 0

    def __repr__(self):
        return f"Component({self.name}, {self.kind.name}, {len(self.roots)} roots)"


def is_jsx(node: Optional[ASTNode]) -> bool:
    return isinstance(node, (JSXElement, JSXFragment))


# =============================================================================
# File Guard
# =============================================================================

def is_known_incompatible(file_path: Optional[str],
                          packages: Sequence[str] = KNOWN_INCOMPATIBLE_PACKAGES) -> bool:
    """Check if a file lives inside an installed package we must not touch."""
    if not file_path:
        return False
    for package in packages:
        if f"/node_modules/{package}/" in file_path:
            return True
        if f"\\node_modules\\{package}\\" in file_path:
            return True
    return False


# =============================================================================
# Root Extraction
# =============================================================================

def function_roots(body: Optional[ASTNode]) -> List[ASTNode]:
    """
    JSX roots of a function or arrow body.

    A concise JSX body is the root. Otherwise the first direct return
    statement decides: JSX is the root, a ternary contributes each JSX
    branch, anything else means the function is not annotated.
    """
    if is_jsx(body):
        return [body]
    if not isinstance(body, BlockStatement):
        return []

    statement = next((s for s in body.body if isinstance(s, ReturnStatement)), None)
    if statement is None or statement.argument is None:
        return []

    arg = statement.argument
    if isinstance(arg, ConditionalExpression):
        return [branch for branch in (arg.consequent, arg.alternate) if is_jsx(branch)]
    if is_jsx(arg):
        return [arg]
    return []


def render_roots(cls: ClassDeclaration) -> List[ASTNode]:
    """Arguments of every JSX-returning return statement inside render()."""
    render = cls.get_method(RENDER_METHOD)
    if render is None or render.body is None:
        return []
    return [
        node.argument for node in walk(render.body)
        if isinstance(node, ReturnStatement) and is_jsx(node.argument)
    ]


# =============================================================================
# Discovery
# =============================================================================

def discover_components(program: Program, file_path: Optional[str] = None,
                        incompatible_packages: Sequence[str] = KNOWN_INCOMPATIBLE_PACKAGES,
                        ) -> List[Component]:
    """
    Find every annotatable component in a program, in source order.

    Components with no JSX root are left out. Nothing is returned for files
    inside a known-incompatible package.
    """
    if file_path is None:
        file_path = program.filename
    if is_known_incompatible(file_path, incompatible_packages):
        logger.debug(f"Skipping {file_path}: inside a known incompatible package")
        return []

    components = []
    for node in walk(program):
        component = _component_for(node)
        if component is None:
            continue
        if not component.roots:
            logger.debug(f"{component.name}: no JSX root found, not annotated")
            continue
        components.append(component)
    return components


def _component_for(node: ASTNode) -> Optional[Component]:
    if isinstance(node, FunctionDeclaration):
        if not node.name:
            return None
        return Component(node.name, ComponentKind.FUNCTION, function_roots(node.body), node.line)

    if isinstance(node, VariableDeclarator):
        # Only arrows bound directly to a name are components
        if not isinstance(node.id, Identifier) or not node.id.name:
            return None
        if not isinstance(node.init, ArrowFunction):
            return None
        return Component(node.id.name, ComponentKind.ARROW, function_roots(node.init.body), node.line)

    if isinstance(node, ClassDeclaration):
        if node.get_method(RENDER_METHOD) is None:
            return None
        return Component(node.name or "", ComponentKind.CLASS, render_roots(node), node.line)

    return None
