"""
JSX/JavaScript Abstract Syntax Tree

Only the shapes the annotation pass reasons about get their own node class:
imports, declarators, functions, classes, returns, ternaries and JSX.
Everything else is kept as an OpaqueNode so traversal still reaches the
code nested inside it.
"""

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Iterator, List, Optional, Union


class NodeType(Enum):
    """Types of AST nodes."""
    PROGRAM = auto()
    IMPORT = auto()                 # import x, { y as z } from "mod"
    IMPORT_SPECIFIER = auto()
    VARIABLE_DECLARATION = auto()   # const a = 1, b = 2
    VARIABLE_DECLARATOR = auto()    # a = 1
    OBJECT_PATTERN = auto()         # { a, b: c }
    PATTERN_PROPERTY = auto()
    FUNCTION = auto()               # function Foo() {}
    ARROW_FUNCTION = auto()         # () => ...
    CLASS = auto()
    METHOD = auto()
    BLOCK = auto()                  # { statements }
    RETURN = auto()
    CONDITIONAL = auto()            # a ? b : c
    IDENTIFIER = auto()
    MEMBER = auto()                 # a.b
    STRING = auto()
    OPAQUE = auto()                 # anything the pass does not inspect
    JSX_ELEMENT = auto()            # <div ...>...</div> or <div />
    JSX_FRAGMENT = auto()           # <>...</>
    JSX_TEXT = auto()
    JSX_EXPRESSION = auto()         # {expr}
    JSX_ATTRIBUTE = auto()
    JSX_IDENTIFIER = auto()         # div, Foo
    JSX_NAMESPACED_NAME = auto()    # svg:rect
    JSX_MEMBER = auto()             # Tab.Group


@dataclass
class ASTNode:
    """Base class for AST nodes."""
    node_type: NodeType = None  # Set by subclasses in __post_init__
    line: int = 0
    column: int = 0


# =============================================================================
# Expressions and Patterns
# =============================================================================

@dataclass
class Identifier(ASTNode):
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.IDENTIFIER

    def __repr__(self):
        return f"Identifier({self.name})"


@dataclass
class MemberExpression(ASTNode):
    """Property access `object.property`."""
    object: Optional[ASTNode] = None
    property: str = ""

    def __post_init__(self):
        self.node_type = NodeType.MEMBER

    def __repr__(self):
        return f"Member({self.object!r}.{self.property})"


@dataclass
class StringLiteral(ASTNode):
    value: str = ""

    def __post_init__(self):
        self.node_type = NodeType.STRING

    def __repr__(self):
        return f"String({self.value!r})"


@dataclass
class ConditionalExpression(ASTNode):
    """A ternary `test ? consequent : alternate`."""
    test: Optional[ASTNode] = None
    consequent: Optional[ASTNode] = None
    alternate: Optional[ASTNode] = None

    def __post_init__(self):
        self.node_type = NodeType.CONDITIONAL


@dataclass
class PatternProperty(ASTNode):
    """One entry of an object pattern. `value` is None for nested patterns."""
    key: str = ""
    value: Optional[str] = None

    def __post_init__(self):
        self.node_type = NodeType.PATTERN_PROPERTY

    def __repr__(self):
        return f"PatternProperty({self.key}: {self.value})"


@dataclass
class ObjectPattern(ASTNode):
    properties: List[PatternProperty] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.OBJECT_PATTERN


@dataclass
class OpaqueNode(ASTNode):
    """Syntax the pass does not inspect, with its converted children."""
    kind: str = ""
    children: List[ASTNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.OPAQUE

    def __repr__(self):
        return f"Opaque({self.kind}, {len(self.children)} children)"


# =============================================================================
# Statements
# =============================================================================

@dataclass
class ImportSpecifier(ASTNode):
    """
    One binding of an import.

    kind is 'named', 'default' or 'namespace'. For named imports `imported`
    is the exported name and `local` the binding it is visible as.
    """
    kind: str = "named"
    imported: Optional[str] = None
    local: str = ""

    def __post_init__(self):
        self.node_type = NodeType.IMPORT_SPECIFIER

    def __repr__(self):
        return f"ImportSpecifier({self.kind}, {self.imported} as {self.local})"


@dataclass
class ImportDeclaration(ASTNode):
    source: str = ""
    specifiers: List[ImportSpecifier] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.IMPORT

    def __repr__(self):
        return f"Import({self.source!r}, {self.specifiers})"


@dataclass
class VariableDeclarator(ASTNode):
    id: Optional[ASTNode] = None
    init: Optional[ASTNode] = None

    def __post_init__(self):
        self.node_type = NodeType.VARIABLE_DECLARATOR

    def __repr__(self):
        return f"Declarator({self.id!r} = {self.init!r})"


@dataclass
class VariableDeclaration(ASTNode):
    kind: str = "const"
    declarators: List[VariableDeclarator] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.VARIABLE_DECLARATION


@dataclass
class BlockStatement(ASTNode):
    body: List[ASTNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.BLOCK

    def __repr__(self):
        return f"Block({len(self.body)} statements)"


@dataclass
class ReturnStatement(ASTNode):
    argument: Optional[ASTNode] = None

    def __post_init__(self):
        self.node_type = NodeType.RETURN

    def __repr__(self):
        return f"Return({self.argument!r})"


@dataclass
class FunctionDeclaration(ASTNode):
    name: Optional[str] = None
    body: Optional[BlockStatement] = None

    def __post_init__(self):
        self.node_type = NodeType.FUNCTION

    def __repr__(self):
        return f"Function({self.name})"


@dataclass
class ArrowFunction(ASTNode):
    """An arrow function. `body` is a BlockStatement or a concise expression."""
    body: Optional[ASTNode] = None

    def __post_init__(self):
        self.node_type = NodeType.ARROW_FUNCTION


@dataclass
class MethodDefinition(ASTNode):
    name: str = ""
    body: Optional[BlockStatement] = None

    def __post_init__(self):
        self.node_type = NodeType.METHOD

    def __repr__(self):
        return f"Method({self.name})"


@dataclass
class ClassDeclaration(ASTNode):
    name: Optional[str] = None
    members: List[ASTNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.CLASS

    def __repr__(self):
        return f"Class({self.name}, {len(self.members)} members)"

    def get_method(self, name: str) -> Optional[MethodDefinition]:
        """Get a method by exact name."""
        for member in self.members:
            if isinstance(member, MethodDefinition) and member.name == name:
                return member
        return None


# =============================================================================
# JSX
# =============================================================================

@dataclass
class JSXIdentifier(ASTNode):
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.JSX_IDENTIFIER

    def __repr__(self):
        return f"JSXIdentifier({self.name})"


@dataclass
class JSXNamespacedName(ASTNode):
    namespace: str = ""
    name: str = ""

    def __post_init__(self):
        self.node_type = NodeType.JSX_NAMESPACED_NAME


@dataclass
class JSXMemberExpression(ASTNode):
    """A dotted tag name. `object` is a JSXIdentifier or another member."""
    object: Optional[ASTNode] = None
    property: str = ""

    def __post_init__(self):
        self.node_type = NodeType.JSX_MEMBER


@dataclass
class JSXAttribute(ASTNode):
    """
    A `name="value"` attribute on an opening tag.

    `value` is only populated for string literal values. `inserted` marks
    attributes added by the annotation pass, which the emitter writes out.
    """
    name: str = ""
    value: Optional[str] = None
    inserted: bool = False

    def __post_init__(self):
        self.node_type = NodeType.JSX_ATTRIBUTE

    def __repr__(self):
        return f"Attribute({self.name}={self.value!r})"


TagName = Union[str, JSXIdentifier, JSXNamespacedName, JSXMemberExpression]


@dataclass
class JSXElement(ASTNode):
    """
    A JSX element with its opening tag folded in.

    `insert_offset` is the byte offset in the original source right after
    the last attribute (or the tag name), where new attributes are spliced.
    """
    name: Optional[TagName] = None
    attributes: List[ASTNode] = field(default_factory=list)
    children: List[ASTNode] = field(default_factory=list)
    self_closing: bool = False
    insert_offset: Optional[int] = None

    def __post_init__(self):
        self.node_type = NodeType.JSX_ELEMENT

    def __repr__(self):
        return f"JSXElement({self.name!r}, {len(self.children)} children)"

    def has_attribute(self, name: Optional[str]) -> bool:
        """Check whether a named attribute is already present."""
        if not name:
            return False
        return any(
            isinstance(attr, JSXAttribute) and attr.name == name
            for attr in self.attributes
        )

    def append_attribute(self, name: str, value: str) -> JSXAttribute:
        """Append a string-valued attribute and return it."""
        attr = JSXAttribute(name=name, value=value, inserted=True,
                            line=self.line, column=self.column)
        self.attributes.append(attr)
        return attr

    def get_attribute(self, name: str) -> Optional[str]:
        """Get the string value of a named attribute."""
        for attr in self.attributes:
            if isinstance(attr, JSXAttribute) and attr.name == name:
                return attr.value
        return None


@dataclass
class JSXFragment(ASTNode):
    """The shorthand `<>...</>` grouping node."""
    children: List[ASTNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = NodeType.JSX_FRAGMENT

    def __repr__(self):
        return f"JSXFragment({len(self.children)} children)"


@dataclass
class JSXText(ASTNode):
    value: str = ""

    def __post_init__(self):
        self.node_type = NodeType.JSX_TEXT

    def __repr__(self):
        return f"JSXText({self.value!r})"


@dataclass
class JSXExpressionContainer(ASTNode):
    expression: Optional[ASTNode] = None

    def __post_init__(self):
        self.node_type = NodeType.JSX_EXPRESSION


# =============================================================================
# Program
# =============================================================================

@dataclass
class Program(ASTNode):
    """Root of the AST. Keeps the original source for re-serialization."""
    body: List[ASTNode] = field(default_factory=list)
    filename: str = "<unknown>"
    source: bytes = b""

    def __post_init__(self):
        self.node_type = NodeType.PROGRAM

    def __repr__(self):
        return f"Program({self.filename}, {len(self.body)} statements)"

    def to_source(self) -> str:
        """Serialize back to source text with inserted attributes applied."""
        from component_annotate.parser.emit import render_source
        return render_source(self)


# =============================================================================
# Traversal
# =============================================================================

def iter_child_nodes(node: ASTNode) -> Iterator[ASTNode]:
    """Yield the direct child nodes of a node, in field order."""
    for f in fields(node):
        if f.name == "node_type":
            continue
        value = getattr(node, f.name)
        if isinstance(value, ASTNode):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, ASTNode):
                    yield item


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield a node and all of its descendants, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))
