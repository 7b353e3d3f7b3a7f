"""
TSX Parser

Parses JavaScript/TypeScript sources with JSX using tree-sitter's TSX grammar
and converts the concrete syntax tree into the AST in `nodes.py`.

tree-sitter never fails on malformed input; it inserts ERROR nodes and keeps
going. Those end up as OpaqueNode like any other syntax we do not model, so
the annotation pass simply finds nothing to do there.

Usage:
    from component_annotate.parser import parse_source

    program = parse_source(source_text, filename="App.tsx")
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser

from component_annotate.parser.emit import encode_source
from component_annotate.parser.nodes import (
    ArrowFunction,
    ASTNode,
    BlockStatement,
    ClassDeclaration,
    ConditionalExpression,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    JSXText,
    MemberExpression,
    MethodDefinition,
    ObjectPattern,
    OpaqueNode,
    PatternProperty,
    Program,
    ReturnStatement,
    StringLiteral,
    TagName,
    VariableDeclaration,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)

TSX_LANGUAGE = Language(tstypescript.language_tsx())

# Leaf node types that are plain names
IDENTIFIER_TYPES = {
    "identifier",
    "property_identifier",
    "type_identifier",
    "shorthand_property_identifier",
    "jsx_identifier",
    "this",
}

# Tag names written as dotted paths. Older grammars call these nested_identifier.
MEMBER_NAME_TYPES = {"member_expression", "nested_identifier"}

CLASS_TYPES = {"class_declaration", "abstract_class_declaration"}


class ParseError(Exception):
    """Error reading or parsing a source file."""
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Parse error in {path}: {message}")


def _text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _named(node: Node) -> List[Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


class TSXParser:
    """
    Converts a tree-sitter TSX tree into the annotation AST.

    Usage:
        parser = TSXParser()
        program = parser.parse(source_bytes, filename="App.tsx")
    """

    def __init__(self):
        self._parser = Parser(TSX_LANGUAGE)
        self._converters: Dict[str, Callable[[Node], ASTNode]] = {
            "import_statement": self._convert_import,
            "lexical_declaration": self._convert_variable_declaration,
            "variable_declaration": self._convert_variable_declaration,
            "variable_declarator": self._convert_declarator,
            "object_pattern": self._convert_object_pattern,
            "function_declaration": self._convert_function,
            "arrow_function": self._convert_arrow,
            "class": self._convert_class,
            "class_declaration": self._convert_class,
            "abstract_class_declaration": self._convert_class,
            "method_definition": self._convert_method,
            "statement_block": self._convert_block,
            "return_statement": self._convert_return,
            "parenthesized_expression": self._convert_parenthesized,
            "ternary_expression": self._convert_ternary,
            "member_expression": self._convert_member,
            "string": self._convert_string,
            "jsx_element": self._convert_jsx_element,
            "jsx_self_closing_element": self._convert_jsx_self_closing,
            "jsx_text": self._convert_jsx_text,
            "jsx_expression": self._convert_jsx_expression,
        }

    def parse(self, source: Union[str, bytes], filename: str = "<unknown>") -> Program:
        """Parse source text into a Program."""
        if isinstance(source, str):
            source = encode_source(source)
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            logger.debug(f"{filename}: syntax errors present, continuing with recovered tree")

        program = Program(filename=filename, source=source, line=1, column=1)
        program.body = [self.convert(child) for child in _named(root)]
        return program

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def convert(self, node: Optional[Node]) -> Optional[ASTNode]:
        """Convert one tree-sitter node (and its subtree)."""
        if node is None:
            return None
        if node.type in IDENTIFIER_TYPES:
            return Identifier(name=_text(node), **self._pos(node))
        converter = self._converters.get(node.type)
        if converter is not None:
            return converter(node)
        return self._convert_opaque(node)

    @staticmethod
    def _pos(node: Node) -> dict:
        row, column = node.start_point
        return {"line": row + 1, "column": column + 1}

    def _convert_opaque(self, node: Node) -> OpaqueNode:
        return OpaqueNode(
            kind=node.type,
            children=[self.convert(c) for c in _named(node)],
            **self._pos(node),
        )

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _convert_import(self, node: Node) -> ImportDeclaration:
        source_node = node.child_by_field_name("source")
        decl = ImportDeclaration(
            source=_string_value(source_node) if source_node is not None else "",
            **self._pos(node),
        )
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in _named(clause):
                if part.type == "identifier":
                    decl.specifiers.append(ImportSpecifier(
                        kind="default", imported="default", local=_text(part),
                        **self._pos(part),
                    ))
                elif part.type == "namespace_import":
                    names = [c for c in _named(part) if c.type == "identifier"]
                    if names:
                        decl.specifiers.append(ImportSpecifier(
                            kind="namespace", local=_text(names[-1]), **self._pos(part),
                        ))
                elif part.type == "named_imports":
                    for spec in _named(part):
                        if spec.type != "import_specifier":
                            continue
                        name_node = spec.child_by_field_name("name")
                        alias_node = spec.child_by_field_name("alias")
                        imported = _string_value(name_node) if name_node is not None else ""
                        local = _text(alias_node) if alias_node is not None else imported
                        decl.specifiers.append(ImportSpecifier(
                            kind="named", imported=imported, local=local, **self._pos(spec),
                        ))
        return decl

    def _convert_variable_declaration(self, node: Node) -> VariableDeclaration:
        kind = _text(node.children[0]) if node.children else "var"
        return VariableDeclaration(
            kind=kind,
            declarators=[
                self._convert_declarator(c) for c in _named(node)
                if c.type == "variable_declarator"
            ],
            **self._pos(node),
        )

    def _convert_declarator(self, node: Node) -> VariableDeclarator:
        return VariableDeclarator(
            id=self.convert(node.child_by_field_name("name")),
            init=self.convert(node.child_by_field_name("value")),
            **self._pos(node),
        )

    def _convert_object_pattern(self, node: Node) -> ObjectPattern:
        pattern = ObjectPattern(**self._pos(node))
        for prop in _named(node):
            if prop.type == "shorthand_property_identifier_pattern":
                name = _text(prop)
                pattern.properties.append(PatternProperty(key=name, value=name, **self._pos(prop)))
            elif prop.type == "pair_pattern":
                key = prop.child_by_field_name("key")
                value = prop.child_by_field_name("value")
                pattern.properties.append(PatternProperty(
                    key=_text(key),
                    value=_text(value) if value is not None and value.type == "identifier" else None,
                    **self._pos(prop),
                ))
            # Defaults and rest elements never bind a plain alias
        return pattern

    def _convert_function(self, node: Node) -> FunctionDeclaration:
        name = node.child_by_field_name("name")
        return FunctionDeclaration(
            name=_text(name) if name is not None else None,
            body=self.convert(node.child_by_field_name("body")),
            **self._pos(node),
        )

    def _convert_arrow(self, node: Node) -> ArrowFunction:
        return ArrowFunction(body=self.convert(node.child_by_field_name("body")), **self._pos(node))

    def _convert_class(self, node: Node) -> ASTNode:
        # A class expression only counts as a declaration when it is the
        # anonymous `export default class extends ... {}`
        if node.type not in CLASS_TYPES:
            parent = node.parent
            if parent is None or parent.type != "export_statement":
                return self._convert_opaque(node)

        name = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        members = [self.convert(m) for m in _named(body)] if body is not None else []
        return ClassDeclaration(
            name=_text(name) if name is not None else None,
            members=members,
            **self._pos(node),
        )

    def _convert_method(self, node: Node) -> MethodDefinition:
        return MethodDefinition(
            name=_text(node.child_by_field_name("name")),
            body=self.convert(node.child_by_field_name("body")),
            **self._pos(node),
        )

    def _convert_block(self, node: Node) -> BlockStatement:
        return BlockStatement(body=[self.convert(c) for c in _named(node)], **self._pos(node))

    def _convert_return(self, node: Node) -> ReturnStatement:
        children = _named(node)
        return ReturnStatement(
            argument=self.convert(children[0]) if children else None,
            **self._pos(node),
        )

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def _convert_parenthesized(self, node: Node) -> Optional[ASTNode]:
        children = _named(node)
        if len(children) != 1:
            return self._convert_opaque(node)
        return self.convert(children[0])

    def _convert_ternary(self, node: Node) -> ConditionalExpression:
        return ConditionalExpression(
            test=self.convert(node.child_by_field_name("condition")),
            consequent=self.convert(node.child_by_field_name("consequence")),
            alternate=self.convert(node.child_by_field_name("alternative")),
            **self._pos(node),
        )

    def _convert_member(self, node: Node) -> MemberExpression:
        return MemberExpression(
            object=self.convert(node.child_by_field_name("object")),
            property=_text(node.child_by_field_name("property")),
            **self._pos(node),
        )

    def _convert_string(self, node: Node) -> StringLiteral:
        return StringLiteral(value=_string_value(node), **self._pos(node))

    # -------------------------------------------------------------------------
    # JSX
    # -------------------------------------------------------------------------

    def _convert_jsx_element(self, node: Node) -> ASTNode:
        open_tag = node.child_by_field_name("open_tag")
        children = [
            self.convert(c) for c in _named(node)
            if c.type not in ("jsx_opening_element", "jsx_closing_element")
        ]
        if open_tag is None or open_tag.child_by_field_name("name") is None:
            return JSXFragment(children=children, **self._pos(node))

        element = self._convert_tag(open_tag)
        element.children = children
        return element

    def _convert_jsx_self_closing(self, node: Node) -> JSXElement:
        element = self._convert_tag(node)
        element.self_closing = True
        return element

    def _convert_tag(self, tag: Node) -> JSXElement:
        """Build an element from an opening or self-closing tag."""
        name_node = tag.child_by_field_name("name")
        attributes: List[ASTNode] = []
        insert_offset = name_node.end_byte if name_node is not None else None

        for child in _named(tag):
            if child.type == "jsx_attribute":
                attributes.append(self._convert_jsx_attribute(child))
            elif child.type == "jsx_expression":
                # Spread attribute `{...props}`
                attributes.append(self._convert_opaque(child))
            else:
                continue
            insert_offset = max(insert_offset or 0, child.end_byte)

        return JSXElement(
            name=self._convert_tag_name(name_node),
            attributes=attributes,
            insert_offset=insert_offset,
            **self._pos(tag),
        )

    def _convert_jsx_attribute(self, node: Node) -> JSXAttribute:
        parts = _named(node)
        attr = JSXAttribute(name=_text(parts[0]) if parts else "", **self._pos(node))
        if len(parts) > 1 and parts[-1].type == "string":
            attr.value = _string_value(parts[-1])
        return attr

    def _convert_tag_name(self, node: Optional[Node]) -> Optional[TagName]:
        if node is None:
            return None
        if node.type in IDENTIFIER_TYPES:
            return JSXIdentifier(name=_text(node), **self._pos(node))
        if node.type == "jsx_namespace_name":
            parts = _named(node)
            if len(parts) == 2:
                return JSXNamespacedName(
                    namespace=_text(parts[0]), name=_text(parts[1]), **self._pos(node),
                )
        if node.type in MEMBER_NAME_TYPES:
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None:
                parts = _named(node)
                if len(parts) != 2:
                    return None
                obj, prop = parts
            return JSXMemberExpression(
                object=self._convert_tag_name(obj),
                property=_text(prop),
                **self._pos(node),
            )
        return None

    def _convert_jsx_text(self, node: Node) -> JSXText:
        return JSXText(value=_text(node), **self._pos(node))

    def _convert_jsx_expression(self, node: Node) -> JSXExpressionContainer:
        children = _named(node)
        return JSXExpressionContainer(
            expression=self.convert(children[0]) if children else None,
            **self._pos(node),
        )


def _string_value(node: Node) -> str:
    """Value of a string literal node, without its quotes."""
    text = _text(node)
    if node.type == "string" and len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: Union[str, bytes], filename: str = "<unknown>") -> Program:
    """Parse source text into a Program."""
    return TSXParser().parse(source, filename=filename)


def parse_file(path: Union[str, Path]) -> Program:
    """Read and parse a source file."""
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        raise ParseError(str(path), str(e)) from e
    return TSXParser().parse(source, filename=str(path))
