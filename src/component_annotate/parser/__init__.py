"""
component_annotate.parser - JSX Source Parsing

Parses JavaScript/TypeScript sources containing JSX into an Abstract Syntax
Tree and writes annotated trees back out as source text.
"""

from component_annotate.parser.nodes import (
    ASTNode,
    NodeType,
    Program,
    ImportDeclaration,
    ImportSpecifier,
    VariableDeclaration,
    VariableDeclarator,
    ObjectPattern,
    PatternProperty,
    FunctionDeclaration,
    ArrowFunction,
    ClassDeclaration,
    MethodDefinition,
    BlockStatement,
    ReturnStatement,
    ConditionalExpression,
    Identifier,
    MemberExpression,
    StringLiteral,
    OpaqueNode,
    JSXElement,
    JSXFragment,
    JSXText,
    JSXExpressionContainer,
    JSXAttribute,
    JSXIdentifier,
    JSXNamespacedName,
    JSXMemberExpression,
    iter_child_nodes,
    walk,
)
from component_annotate.parser.tsx import TSXParser, ParseError, parse_source, parse_file
from component_annotate.parser.emit import render_source

__all__ = [
    # Parser
    "TSXParser",
    "ParseError",
    "parse_source",
    "parse_file",
    "render_source",
    # AST Nodes
    "ASTNode",
    "NodeType",
    "Program",
    "ImportDeclaration",
    "ImportSpecifier",
    "VariableDeclaration",
    "VariableDeclarator",
    "ObjectPattern",
    "PatternProperty",
    "FunctionDeclaration",
    "ArrowFunction",
    "ClassDeclaration",
    "MethodDefinition",
    "BlockStatement",
    "ReturnStatement",
    "ConditionalExpression",
    "Identifier",
    "MemberExpression",
    "StringLiteral",
    "OpaqueNode",
    "JSXElement",
    "JSXFragment",
    "JSXText",
    "JSXExpressionContainer",
    "JSXAttribute",
    "JSXIdentifier",
    "JSXNamespacedName",
    "JSXMemberExpression",
    # Traversal
    "iter_child_nodes",
    "walk",
]
