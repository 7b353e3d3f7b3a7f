"""
Fragment alias collection.

Scans a file's top-level statements once and records which local names
refer to React's Fragment and which refer to the React namespace object.

Recognized shapes:
    import { Fragment as F } from "react"      F is a fragment alias
    import React from "react"                  React is a namespace alias
    import * as R from "react"                 R is a namespace alias
    const F2 = F                               F2 is a fragment alias (F known)
    const F3 = R.Fragment                      F3 is a fragment alias (R known)
    const { Fragment: F4 } = R                 F4 is a fragment alias (R known)

The scan is a single pass in source order, so an alias of an alias declared
before its target is not resolved.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Set

from component_annotate.constants import DEFAULT_NAMESPACE, FRAGMENT_NAME, REACT_MODULE_NAMES
from component_annotate.parser.nodes import (
    ASTNode,
    Identifier,
    ImportDeclaration,
    MemberExpression,
    ObjectPattern,
    OpaqueNode,
    Program,
    VariableDeclaration,
    VariableDeclarator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FragmentContext:
    """Names known to denote Fragment or the React namespace in one file."""
    fragment_aliases: FrozenSet[str] = frozenset()
    namespace_aliases: FrozenSet[str] = frozenset({DEFAULT_NAMESPACE})


def collect_fragment_context(program: Program) -> FragmentContext:
    """Build the FragmentContext for a program."""
    fragment_aliases: Set[str] = set()
    namespace_aliases: Set[str] = {DEFAULT_NAMESPACE}

    for statement in _top_level_statements(program.body):
        if isinstance(statement, ImportDeclaration):
            if statement.source not in REACT_MODULE_NAMES:
                continue
            for spec in statement.specifiers:
                if spec.kind == "named":
                    if spec.imported == FRAGMENT_NAME:
                        fragment_aliases.add(spec.local)
                elif spec.local:
                    namespace_aliases.add(spec.local)

        elif isinstance(statement, VariableDeclaration):
            for declarator in statement.declarators:
                _collect_declarator(declarator, fragment_aliases, namespace_aliases)

    if fragment_aliases or len(namespace_aliases) > 1:
        logger.debug(
            f"{program.filename}: fragment aliases {sorted(fragment_aliases)}, "
            f"namespace aliases {sorted(namespace_aliases)}"
        )
    return FragmentContext(frozenset(fragment_aliases), frozenset(namespace_aliases))


def _collect_declarator(declarator: VariableDeclarator, fragment_aliases: Set[str],
                        namespace_aliases: Set[str]) -> None:
    init = declarator.init
    if init is None:
        return

    if isinstance(declarator.id, Identifier):
        # const MyFragment = Fragment
        if isinstance(init, Identifier) and init.name in fragment_aliases:
            fragment_aliases.add(declarator.id.name)

        # const MyFragment = React.Fragment
        if (
            isinstance(init, MemberExpression)
            and isinstance(init.object, Identifier)
            and init.object.name in namespace_aliases
            and init.property == FRAGMENT_NAME
        ):
            fragment_aliases.add(declarator.id.name)

    # const { Fragment: MyFragment } = React
    elif isinstance(declarator.id, ObjectPattern):
        if isinstance(init, Identifier) and init.name in namespace_aliases:
            for prop in declarator.id.properties:
                if prop.key == FRAGMENT_NAME and prop.value:
                    fragment_aliases.add(prop.value)


def _top_level_statements(body: List[ASTNode]) -> Iterator[ASTNode]:
    """Top-level statements, looking through `export` wrappers."""
    for statement in body:
        if isinstance(statement, OpaqueNode) and statement.kind == "export_statement":
            yield from statement.children
        else:
            yield statement
