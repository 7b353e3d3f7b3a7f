"""
CLI entry point for component-annotate.

Usage:
    component-annotate annotate <file>       Print the annotated source
    component-annotate annotate <file> -i    Annotate the file in place
    component-annotate components <file>     List components and their roots

Annotate options:
    --config PATH           YAML options file
    --native                camelCase attribute names
    --annotate-fragments    name the first child of a root fragment
    --ignore NAME           ignore a component or element (repeatable)
    --legacy                legacy traversal policy
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from component_annotate import __version__


def build_config(args):
    """Options file and environment first, command-line flags on top."""
    from .config import AnnotationConfig, TraversalPolicy, load_options

    options = load_options(Path(args.config) if args.config else None)
    config = AnnotationConfig.from_options(options)

    if args.native:
        config = replace(config, use_alternate_attribute_names=True)
    if args.annotate_fragments:
        config = replace(config, annotate_fragments=True)
    if args.ignore:
        config = replace(config, ignored_components=config.ignored_components + tuple(args.ignore))
    if args.legacy:
        config = replace(config, policy=TraversalPolicy.LEGACY)
    return config


def cmd_annotate(args):
    """Annotate a file and print or write the result."""
    from .annotate import annotate_file
    from .parser.emit import encode_source

    try:
        config = build_config(args)
        result = annotate_file(args.file, config, inplace=args.inplace)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.inplace:
        print(f"Annotated: {args.file} ({result.summary()})")
    else:
        # Bytes, so undecodable input comes back out unchanged
        sys.stdout.flush()
        sys.stdout.buffer.write(encode_source(result.code))
        sys.stdout.buffer.flush()
    return 0


def cmd_components(args):
    """List discovered components and the elements they render."""
    from .annotate import discover_components, element_name
    from .parser import JSXElement, parse_file

    try:
        program = parse_file(args.file)
    except Exception as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    components = discover_components(program)
    if not components:
        print("No components found")
        return 0

    for component in components:
        roots = ", ".join(
            element_name(root.name) if isinstance(root, JSXElement) else "<>"
            for root in component.roots
        )
        print(f"  {component.name or '<anonymous>'} ({component.kind.name.lower()}, "
              f"line {component.line}): {roots}")
    print(f"\n{len(components)} components found")
    return 0


def _add_annotate_options(p):
    p.add_argument('file', help='Source file (.js, .jsx, .ts, .tsx)')
    p.add_argument('-c', '--config', help='YAML options file')
    p.add_argument('--native', action='store_true', help='Use camelCase attribute names')
    p.add_argument('--annotate-fragments', action='store_true',
                   help='Give the first child of a root fragment the component name')
    p.add_argument('--ignore', action='append', default=[], metavar='NAME',
                   help='Component or element name to leave unannotated')
    p.add_argument('--legacy', action='store_true', help='Use the legacy traversal policy')


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="component-annotate",
        description="Annotate JSX with component tracking attributes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    component-annotate annotate src/App.tsx
    component-annotate annotate src/App.tsx --inplace --ignore Tab.Group
    component-annotate components src/App.tsx
"""
    )
    parser.add_argument('--version', action='version', version=f'component-annotate {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # annotate
    annotate_p = subparsers.add_parser('annotate', help='Annotate a file')
    _add_annotate_options(annotate_p)
    annotate_p.add_argument('-i', '--inplace', action='store_true', help='Modify in place')
    annotate_p.set_defaults(func=cmd_annotate)

    # components
    components_p = subparsers.add_parser('components', help='List components in a file')
    components_p.add_argument('file', help='Source file (.js, .jsx, .ts, .tsx)')
    components_p.set_defaults(func=cmd_components)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
