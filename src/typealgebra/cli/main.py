# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the typealgebra command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path

from typealgebra.compiler.artifact import REGISTRY_ARTIFACT_NAME, serialize, write_artifact
from typealgebra.compiler.build import BuildResult, CompilerError, build_registry, compile_units
from typealgebra.model.entities import DeclarationUnit
from typealgebra.model.types import format_type, named
from typealgebra.parser.lexer import LexerError
from typealgebra.parser.parser import ParseError, parse_type
from typealgebra.registry.errors import TypeAlgebraError
from typealgebra.registry.names import absolute
from typealgebra.resolver.subtype import SubtypeResolver
from typealgebra.validation.checks import validate
from typealgebra.workspace.config import (
    CONFIG_FILENAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the typealgebra CLI."""
    parser = argparse.ArgumentParser(
        prog="typealgebra",
        description="typealgebra: set-theoretic subtype checking for declared types",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new typealgebra workspace",
        description=f"Create a default {CONFIG_FILENAME} in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check the declared types of a workspace",
        description="Build the registry, validate definitions and overrides, and write the registry snapshot.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the typealgebra workspace (default: current directory)",
    )

    # subtype subcommand
    subtype_parser = subparsers.add_parser(
        "subtype",
        help="Decide whether one type expression is a subtype of another",
        description="Print 'true' and exit 0 if SUB is a subtype of SUPER, otherwise print 'false' and exit 1.",
    )
    subtype_parser.add_argument("sub", metavar="SUB", help="The candidate subtype expression")
    subtype_parser.add_argument("sup", metavar="SUPER", help="The candidate supertype expression")
    _add_query_arguments(subtype_parser)

    # resolve subcommand
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the declaration a name resolves to",
        description="Print the canonical declaration of a name together with its body and canonical form.",
    )
    resolve_parser.add_argument("name", metavar="NAME", help="The type name to resolve")
    _add_query_arguments(resolve_parser)

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the registry snapshot as JSON",
        description="Build the registry of a workspace and print its snapshot.",
    )
    dump_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the typealgebra workspace (default: current directory)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_query_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--namespace",
        default="",
        help="Namespace relative names are resolved from (default: global)",
    )
    parser.add_argument(
        "--directory",
        default=".",
        help="Directory containing the typealgebra workspace (default: current directory)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "subtype":
        return _cmd_subtype(args)
    if args.command == "resolve":
        return _cmd_resolve(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILENAME

    if config_file.exists():
        print(
            f"Error: workspace already exists at '{config_file}'.",
            file=sys.stderr,
        )
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Initialized typealgebra workspace at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    loaded = _load_workspace(Path(args.directory))
    if loaded is None:
        return 1
    directory, config = loaded

    files = config.discover_units(directory)
    if not files:
        print("No declaration files found in the workspace.")
        return 0

    print(f"Checking {len(files)} declaration file(s)...")
    built = _build(files)
    if built is None:
        return 1
    units, build = built

    has_errors = False
    for build_error in build.errors:
        print(f"Error: {build_error.source}: {build_error.message}", file=sys.stderr)
        has_errors = True

    result = validate(build.registry, units, max_depth=config.max_expansion_depth)
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for error in result.errors:
        print(f"Error: {error.message}", file=sys.stderr)
        has_errors = True

    artifact = directory / config.build_directory / REGISTRY_ARTIFACT_NAME
    write_artifact(build.registry, artifact)

    if has_errors or (config.fail_on_warnings and result.warnings):
        return 1

    print(f"No issues found. Registry written to '{artifact}'.")
    return 0


def _cmd_subtype(args: argparse.Namespace) -> int:
    """Handle the subtype subcommand."""
    resolver = _workspace_registry(Path(args.directory))
    if resolver is None:
        return 1
    namespace = absolute(args.namespace)
    try:
        sub = parse_type(args.sub, namespace)
        sup = parse_type(args.sup, namespace)
        answer = resolver.is_subtype(sub, sup)
    except (LexerError, ParseError, TypeAlgebraError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("true" if answer else "false")
    return 0 if answer else 1


def _cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the resolve subcommand."""
    resolver = _workspace_registry(Path(args.directory))
    if resolver is None:
        return 1
    namespace = absolute(args.namespace)
    try:
        decl = resolver.registry.resolve(args.name, namespace)
        canonical = resolver.canonicalize(named(args.name, namespace))
    except TypeAlgebraError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"name:      {decl.qualified_name}")
    print(f"origin:    {decl.origin.value}")
    print(f"body:      {format_type(decl.body)}")
    print(f"canonical: {format_type(canonical)}")
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    resolver = _workspace_registry(Path(args.directory))
    if resolver is None:
        return 1
    print(json.dumps(json.loads(serialize(resolver.registry)), indent=2))
    return 0


def _load_workspace(directory: Path) -> tuple[Path, WorkspaceConfig] | None:
    """Return the resolved workspace root and its configuration, or None after printing an error."""
    directory = directory.resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return None

    config_file = directory / CONFIG_FILENAME
    if not config_file.exists():
        print(
            f"Error: no typealgebra workspace found at '{directory}'."
            " Run 'typealgebra init' to initialize a workspace.",
            file=sys.stderr,
        )
        return None

    try:
        config = load_workspace_config(config_file)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    return directory, config


def _build(files: list[Path]) -> tuple[list[DeclarationUnit], BuildResult] | None:
    try:
        units = compile_units(files)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    return units, build_registry(units)


def _workspace_registry(directory: Path) -> SubtypeResolver | None:
    """Build the workspace registry for a query command.

    Build errors are reported as warnings: queries run against whatever
    declarations were registered.
    """
    loaded = _load_workspace(directory)
    if loaded is None:
        return None
    root, config = loaded
    built = _build(config.discover_units(root))
    if built is None:
        return None
    _, build = built
    for build_error in build.errors:
        print(f"Warning: {build_error.source}: {build_error.message}", file=sys.stderr)
    return SubtypeResolver(build.registry, max_depth=config.max_expansion_depth)
