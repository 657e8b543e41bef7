# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the asyncapi-codegen command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from asyncapi_codegen.compiler.builder import BuilderScopeError, DuplicateDeclarationError
from asyncapi_codegen.compiler.generator import Generator, UnsupportedPayloadError
from asyncapi_codegen.compiler.services import aggregate
from asyncapi_codegen.compiler.topics import GrammarError
from asyncapi_codegen.emitter.python import GenerationError
from asyncapi_codegen.extensions.json import JsonExtension
from asyncapi_codegen.model.registry import DuplicateDefinitionError, UnknownReferenceError
from asyncapi_codegen.parser.loader import ParserError, load_schema
from asyncapi_codegen.workspace.config import (
    OPTIONS_FILE_NAME,
    ConfigurationError,
    GeneratorOptions,
    load_generator_options,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the asyncapi-codegen CLI."""
    parser = argparse.ArgumentParser(
        prog="asyncapi-codegen",
        description="asyncapi-codegen: typed Python bindings for AsyncAPI services",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the progress of the run to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Python bindings from an AsyncAPI document",
        description=(
            "Generate message classes, types and versioned client and server "
            "interfaces from an AsyncAPI document. Options are read from "
            f"'{OPTIONS_FILE_NAME}' next to the document if present; command-line "
            "options take precedence."
        ),
    )
    generate_parser.add_argument("document", help="Path to the AsyncAPI YAML document")
    generate_parser.add_argument(
        "-o",
        "--target",
        help="Directory to write the generated package tree to",
    )
    generate_parser.add_argument(
        "--base-package",
        help="Package prefix of all generated names (default: the document's baseTopic)",
    )
    generate_parser.add_argument(
        "--character-set",
        help="Encoding of the generated files (default: utf-8)",
    )
    generate_parser.add_argument(
        "--config",
        help=f"Path to an options file (default: {OPTIONS_FILE_NAME} next to the document)",
    )
    generate_parser.add_argument(
        "--no-validate-topic-syntax",
        action="store_true",
        help="Classify topics outside the topic grammar by fallback instead of failing",
    )
    generate_parser.add_argument(
        "--keep-original-literal-values",
        action="store_true",
        help="Use the schema literals as enum values instead of the constant names",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Also generate JSON wire names and the topic-to-message lookup",
    )

    # inspect subcommand
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the services and versions of an AsyncAPI document",
        description="List the topics of a document grouped by version and service, and the latest version of each service.",
    )
    inspect_parser.add_argument("document", help="Path to the AsyncAPI YAML document")
    inspect_parser.add_argument(
        "--no-validate-topic-syntax",
        action="store_true",
        help="Classify topics outside the topic grammar by fallback instead of failing",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_GENERATION_ERRORS = (
    ConfigurationError,
    GrammarError,
    UnknownReferenceError,
    DuplicateDefinitionError,
    UnsupportedPayloadError,
    DuplicateDeclarationError,
    BuilderScopeError,
    GenerationError,
)


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "inspect":
        return _cmd_inspect(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    document = Path(args.document)

    try:
        schema = load_schema(document)
    except ParserError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        options = _load_options(document, args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    options = options.with_overrides(
        target_path=Path(args.target) if args.target else None,
        base_package=args.base_package,
        character_set=args.character_set,
        validate_topic_syntax=False if args.no_validate_topic_syntax else None,
        keep_original_literal_values=True if args.keep_original_literal_values else None,
    )
    extensions = [JsonExtension()] if args.json else []

    try:
        result = Generator(schema, options, extensions).generate()
    except _GENERATION_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.diagnostics:
        print(f"{len(result.diagnostics)} topic(s) do not follow the topic grammar and were classified by fallback.")
    print(f"Generated {len(result.files)} file(s) in '{options.target_path}'.")
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    """Handle the inspect subcommand."""
    try:
        schema = load_schema(Path(args.document))
        definitions = aggregate(schema.topics, validate_topic_syntax=not args.no_validate_topic_syntax)
    except (ParserError, GrammarError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    title = schema.information.title or args.document
    print(f"{title} {schema.information.version}")
    for version, services in definitions.versions.items():
        print(f"  version {version}")
        for service, topics in services.items():
            print(f"    {service}")
            for topic in topics:
                sides = [side for side in ("publish", "subscribe") if getattr(topic, side) is not None]
                print(f"      {topic.name} [{', '.join(sides) or 'no messages'}]")

    print("  latest")
    for name, latest in definitions.latest.items():
        print(f"    {name}: {latest.version_label}")

    for diagnostic in definitions.diagnostics:
        print(f"Warning: {diagnostic.message}", file=sys.stderr)
    return 0


def _load_options(document: Path, config: str | None) -> GeneratorOptions:
    """Load the options file given on the command line, else the one next to the document."""
    if config is not None:
        return load_generator_options(Path(config))
    default = document.parent / OPTIONS_FILE_NAME
    if default.exists():
        return load_generator_options(default)
    return GeneratorOptions()
