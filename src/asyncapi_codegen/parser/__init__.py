# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML document loader for AsyncAPI descriptions."""

from asyncapi_codegen.parser.loader import SUPPORTED_VERSION, ParserError, load_schema, parse_schema

__all__ = ["SUPPORTED_VERSION", "ParserError", "load_schema", "parse_schema"]
