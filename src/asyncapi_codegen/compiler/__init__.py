# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler middle-end: topic grammar, service aggregation, type resolution and code building.

The generation pipeline itself lives in :mod:`asyncapi_codegen.compiler.generator`.
"""

from asyncapi_codegen.compiler.builder import BuilderScopeError, DuplicateDeclarationError, TypeBuilder
from asyncapi_codegen.compiler.connectors import ConnectorAssembler, ConnectorType
from asyncapi_codegen.compiler.resolver import PYTHON_TYPE_TABLE, QualifiedName, TypeExpression, TypeResolver
from asyncapi_codegen.compiler.services import ServiceDefinitions, aggregate
from asyncapi_codegen.compiler.topics import GrammarError, Status, TopicInformation, parse_topic
from asyncapi_codegen.compiler.tree import SourceTree
from asyncapi_codegen.compiler.version import Version

__all__ = [
    "parse_topic",
    "GrammarError",
    "Status",
    "TopicInformation",
    "Version",
    "aggregate",
    "ServiceDefinitions",
    "TypeResolver",
    "QualifiedName",
    "TypeExpression",
    "PYTHON_TYPE_TABLE",
    "TypeBuilder",
    "BuilderScopeError",
    "DuplicateDeclarationError",
    "SourceTree",
    "ConnectorAssembler",
    "ConnectorType",
]
