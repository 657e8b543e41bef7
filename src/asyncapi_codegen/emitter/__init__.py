# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of generated declarations as Python source files."""

from asyncapi_codegen.emitter.python import GenerationError, PythonEmitter, python_identifier, python_reference

__all__ = [
    "PythonEmitter",
    "GenerationError",
    "python_identifier",
    "python_reference",
]
