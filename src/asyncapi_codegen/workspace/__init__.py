# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator options and the options file."""

from asyncapi_codegen.workspace.config import (
    OPTIONS_FILE_NAME,
    ConfigurationError,
    GeneratorOptions,
    check_options,
    effective_base_package,
    is_valid_package_name,
    load_generator_options,
)

__all__ = [
    "OPTIONS_FILE_NAME",
    "ConfigurationError",
    "GeneratorOptions",
    "check_options",
    "effective_base_package",
    "is_valid_package_name",
    "load_generator_options",
]
