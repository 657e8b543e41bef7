# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator extensions shipped with asyncapi-codegen."""

from asyncapi_codegen.extensions.json import JsonExtension

__all__ = ["JsonExtension"]
