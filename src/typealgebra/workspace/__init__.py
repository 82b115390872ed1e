# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for typealgebra."""

from typealgebra.workspace.config import (
    CONFIG_FILENAME,
    DEFAULT_BUILD_DIRECTORY,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_BUILD_DIRECTORY",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "default_config_text",
    "load_workspace_config",
]
