# Copyright 2026 Typealgebra Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for typealgebra documentation."""

project = "typealgebra"
author = "Typealgebra Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
