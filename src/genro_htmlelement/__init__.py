# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-HtmlElement - Fluent builder for nested markup trees.

A lightweight, zero-dependency library that builds trees of elements
and renders them to HTML-like markup strings.
"""

__version__ = "0.1.0"

from .element import DEFAULT_TAG, ContentConcat, Element, escape_html
from .exceptions import HtmlElementError, InvalidArgumentError

__all__ = [
    # Core classes
    "Element",
    "ContentConcat",
    "DEFAULT_TAG",
    # Escaping hook
    "escape_html",
    # Exceptions
    "HtmlElementError",
    "InvalidArgumentError",
]
