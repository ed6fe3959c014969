# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HtmlElement exceptions."""

from __future__ import annotations


class HtmlElementError(Exception):
    """Base exception for HtmlElement errors."""

    pass


class InvalidArgumentError(HtmlElementError, TypeError):
    """Raised when an attribute key or value has an unsupported type."""

    pass
