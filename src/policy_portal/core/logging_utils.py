# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Central logging utilities for the policy portal.

This module enforces a consistent logging configuration across the
code-base and provides a convenience helper for retrieving module-scoped
loggers.

Key Features
------------
1. configure_logging(): idempotent initialization of the root logger.
2. get_logger(name): typed helper that always returns a configured logger.

The pure classification and filtering functions never log; only the
collaborator boundary (HTTP client, services) does.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
    "get_logger",
    "reset_logging",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_is_configured: bool = False


@beartype
def configure_logging(
    *, level: int | None = None, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger exactly once.

    Calling this function multiple times is safe – configuration will only
    be applied on the first invocation. When ``level`` is omitted the level
    comes from the portal settings.
    """
    global _is_configured
    if _is_configured:
        return

    if level is None:
        from .config import get_settings

        level = get_settings().log_level_value

    logging.basicConfig(level=level, format=fmt)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a module-scoped logger that is guaranteed to be configured."""
    configure_logging()
    logger = logging.getLogger(name or "policy_portal")
    if level is not None:
        logger.setLevel(level)
    return logger


@beartype
def reset_logging() -> None:
    """Allow the next configure_logging() call to apply again (for testing)."""
    global _is_configured
    _is_configured = False
