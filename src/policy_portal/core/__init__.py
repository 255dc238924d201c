# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure components for the policy portal."""

from .clock import Clock, FixedClock, SystemClock, today_in_zone
from .config import Settings, get_settings
from .errors import AuthError, ExtractionFailed, NetworkError, StaleCriteria
from .result_types import Err, Ok, Result

__all__ = [
    "get_settings",
    "Settings",
    "Clock",
    "SystemClock",
    "FixedClock",
    "today_in_zone",
    "Result",
    "Ok",
    "Err",
    "AuthError",
    "NetworkError",
    "ExtractionFailed",
    "StaleCriteria",
]
