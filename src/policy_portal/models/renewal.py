# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Derived renewal state. Never stored, recomputed on every read."""

from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


class RenewalState(str, Enum):
    """Where a policy stands relative to its expiry."""

    EXPIRED_BY_DATE = "EXPIRED_BY_DATE"
    EXPIRING_SOON = "EXPIRING_SOON"
    ACTIVE_FAR = "ACTIVE_FAR"
    NOT_ACTIVE = "NOT_ACTIVE"


class UrgencyTier(str, Enum):
    """Display colouring for the days-remaining column."""

    URGENT = "URGENT"
    WARNING = "WARNING"
    SAFE = "SAFE"


@beartype
class RenewalInfo(BaseModelConfig):
    """Classifier output for one policy on one day."""

    days_until_expiry: int = Field(..., description="Signed calendar days left")
    renewal_state: RenewalState = Field(..., description="Derived renewal bucket")
