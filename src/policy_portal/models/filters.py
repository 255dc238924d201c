# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Filter criteria and summary count models for the policy list.

Criteria arrive straight from form inputs, so the advanced filters parse
leniently: a blank or malformed value becomes ``None`` (no constraint)
instead of failing validation. Every edit produces a new frozen snapshot.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from beartype import beartype
from pydantic import Field, field_validator

from .base import BaseModelConfig
from .policy import PolicyType, PremiumFrequency


class StatusBucket(str, Enum):
    """Tab selector above the policy list."""

    ALL = "ALL"
    ACTIVE = "ACTIVE"
    EXPIRING = "EXPIRING"
    EXPIRED = "EXPIRED"


def _lenient_decimal(value: object) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, (int, float)):
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            candidate = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    return candidate if candidate.is_finite() else None


def _lenient_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _lenient_enum(enum_cls: type[Enum], value: object) -> Enum | None:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return enum_cls(value.strip().upper())
    except ValueError:
        return None


@beartype
class AdvancedFilters(BaseModelConfig):
    """Independently toggleable constraints; ``None`` means unconstrained."""

    policy_type: PolicyType | None = None
    premium_frequency: PremiumFrequency | None = None
    min_premium: Decimal | None = Field(None, description="Inclusive lower bound")
    max_premium: Decimal | None = Field(None, description="Inclusive upper bound")
    expiry_from: date | None = Field(None, description="Inclusive earliest expiry")
    expiry_to: date | None = Field(None, description="Inclusive latest expiry")

    @field_validator("policy_type", mode="before")
    @classmethod
    def parse_policy_type(cls, v: object) -> Any:
        """Blank or unknown selections mean no type constraint."""
        return _lenient_enum(PolicyType, v)

    @field_validator("premium_frequency", mode="before")
    @classmethod
    def parse_premium_frequency(cls, v: object) -> Any:
        """Blank or unknown selections mean no frequency constraint."""
        return _lenient_enum(PremiumFrequency, v)

    @field_validator("min_premium", "max_premium", mode="before")
    @classmethod
    def parse_premium_bound(cls, v: object) -> Decimal | None:
        """Non-numeric input means no bound."""
        return _lenient_decimal(v)

    @field_validator("expiry_from", "expiry_to", mode="before")
    @classmethod
    def parse_expiry_bound(cls, v: object) -> date | None:
        """Unparseable dates mean no bound."""
        return _lenient_date(v)

    @property
    def active_count(self) -> int:
        """Number of constraints in effect (the badge on the filter toggle)."""
        return sum(
            1 for name in type(self).model_fields if getattr(self, name) is not None
        )

    @property
    def is_empty(self) -> bool:
        """True when no advanced constraint is set."""
        return self.active_count == 0


@beartype
class FilterCriteria(BaseModelConfig):
    """One snapshot of the list controls: tab, search box and advanced panel."""

    status_bucket: StatusBucket = Field(default=StatusBucket.ALL)
    search_query: str = Field(default="", description="Free-text search box")
    advanced: AdvancedFilters = Field(default_factory=AdvancedFilters)

    def with_bucket(self, bucket: StatusBucket) -> "FilterCriteria":
        """Snapshot with a different tab selected."""
        return self.model_copy(update={"status_bucket": bucket})

    def with_search(self, query: str) -> "FilterCriteria":
        """Snapshot with a new search box value."""
        return FilterCriteria(
            status_bucket=self.status_bucket, search_query=query, advanced=self.advanced
        )

    def with_advanced(self, **changes: object) -> "FilterCriteria":
        """Snapshot with some advanced inputs changed (raw form values allowed)."""
        merged = {**self.advanced.model_dump(), **changes}
        return self.model_copy(
            update={"advanced": AdvancedFilters.model_validate(merged)}
        )

    def cleared_advanced(self) -> "FilterCriteria":
        """Snapshot with the advanced panel reset."""
        return self.model_copy(update={"advanced": AdvancedFilters()})


@beartype
class PolicyStats(BaseModelConfig):
    """Counts shown on the tabs; always over the unfiltered collection."""

    total: int = Field(..., ge=0)
    active: int = Field(..., ge=0)
    expiring: int = Field(..., ge=0)
    expired: int = Field(..., ge=0)


@beartype
class DashboardStats(BaseModelConfig):
    """Counts shown on the landing dashboard cards."""

    total_policies: int = Field(..., ge=0)
    active_policies: int = Field(..., ge=0)
    expiring_policies: int = Field(..., ge=0)
