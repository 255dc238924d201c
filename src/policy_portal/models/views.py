# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Read models handed to the presentation layer."""

from datetime import date

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig
from .client import ClientPolicy
from .extraction import PolicyDraft
from .filters import FilterCriteria, PolicyStats
from .policy import Policy
from .renewal import RenewalInfo, UrgencyTier


@beartype
class PolicyRow(BaseModelConfig):
    """One line of the policy table."""

    policy: Policy
    renewal: RenewalInfo
    urgency: UrgencyTier
    expiry_label: str


@beartype
class PolicyListView(BaseModelConfig):
    """Everything the policy page renders for one criteria snapshot."""

    today: date
    criteria: FilterCriteria
    rows: list[PolicyRow] = Field(default_factory=list)
    stats: PolicyStats

    @property
    def policies(self) -> list[Policy]:
        """Visible policies in display order."""
        return [row.policy for row in self.rows]


@beartype
class ClientPolicyRow(BaseModelConfig):
    """One policy card on the client detail page."""

    policy: ClientPolicy
    renewal: RenewalInfo
    is_expiring_soon: bool


@beartype
class ExtractionPrefill(BaseModelConfig):
    """Create-policy form pre-populated from a document."""

    draft: PolicyDraft
    confidence: float | None = Field(None, ge=0.0, le=1.0)
    message: str = ""
    warning: str | None = Field(
        None, description="Shown when confidence is low; never blocks submission"
    )
