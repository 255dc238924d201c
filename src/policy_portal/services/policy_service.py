# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy page service.

Holds the latest snapshot fetched from the policy source (sorted by expiry)
and derives list views from it on demand. Renewal state is never cached
across refreshes: every view is recomputed from the snapshot and the date
supplied by the injected clock.
"""

from datetime import date

from beartype import beartype

from ..core.clock import Clock, SystemClock, today_in_zone
from ..core.config import Settings, get_settings
from ..core.errors import ExtractionFailed, PortalError, StaleCriteria
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.extraction import PolicyDraft
from ..models.filters import DashboardStats, FilterCriteria
from ..models.policy import Policy, PolicyCreate, PolicyStatus
from ..models.views import ExtractionPrefill, PolicyListView, PolicyRow
from .extraction import draft_to_policy_create, prefill_from_extraction
from .policy_filter import (
    CriteriaMemo,
    LatestCriteriaGate,
    aggregate,
    dashboard_stats,
    sort_by_expiry,
)
from .renewal import classify, expiry_label, urgency_tier
from .sources import DocumentExtractor, PolicySource

logger = get_logger(__name__)


class PolicyService:
    """Service for the policy list, dashboard and create/delete flows."""

    def __init__(
        self,
        source: PolicySource,
        *,
        clock: Clock | None = None,
        extractor: DocumentExtractor | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize policy service."""
        self._source = source
        self._clock = clock or SystemClock()
        self._extractor = extractor
        self._settings = settings or get_settings()
        self._snapshot: tuple[Policy, ...] = ()
        self._memo = CriteriaMemo()
        self._gate: LatestCriteriaGate[PolicyListView] = LatestCriteriaGate()

    @property
    def policies(self) -> tuple[Policy, ...]:
        """Latest fetched snapshot, ascending by expiry date."""
        return self._snapshot

    @beartype
    def today(self) -> date:
        """Current calendar date in the configured zone."""
        return today_in_zone(self._clock.now(), self._settings.timezone)

    @beartype
    async def refresh(self) -> Result[tuple[Policy, ...], PortalError | StaleCriteria]:
        """Reload the snapshot from the policy source.

        Reloads share the filter gate, so a fetch that was overtaken by a
        newer one never replaces the snapshot.
        """
        ticket = self._gate.submit()
        result = await self._source.list_policies()
        if not self._gate.is_current(ticket):
            logger.debug("Dropping reload %d, superseded", ticket)
            return Err(StaleCriteria(ticket=ticket, latest=self._gate.latest))
        if isinstance(result, Err):
            logger.warning("Failed to fetch policies: %s", result.unwrap_err())
            return result

        self._apply_snapshot(result.unwrap())
        return Ok(self._snapshot)

    def _apply_snapshot(self, policies: list[Policy]) -> None:
        self._snapshot = tuple(sort_by_expiry(policies))
        self._memo.clear()

    @beartype
    def view(self, criteria: FilterCriteria, today: date | None = None) -> PolicyListView:
        """Filtered rows plus unfiltered tab counts for one criteria snapshot."""
        if today is None:
            today = self.today()
        visible = self._memo.filter(self._snapshot, criteria, today)
        rows = []
        for policy in visible:
            renewal = classify(policy, today)
            rows.append(
                PolicyRow(
                    policy=policy,
                    renewal=renewal,
                    urgency=urgency_tier(renewal.days_until_expiry),
                    expiry_label=expiry_label(renewal.days_until_expiry),
                )
            )
        return PolicyListView(
            today=today,
            criteria=criteria,
            rows=rows,
            stats=aggregate(self._snapshot, today),
        )

    @beartype
    async def refresh_and_filter(
        self, criteria: FilterCriteria
    ) -> Result[PolicyListView, PortalError | StaleCriteria]:
        """Fetch, then filter; superseded requests come back stale."""
        ticket = self._gate.submit()
        fetched = await self._source.list_policies()
        if not self._gate.is_current(ticket):
            logger.debug("Dropping filter request %d, superseded", ticket)
            return Err(StaleCriteria(ticket=ticket, latest=self._gate.latest))
        if isinstance(fetched, Err):
            logger.warning("Failed to fetch policies: %s", fetched.unwrap_err())
            return fetched

        self._apply_snapshot(fetched.unwrap())
        return self._gate.resolve(ticket, self.view(criteria))

    @beartype
    def dashboard(self, today: date | None = None) -> DashboardStats:
        """Landing-page counts over the snapshot."""
        if today is None:
            today = self.today()
        return dashboard_stats(self._snapshot, today)

    @beartype
    async def create(self, policy_data: PolicyCreate) -> Result[Policy, PortalError]:
        """Create a policy, then reload the snapshot."""
        result = await self._source.create_policy(policy_data)
        if isinstance(result, Err):
            return result
        await self.refresh()
        return result

    @beartype
    async def submit_draft(
        self, draft: PolicyDraft
    ) -> Result[Policy, PortalError | str]:
        """Validate the create form and submit it.

        Low extraction confidence is only ever a warning; it never stops
        a valid draft from being submitted.
        """
        policy_data = draft_to_policy_create(draft)
        if isinstance(policy_data, Err):
            return policy_data
        return await self.create(policy_data.unwrap())

    @beartype
    async def delete(self, policy_id: int) -> Result[bool, PortalError]:
        """Delete a policy, then reload the snapshot."""
        result = await self._source.delete_policy(policy_id)
        if isinstance(result, Err):
            return result
        await self.refresh()
        return result

    @beartype
    async def update_status(
        self, policy_id: int, status: PolicyStatus
    ) -> Result[Policy, PortalError]:
        """Change the authoritative status, then reload the snapshot."""
        result = await self._source.update_policy_status(policy_id, status)
        if isinstance(result, Err):
            return result
        await self.refresh()
        return result

    @beartype
    async def prefill_from_document(
        self, filename: str, content: bytes, content_type: str = "application/pdf"
    ) -> Result[ExtractionPrefill, PortalError | ExtractionFailed]:
        """Run document extraction and build the pre-populated form."""
        if self._extractor is None:
            return Err(ExtractionFailed("Document extraction is not configured"))

        result = await self._extractor.extract_from_document(
            filename, content, content_type
        )
        if isinstance(result, Err):
            logger.warning("Extraction of %s failed: %s", filename, result.unwrap_err())
            return result

        prefill = prefill_from_extraction(
            result.unwrap(), self._settings.extraction_confidence_threshold
        )
        if prefill.warning:
            logger.info("Extraction of %s needs review: %s", filename, prefill.warning)
        return Ok(prefill)
