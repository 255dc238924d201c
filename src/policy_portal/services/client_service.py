# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Client business logic service."""

from datetime import date

from beartype import beartype

from ..core.clock import Clock, SystemClock, today_in_zone
from ..core.config import Settings, get_settings
from ..core.errors import PortalError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.client import Client, ClientCreate
from ..models.extraction import PolicyDraft
from ..models.renewal import RenewalState
from ..models.views import ClientPolicyRow
from .extraction import draft_for_client, draft_to_policy_create
from .renewal import classify_status
from .sources import ClientSource, PolicySource

logger = get_logger(__name__)


class ClientService:
    """Service for the client list and client detail pages."""

    def __init__(
        self,
        source: ClientSource,
        *,
        clock: Clock | None = None,
        settings: Settings | None = None,
        policy_source: PolicySource | None = None,
    ) -> None:
        """Initialize client service.

        Policies added from the client page go to ``policy_source``; when it
        is omitted, ``source`` is used if it also serves policies.
        """
        self._source = source
        if policy_source is None and isinstance(source, PolicySource):
            policy_source = source
        self._policy_source = policy_source
        self._clock = clock or SystemClock()
        self._settings = settings or get_settings()

    @beartype
    async def list_clients(self) -> Result[list[Client], PortalError]:
        """Clients of the logged-in agent."""
        result = await self._source.list_clients()
        if isinstance(result, Err):
            logger.warning("Failed to fetch clients: %s", result.unwrap_err())
        return result

    @beartype
    async def get_client(self, client_id: int) -> Result[Client, PortalError]:
        """Client by id, with embedded policies."""
        return await self._source.get_client(client_id)

    @beartype
    async def create_client(self, client_data: ClientCreate) -> Result[Client, PortalError]:
        """Create a client."""
        result = await self._source.create_client(client_data)
        if isinstance(result, Ok):
            logger.info("Created client %s", result.unwrap().full_name)
        return result

    @beartype
    async def add_policy(
        self, client: Client, draft: PolicyDraft
    ) -> Result[Client, PortalError | str]:
        """Add a policy to ``client`` from the policy-only form.

        The holder details are taken from ``client``. On success the client
        is fetched again so its embedded policies include the new one.
        """
        if self._policy_source is None:
            return Err("Policy creation is not configured")

        policy_data = draft_to_policy_create(draft_for_client(client, draft))
        if isinstance(policy_data, Err):
            return policy_data

        created = await self._policy_source.create_policy(policy_data.unwrap())
        if isinstance(created, Err):
            logger.warning(
                "Failed to add policy for client %d: %s", client.id, created.unwrap_err()
            )
            return created

        logger.info("Added policy %s for client %d", created.unwrap().policy_number, client.id)
        return await self.get_client(client.id)

    @beartype
    def policy_rows(self, client: Client, today: date | None = None) -> list[ClientPolicyRow]:
        """Renewal details for each policy card on the client page.

        The expiring-soon warning follows the renewal classifier, so it is
        never shown on a CANCELLED or RENEWED card, only on ACTIVE ones.
        """
        if today is None:
            today = today_in_zone(self._clock.now(), self._settings.timezone)
        rows = []
        for policy in client.policies:
            renewal = classify_status(policy.status, policy.expiry_date, today)
            rows.append(
                ClientPolicyRow(
                    policy=policy,
                    renewal=renewal,
                    is_expiring_soon=renewal.renewal_state == RenewalState.EXPIRING_SOON,
                )
            )
        return rows
