"""Test configuration and fixtures.

Provides a pinned clock, in-memory collaborators standing in for the REST
backend, and an ``httpx.MockTransport`` based portal client.
"""

from collections.abc import Callable, Generator
from datetime import date, datetime, timezone
from typing import Any

import httpx
import pytest

from policy_portal.core.clock import FixedClock
from policy_portal.core.config import Settings, clear_settings_cache
from policy_portal.core.errors import NetworkError, PortalError
from policy_portal.core.result_types import Err, Ok, Result
from policy_portal.models.policy import Policy, PolicyCreate, PolicyStatus
from policy_portal.services.portal_client import PortalClient
from tests.fixtures.test_data import TODAY, example_policies


class InMemoryPolicySource:
    """Policy source backed by a dict; can be told to fail."""

    def __init__(self, policies: list[Policy]) -> None:
        self.policies = {policy.policy_id: policy for policy in policies}
        self.fail_with: PortalError | None = None
        self.list_calls = 0

    async def list_policies(self) -> Result[list[Policy], PortalError]:
        self.list_calls += 1
        if self.fail_with is not None:
            return Err(self.fail_with)
        return Ok(list(self.policies.values()))

    async def get_policy(self, policy_id: int) -> Result[Policy, PortalError]:
        if policy_id not in self.policies:
            return Err(NetworkError("Policy not found", status_code=404))
        return Ok(self.policies[policy_id])

    async def create_policy(self, policy_data: PolicyCreate) -> Result[Policy, PortalError]:
        if self.fail_with is not None:
            return Err(self.fail_with)
        policy_id = max(self.policies, default=0) + 1
        policy = Policy(
            policy_id=policy_id,
            policy_status=PolicyStatus.ACTIVE,
            **policy_data.model_dump(),
        )
        self.policies[policy_id] = policy
        return Ok(policy)

    async def delete_policy(self, policy_id: int) -> Result[bool, PortalError]:
        if policy_id not in self.policies:
            return Err(NetworkError("Policy not found", status_code=404))
        del self.policies[policy_id]
        return Ok(True)

    async def update_policy_status(
        self, policy_id: int, status: PolicyStatus
    ) -> Result[Policy, PortalError]:
        if policy_id not in self.policies:
            return Err(NetworkError("Policy not found", status_code=404))
        updated = self.policies[policy_id].model_copy(update={"policy_status": status})
        self.policies[policy_id] = updated
        return Ok(updated)


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Reset the settings singleton between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def today() -> date:
    """Fixed calendar date for classification tests."""
    return TODAY


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock pinned to mid-morning UTC on ``TODAY``."""
    return FixedClock(datetime(TODAY.year, TODAY.month, TODAY.day, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def settings() -> Settings:
    """Explicit settings independent of the environment."""
    return Settings(
        api_base_url="http://portal.test/api",
        timezone="UTC",
        extraction_confidence_threshold=0.7,
        max_upload_size_mb=10,
    )


@pytest.fixture
def policies(today: date) -> list[Policy]:
    """Three-policy example portfolio."""
    return example_policies(today)


@pytest.fixture
def policy_source(policies: list[Policy]) -> InMemoryPolicySource:
    """In-memory policy source seeded with the example portfolio."""
    return InMemoryPolicySource(policies)


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client(settings: Settings) -> Callable[..., PortalClient]:
    """Build portal clients whose requests go to a handler function."""

    def _make(handler: Handler, **kwargs: Any) -> PortalClient:
        return PortalClient(settings, transport=httpx.MockTransport(handler), **kwargs)

    return _make

