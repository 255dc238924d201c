# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Collaborator interfaces consumed by the portal services.

``PortalClient`` implements all three over REST; tests substitute in-memory
fakes.
"""

from typing import Protocol, runtime_checkable

from ..core.errors import ExtractionFailed, PortalError
from ..core.result_types import Result
from ..models.client import Client, ClientCreate
from ..models.extraction import ExtractionResult
from ..models.policy import Policy, PolicyCreate, PolicyStatus


@runtime_checkable
class PolicySource(Protocol):
    """Policies owned by the logged-in agent."""

    async def list_policies(self) -> Result[list[Policy], PortalError]: ...

    async def get_policy(self, policy_id: int) -> Result[Policy, PortalError]: ...

    async def create_policy(
        self, policy_data: PolicyCreate
    ) -> Result[Policy, PortalError]: ...

    async def delete_policy(self, policy_id: int) -> Result[bool, PortalError]: ...

    async def update_policy_status(
        self, policy_id: int, status: PolicyStatus
    ) -> Result[Policy, PortalError]: ...


@runtime_checkable
class ClientSource(Protocol):
    """Clients owned by the logged-in agent."""

    async def list_clients(self) -> Result[list[Client], PortalError]: ...

    async def get_client(self, client_id: int) -> Result[Client, PortalError]: ...

    async def create_client(
        self, client_data: ClientCreate
    ) -> Result[Client, PortalError]: ...


@runtime_checkable
class DocumentExtractor(Protocol):
    """Opaque policy-document reader."""

    async def extract_from_document(
        self, filename: str, content: bytes, content_type: str = "application/pdf"
    ) -> Result[ExtractionResult, PortalError | ExtractionFailed]: ...
