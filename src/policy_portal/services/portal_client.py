# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Async REST client for the agent portal backend.

Every call returns a ``Result``; nothing is raised for HTTP or transport
failures and nothing is retried. A 401/403 drops the stored bearer token so
the next call goes out unauthenticated, mirroring the portal's forced logout.
"""

from typing import Any, TypeVar

import httpx
from beartype import beartype
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..core.config import Settings, get_settings
from ..core.errors import AuthError, ExtractionFailed, NetworkError, PortalError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.agent import AgentSession, LoginRequest, SignupRequest
from ..models.client import Client, ClientCreate
from ..models.extraction import ExtractionResult
from ..models.policy import Policy, PolicyCreate, PolicyStatus, PolicyStatusUpdate

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

PDF_CONTENT_TYPE = "application/pdf"
_AUTH_STATUSES = frozenset({401, 403})

_policy_list = TypeAdapter(list[Policy])
_client_list = TypeAdapter(list[Client])


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull the backend's ``error`` field out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


def _as_extraction_failure(error: PortalError) -> PortalError:
    """HTTP rejections of an upload read as failed extractions."""
    if isinstance(error, NetworkError) and error.status_code is not None:
        return ExtractionFailed(error.message)
    return error


class PortalClient:
    """Policy, client and extraction collaborator over HTTP."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Portal settings (defaults to the cached settings)
            token: Bearer token from a previous login
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self._settings = settings or get_settings()
        self._token = token
        self._http = httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            timeout=self._settings.request_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()

    # Token handling

    @property
    def token(self) -> str | None:
        """Current bearer token, if logged in."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        """Whether a bearer token is held."""
        return self._token is not None

    @beartype
    def set_token(self, token: str) -> None:
        """Use ``token`` for subsequent requests."""
        self._token = token

    @beartype
    def clear_token(self) -> None:
        """Forget the bearer token."""
        self._token = None

    # Transport

    def _headers(self) -> dict[str, str]:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        files: Any = None,
    ) -> Result[httpx.Response, PortalError]:
        """Send one request and map failures to error values."""
        try:
            response = await self._http.request(
                method, path, json=json, files=files, headers=self._headers()
            )
        except httpx.TimeoutException:
            logger.warning("%s %s timed out", method, path)
            return Err(NetworkError(f"{method} {path} timed out"))
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return Err(NetworkError(f"Network error during {method} {path}: {e}"))

        if response.status_code in _AUTH_STATUSES:
            logger.warning(
                "%s %s rejected with HTTP %d, clearing token",
                method,
                path,
                response.status_code,
            )
            self.clear_token()
            return Err(
                AuthError(
                    status_code=response.status_code,
                    message=_error_message(response, "Authentication required"),
                )
            )

        if response.is_error:
            logger.warning("%s %s failed with HTTP %d", method, path, response.status_code)
            return Err(
                NetworkError(
                    _error_message(response, f"{method} {path} failed"),
                    status_code=response.status_code,
                )
            )

        return Ok(response)

    @staticmethod
    def _parse(
        response: httpx.Response, model: type[M]
    ) -> Result[M, PortalError]:
        try:
            return Ok(model.model_validate(response.json()))
        except (ValueError, ValidationError) as e:
            logger.warning("Malformed %s payload: %s", model.__name__, e)
            return Err(NetworkError(f"Malformed {model.__name__} response"))

    @staticmethod
    def _parse_list(
        response: httpx.Response, adapter: TypeAdapter[Any], label: str
    ) -> Result[Any, PortalError]:
        try:
            return Ok(adapter.validate_python(response.json()))
        except (ValueError, ValidationError) as e:
            logger.warning("Malformed %s payload: %s", label, e)
            return Err(NetworkError(f"Malformed {label} response"))

    # Auth API

    @beartype
    async def login(self, credentials: LoginRequest) -> Result[AgentSession, PortalError]:
        """Log in and keep the returned token for later calls."""
        result = await self._request(
            "POST", "/auth/login", json=credentials.model_dump(mode="json", by_alias=True)
        )
        if isinstance(result, Err):
            return result

        session = self._parse(result.unwrap(), AgentSession)
        if isinstance(session, Ok):
            self.set_token(session.value.token)
            logger.info("Agent %s logged in", session.value.username)
        return session

    @beartype
    async def signup(self, registration: SignupRequest) -> Result[bool, PortalError]:
        """Register a new agent account."""
        result = await self._request(
            "POST",
            "/auth/signup",
            json=registration.model_dump(mode="json", by_alias=True),
        )
        return result.map(lambda _: True)

    @beartype
    def logout(self) -> None:
        """Drop the session token."""
        self.clear_token()

    @beartype
    async def health(self) -> Result[bool, PortalError]:
        """Check that the backend answers."""
        result = await self._request("GET", "/auth/health")
        return result.map(lambda _: True)

    # Policy API

    @beartype
    async def list_policies(self) -> Result[list[Policy], PortalError]:
        """All policies owned by the logged-in agent."""
        result = await self._request("GET", "/policies")
        return result.and_then(
            lambda response: self._parse_list(response, _policy_list, "policy list")
        )

    @beartype
    async def get_policy(self, policy_id: int) -> Result[Policy, PortalError]:
        """One policy by id."""
        result = await self._request("GET", f"/policies/{policy_id}")
        return result.and_then(lambda response: self._parse(response, Policy))

    @beartype
    async def create_policy(self, policy_data: PolicyCreate) -> Result[Policy, PortalError]:
        """Create a policy together with (or attached to) its client."""
        result = await self._request(
            "POST",
            "/policies/create",
            json=policy_data.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        if isinstance(result, Err):
            return result
        logger.info("Created policy %s", policy_data.policy_number)
        return self._parse(result.unwrap(), Policy)

    @beartype
    async def update_policy_status(
        self, policy_id: int, status: PolicyStatus
    ) -> Result[Policy, PortalError]:
        """Set the authoritative status of a policy."""
        result = await self._request(
            "PUT",
            f"/policies/{policy_id}/status",
            json=PolicyStatusUpdate(status=status).model_dump(mode="json", by_alias=True),
        )
        return result.and_then(lambda response: self._parse(response, Policy))

    @beartype
    async def delete_policy(self, policy_id: int) -> Result[bool, PortalError]:
        """Delete a policy."""
        result = await self._request("DELETE", f"/policies/{policy_id}")
        if isinstance(result, Ok):
            logger.info("Deleted policy %d", policy_id)
        return result.map(lambda _: True)

    # Document extraction

    @beartype
    def check_upload(
        self, filename: str, content: bytes, content_type: str = PDF_CONTENT_TYPE
    ) -> Result[bool, ExtractionFailed]:
        """Local guard run before any upload: PDF only, size-capped."""
        if content_type != PDF_CONTENT_TYPE:
            return Err(
                ExtractionFailed(f"Please upload a PDF file ({filename} is {content_type})")
            )
        limit_mb = self._settings.max_upload_size_mb
        if len(content) > self._settings.max_upload_size_bytes:
            return Err(ExtractionFailed(f"File size must be less than {limit_mb}MB"))
        if not content:
            return Err(ExtractionFailed("File is empty"))
        return Ok(True)

    @beartype
    async def extract_from_document(
        self, filename: str, content: bytes, content_type: str = PDF_CONTENT_TYPE
    ) -> Result[ExtractionResult, PortalError | ExtractionFailed]:
        """Send a policy document to the extraction service."""
        guard = self.check_upload(filename, content, content_type)
        if isinstance(guard, Err):
            return guard

        result = await self._request(
            "POST",
            "/policies/extract-from-pdf",
            files={"file": (filename, content, PDF_CONTENT_TYPE)},
        )
        if isinstance(result, Err):
            return result.map_err(_as_extraction_failure)

        parsed = self._parse(result.unwrap(), ExtractionResult)
        if isinstance(parsed, Err):
            return Err(ExtractionFailed("Failed to extract data from PDF"))

        extraction = parsed.unwrap()
        if not extraction.success:
            logger.info("Extraction of %s unsuccessful: %s", filename, extraction.message)
            return Err(ExtractionFailed(extraction.message or "No data extracted"))
        return Ok(extraction)

    # Client API

    @beartype
    async def list_clients(self) -> Result[list[Client], PortalError]:
        """All clients owned by the logged-in agent."""
        result = await self._request("GET", "/clients")
        return result.and_then(
            lambda response: self._parse_list(response, _client_list, "client list")
        )

    @beartype
    async def get_client(self, client_id: int) -> Result[Client, PortalError]:
        """One client, with its policies embedded."""
        result = await self._request("GET", f"/clients/{client_id}")
        return result.and_then(lambda response: self._parse(response, Client))

    @beartype
    async def create_client(self, client_data: ClientCreate) -> Result[Client, PortalError]:
        """Create a client."""
        result = await self._request(
            "POST",
            "/clients",
            json=client_data.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return result.and_then(lambda response: self._parse(response, Client))
