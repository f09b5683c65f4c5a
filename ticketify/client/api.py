"""
Ticket API client

Async wrapper around the ``/api/tickets`` endpoints. Every response is
unwrapped from the ``{success, data, error}`` envelope and failures are
raised as ``TicketClientError`` subclasses.
"""
import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ticketify.client.errors import HttpError, NetworkError, NotFoundError
from ticketify.core.config import get_settings
from ticketify.models.schemas.ticket import TicketCreateRequest, TicketRead, TicketUpdateRequest

logger = logging.getLogger(__name__)

TICKETS_PATH = "/api/tickets"


class TicketApiClient:
    """
    HTTP access to the remote ticket collection.

    A caller-owned ``httpx.AsyncClient`` may be injected (tests pass one
    wired to an ASGI or mock transport); otherwise a short-lived client is
    opened per request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.client_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds
        self.token = token if token is not None else settings.client_auth_token
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        """
        Send a request and return the envelope's ``data`` member.

        Raises:
            NetworkError: On transport failures or an unreadable body
            NotFoundError: On a 404 response
            HttpError: On any other non-success response
        """
        url = f"{self.base_url}{path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, json=json, headers=self._headers(), timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(method, url, json=json, headers=self._headers())
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"Unable to reach ticket API: {exc}") from exc

        return self._unwrap(response)

    def _unwrap(self, response: httpx.Response) -> Any:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        body = payload if isinstance(payload, dict) else {}
        if not response.is_success:
            message = body.get("error") or body.get("message")
            if not isinstance(message, str) or not message:
                message = f"HTTP error! status: {response.status_code}"
            code = body.get("code") if isinstance(body.get("code"), str) else None
            error_cls = NotFoundError if response.status_code == 404 else HttpError
            raise error_cls(response.status_code, message, code=code)

        if payload is None:
            raise NetworkError("Ticket API returned an unreadable response body")
        if not body.get("success", False):
            raise HttpError(
                response.status_code,
                body.get("error") or "Ticket API reported a failure",
            )
        return body.get("data")

    def _parse_ticket(self, data: Any) -> TicketRead:
        if data is None:
            raise NetworkError("Ticket API response did not include a ticket")
        try:
            return TicketRead.model_validate(data)
        except PydanticValidationError as exc:
            raise NetworkError(f"Malformed ticket payload: {exc.error_count()} issue(s)") from exc

    async def list_tickets(self) -> list[TicketRead]:
        data = await self._request("GET", TICKETS_PATH)
        return [self._parse_ticket(item) for item in data or []]

    async def get_ticket(self, ticket_id: str) -> TicketRead:
        data = await self._request("GET", f"{TICKETS_PATH}/{ticket_id}")
        return self._parse_ticket(data)

    async def create_ticket(self, payload: TicketCreateRequest) -> TicketRead:
        body = payload.model_dump(by_alias=True, mode="json", exclude_none=True)
        data = await self._request("POST", TICKETS_PATH, json=body)
        return self._parse_ticket(data)

    async def update_ticket(self, ticket_id: str, payload: TicketUpdateRequest) -> TicketRead:
        # Only explicitly set fields travel, so an explicit null (unassign) survives.
        body = payload.model_dump(
            by_alias=True,
            mode="json",
            exclude_unset=True,
            exclude={"id", "created_at"},
        )
        data = await self._request("PUT", f"{TICKETS_PATH}/{ticket_id}", json=body)
        return self._parse_ticket(data)

    async def delete_ticket(self, ticket_id: str) -> str:
        data = await self._request("DELETE", f"{TICKETS_PATH}/{ticket_id}")
        if isinstance(data, dict):
            return str(data.get("message", ""))
        return ""
