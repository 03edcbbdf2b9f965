"""
Jotter UI — Notes API Client
=============================

What:  Thin async HTTP client for the /api/notes contract.
How:   httpx.AsyncClient. Any non-2xx response or transport failure raises
       ApiRequestError carrying the server's `message` text (or a fallback),
       which the board shows verbatim.
Who:   Used by NoteBoard. Points at NOTES_API_URL, or at this same app
       through httpx.ASGITransport when no URL is configured.
"""

import logging
from typing import List, Optional

import httpx

from app.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

NOTES_PATH = "/api/notes"


class ApiRequestError(Exception):
    """A Notes API call failed; `message` is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotesApiClient:
    """
    Async client for list/create/update/delete.

    Args:
        base_url:  API root, e.g. "http://localhost:8000"
        transport: Optional httpx transport (ASGITransport for in-process use)
        timeout:   Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_notes(self) -> List[NoteResponse]:
        response = await self._request("GET", NOTES_PATH, fallback="Failed to load notes")
        return [NoteResponse.model_validate(item) for item in response.json()]

    async def create_note(self, title: str, content: str) -> NoteResponse:
        response = await self._request(
            "POST", NOTES_PATH, json={"title": title, "content": content}
        )
        return NoteResponse.model_validate(response.json())

    async def update_note(self, note_id: str, title: str, content: str) -> NoteResponse:
        response = await self._request(
            "PUT", NOTES_PATH, json={"id": note_id, "title": title, "content": content}
        )
        return NoteResponse.model_validate(response.json())

    async def delete_note(self, note_id: str) -> str:
        response = await self._request(
            "DELETE", NOTES_PATH, params={"id": note_id}, fallback="Delete failed"
        )
        return response.json().get("message", "Note deleted")

    async def _request(self, method: str, url: str, fallback: str = "Request failed", **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, str(e))
            raise ApiRequestError(fallback)

        if response.is_success:
            return response

        message = fallback
        try:
            message = response.json().get("message") or fallback
        except (ValueError, AttributeError):
            pass
        logger.warning("%s %s returned %d: %s", method, url, response.status_code, message)
        raise ApiRequestError(message, status_code=response.status_code)
