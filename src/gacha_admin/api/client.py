"""
Edge Function API Client.

Every admin operation is a JSON request to a Supabase Edge Function under
``<SUPABASE_URL>/functions/v1``. Responses share one envelope::

    {"success": true, "data": ...}
    {"success": false, "error": "message"}       # or {"error": {"message": ...}}

Any transport error, non-2xx status, non-JSON body or ``success: false``
envelope is raised as ``ApiError`` with a human-readable message.
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Optional

import httpx

from gacha_admin.config import Config
from gacha_admin.exceptions import ApiError, AuthenticationRequiredError
from gacha_admin.log.logger import get_logger

if TYPE_CHECKING:
    from gacha_admin.auth.session import SessionStore

logger = get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "API 호출 실패"
MALFORMED_RESPONSE_MESSAGE = "잘못된 응답 형식입니다."


def _extract_error_message(payload: Any) -> str:
    """Pull the error message out of a failure envelope."""
    if not isinstance(payload, dict):
        return DEFAULT_ERROR_MESSAGE

    error = payload.get("error")
    if isinstance(error, dict):
        return error.get("message") or DEFAULT_ERROR_MESSAGE
    if isinstance(error, str) and error:
        return error
    return payload.get("message") or DEFAULT_ERROR_MESSAGE


@contextmanager
def parsing_response(endpoint: str) -> Iterator[None]:
    """
    Raise ``ApiError`` when a success envelope carries data of the wrong shape.

    Wrap the code that turns ``data`` into models, e.g. a node without ``id``
    or a list where an object is expected.
    """
    try:
        yield
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        logger.error(f"{endpoint} returned malformed data: {e!r}")
        raise ApiError(MALFORMED_RESPONSE_MESSAGE) from e


class EdgeFunctionClient:
    """
    Async client for the admin Edge Functions.

    A fresh ``httpx.AsyncClient`` is opened per request, so one instance can be
    driven from several event loops (Streamlit runs each interaction with its
    own ``asyncio.run``).
    """

    def __init__(
        self,
        config: Config,
        session_store: Optional["SessionStore"] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.session_store = session_store
        self._transport = transport

    def _headers(self, authenticated: bool) -> dict[str, str]:
        if authenticated:
            token = self.session_store.access_token if self.session_store else None
            if not token:
                raise AuthenticationRequiredError()
        else:
            token = self.config.supabase_anon_key

        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Call one Edge Function and return the unwrapped ``data`` field.

        Args:
            endpoint: Function path, e.g. ``/admin-menus-get``
            method: HTTP method
            json: JSON request body
            params: Query string parameters
            authenticated: Use the session bearer token (False uses the anon key)

        Returns:
            The ``data`` member of the success envelope

        Raises:
            AuthenticationRequiredError: No session for an authenticated call
            ApiError: Any failed call
        """
        headers = self._headers(authenticated)

        async with httpx.AsyncClient(
            base_url=self.config.edge_function_url,
            timeout=self.config.api_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, endpoint, headers=headers, json=json, params=params)
            except httpx.HTTPError as e:
                logger.error(f"{method} {endpoint} failed: {e}")
                raise ApiError(f"{DEFAULT_ERROR_MESSAGE}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"{method} {endpoint} returned non-JSON body (status {response.status_code})")
            raise ApiError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from e

        if not response.is_success or not isinstance(payload, dict) or not payload.get("success"):
            message = _extract_error_message(payload)
            logger.warning(f"{method} {endpoint} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        logger.debug(f"{method} {endpoint} -> {response.status_code}")
        return payload.get("data")
