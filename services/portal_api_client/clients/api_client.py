"""Backend request gateway for the maintenance portal.

Every page of the portal talks to the REST backend through ``ApiClient.request``.
Two generations of call sites depend on it, so it accepts both calling shapes:

- ``request(path, "POST", body)``: verb string plus a body that is JSON-encoded.
- ``request(path, {"method": "POST", "headers": {...}, "body": ...})``: options
  mapping whose headers override the defaults.

GET calls return the parsed payload and raise ``ApiRequestError`` on a
non-success status. All other verbs return a ``ResponseEnvelope`` and never
raise for HTTP error statuses; callers branch on ``envelope.ok``. Transport
errors from httpx propagate unchanged.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict

import httpx
from portal_service_libs.logging_utils import create_service_logger

from services.portal_api_client.config import PortalClientSettings, settings
from services.portal_api_client.exceptions import ApiRequestError
from services.portal_api_client.protocols import TokenStoreProtocol

logger = create_service_logger("portal_api_client.api_client")

JSON_CONTENT_TYPE = "application/json"


class RequestOptions(TypedDict, total=False):
    """Options accepted by the mapping calling shape."""

    method: str
    headers: Mapping[str, str]
    body: Any


@dataclass(frozen=True)
class MultipartForm:
    """Form-data payload such as a file upload.

    Always sent as multipart/form-data, even without files. The transport
    encodes it and sets the boundary-bearing Content-Type.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)
    files: Mapping[str, Any] | list[tuple[str, Any]] | None = None

    def parts(self) -> list[tuple[str, Any]]:
        """Fields as filename-less parts followed by the files."""
        parts: list[tuple[str, Any]] = [
            (name, (None, value if isinstance(value, (str, bytes)) else str(value)))
            for name, value in self.fields.items()
        ]
        files = self.files or []
        parts.extend(files.items() if isinstance(files, Mapping) else files)
        return parts


@dataclass(frozen=True)
class ResponseEnvelope:
    """Response-like result of a non-GET call."""

    ok: bool
    status: int
    status_text: str
    headers: httpx.Headers
    data: Any
    raw_text: str | None = None

    def json(self) -> Any:
        return self.data

    def text(self) -> str:
        if self.raw_text is not None:
            return self.raw_text
        return dump_json(self.data)

    @classmethod
    def unauthorized(cls, message: str) -> ResponseEnvelope:
        """Build the local 401 returned when a protected write has no token."""
        return cls(
            ok=False,
            status=401,
            status_text="Unauthorized",
            headers=httpx.Headers(),
            data={"message": message},
        )


def dump_json(value: Any) -> str:
    """Serialize compactly, keeping non-ASCII text as-is."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def classify_response(response: httpx.Response) -> tuple[Any, str | None]:
    """Parse a response body into a ``(value, raw_text)`` pair.

    A JSON content type is parsed as JSON and yields ``None`` when the body is
    malformed. Any other body is read as text: empty text yields ``None``,
    JSON-looking text is parsed, and anything else is returned verbatim.
    """
    content_type = response.headers.get("content-type", "")
    if JSON_CONTENT_TYPE in content_type.lower():
        try:
            return response.json(parse_constant=_reject_constant), None
        except ValueError:
            return None, None

    raw_text = response.text
    if not raw_text:
        return None, raw_text
    try:
        return json.loads(raw_text, parse_constant=_reject_constant), raw_text
    except ValueError:
        return raw_text, raw_text


def failure_message(payload: Any, response: httpx.Response) -> str:
    """Prefer the backend's ``message``, else the status line."""
    if isinstance(payload, Mapping) and payload.get("message"):
        return str(payload["message"])
    return f"{response.status_code} {response.reason_phrase}"


def _has_body(body: Any, legacy: bool = False) -> bool:
    if body is None or body == "":
        return False
    if legacy and isinstance(body, (bool, int, float)):
        # Falsy scalars carry no body in the verb-string shape.
        return bool(body) and not (isinstance(body, float) and math.isnan(body))
    return True


def build_request(
    options_or_method: str | RequestOptions | None,
    body: Any,
    token: str | None,
) -> tuple[str, httpx.Headers, dict[str, Any]]:
    """Resolve verb, headers and httpx body arguments for either calling shape."""
    headers = httpx.Headers({"Content-Type": JSON_CONTENT_TYPE})
    if token:
        headers["Authorization"] = f"Bearer {token}"

    method = "GET"
    payload: Any = None
    encode_strings = False

    if isinstance(options_or_method, str):
        method = options_or_method
        payload = body
        encode_strings = True
    elif isinstance(options_or_method, Mapping):
        method = options_or_method.get("method") or "GET"
        headers.update(options_or_method.get("headers") or {})
        payload = options_or_method.get("body")

    body_kwargs: dict[str, Any] = {}
    if isinstance(payload, MultipartForm):
        headers.pop("content-type", None)
        body_kwargs = {"files": payload.parts()}
    elif _has_body(payload, legacy=encode_strings):
        if isinstance(payload, bytes) or (isinstance(payload, str) and not encode_strings):
            body_kwargs = {"content": payload}
        else:
            body_kwargs = {"content": dump_json(payload)}

    return method.upper(), headers, body_kwargs


class ApiClient:
    """HTTP gateway to the maintenance REST backend."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_store: TokenStoreProtocol,
        config: PortalClientSettings = settings,
        base_url: str | None = None,
    ) -> None:
        """Initialize with shared HTTP client and token store.

        Args:
            http_client: Shared httpx AsyncClient instance
            token_store: Store the bearer token is read from on every call
            config: Client settings
            base_url: Overrides config.API_URL when given
        """
        self._client = http_client
        self._token_store = token_store
        self._config = config
        self._base_url = (base_url or config.API_URL).rstrip("/")

    def _requires_login(self, path: str, token: str | None) -> bool:
        return (
            path.startswith(self._config.PROTECTED_PATH_PREFIX)
            and self._config.PUBLIC_PATH_MARKER not in path
            and not token
        )

    async def request(
        self,
        path: str,
        options_or_method: str | RequestOptions | None = None,
        body: Any = None,
    ) -> Any | ResponseEnvelope:
        """Perform one backend call and normalize the result.

        Args:
            path: Backend path, appended to the base URL
            options_or_method: Verb string (legacy shape) or RequestOptions
            body: Body for the legacy shape; ignored with RequestOptions

        Returns:
            Parsed payload for GET, ResponseEnvelope for every other verb

        Raises:
            ApiRequestError: GET answered with a non-success status
            httpx.TransportError: The call never produced a response
        """
        token = self._token_store.get(self._config.TOKEN_STORAGE_KEY)
        method, headers, body_kwargs = build_request(options_or_method, body, token)

        if method != "GET" and self._requires_login(path, token):
            logger.warning(
                "Missing auth token for protected API",
                extra={"method": method, "path": path},
            )
            return ResponseEnvelope.unauthorized(self._config.UNAUTHORIZED_MESSAGE)

        response = await self._client.request(
            method, self._base_url + path, headers=headers, **body_kwargs
        )

        logger.info(
            "Backend call completed",
            extra={"method": method, "path": path, "status": response.status_code},
        )

        data, raw_text = classify_response(response)

        if method == "GET":
            if not response.is_success:
                raise ApiRequestError(
                    failure_message(data, response),
                    status_code=response.status_code,
                    status_text=response.reason_phrase,
                    payload=data,
                )
            return data

        envelope = ResponseEnvelope(
            ok=response.is_success,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            data=data,
            raw_text=raw_text,
        )

        if not envelope.ok:
            logger.error(
                "Backend call failed",
                extra={"method": method, "path": path, "status": envelope.status, "payload": data},
            )

        return envelope
