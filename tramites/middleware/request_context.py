"""Request and correlation identifiers (raw ASGI).

Forwards a client's X-Request-ID when it is safe to log, otherwise mints
one. The correlation id falls back to the request id. Both are stored on
scope["state"] and echoed on the response.
"""

import re
import uuid
from typing import Any, Awaitable, Callable

Scope = dict[str, Any]
Message = dict[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _header(scope: Scope, name: str) -> str | None:
    wanted = name.lower().encode("latin-1")
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("latin-1").strip()
    return None


def _safe_or_new(raw: str | None) -> str:
    if raw and _SAFE_ID.match(raw):
        return raw
    return uuid.uuid4().hex


class RequestContextMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        request_id_header: str = "X-Request-ID",
        correlation_id_header: str = "X-Correlation-ID",
    ) -> None:
        self.app = app
        self.request_id_header = request_id_header
        self.correlation_id_header = correlation_id_header

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _safe_or_new(_header(scope, self.request_id_header))
        forwarded = _header(scope, self.correlation_id_header)
        correlation_id = forwarded if forwarded and _SAFE_ID.match(forwarded) else request_id
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id

        extra = [
            (self.request_id_header.encode("latin-1"), request_id.encode("latin-1")),
            (self.correlation_id_header.encode("latin-1"), correlation_id.encode("latin-1")),
        ]

        async def send_with_ids(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + extra
            await send(message)

        await self.app(scope, receive, send_with_ids)
