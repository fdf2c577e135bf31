"""Middleware — request ID + upload size guard.

Pure ASGI middleware (not BaseHTTPMiddleware) so the upload guard can answer
before the multipart body is read.
"""

import json
import uuid
from contextvars import ContextVar

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdMiddleware:
    """Attach an 8-char request ID to every request/response cycle."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        scope.setdefault("state", {})["request_id"] = rid

        async def send_with_rid(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.append("X-Request-ID", rid)
            await send(message)

        await self.app(scope, receive, send_with_rid)


class UploadSizeLimitMiddleware:
    """Reject oversized uploads by Content-Length before the body is parsed.

    Only paths under `path_prefix` are checked. `max_body` already includes
    the multipart overhead allowance; the route still checks the exact file
    size afterwards.
    """

    def __init__(self, app: ASGIApp, max_body: int, path_prefix: str, message: str) -> None:
        self.app = app
        self.max_body = max_body
        self.path_prefix = path_prefix
        self.message = message

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope.get("path", "").startswith(self.path_prefix):
            await self.app(scope, receive, send)
            return

        headers = {k: v for k, v in scope.get("headers", [])}
        raw_length = headers.get(b"content-length", b"").decode()

        if raw_length.isdigit() and int(raw_length) > self.max_body:
            body = json.dumps({"error": self.message, "request_id": request_id_var.get("-")}).encode()
            await send({
                "type": "http.response.start",
                "status": 400,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"content-length", str(len(body)).encode()],
                ],
            })
            await send({"type": "http.response.body", "body": body})
            return

        await self.app(scope, receive, send)
