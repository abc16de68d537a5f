from __future__ import annotations

import logging
import re
from typing import Union

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .settings import LEGACY_PATH_MODES

logger = logging.getLogger(__name__)

LEGACY_TASKS_PATH = re.compile(r"^/tasks/(.*)$")
LEGACY_TASKS_TARGET = r"/todos/\1"


# PUBLIC_INTERFACE
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log the method and path of every request and the status code of its response.

    Registered outermost, so unmatched routes and handler failures are logged too.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        logger.info("[%s] %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Response status code: %d", 500)
            raise
        logger.info("Response status code: %d", response.status_code)
        return response


# PUBLIC_INTERFACE
class LegacyPathMiddleware:
    """
    Map legacy /tasks/... paths onto /todos/... before routing.

    Modes:
    - redirect: answer with 302 Found pointing at the new path (query string kept)
    - rewrite: swap the path in place and let the router handle it
    """

    def __init__(
        self,
        app: ASGIApp,
        mode: str = "redirect",
        pattern: Union[str, re.Pattern[str]] = LEGACY_TASKS_PATH,
        replacement: str = LEGACY_TASKS_TARGET,
    ) -> None:
        if mode not in LEGACY_PATH_MODES:
            raise ValueError(f"unsupported legacy path mode: {mode!r}")
        self.app = app
        self.mode = mode
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.replacement = replacement

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        match = self.pattern.match(scope["path"])
        if match is None:
            await self.app(scope, receive, send)
            return

        target = match.expand(self.replacement)
        if self.mode == "rewrite":
            scope = dict(scope)
            scope["path"] = target
            scope.pop("raw_path", None)
            await self.app(scope, receive, send)
            return

        query = scope.get("query_string", b"").decode("latin-1")
        location = f"{target}?{query}" if query else target
        response = RedirectResponse(location, status_code=302)
        await response(scope, receive, send)
