"""One JSON access line per HTTP request on the ``api.access`` logger."""

import json
import logging
import time
from typing import Callable

access_logger = logging.getLogger("api.access")


class StructuredLoggingMiddleware:
    def __init__(self, app: Callable) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                access_logger.info(
                    json.dumps(
                        {
                            "method": scope["method"],
                            "path": scope["path"],
                            "status": message["status"],
                            "ms": round((time.perf_counter() - started) * 1000, 1),
                        }
                    )
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
