import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from taskvibe.core.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id, binds it to the log context and logs one
    line with the outcome and duration.

    An id sent by the client in the request header is reused; either way it
    is echoed back on the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        with log_context(request_id=request_id, method=request.method, path=request.url.path):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    f"{request.method} {request.url.path} raised after {self._elapsed(started)}ms"
                )
                raise

            self._log_outcome(request, response.status_code, self._elapsed(started))

        response.headers[self.header_name] = request_id
        return response

    @staticmethod
    def _elapsed(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)

    @staticmethod
    def _log_outcome(request: Request, status_code: int, elapsed_ms: float) -> None:
        line = f"{request.method} {request.url.path} {status_code} in {elapsed_ms}ms"
        if status_code >= 500:
            logger.error(line)
        elif status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)


def register_middlewares(app: FastAPI) -> None:
    """Register all middlewares with the FastAPI app."""
    app.add_middleware(RequestLoggingMiddleware, header_name=REQUEST_ID_HEADER)
