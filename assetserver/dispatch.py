import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)


async def trace_requests(request: Request, call_next) -> Response:
    """Log one INFO record per request, with a DEBUG record at the start.

    Anything the route table raises is turned into a 500 here so that one
    broken request never reaches the listener.
    """
    span = uuid.uuid4().hex[:8]
    method, path = request.method, request.url.path
    logger.debug("started request span=%s method=%s path=%s", span, method, path)
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("unhandled error span=%s method=%s path=%s", span, method, path)
        response = PlainTextResponse("Internal Server Error", status_code=500)
    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "finished request span=%s method=%s path=%s status=%d latency=%.2fms",
        span,
        method,
        path,
        response.status_code,
        latency_ms,
    )
    return response


def install_tracing(app: FastAPI) -> None:
    app.middleware("http")(trace_requests)
