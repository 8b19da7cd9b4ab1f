"""Error handling for page requests.

Maps HTTPError exceptions and unexpected failures to Response objects.
"""

import logging
import traceback

from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response

logger = logging.getLogger("roost.server")


def handle_http_error(exc: HTTPError, request: Request, debug: bool) -> Response:
    """Map an HTTPError to a Response with the matching status."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, content_type="text/plain; charset=utf-8").with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    body = "Internal Server Error"
    if debug:
        body = "".join(traceback.format_exception(exc))
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
