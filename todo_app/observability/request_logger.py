"""
请求日志中间件：每个请求一条开始、一条结束日志

结束日志带上会话 id 和是否脚本请求，方便按会话追查一次删除 / 跳转链路。
会话 id 由内层 SessionMiddleware 写入 request.state，所以只能在 call_next 之后读取。
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_app.api.context import is_xhr_request

log = structlog.get_logger()

TRACE_HEADER = "X-Trace-ID"


def new_trace_id() -> str:
    return uuid.uuid4().hex


class RequestLoggerMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or new_trace_id()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(trace_id=trace_id)

        xhr = is_xhr_request(request)
        log.info("请求开始", method=request.method, path=request.url.path, xhr=xhr)

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = int((time.monotonic() - start) * 1000)

        log.info(
            "请求结束",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            session_id=getattr(request.state, "session_id", None),
            xhr=xhr,
        )

        response.headers[TRACE_HEADER] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)
        return response
