"""
会话中间件：识别 / 签发会话 Cookie

Cookie 只保存不透明的 session_id（uuid4 hex），会话内容全部在服务端（Redis）。
首次访问或 Cookie 格式不合法时生成新 id，并在响应中下发 Cookie。
"""

import re
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

log = structlog.get_logger()

_SESSION_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_session_id() -> str:
    return uuid.uuid4().hex


class SessionMiddleware(BaseHTTPMiddleware):
    """会话 id 注入：request.state.session_id + structlog 上下文"""

    def __init__(
        self,
        app: ASGIApp,
        cookie_name: str,
        max_age: int,
        secure: bool = False,
    ):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.secure = secure

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session_id = request.cookies.get(self.cookie_name, "")
        is_new = not _SESSION_ID_PATTERN.match(session_id)
        if is_new:
            session_id = new_session_id()
            log.info("签发新会话", session_id=session_id)

        request.state.session_id = session_id
        structlog.contextvars.bind_contextvars(session_id=session_id)

        response = await call_next(request)

        # 滑动过期：每次请求都续期 Cookie，与服务端 TTL 保持一致
        response.set_cookie(
            self.cookie_name,
            session_id,
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
            secure=self.secure,
        )
        return response
