"""
异常处理：NotFoundError → flash 错误提示 + 303 重定向

脚本请求（XHR）不跟随重定向，改为返回 200 + 跳转路径文本，与删除清单的响应形态一致。

其余未预期异常（Redis / PG 不可用等）不在此处理，交给 FastAPI 默认 500 响应。
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from todo_app.observability.metrics import NOT_FOUND_TOTAL
from todo_app.todos.errors import NotFoundError

log = structlog.get_logger()


async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    """按 id 查找失败：提示后跳转到安全页面"""
    ctx = getattr(request.state, "context", None)
    if ctx is not None:
        await ctx.flash.error(exc.message)

    NOT_FOUND_TOTAL.labels(entity=exc.entity).inc()
    log.info("实体不存在，重定向", entity=exc.entity, path=request.url.path, redirect_to=exc.redirect_to)
    if ctx is not None and ctx.is_xhr:
        return PlainTextResponse(exc.redirect_to)
    return RedirectResponse(exc.redirect_to, status_code=303)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
