"""
视图渲染：Jinja2 模板 + 一次性 flash 消息

渲染时取出并清除当前会话的 flash，保证每条消息只出现一次。
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from todo_app.config import get_settings
from todo_app.session.store import FlashMessages
from todo_app.todos.helpers import TEMPLATE_HELPERS
from todo_app.web.views import PageView

TEMPLATE_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=TEMPLATE_DIR)
templates.env.globals.update(TEMPLATE_HELPERS)
templates.env.globals["app_name"] = get_settings().APP_NAME


async def render(
    request: Request,
    flash: FlashMessages,
    view: PageView,
    status_code: int = 200,
) -> HTMLResponse:
    """渲染视图模型对应的模板"""
    messages = await flash.pop()
    return templates.TemplateResponse(
        request,
        view.template,
        {"view": view, "flash": messages},
        status_code=status_code,
    )
