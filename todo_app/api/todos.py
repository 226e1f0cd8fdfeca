"""
待办路由：新增 / 删除 / 切换完成状态 / 全部完成
"""

import structlog
from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import RedirectResponse

from todo_app.api.context import (
    RequestContext,
    get_request_context,
    parse_list_id,
    parse_todo_id,
)
from todo_app.observability.metrics import TODO_MUTATION_TOTAL, VALIDATION_FAILURE_TOTAL
from todo_app.todos.validators import validate_todo_name
from todo_app.web.renderer import render
from todo_app.web.views import ListDetailView

router = APIRouter(prefix="/lists/{list_id}", tags=["待办"])
log = structlog.get_logger()


def redirect_to_list(list_id: int) -> RedirectResponse:
    return RedirectResponse(f"/lists/{list_id}", status_code=303)


def parse_completed(value: str) -> bool:
    """表单里只有字符串 true 表示已完成"""
    return value.strip().lower() == "true"


@router.post("/todos")
async def add_todo(
    list_id: str,
    request: Request,
    todo: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
):
    """向清单追加待办"""
    list_id = parse_list_id(list_id)
    todo_list = await ctx.store.find_list(list_id)
    name = todo.strip()

    violation = validate_todo_name(name)
    if violation:
        VALIDATION_FAILURE_TOTAL.labels(kind=violation.kind).inc()
        log.info("待办名称校验失败", kind=violation.kind, list_id=list_id)
        await ctx.flash.error(violation.message)
        return await render(
            request,
            ctx.flash,
            ListDetailView(todo_list=todo_list, form_value=name),
            status_code=422,
        )

    await ctx.store.create_todo(list_id, name)
    TODO_MUTATION_TOTAL.labels(action="create", backend=ctx.store.backend).inc()
    await ctx.flash.success("The todo was added.")
    return redirect_to_list(list_id)


@router.post("/todos/{todo_id}/delete")
async def delete_todo(
    list_id: str,
    todo_id: str,
    ctx: RequestContext = Depends(get_request_context),
):
    """删除待办；脚本请求只返回 204，不写 flash"""
    list_id = parse_list_id(list_id)
    todo_id = parse_todo_id(list_id, todo_id)
    await ctx.store.delete_todo(list_id, todo_id)
    TODO_MUTATION_TOTAL.labels(action="delete", backend=ctx.store.backend).inc()

    if ctx.is_xhr:
        return Response(status_code=204)
    await ctx.flash.success("The todo has been deleted.")
    return redirect_to_list(list_id)


@router.post("/complete")
async def complete_all_todos(list_id: str, ctx: RequestContext = Depends(get_request_context)):
    list_id = parse_list_id(list_id)
    await ctx.store.mark_all_todos_complete(list_id)
    TODO_MUTATION_TOTAL.labels(action="complete_all", backend=ctx.store.backend).inc()
    await ctx.flash.success("All todos marked complete.")
    return redirect_to_list(list_id)


@router.post("/todos/{todo_id}")
async def toggle_todo(
    list_id: str,
    todo_id: str,
    completed: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
):
    """设置待办完成状态"""
    list_id = parse_list_id(list_id)
    todo_id = parse_todo_id(list_id, todo_id)
    await ctx.store.update_todo_status(list_id, todo_id, parse_completed(completed))
    TODO_MUTATION_TOTAL.labels(action="toggle", backend=ctx.store.backend).inc()
    await ctx.flash.success("The todo has been updated.")
    return redirect_to_list(list_id)
