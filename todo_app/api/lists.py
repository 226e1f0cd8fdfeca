"""
清单路由：列表 / 新建 / 详情 / 重命名 / 删除

成功的变更操作一律 flash + 303 重定向；名称校验失败时 flash 错误并以 422 重新渲染当前表单。
"""

import structlog
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from todo_app.api.context import RequestContext, get_request_context, parse_list_id
from todo_app.observability.metrics import LIST_MUTATION_TOTAL, VALIDATION_FAILURE_TOTAL
from todo_app.todos.validators import validate_list_name
from todo_app.web.renderer import render
from todo_app.web.views import EditListView, ListDetailView, ListIndexView, NewListView

router = APIRouter(tags=["清单"])
log = structlog.get_logger()


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


@router.get("/")
async def home():
    return redirect("/lists")


@router.get("/lists")
async def list_index(request: Request, ctx: RequestContext = Depends(get_request_context)):
    """全部清单"""
    lists = await ctx.store.all_lists()
    return await render(request, ctx.flash, ListIndexView(lists=lists))


@router.get("/lists/new")
async def new_list_form(request: Request, ctx: RequestContext = Depends(get_request_context)):
    return await render(request, ctx.flash, NewListView())


@router.get("/lists/{list_id}")
async def list_detail(
    list_id: str,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
):
    list_id = parse_list_id(list_id)
    todo_list = await ctx.store.find_list(list_id)
    return await render(request, ctx.flash, ListDetailView(todo_list=todo_list))


@router.get("/lists/{list_id}/edit")
async def edit_list_form(
    list_id: str,
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
):
    list_id = parse_list_id(list_id)
    todo_list = await ctx.store.find_list(list_id)
    return await render(request, ctx.flash, EditListView(todo_list=todo_list))


@router.post("/lists")
async def create_list(
    request: Request,
    list_name: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
):
    """新建清单"""
    name = list_name.strip()

    violation = validate_list_name(name, await ctx.store.all_lists())
    if violation:
        VALIDATION_FAILURE_TOTAL.labels(kind=violation.kind).inc()
        log.info("清单名称校验失败", kind=violation.kind)
        await ctx.flash.error(violation.message)
        return await render(request, ctx.flash, NewListView(form_value=name), status_code=422)

    await ctx.store.create_list(name)
    LIST_MUTATION_TOTAL.labels(action="create", backend=ctx.store.backend).inc()
    await ctx.flash.success("The list has been created.")
    return redirect("/lists")


@router.post("/lists/{list_id}")
async def rename_list(
    list_id: str,
    request: Request,
    list_name: str = Form(""),
    ctx: RequestContext = Depends(get_request_context),
):
    """重命名清单，唯一性校验排除清单自身"""
    list_id = parse_list_id(list_id)
    name = list_name.strip()
    todo_list = await ctx.store.find_list(list_id)

    violation = validate_list_name(name, await ctx.store.all_lists(), exclude_id=list_id)
    if violation:
        VALIDATION_FAILURE_TOTAL.labels(kind=violation.kind).inc()
        log.info("清单名称校验失败", kind=violation.kind, list_id=list_id)
        await ctx.flash.error(violation.message)
        return await render(
            request,
            ctx.flash,
            EditListView(todo_list=todo_list, form_value=name),
            status_code=422,
        )

    await ctx.store.update_list_name(list_id, name)
    LIST_MUTATION_TOTAL.labels(action="rename", backend=ctx.store.backend).inc()
    await ctx.flash.success("The list has been renamed.")
    return redirect(f"/lists/{list_id}")


@router.post("/lists/{list_id}/delete")
async def delete_list(list_id: str, ctx: RequestContext = Depends(get_request_context)):
    """删除清单；脚本请求返回跳转路径文本，由前端自行跳转"""
    list_id = parse_list_id(list_id)
    await ctx.store.delete_list(list_id)
    LIST_MUTATION_TOTAL.labels(action="delete", backend=ctx.store.backend).inc()
    await ctx.flash.success("The list has been deleted.")

    if ctx.is_xhr:
        return PlainTextResponse("/lists")
    return redirect("/lists")
