"""
页面视图模型

路由层只负责组装视图模型，渲染器据此选择模板。
模板通过 view 变量访问字段，通过全局函数访问展示辅助（见 todos.helpers）。
"""

from typing import ClassVar

from pydantic import BaseModel, Field

from todo_app.todos.schemas import TodoList


class PageView(BaseModel):
    """视图基类"""

    template: ClassVar[str]
    title: str = "Todo Tracker"


class ListIndexView(PageView):
    """清单列表页"""

    template: ClassVar[str] = "lists.html"
    title: str = "Todo Lists"
    lists: list[TodoList] = Field(default_factory=list)


class NewListView(PageView):
    """新建清单表单；form_value 为校验失败时回填的名称"""

    template: ClassVar[str] = "new_list.html"
    title: str = "New List"
    form_value: str = ""


class EditListView(PageView):
    """重命名清单表单"""

    template: ClassVar[str] = "edit_list.html"
    title: str = "Edit List"
    todo_list: TodoList
    form_value: str | None = None

    @property
    def name_value(self) -> str:
        return self.todo_list.name if self.form_value is None else self.form_value


class ListDetailView(PageView):
    """清单详情页（含新增待办表单）"""

    template: ClassVar[str] = "list.html"
    todo_list: TodoList
    form_value: str = ""
