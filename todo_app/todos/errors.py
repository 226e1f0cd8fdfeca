"""
业务异常

NotFoundError 由存储层抛出，应用级异常处理器统一转换为
flash 错误提示 + 重定向，不会以 5xx 形式暴露给客户端。
"""


class TodoAppError(Exception):
    """todo_app 业务异常基类"""


class NotFoundError(TodoAppError):
    """按 id 查找实体失败"""

    entity: str = "entity"

    def __init__(self, message: str, redirect_to: str):
        super().__init__(message)
        self.message = message
        self.redirect_to = redirect_to


class ListNotFoundError(NotFoundError):
    entity = "list"

    def __init__(self, list_id: int | str):
        super().__init__("The specified list was not found.", redirect_to="/lists")
        self.list_id = list_id


class TodoNotFoundError(NotFoundError):
    entity = "todo"

    def __init__(self, list_id: int, todo_id: int | str):
        super().__init__(
            "The specified todo was not found.", redirect_to=f"/lists/{list_id}"
        )
        self.list_id = list_id
        self.todo_id = todo_id
