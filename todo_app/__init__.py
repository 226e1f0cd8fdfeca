"""todo_app：会话级待办清单管理（FastAPI + Jinja2 服务端渲染）"""
