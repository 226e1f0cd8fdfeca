"""
Prometheus 指标定义

所有指标统一在此文件定义，中间件和业务代码按需引用。
"""

from prometheus_client import Counter, Histogram

# ── 请求级指标 ──

REQUEST_TOTAL = Counter(
    "todo_request_total",
    "HTTP 请求总数",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todo_request_duration_ms",
    "HTTP 请求耗时（毫秒）",
    ["method", "endpoint"],
    buckets=[5, 10, 25, 50, 100, 200, 500, 1000, 2000],
)

# ── 业务指标 ──

LIST_MUTATION_TOTAL = Counter(
    "todo_list_mutation_total",
    "清单变更总数",
    ["action", "backend"],  # action: create/rename/delete
)

TODO_MUTATION_TOTAL = Counter(
    "todo_item_mutation_total",
    "待办变更总数",
    ["action", "backend"],  # action: create/delete/toggle/complete_all
)

VALIDATION_FAILURE_TOTAL = Counter(
    "todo_validation_failure_total",
    "名称校验失败总数",
    ["kind"],  # invalid_length/duplicate_name
)

NOT_FOUND_TOTAL = Counter(
    "todo_not_found_total",
    "按 id 查找失败总数",
    ["entity"],  # list/todo
)
