"""
日志初始化：structlog 负责应用日志，标准库 logging 只承接第三方库（SQLAlchemy / uvicorn）

- development：彩色控制台输出，不缓存 logger，便于测试中替换处理器
- production：JSON 单行输出，带异常堆栈
"""

import logging
import sys

import structlog

# 请求日志中间件已逐条记录请求，uvicorn 自带的 access 日志只在告警级别输出
_QUIET_LOGGERS = ("uvicorn.access",)


def _renderer(env: str):
    if env == "production":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(env: str = "development", level: str = "INFO") -> None:
    """按环境配置 structlog；level 为标准库级别名，如 DEBUG / INFO / WARNING"""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"未知日志级别: {level}")

    structlog.configure(
        processors=[
            # trace_id / session_id 由中间件 bind_contextvars 注入
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(env),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=env == "production",
    )

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stdout, level=numeric_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
