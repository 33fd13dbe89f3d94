"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: log.py
@DateTime: 2026-03-02
@Docs: structlog configuration for import runs.
导入运行的 structlog 配置。

Library modules only call ``structlog.get_logger(__name__)``. Applications
decide the output format by calling ``configure_logging`` once at startup.
库模块只调用 ``structlog.get_logger(__name__)``；应用在启动时调用一次
``configure_logging`` 决定输出格式。
"""

import logging

import structlog


def configure_logging(*, json_logs: bool = False, level: int = logging.INFO) -> None:
    """Configure structlog with stdlib integration.

    配置 structlog（集成标准库 logging）。

    Args:
        json_logs: Render JSON lines instead of the console renderer.
            输出 JSON 行而不是控制台格式。
        level: Root log level.
            根日志级别。
    """
    logging.basicConfig(format="%(message)s", level=level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
