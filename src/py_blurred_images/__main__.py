"""Entry point for python -m py_blurred_images.

无参数时启动 MCP 服务器；`run <任务文件> [目标]` 执行任务并以退出码报告结果。
"""

import sys


def run_command(args: list[str]) -> int:
    """执行任务文件，成功返回 0，致命错误返回 1"""
    from .blurrer import ImageBlurrer
    from .exceptions import BlurError, ErrorHandler
    from .utils.logging_helpers import configure_logging, get_logger

    configure_logging()
    logger = get_logger()

    if not args:
        logger.error("用法: python -m py_blurred_images run <任务文件> [目标]")
        return 2

    task_file = args[0]
    target = args[1] if len(args) > 1 else None

    try:
        results = ImageBlurrer().run_task_file(task_file, target)
    except BlurError as e:
        return ErrorHandler.handle_fatal(e)

    for result in results:
        logger.info(f"[{result.target}] {result.get_summary()}")
    return 0


def main() -> None:
    """主入口函数"""
    if len(sys.argv) > 1 and sys.argv[1] in ["--version", "-v"]:
        from . import __version__

        print(f"py-blurred-images {__version__}")
        return

    if len(sys.argv) > 1 and sys.argv[1] == "run":
        sys.exit(run_command(sys.argv[2:]))

    # 启动 MCP 服务器
    from .mcp_server import main as server_main

    server_main()


if __name__ == "__main__":
    main()
