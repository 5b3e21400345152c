#!/usr/bin/env python3
"""
开发环境启动脚本

默认的 host / port 取自 gateway.base_url，日志级别取自 log_level，
命令行参数可以覆盖。前端另行启动：streamlit run app.py
"""

import argparse
import logging
from urllib.parse import urlparse

from kuweni.config import Config
from kuweni.logging_config import setup_logging

logger = logging.getLogger("run_dev")

LOG_LEVELS = ["debug", "info", "warning", "error"]


def default_bind() -> tuple:
    """从 gateway.base_url 解析出监听地址，前端和网关因此默认指向同一处"""
    parsed = urlparse(Config.gateway.base_url)
    return parsed.hostname or "127.0.0.1", parsed.port or 8000


def build_parser() -> argparse.ArgumentParser:
    host, port = default_bind()
    level = Config.log_level.lower()

    parser = argparse.ArgumentParser(description="kuweni-ai gateway (development)")
    parser.add_argument("--host", default=host, help=f"Host to bind (default: {host})")
    parser.add_argument("--port", type=int, default=port, help=f"Port to bind (default: {port})")
    parser.add_argument("--no-reload", dest="reload", action="store_false", help="Disable auto-reload")
    parser.add_argument(
        "--log-level",
        default=level if level in LOG_LEVELS else "info",
        choices=LOG_LEVELS,
    )
    return parser


def main():
    args = build_parser().parse_args()
    setup_logging(args.log_level)

    import uvicorn

    logger.info(f"🚀 kuweni-ai gateway on http://{args.host}:{args.port} (reload={args.reload})")
    logger.info(f"📖 API docs: http://{args.host}:{args.port}/docs")
    logger.info(f"🔗 Upstream: {Config.pollinations.text_base_url} | {Config.pollinations.image_base_url}")

    uvicorn.run(
        "main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=["kuweni", "api"] if args.reload else None,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
