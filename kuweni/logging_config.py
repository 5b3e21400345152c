import logging

from kuweni.config import Config


def setup_logging(level: str | None = None) -> None:
    """配置日志"""
    logging.basicConfig(
        level=(level or Config.log_level).upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
