import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    复制文本到剪贴板

    Returns:
        True 表示成功；没有可用的剪贴板后端时返回 False
    """
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException as e:
        logger.error(f"❌ Failed to copy text: {e}")
        return False
