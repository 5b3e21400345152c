from .clipboard import copy_to_clipboard
from .downloads import DownloadPayload, build_download_filename, fetch_download, save_download
from .ids import generate_id
from .timefmt import format_message_time

__all__ = [
    "copy_to_clipboard",
    "DownloadPayload",
    "build_download_filename",
    "fetch_download",
    "save_download",
    "generate_id",
    "format_message_time",
]
