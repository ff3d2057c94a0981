from taxocluster.utils.logging_config import setup_logging, get_logger
from taxocluster.utils.file_utils import save_json, load_json, read_text

__all__ = [
    "setup_logging", "get_logger",
    "save_json", "load_json", "read_text",
]
