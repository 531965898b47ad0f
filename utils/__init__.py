# Utils module
from .logger import get_logger, get_log_file_path

__all__ = ["get_logger", "get_log_file_path"]
