from .file_names import build_file_url, guess_mime_type, sanitize_base_name, split_extension
from .id_generator import generate_id
from .logging import get_logger, setup_logging
from .time_utils import get_timestamp_ms

__all__ = [
    "build_file_url",
    "guess_mime_type",
    "sanitize_base_name",
    "split_extension",
    "generate_id",
    "get_logger",
    "setup_logging",
    "get_timestamp_ms",
]
