# Utils package

# Expose commonly used utilities
from src.utils.config import Config, config
from src.utils.logger import setup_logging, get_logger, get_uvicorn_log_config
from src.utils.helpers import get_settings, generate_topic_id, utc_now

__all__ = [
    "Config",
    "config",
    "setup_logging",
    "get_logger",
    "get_uvicorn_log_config",
    "get_settings",
    "generate_topic_id",
    "utc_now",
]
