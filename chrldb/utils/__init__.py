from .file_handler import open_text, is_gzipped
from .settings import AppConfig, ConfigurationError, load_config, save_config

__all__ = [
    "open_text",
    "is_gzipped",
    "AppConfig",
    "ConfigurationError",
    "load_config",
    "save_config",
]
