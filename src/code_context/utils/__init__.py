from .config import Config, load_config, create_sample_env
from .logging import configure_logging

__all__ = ["Config", "load_config", "create_sample_env", "configure_logging"]
