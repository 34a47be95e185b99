from archivarr.env.env import (
    Environment,
    LoggingEnvironment,
    get_env,
    get_logs_dir,
    reset_env_caches,
    get_logging_env,
    load_env_file,
    ConfigError,
)

from archivarr.env.paths import default_logs_dir, dotenv_candidates

__all__ = [
    "Environment",
    "LoggingEnvironment",
    "get_env",
    "get_logs_dir",
    "reset_env_caches",
    "get_logging_env",
    "load_env_file",
    "ConfigError",
    "default_logs_dir",
    "dotenv_candidates",
]
