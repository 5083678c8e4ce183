"""
Configuration management for the dungeon generation service.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# server/.env, then the project root .env
ENV_PATHS = [
    Path(__file__).parent.parent.parent / ".env",
    Path(__file__).parent.parent.parent.parent / ".env",
]


class Config:
    """Configuration for dungeon generation service"""

    def __init__(self):
        # Server configuration
        self.host = os.getenv("DUNGEON_SERVICE_HOST", "0.0.0.0")
        self.port = int(os.getenv("DUNGEON_SERVICE_PORT", "8082"))
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Generation configuration
        self.world_seed = int(os.getenv("WORLD_SEED", "12345"))
        self.connect_probability = float(os.getenv("CONNECT_PROBABILITY", "0.5"))


def load_env_files() -> None:
    """Load the first .env file found. Existing environment variables win."""
    for env_path in ENV_PATHS:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            break


def load_config() -> Config:
    """Load configuration from .env files and environment variables"""
    load_env_files()
    return Config()
