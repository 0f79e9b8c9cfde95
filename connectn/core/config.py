import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from connectn.engine.errors import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "engine.yaml"


class BoardConfig(BaseModel):
    width: int = 7
    height: int = 6
    win_condition: int = 4


class EngineConfig(BaseModel):
    name: str = "AI"
    depth: int = 4
    mistake_rate: float = 0.1
    top_k: int = 3
    heuristic: str = "center"
    cache_size: Optional[int] = None  # Optional LRU bound


class DifficultyConfig(BaseModel):
    label: str
    depth: int
    mistake_rate: float
    name: Optional[str] = None
    heuristic: Optional[str] = None


class ServerConfig(BaseModel):
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])


class Settings(BaseModel):
    board: BoardConfig = Field(default_factory=BoardConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    difficulties: Dict[str, DifficultyConfig] = Field(default_factory=dict)
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Settings":
        """
        Reads the YAML config, then applies environment overrides:
        CONNECTN_CONFIG, CONNECTN_LOG_LEVEL, CONNECTN_CORS_ORIGINS.
        """
        config_path = Path(path or os.getenv("CONNECTN_CONFIG") or DEFAULT_CONFIG_PATH)
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        settings = cls(**data)

        if log_level := os.getenv("CONNECTN_LOG_LEVEL"):
            settings.log_level = log_level.upper()
        if origins := os.getenv("CONNECTN_CORS_ORIGINS"):
            settings.server.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
        return settings

    def get_difficulty(self, key: str) -> DifficultyConfig:
        difficulty = self.difficulties.get(key)
        if difficulty is None:
            raise ConfigurationError(f"Unknown difficulty: {key}")
        return difficulty


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Suppress HTTP request logs for cleaner output
    logging.getLogger("httpx").setLevel(logging.WARNING)


# Singleton instance
settings = Settings.load()
