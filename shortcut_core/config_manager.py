import os
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field


class PathsConfig(BaseModel):
    base_dir: str = Field(default=".")
    log_dir: str = Field(default="logs")


class LLMConfig(BaseModel):
    llm_provider: str = Field(default="openai")
    model_name: str = Field(default="gpt-4o-mini")
    base_url: Optional[str] = Field(default=None)
    max_tokens: int = Field(default=4096)
    timeout_seconds: Optional[float] = Field(default=None)
    # Forward safety/grounding hints in the request body
    pass_execution_hints: bool = Field(default=True)
    openai_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    anthropic_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY"))


class ServerConfig(BaseModel):
    title: str = Field(default="ShortCut")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    session_cookie: str = Field(default="shortcut_session")
    max_sessions: int = Field(default=500)
    notification_limit: int = Field(default=1)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    file_level: str = Field(default="DEBUG")
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="10 days")
    compression: Optional[str] = Field(default="zip")
    # One JSON record per line, for log shippers
    json_logs: bool = Field(default=True)


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


class ConfigManager:
    """
    Manages loading and validation of application configuration.
    """

    def __init__(self, config_path: str = "config/settings.yaml", allow_missing: bool = False):
        self.config_path = Path(config_path)
        self.allow_missing = allow_missing
        self.config: AppConfig = self._load_config()

    def _load_config(self) -> AppConfig:
        if not self.config_path.exists():
            if self.allow_missing:
                logger.warning(f"Configuration file not found at {self.config_path}. Using defaults.")
                return AppConfig()
            raise FileNotFoundError(f"Configuration file not found at {self.config_path}")

        with open(self.config_path, "r") as f:
            raw_config = yaml.safe_load(f) or {}

        return AppConfig(**raw_config)

    @property
    def paths(self) -> PathsConfig:
        return self.config.paths

    @property
    def logging(self) -> LoggingConfig:
        return self.config.logging

    @property
    def llm(self) -> LLMConfig:
        return self.config.llm

    @property
    def server(self) -> ServerConfig:
        return self.config.server
