# Task board — configuration
# Override defaults via taskboard.yaml, environment variables or CLI args.

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Optional

CONFIG_NAME = "taskboard.yaml"


@dataclass
class BoardConfig:
    """Runtime configuration for the board server."""

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # Input limits (None = unbounded)
    title_max_length: Optional[int] = 200
    details_max_length: Optional[int] = 2000

    # Mutating API routes require X-API-Key when this variable is set
    api_secret_env: str = "TASKBOARD_API_SECRET"

    @property
    def api_secret(self) -> str:
        return os.environ.get(self.api_secret_env, "").strip()

    def apply_env(self):
        """Let TASKBOARD_HOST / TASKBOARD_PORT override file values."""
        host = os.environ.get("TASKBOARD_HOST")
        if host:
            self.host = host
        port = os.environ.get("TASKBOARD_PORT")
        if port:
            try:
                self.port = int(port)
            except ValueError:
                pass

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BoardConfig":
        """Load config from YAML file, falling back to defaults."""
        if path is None:
            path = os.environ.get("TASKBOARD_CONFIG")
        cfg_path = Path(path) if path else Path.cwd() / CONFIG_NAME
        known = {f.name for f in fields(cls)}
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
            except (OSError, yaml.YAMLError, TypeError, AttributeError):
                cfg = cls()
        else:
            cfg = cls()
        cfg.apply_env()
        return cfg
