import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Dict, Any
from pathlib import Path


class Settings(BaseSettings):
    # Workspace paths
    SPLITVERIFY_WORKDIR: str = "var"  # Tool-managed artifacts (reports)

    # Thresholds applied by the verification suite
    MAX_CORRUPTION_PERCENT: float = 3.0  # Acceptable packet loss, rounded up
    MAX_IMBALANCE_PERCENT: int = 10  # Allowed deviation from an even split

    # Checker behaviour
    TRAILING_LINE: str = "evaluate"  # evaluate|drop
    READ_CHUNK_SIZE: int = 64 * 1024
    MAX_DIAGNOSTICS: int = 1000  # Corrupt lines kept in results
    TEXT_ENCODING: str = "utf-8"

    # Observability & UI
    LOG_FORMAT: str = "auto"  # json|plain|auto
    NO_COLOR: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path = Path(config_file)
        else:
            # Auto-discover .splitverify.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".splitverify.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        # Load config file if found
        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Config file values are defaults; keys set in the environment win
        return cls(**{k: v for k, v in config_data.items() if k not in os.environ})


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
