"""
⚙️ Configuration Management
Centralized settings for genopt runs
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .path_utils import get_project_root, ensure_directory_exists


class Settings(BaseSettings):
    """genopt settings, read from GENOPT_* environment variables or a .env file"""

    model_config = SettingsConfigDict(
        env_prefix="GENOPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False

    # Paths
    logs_dir: Path = Field(default_factory=lambda: get_project_root() / "logs")
    results_dir: Path = Field(default_factory=lambda: get_project_root() / "results")

    # Genetic algorithm defaults
    popsize: int = Field(default=100, ge=2)
    crossover_rate: float = 0.7
    mutation_rate: float = 0.001
    generations: int = Field(default=50, ge=0)
    random_seed: Optional[int] = None

    @field_validator("logs_dir", "results_dir")
    @classmethod
    def ensure_path_absolute(cls, v):
        """Make directory settings absolute"""
        if isinstance(v, str):
            v = Path(v)
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate the log level name"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator("crossover_rate", "mutation_rate")
    @classmethod
    def validate_rate(cls, v):
        """Operator rates are probabilities"""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Rate must be within [0, 1], got {v}")
        return v

    def create_directories(self) -> None:
        """Create the logs and results directories"""
        for directory in (self.logs_dir, self.results_dir):
            ensure_directory_exists(directory, relative_to_project=False)

    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        return self.environment.lower() == "testing"


@lru_cache()
def get_settings() -> Settings:
    """
    Settings singleton.
    Cached so environment variables are read once per process.
    """
    return Settings()
