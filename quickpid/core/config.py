"""Application configuration via environment variables."""

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "QuickPID"
    VERSION: str = "3.1.1"
    LOG_LEVEL: str = "INFO"

    # Controller defaults
    DEFAULT_SAMPLE_TIME_US: int = 100_000   # 0.1 s
    DEFAULT_OUTPUT_MIN: float = 0.0
    DEFAULT_OUTPUT_MAX: float = 255.0       # PWM range

    # Simulation
    SIMULATION_DT: float = 0.01             # s per simulated step
    MAX_SIMULATION_TIME: float = 3600.0     # s
    RECORDER_MAX_ROWS: int = 100_000        # rows retained per run

    class Config:
        env_file = ".env"
        env_prefix = "QUICKPID_"
        case_sensitive = True


settings = Settings()


def configure_logging(level: str | None = None):
    """Configure root logging from LOG_LEVEL."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
