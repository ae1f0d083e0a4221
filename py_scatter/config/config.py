"""Engine-wide settings pulled from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Process-level settings for the scatter engine."""

    model_config = SettingsConfigDict(
        env_prefix="PY_SCATTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    # Performance Configuration
    max_workers: int = Field(default=4, ge=1, description="Worker threads for parallel sampling")

    # Sampling Configuration
    candidate_attempts: int = Field(
        default=30, ge=1, description="Candidates tried around each frontier point"
    )
    seed_attempts: int = Field(
        default=30, ge=1, description="Random zone positions tried when no frontier seed is accepted"
    )
    acceptance_floor: float = Field(
        default=0.01, ge=0.0, description="Minimum slope response for a candidate to be accepted"
    )
    probe_height: float = Field(
        default=100.0, description="Height above a candidate from which terrain is probed"
    )
    poisson_max_points: int = Field(
        default=100_000, ge=0, description="Cap on Poisson-disk candidates per call"
    )
    poisson_max_total_attempts: int = Field(
        default=2_000_000, ge=0, description="Cap on Poisson-disk candidate attempts per call"
    )
    noise_resolution: int = Field(
        default=128, ge=1, description="Cells per side of the layered noise map"
    )
    dla_attempt_factor: int = Field(
        default=100, ge=1, description="Walker attempts allowed per requested DLA particle"
    )


# Instantiate singleton settings object
settings = EngineSettings()
