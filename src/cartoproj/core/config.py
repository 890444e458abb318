"""
Configuration settings for the Cartoproj engine.
"""

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from cartoproj.core.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Engine settings with environment variable support.

    The strictness flags choose between raising an error and the legacy
    silent fallback for the three degraded cases the engine knows about.
    Each flag can still be overridden per call.

    Attributes:
        strict_convergence: Raise when the UTM inverse iteration does not
            converge instead of clamping the result to (0, 0)
        strict_shapes: Raise when an unrecognized shape is reprojected
            instead of returning it unchanged
        strict_datum: Raise on an unrecognized datum name instead of
            falling back to NAD27
        utm_max_iterations: Iteration cap for the footpoint latitude
        utm_convergence_tolerance: Convergence tolerance in radians
        log_level: Default log level used by setup_logging()
        log_file: Rotating log file used by setup_logging(), if any
        json_logs: Write the log file as JSON lines
        environment: Deployment environment
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="CARTOPROJ_",
        extra="ignore",
    )

    # Degraded-case policies
    strict_convergence: bool = True
    strict_shapes: bool = True
    strict_datum: bool = False

    # UTM inverse iteration
    utm_max_iterations: int = Field(default=6, ge=1)
    utm_convergence_tolerance: float = Field(default=1.0e-10, gt=0)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    json_logs: bool = False

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @property
    def legacy_mode(self) -> bool:
        """True when every degraded case uses the legacy silent fallback."""
        return not (self.strict_convergence or self.strict_shapes or self.strict_datum)


def load_settings(**overrides: Any) -> Settings:
    """
    Build settings from the environment plus explicit overrides.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If a value fails validation
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        first = e.errors()[0]
        config_key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid setting: {first.get('msg', str(e))}",
            config_key=config_key or None,
            details={"errors": len(e.errors())},
        ) from e


# Global settings instance
settings = load_settings()
