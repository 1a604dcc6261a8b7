# src/dealforge/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # IRR solver (decimal rates, not percents)
    # -----------------------------
    IRR_MAX_ITERATIONS: int = Field(default=200)
    IRR_TOLERANCE: float = Field(default=1e-7)
    IRR_LOWER_BOUND: float = Field(default=-0.99)
    IRR_UPPER_BOUND: float = Field(default=10.0)

    # -----------------------------
    # Syndication sensitivity grid (percentage-point offsets)
    # -----------------------------
    SENSITIVITY_EXIT_CAP_STEPS: list[float] = Field(default=[-1.0, -0.5, 0.0, 0.5, 1.0])
    SENSITIVITY_RENT_GROWTH_STEPS: list[float] = Field(default=[-1.0, 0.0, 1.0])

    # -----------------------------
    # Distress batch scoring
    # -----------------------------
    DISTRESS_N_JOBS: int = Field(default=1)

    model_config = SettingsConfigDict(
        env_prefix="DEALFORGE_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "SENSITIVITY_EXIT_CAP_STEPS",
        "SENSITIVITY_RENT_GROWTH_STEPS",
        mode="before",
    )
    @classmethod
    def _to_float_steps(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            s = v.strip().strip("[]")
            if not s:
                return []
            v = [part.strip().replace("%", "") for part in s.split(",") if part.strip()]
        try:
            return [float(x) for x in v]
        except (TypeError, ValueError) as err:
            raise ValueError("sensitivity steps must be numeric") from err

    @field_validator("IRR_MAX_ITERATIONS", "DISTRESS_N_JOBS", mode="before")
    @classmethod
    def _non_zero_int(cls, v: Any) -> Any:
        i = int(v)
        if i == 0:
            raise ValueError("must be non-zero")
        return i

    @field_validator("IRR_TOLERANCE", mode="before")
    @classmethod
    def _tolerance_positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("IRR_TOLERANCE must be > 0")
        return f


config = AppConfig()
