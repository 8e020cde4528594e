"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from fitness_tracker.domain.energy import EnergyConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    activity_factor: float = 1.55
    default_calorie_goal: int = 2000
    pr_count_warmups: bool = True
    gain_surplus_kcal: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def energy_config(self) -> EnergyConfig:
        """Build the calorie formula configuration from settings."""
        config = EnergyConfig(activity_factor=self.activity_factor)
        surplus = parse_speed_table(self.gain_surplus_kcal)
        if surplus:
            adjustments = dict(config.adjustments)
            adjustments["gain"] = {**adjustments["gain"], **surplus}
            config = EnergyConfig(
                activity_factor=self.activity_factor, adjustments=adjustments
            )
        return config


def parse_speed_table(raw: str | None) -> dict[str, int]:
    """Parse a `slow:200,moderate:300,fast:500` override from env."""
    if raw is None:
        return {}
    table: dict[str, int] = {}
    for chunk in raw.split(","):
        speed, _, value = chunk.partition(":")
        speed = speed.strip().lower()
        value = value.strip().lstrip("+")
        if speed in {"slow", "moderate", "fast"} and value.isdigit():
            table[speed] = int(value)
    return table
