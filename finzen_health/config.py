"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from finzen_health.domain.policy import BudgetPolicy, VibePolicy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    reporting_api_base: str = "http://localhost:3001/api"

    # Service
    service_name: str = "finzen-health"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Vibe composite weights (must sum to 1.0)
    vibe_volatility_weight: float = 0.3
    vibe_burn_rate_weight: float = 0.3
    vibe_runway_weight: float = 0.4

    # Budget control bands on mean capped progress
    budget_well_controlled_below: float = 60.0
    budget_normal_control_below: float = 80.0

    def vibe_policy(self) -> VibePolicy:
        return VibePolicy(
            volatility_weight=self.vibe_volatility_weight,
            burn_rate_weight=self.vibe_burn_rate_weight,
            runway_weight=self.vibe_runway_weight,
        )

    def budget_policy(self) -> BudgetPolicy:
        return BudgetPolicy(
            control_bands=(self.budget_well_controlled_below, self.budget_normal_control_below),
        )


settings = Settings()
