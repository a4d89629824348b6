"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, model_validator


class RoutingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    short_term_days: int = Field(default=15, ge=0)
    seasonal_days: int = Field(default=210, ge=1)

    @model_validator(mode="after")
    def _seasonal_after_short_term(self) -> "RoutingConfig":
        if self.seasonal_days <= self.short_term_days:
            raise ValueError("seasonal_days must be greater than short_term_days")
        return self


class ProvidersConfig(BaseModel):
    model_config = {"extra": "forbid"}

    nasa_base_url: str = "https://power.larc.nasa.gov/api/temporal/daily/point"
    meteomatics_base_url: str = "https://api.meteomatics.com"
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "weather-planner/0.1.0"
    standard_model: str = "mix"
    seasonal_model: str = "ecmwf-ens"
    climate_scenario: str = "mri-esm2-ssp585"
    timeout_seconds: float = Field(default=5.0, gt=0.0, le=30.0)
    max_retries: int = Field(default=1, ge=0)
    retry_base_delay: float = Field(default=0.5, ge=0.0)


class RateLimitConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_requests_per_minute: int = Field(default=30, ge=1)
    min_time_between_requests_ms: int = Field(default=2000, ge=0)
    request_window_ms: int = Field(default=60000, ge=1)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    capacity: int = Field(default=50, ge=1)
    evict_count: int = Field(default=10, ge=1)


class AIConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.0-flash"
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3001, ge=1, le=65535)


class PlannerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    routing: RoutingConfig = RoutingConfig()
    providers: ProvidersConfig = ProvidersConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
    cache: CacheConfig = CacheConfig()
    ai: AIConfig = AIConfig()
    server: ServerConfig = ServerConfig()
