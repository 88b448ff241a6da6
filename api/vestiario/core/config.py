"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Vestiário"
    debug: bool = True
    secret_key: str = "dev-secret-change-in-production"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "postgresql+asyncpg://vestiario:vestiario@db:5432/vestiario"
    database_echo: bool = False

    # Auth
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 30
    jwt_algorithm: str = "HS256"

    # Venue clock. Booking dates and times are naive wall-clock values in this zone.
    timezone: str = "America/Sao_Paulo"

    # Availability
    open_hour: int = 8  # first slot starts at 08:00
    close_hour: int = 22  # last slot starts at 22:00
    booking_durations_hours: list[int] = [1, 2, 3, 4]
    # Cancelled bookings still hold their hours unless this is switched off
    count_cancelled_bookings: bool = True

    model_config = {"env_prefix": "VB_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
