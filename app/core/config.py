from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DEFAULT_MAX_DISTANCE_KM: float = 10.0
    MIN_DISTANCE_LIMIT_KM: float = 1.0
    MAX_DISTANCE_LIMIT_KM: float = 50.0
    SELECTION_CLEAR_ON_FILTER_MISS: bool = False

    ENERGY_UNITS_PER_HOUR: float = 25.0
    CURRENCY_SYMBOL: str = "₹"
    CURRENCY_DECIMALS: int = 2

    BOOKING_DEFAULT_DURATION_HOURS: int = 2
    BOOKING_MIN_DURATION_HOURS: int = 1
    BOOKING_MAX_DURATION_HOURS: int = 8
    BOOKING_AUTO_CLOSE_SECONDS: float = 3.0

    STATION_DIRECTORY_URL: str | None = None
    PAYMENT_GATEWAY_URL: str | None = None
    PAYMENT_GATEWAY_API_KEY: str | None = None

    SESSION_TTL_SECONDS: float = 1800.0


settings = Settings()
