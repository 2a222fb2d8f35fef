from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from declaration_engine.activity import ActivityType, HourKind


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="DECLARATIONS_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="DECLARATIONS_LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="DECLARATIONS_LOG_JSON")
    max_period_days: int = Field(
        default=180,
        validation_alias="DECLARATIONS_MAX_PERIOD_DAYS",
        description="Longest calendar or declaration period accepted by the services",
    )
    extended_weeks: int = Field(
        default=2,
        validation_alias="DECLARATIONS_EXTENDED_WEEKS",
        description="Weeks appended after the regular sequence for extended programs",
    )
    holiday_api_url: str = Field(
        default="https://zilelibere.webventure.ro/api",
        validation_alias="DECLARATIONS_HOLIDAY_API_URL",
    )
    holiday_api_timeout: float = Field(default=10.0, validation_alias="DECLARATIONS_HOLIDAY_API_TIMEOUT")
    default_coefficient: float = Field(default=1.0, validation_alias="DECLARATIONS_DEFAULT_COEFFICIENT")
    coefficient_overrides: dict[str, float] = Field(
        default_factory=dict,
        validation_alias="DECLARATIONS_COEFFICIENT_OVERRIDES",
        description='JSON map of "ACTIVITY:kind" to coefficient, e.g. {"LE:course": 1.25}',
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("max_period_days", "extended_weeks")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @field_validator("coefficient_overrides")
    @classmethod
    def validate_coefficient_keys(cls, value: dict[str, float]) -> dict[str, float]:
        """Validate override keys name a known activity type and hour kind."""
        activities = {activity.value for activity in ActivityType}
        kinds = {kind.value for kind in HourKind}
        for key, coefficient in value.items():
            if key.count(":") != 1:
                raise ValueError(f"Coefficient override key must look like 'LR:course', got: {key}")
            activity, kind = key.split(":")
            if activity.strip().upper() not in activities:
                raise ValueError(f"Unknown activity type in coefficient override {key}, expected one of {sorted(activities)}")
            if kind.strip().lower() not in kinds:
                raise ValueError(f"Unknown hour kind in coefficient override {key}, expected one of {sorted(kinds)}")
            if coefficient <= 0:
                raise ValueError(f"Coefficient for {key} must be positive, got: {coefficient}")
        return value


settings = Settings()
