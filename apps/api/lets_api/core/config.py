from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="lets-feeds", validation_alias="APP_NAME")
    app_env: str = Field(default="dev", validation_alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    secret_key: str = Field(default="change-me", validation_alias="SECRET_KEY")
    database_url: str = Field(validation_alias="DATABASE_URL")

    pagination_limit: int = Field(default=20, validation_alias="PAGINATION_LIMIT")
    pagination_offset: int = Field(default=0, validation_alias="PAGINATION_OFFSET")

    # size of the "latest" sub-lists embedded in a resolved activity
    activity_latest_likes: int = Field(default=5, validation_alias="ACTIVITY_LATEST_LIKES")
    activity_latest_rsvp: int = Field(default=5, validation_alias="ACTIVITY_LATEST_RSVP")
    activity_latest_comments: int = Field(default=5, validation_alias="ACTIVITY_LATEST_COMMENTS")
    activity_latest_photos: int = Field(default=5, validation_alias="ACTIVITY_LATEST_PHOTOS")

    upcoming_feeds_past_n_days: int = Field(default=1, validation_alias="UPCOMING_FEEDS_PAST_N_DAYS")


settings = Settings()
