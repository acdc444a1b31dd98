from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including the database name, e.g. mongodb://localhost/studysphere
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    session_secret_key: str
    session_max_age: int = 24 * 60 * 60  # Session token lifetime and cookie Max-Age, in seconds
    secure_cookies: bool = True  # Disable only for local development over plain HTTP
    cors_origins: list[str] = []
    default_timezone: str = "UTC"  # Day boundaries for streaks when the user has no timezone setting

    model_config = {
        "env_file": [".env"],
        "env_prefix": "STUDYSPHERE_",
        "extra": "ignore",
    }
