"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from TWINKLY_* environment variables."""

    host: str = "192.168.1.160"
    led_count: int = 600
    proxy_url: str = "http://127.0.0.1:8888"
    use_proxy: bool = False
    request_timeout_seconds: float = 10.0
    demo_frame_delay_ms: int = 500
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TWINKLY_",
        env_file=".env",
        extra="ignore",
    )
