"""
Environment-driven configuration for the RentACar site.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RAC_", extra="ignore")

    secret_key: str = "django-insecure-rent-a-car-development-key"
    debug: bool = False
    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "testserver"]
    log_level: str = "INFO"

    # External collaborators
    cars_source_url: str = "https://myfakeapi.com/api/cars"
    api_base_url: str = "http://localhost:4000"
    auth_base: str = "https://dummyjson.com"
    auth_strategy: Literal["auth_login", "user_lookup"] = "auth_login"
    http_timeout_seconds: float = 10.0

    # Catalogue
    cars_cache_timeout: int = 60 * 60 * 6
    vehicles_page_size: int = 9

    # Booking
    phone_min_length: int = 7
    booking_redirect_delay: int = 3


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
