from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    base_url: HttpUrl = HttpUrl("http://localhost:8080")
    timeout: float = 10.0
