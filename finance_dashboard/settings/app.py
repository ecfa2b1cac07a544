from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_dashboard.models.enums import LoadPolicy


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="app_")

    app_name: str = "Finance Dashboard"
    load_policy: LoadPolicy = LoadPolicy.JOIN
    log_level: str = "INFO"
