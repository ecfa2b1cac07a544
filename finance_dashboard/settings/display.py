from typing import Annotated

from annotated_types import Ge
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finance_dashboard.services.formatting import SEPARATORS


class DisplaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    locale: str = "pt_BR"
    currency_symbol: str = "R$"
    placeholder: str = "--"
    recent_limit: Annotated[int, Ge(ge=1)] = 10

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if v not in SEPARATORS:
            raise ValueError(
                f"unsupported locale, expected one of {sorted(SEPARATORS)}"
            )
        return v
