"""ASGI entry point of the finance dashboard service."""

import logging

from finance_dashboard.core.app import create_app
from finance_dashboard.settings.app import AppSettings

settings = AppSettings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = create_app(title=settings.app_name)
