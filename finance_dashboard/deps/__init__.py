from dishka import AsyncContainer, Provider, Scope, make_async_container
from dishka.integrations.fastapi import FastapiProvider
from pydantic_settings import BaseSettings

from finance_dashboard.deps.http import TransactionApiProvider
from finance_dashboard.services.dashboard import DashboardServicesProvider
from finance_dashboard.settings.api import ApiSettings
from finance_dashboard.settings.app import AppSettings
from finance_dashboard.settings.display import DisplaySettings


class AppProvider(Provider):
    def register_settings(self, settings: type[BaseSettings]):
        self.provide(lambda: settings(), scope=Scope.APP, provides=settings)


def create_container(api_provider: Provider | None = None) -> AsyncContainer:
    """Build the application container.

    ``api_provider`` replaces the HTTP-backed collaborators, which is how
    tests plug in in-memory readers and writers.
    """
    provider = AppProvider()
    provider.register_settings(AppSettings)
    provider.register_settings(ApiSettings)
    provider.register_settings(DisplaySettings)

    return make_async_container(
        provider,
        api_provider or TransactionApiProvider(),
        DashboardServicesProvider(),
        FastapiProvider(),
    )
