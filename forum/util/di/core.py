"""Configuration providers (never mocked)."""

from dishka import Scope, provide

from forum.config import CascadeSettings, Settings
from forum.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings from the environment and ``.env``, read once per container.

    Tests override values through environment variables rather than a
    mock provider.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_cascade_settings(self, settings: Settings) -> CascadeSettings:
        """Provide the cascade section on its own for the resolver."""
        return settings.cascade
