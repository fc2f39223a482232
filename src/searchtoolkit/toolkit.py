# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from injector import Injector, Module, provider, singleton

from searchtoolkit.common.config import TransportSettings


class SearchToolkitModule(Module):
    """Bindings that cannot be built from constructor type hints alone."""

    def __init__(self, settings: TransportSettings | None = None):
        self._settings = settings

    @singleton
    @provider
    def provide_transport_settings(self) -> TransportSettings:
        if self._settings is not None:
            return self._settings
        return TransportSettings.from_env()


def create_injector(settings: TransportSettings | None = None) -> Injector:
    """
    Builds the injector for a host process. Services are resolved from it,
    e.g. `create_injector().get(WebSearchService)`.
    """
    return Injector([SearchToolkitModule(settings)])
