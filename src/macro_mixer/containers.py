"""Dependency container wiring for the application."""

from dataclasses import dataclass

from macro_mixer.adapters.toml_loader import TomlInputLoader
from macro_mixer.config import Settings
from macro_mixer.services.mixer import MixService
from macro_mixer.services.search import SearchEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    loader: TomlInputLoader
    mix_service: MixService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    engine = SearchEngine(
        step_grams=resolved_settings.step_grams,
        max_iterations=resolved_settings.max_iterations,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        loader=TomlInputLoader(),
        mix_service=MixService(engine=engine),
    )
