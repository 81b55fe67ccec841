"""TOML file loading for targets and ingredients."""

import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from macro_mixer.adapters.schemas import IngredientFile, TargetFile
from macro_mixer.domain.errors import InputFileError
from macro_mixer.domain.ingredients import RawIngredient
from macro_mixer.domain.targets import RawTarget

_logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


@dataclass
class TomlInputLoader:
    """Reads target and ingredient records from TOML files."""

    encoding: str = "utf-8"

    def load_target(self, path: str | Path) -> RawTarget:
        """Load a target record."""
        return self._load(Path(path), TargetFile).to_domain()

    def load_ingredient(self, path: str | Path) -> RawIngredient:
        """Load a single ingredient record."""
        return self._load(Path(path), IngredientFile).to_domain()

    def load_catalog(self, paths: Iterable[str | Path]) -> list[RawIngredient]:
        """Load ingredient records in the order given."""
        return [self.load_ingredient(path) for path in paths]

    def _load(self, path: Path, model: type[_ModelT]) -> _ModelT:
        try:
            text = path.read_text(encoding=self.encoding)
        except OSError as exc:
            raise InputFileError(str(path), f"could not open file ({exc})") from exc
        try:
            payload = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise InputFileError(str(path), f"invalid TOML ({exc})") from exc
        try:
            record = model.model_validate(payload)
        except ValidationError as exc:
            raise InputFileError(str(path), _describe(exc)) from exc
        _logger.debug("Loaded %s from %s", model.__name__, path)
        return record


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "record"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)
