"""
Schema for the two configuration documents the applet follows.

Each document is a set of keys stored independently by the config store.
Values are decoded from RON and validated per key; a key that fails
validation is reported and replaced by its default.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Type, TypeVar

from .places import FavoriteRef, FavoriteTag
from .ron import Variant

APPLET_ID = "dev.dominiccgeh.CosmicAppletPlacesStatusIndicator"
APPLET_CONFIG_VERSION = 1
FILES_ID = "com.system76.CosmicFiles"
FILES_CONFIG_VERSION = 1

DEFAULT_FILE_MANAGER = "cosmic-files"


class ConfigValidationError(ValueError):
    """Raised when a stored key holds a value of the wrong shape."""


@dataclass(frozen=True)
class ConfigLoadError:
    """A key that could not be loaded, and why."""

    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


@dataclass(frozen=True)
class DisplayConfig:
    """Applet preferences. ``show_icon`` prefers an icon over a label in the panel."""

    show_icon: bool = True
    file_manager: str = DEFAULT_FILE_MANAGER

    @staticmethod
    def decode_key(key: str, raw: Any) -> Any:
        if key == "show_icon":
            if not isinstance(raw, bool):
                raise ConfigValidationError("show_icon must be a boolean.")
            return raw
        if key == "file_manager":
            value = _require_string(raw, field="file_manager")
            if not value:
                raise ConfigValidationError("file_manager must not be empty.")
            return value
        raise ConfigValidationError(f"Unknown key {key!r}.")

    @staticmethod
    def encode_key(key: str, value: Any) -> Any:
        return value


@dataclass(frozen=True)
class FavoritesConfig:
    """The file manager's ordered favorites list. Duplicates are kept."""

    favorites: Tuple[FavoriteRef, ...] = ()

    @staticmethod
    def decode_key(key: str, raw: Any) -> Any:
        if key == "favorites":
            return parse_favorites(raw)
        raise ConfigValidationError(f"Unknown key {key!r}.")

    @staticmethod
    def encode_key(key: str, value: Any) -> Any:
        if key == "favorites":
            return [encode_favorite(ref) for ref in value]
        return value


ConfigT = TypeVar("ConfigT", DisplayConfig, FavoritesConfig)


def config_keys(config_type: Type[ConfigT]) -> List[str]:
    return [f.name for f in fields(config_type)]


def build_config(
    config_type: Type[ConfigT], raw_values: Mapping[str, Any]
) -> Tuple[ConfigT, List[ConfigLoadError]]:
    """
    Assemble a config document from raw per-key decoded values.

    Keys absent from ``raw_values`` keep their defaults silently. Keys that
    fail validation keep their defaults and are returned as load errors.
    """
    config = config_type()
    errors: List[ConfigLoadError] = []
    updates: Dict[str, Any] = {}
    for key in config_keys(config_type):
        if key not in raw_values:
            continue
        try:
            updates[key] = config_type.decode_key(key, raw_values[key])
        except ConfigValidationError as exc:
            errors.append(ConfigLoadError(key=key, message=str(exc)))
    if updates:
        config = replace(config, **updates)
    return config, errors


def parse_favorites(raw: Any) -> Tuple[FavoriteRef, ...]:
    """
    Parse the stored favorites list.

    Each item is either a bare location variant (``Home``) or a
    ``Path("/some/dir")`` newtype variant.
    """
    if not isinstance(raw, list):
        raise ConfigValidationError("favorites must be a list.")
    return tuple(parse_favorite(item, index=i) for i, item in enumerate(raw))


def parse_favorite(raw: Any, *, index: int = 0) -> FavoriteRef:
    if not isinstance(raw, Variant):
        raise ConfigValidationError(f"favorites[{index}] must be a location name or a Path.")
    if raw.name == "Path" and raw.has_value:
        # Paths are taken verbatim; whitespace is a legal part of a file name.
        value = _require_string(raw.value, field=f"favorites[{index}].Path", strip=False)
        if not value:
            raise ConfigValidationError(f"favorites[{index}].Path must not be empty.")
        return FavoriteRef.of_path(Path(value))
    if raw.has_value:
        raise ConfigValidationError(f"favorites[{index}]: unexpected payload for {raw.name!r}.")
    try:
        return FavoriteRef.of_tag(FavoriteTag(raw.name))
    except ValueError as exc:
        raise ConfigValidationError(f"favorites[{index}]: unknown location {raw.name!r}.") from exc


def encode_favorite(ref: FavoriteRef) -> Variant:
    if ref.tag is not None:
        return Variant.unit(ref.tag.value)
    return Variant.newtype("Path", str(ref.path))


def _require_string(value: Any, *, field: str, strip: bool = True) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(f"{field} must be a string.")
    return value.strip() if strip else value
