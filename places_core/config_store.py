"""
File-backed configuration namespaces and their change notifications.

Each namespace lives in ``<config dir>/cosmic/<namespace>/v<version>/`` with
one RON-encoded file per key, the layout cosmic-config uses. A different
version reads a different directory, so a version mismatch looks like an
empty document.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Tuple, Type

from PySide6.QtCore import QFileSystemWatcher, QObject, QStandardPaths, QTimer, Signal

from places_applet import logger as app_logger
from places_shared import ron
from places_shared.config_schema import ConfigLoadError, ConfigT, build_config, config_keys

_LOGGER = app_logger.get_logger()

DEFAULT_POLL_INTERVAL_MS = 15000


class ConfigStoreError(OSError):
    """Raised when a config namespace directory cannot be opened or created."""


def default_config_root() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
    config_home = Path(location) if location else Path.home() / ".config"
    return config_home / "cosmic"


def _can_appear(directory: Path) -> bool:
    """True when ``directory`` exists or could still be created by its owner."""
    for candidate in (directory, *directory.parents):
        if candidate.exists():
            return candidate.is_dir()
    return False


@dataclass(frozen=True)
class ConfigUpdate(Generic[ConfigT]):
    """A best-effort document plus the keys that changed and any load errors."""

    config: ConfigT
    keys: Tuple[str, ...] = ()
    errors: Tuple[ConfigLoadError, ...] = field(default_factory=tuple)


class ConfigStore(Generic[ConfigT]):
    """Reads and writes one versioned config namespace."""

    def __init__(
        self,
        namespace: str,
        version: int,
        config_type: Type[ConfigT],
        *,
        root: Optional[Path] = None,
    ) -> None:
        if version < 1:
            raise ValueError("Config versions are positive integers.")
        self.namespace = namespace
        self.version = version
        self.config_type = config_type
        self.directory = (root or default_config_root()) / namespace / f"v{version}"

    @classmethod
    def open(
        cls,
        namespace: str,
        version: int,
        config_type: Type[ConfigT],
        *,
        root: Optional[Path] = None,
        create: bool = True,
    ) -> "ConfigStore[ConfigT]":
        """
        Open a namespace. With ``create=False`` the directory is left alone;
        a missing one reads as an empty document until its owner writes it.
        """
        store = cls(namespace, version, config_type, root=root)
        if not create:
            if not _can_appear(store.directory):
                raise ConfigStoreError(f"Cannot open config namespace {namespace} v{version}: not a directory")
            return store
        try:
            store.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigStoreError(f"Cannot open config namespace {namespace} v{version}: {exc}") from exc
        return store

    @property
    def keys(self) -> List[str]:
        return config_keys(self.config_type)

    def key_path(self, key: str) -> Path:
        return self.directory / key

    def read_texts(self) -> Tuple[Dict[str, str], List[ConfigLoadError]]:
        """Raw file contents per present key. Missing keys are not errors."""
        texts: Dict[str, str] = {}
        errors: List[ConfigLoadError] = []
        for key in self.keys:
            try:
                texts[key] = self.key_path(key).read_text(encoding="utf-8")
            except FileNotFoundError:
                continue
            except OSError as exc:
                errors.append(ConfigLoadError(key=key, message=f"unreadable: {exc}"))
        return texts, errors

    def decode(self, texts: Dict[str, str]) -> Tuple[ConfigT, List[ConfigLoadError]]:
        raw_values: Dict[str, Any] = {}
        errors: List[ConfigLoadError] = []
        for key, text in texts.items():
            try:
                raw_values[key] = ron.loads(text)
            except ron.RonError as exc:
                errors.append(ConfigLoadError(key=key, message=f"not valid RON: {exc}"))
        config, schema_errors = build_config(self.config_type, raw_values)
        return config, errors + schema_errors

    def get(self) -> Tuple[ConfigT, List[ConfigLoadError]]:
        """Load the whole document; broken keys fall back to their defaults."""
        texts, read_errors = self.read_texts()
        config, decode_errors = self.decode(texts)
        return config, read_errors + decode_errors

    def set(self, key: str, value: Any) -> None:
        """Write one key atomically."""
        if key not in self.keys:
            raise KeyError(key)
        encoded = ron.dumps(self.config_type.encode_key(key, value))
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(encoded)
            os.replace(tmp_name, self.key_path(key))
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class ConfigWatcher(QObject):
    """
    Pushes a ConfigUpdate whenever a key of the watched namespace changes.

    A QFileSystemWatcher on the namespace directory gives prompt
    notifications; a slow poll timer catches anything the watcher misses
    (files replaced by rename drop out of the watch list, for example).
    Signals are delivered on the Qt event loop, one at a time.
    """

    updated = Signal(object)

    def __init__(
        self,
        store: ConfigStore,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._snapshot: Dict[str, str] = {}
        self._watcher = QFileSystemWatcher(self)
        self._watcher.directoryChanged.connect(self._on_fs_event)  # type: ignore[arg-type]
        self._watcher.fileChanged.connect(self._on_fs_event)  # type: ignore[arg-type]
        self._timer = QTimer(self)
        self._timer.setInterval(poll_interval_ms)
        self._timer.timeout.connect(self.reload)  # type: ignore[arg-type]

    @property
    def store(self) -> ConfigStore:
        return self._store

    def start(self) -> None:
        """Take the current contents as the baseline and begin watching."""
        self._snapshot, _ = self._store.read_texts()
        self._rearm()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        watched = self._watcher.files() + self._watcher.directories()
        if watched:
            self._watcher.removePaths(watched)

    def reload(self) -> Optional[ConfigUpdate]:
        """Re-read the namespace and emit an update if any key changed."""
        texts, read_errors = self._store.read_texts()
        changed = tuple(
            key for key in self._store.keys if texts.get(key) != self._snapshot.get(key)
        )
        self._rearm()
        if not changed:
            return None
        self._snapshot = texts
        config, decode_errors = self._store.decode(texts)
        update = ConfigUpdate(config=config, keys=changed, errors=tuple(read_errors + decode_errors))
        _LOGGER.debug("Config {} changed keys: {}", self._store.namespace, ", ".join(changed))
        self.updated.emit(update)
        return update

    def _on_fs_event(self, _path: str) -> None:
        self.reload()

    def _rearm(self) -> None:
        directory = str(self._store.directory)
        if self._store.directory.is_dir() and directory not in self._watcher.directories():
            self._watcher.addPath(directory)
        watched_files = set(self._watcher.files())
        for key in self._store.keys:
            path = self._store.key_path(key)
            if str(path) not in watched_files and path.exists():
                self._watcher.addPath(str(path))
