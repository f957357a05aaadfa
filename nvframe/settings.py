"""A shared registry of typed setting groups and their editor-side handlers."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable, Dict, List, MutableMapping, Sequence, Type, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

UpdateHandler = Callable[[Any], None]
Reader = Callable[[], Any]

_NOTIFIER_TEMPLATE = (
    'exe "'
    "fun! NeovideNotify{0}Changed(d, k, z)\n"
    "call rpcnotify(1, 'setting_changed', '{0}', g:neovide_{0})\n"
    "endf\n"
    "call dictwatcheradd(g:, 'neovide_{0}', 'NeovideNotify{0}Changed')\""
)


class Settings:
    """Holds one value per setting type plus per-property update and read handlers.

    Values are copied on the way in and on the way out, so callers never share
    state with the registry.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._settings: Dict[type, Any] = {}
        self._listeners: Dict[str, UpdateHandler] = {}
        self._readers: Dict[str, Reader] = {}

    @property
    def listeners(self) -> Dict[str, UpdateHandler]:
        """A snapshot of the registered update handlers."""
        with self._lock:
            return dict(self._listeners)

    @property
    def readers(self) -> Dict[str, Reader]:
        """A snapshot of the registered reader functions."""
        with self._lock:
            return dict(self._readers)

    def set_setting_handlers(
        self, property_name: str, update_func: UpdateHandler, reader_func: Reader
    ) -> None:
        """Register how a property is updated from, and read back for, the editor."""
        with self._lock:
            self._listeners[property_name] = update_func
            self._readers[property_name] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of value, replacing any earlier value of the same type."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._settings[type(value)] = stored

    def get(self, setting_type: Type[T]) -> T:
        """Return a copy of the stored value of the given type."""
        with self._lock:
            try:
                value = self._settings[setting_type]
            except KeyError:
                raise KeyError(
                    f"Trying to retrieve a settings object that doesn't exist: "
                    f"{setting_type.__name__}"
                ) from None
            return copy.deepcopy(value)

    def read_initial_values(self, variables: MutableMapping[str, Any]) -> None:
        """Synchronise with the editor's global variables.

        For each property, an existing ``neovide_<name>`` variable is fed to its
        update handler; a missing one is filled in from the property's reader.
        """
        with self._lock:
            names = list(self._listeners)
        for name in names:
            variable_name = f"neovide_{name}"
            if variable_name in variables:
                self._listener(name)(variables[variable_name])
            else:
                log.debug("Initial value load failed for %s: not set", name)
                with self._lock:
                    reader = self._readers[name]
                variables[variable_name] = reader()

    def changed_listener_commands(self) -> List[str]:
        """Editor commands that make each property notify us when it changes."""
        with self._lock:
            names = list(self._listeners)
        return [_NOTIFIER_TEMPLATE.format(name) for name in names]

    def handle_changed_notification(self, arguments: Sequence[Any]) -> None:
        """Dispatch a ``setting_changed`` notification of the form [name, value]."""
        if len(arguments) < 2:
            raise ValueError("setting change notification needs a name and a value")
        name, value = arguments[0], arguments[1]
        if not isinstance(name, str):
            raise TypeError(f"setting name must be a string, got {name!r}")
        self._listener(name)(value)

    def _listener(self, name: str) -> UpdateHandler:
        with self._lock:
            try:
                return self._listeners[name]
            except KeyError:
                raise KeyError(f"No setting handler registered for {name!r}") from None


SETTINGS = Settings()