"""Single-instance base classes."""

from __future__ import annotations

import threading
from typing import Any, TypeVar

from nsflow.assertion import check

_S = TypeVar("_S", bound="Singleton")
_T = TypeVar("_T", bound="Singularity")


class Singleton:
    """Base for classes with one lazily created, shared instance per subclass."""

    _lock = threading.RLock()
    _singleton_instance: Any = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._singleton_instance = None

    @classmethod
    def instance(cls: type[_S]) -> _S:
        """Return the shared instance, creating it on first use."""
        with Singleton._lock:
            if cls._singleton_instance is None:
                cls._singleton_instance = cls()
            return cls._singleton_instance

    @classmethod
    def is_instantiated(cls) -> bool:
        """Whether the shared instance has been created."""
        return cls._singleton_instance is not None

    def __copy__(self) -> Any:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> Any:
        raise TypeError(f"{type(self).__name__} cannot be copied")


_registry: dict[type, "Singularity"] = {}
_registry_lock = threading.Lock()


class Singularity:
    """Base for classes of which at most one instance may live at a time."""

    def __init__(self) -> None:
        with _registry_lock:
            check(type(self) not in _registry, "Singularity instance has already been created!")
            _registry[type(self)] = self

    def release(self) -> None:
        """Retire this instance so another may be created."""
        with _registry_lock:
            check(type(self) in _registry, "Singularity instance has to be created first!")
            del _registry[type(self)]

    @classmethod
    def current(cls: type[_T]) -> _T:
        """Return the live instance; it must exist."""
        instance = _registry.get(cls)
        check(instance is not None, "Singularity instance has to be created first!")
        return instance  # type: ignore[return-value]

    @classmethod
    def current_or_none(cls: type[_T]) -> _T | None:
        """Return the live instance, or None."""
        return _registry.get(cls)  # type: ignore[return-value]

    def __enter__(self: _T) -> _T:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.release()

    def __copy__(self) -> Any:
        raise TypeError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> Any:
        raise TypeError(f"{type(self).__name__} cannot be copied")