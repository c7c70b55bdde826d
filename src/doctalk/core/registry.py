"""Pluggable backends selected by name from configuration."""

from typing import TypeVar, Generic, Callable, Any

from doctalk.core.exceptions import RegistryError

T = TypeVar("T")


class Registry(Generic[T]):
    """Backend classes of one kind, keyed by the `backend` value of a config section.

    Usage:
        GeneratorRegistry = Registry[BaseGenerator]("generation")

        @GeneratorRegistry.register("llama-cpp")
        class LlamaCppGenerator(BaseGenerator):
            ...

        generator = GeneratorRegistry.create(config.backend, config=config)
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._backends: dict[str, type[T]] = {}

    def register(self, name: str) -> Callable[[type[T]], type[T]]:
        """Class decorator adding a backend under `name`."""
        def add(cls: type[T]) -> type[T]:
            if name in self._backends:
                raise RegistryError(f"{self.kind} backend '{name}' already registered")
            self._backends[name] = cls
            return cls
        return add

    def get(self, name: str) -> type[T]:
        try:
            return self._backends[name]
        except KeyError:
            available = ", ".join(self.names()) or "none"
            raise RegistryError(
                f"Unknown {self.kind} backend '{name}' (available: {available})"
            ) from None

    def create(self, name: str, /, **kwargs: Any) -> T:
        """Instantiate the backend registered under `name`."""
        return self.get(name)(**kwargs)

    def names(self) -> list[str]:
        return sorted(self._backends)

    def __contains__(self, name: str) -> bool:
        return name in self._backends

    def __repr__(self) -> str:
        return f"Registry({self.kind}: {', '.join(self.names())})"
