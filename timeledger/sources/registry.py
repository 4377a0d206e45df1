"""Registry of checkpoint sources, keyed by name."""

from timeledger.sources.base import BaseCheckpointSource

# Registry of all available checkpoint sources
_SOURCES: dict[str, type[BaseCheckpointSource]] = {}


def register(name: str):
    """Decorator to register a checkpoint source class by name."""

    def wrapper(cls: type[BaseCheckpointSource]):
        _SOURCES[name] = cls
        return cls

    return wrapper


def get_source(name: str) -> type[BaseCheckpointSource]:
    """Get a registered checkpoint source class by name."""
    if name not in _SOURCES:
        available = ", ".join(sorted(_SOURCES.keys()))
        raise KeyError(f"Unknown checkpoint source '{name}'. Available: {available}")
    return _SOURCES[name]


def list_sources() -> list[str]:
    """List all registered checkpoint source names."""
    return sorted(_SOURCES.keys())
