"""ContextVar-based configuration for gomin.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The parser and ``minify()`` read the active config; nothing is passed
through constructor arguments.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from gomin.config import MinifyConfig, config_context

    with config_context(MinifyConfig(final_newline=True)):
        text = minify(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MinifyConfig:
    """Immutable configuration.

    Note: source_file is intentionally excluded; it's per-call state,
    not configuration. It remains on the Parser instance.

    Attributes:
        max_nesting_depth: Deepest expression/statement nesting the parser
            accepts before raising ParseError (guards the interpreter stack)
        final_newline: Append a newline to the text returned by ``minify()``

    """

    max_nesting_depth: int = 100
    final_newline: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "MinifyConfig":
        """Create MinifyConfig from dictionary.

        Only includes keys that are valid MinifyConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = MinifyConfig.from_dict({"final_newline": True, "x": 1})
            >>> config.final_newline
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: MinifyConfig = MinifyConfig()

_config: ContextVar[MinifyConfig] = ContextVar(
    "gomin_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> MinifyConfig:
    """Get current configuration (thread-local)."""
    return _config.get()


def set_config(config: MinifyConfig) -> None:
    """Set configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _config.set(config)


def reset_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: MinifyConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(MinifyConfig(max_nesting_depth=50)):
        ...     tree = parse(source)
        >>> # Automatically reset to previous config

    """
    previous = _config.get()
    _config.set(config)
    try:
        yield
    finally:
        _config.set(previous)


__all__ = [
    "MinifyConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
]
