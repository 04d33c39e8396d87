"""Helpers for creating and working with the Slidemill plugin manager."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from typing import Iterable as TypingIterable
from typing import Tuple

import pluggy

from ..config import SlidemillConfig
from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .spec import SlidemillHookSpec
from .types import FormatContribution

logger = logging.getLogger(__name__)


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or registration."""


def create_plugin_manager(*, load_entry_points: bool = True) -> pluggy.PluginManager:
    """Instantiate a pluggy ``PluginManager`` configured for Slidemill."""

    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(SlidemillHookSpec)

    if load_entry_points:
        load_plugin_entry_points(manager)

    return manager


def register_modules(
    manager: pluggy.PluginManager,
    modules: Sequence[object],
) -> None:
    """Register in-process plugin modules with the manager."""

    for module in modules:
        try:
            manager.register(module)
        except (pluggy.PluginValidationError, ValueError) as exc:
            raise PluginRegistrationError(str(exc)) from exc


def iter_format_contributions(
    manager: pluggy.PluginManager,
    config: SlidemillConfig,
) -> Iterator[FormatContribution]:
    """Yield output format contributions from all registered plugins."""

    for contributions in manager.hook.output_formats(config=config):
        if not contributions:
            continue
        yield from _ensure_iterable(contributions)


def load_plugin_entry_points(
    manager: pluggy.PluginManager,
    *,
    group: str = ENTRY_POINT_GROUP,
) -> None:
    """Load plugin entry points via ``importlib.metadata`` integration."""

    loaded = manager.load_setuptools_entrypoints(group)
    if loaded:
        logger.debug("Loaded %d plugin(s) from entry point group %s", loaded, group)


def iter_plugin_modules() -> Tuple[object, ...]:
    """Return plugin modules bundled with Slidemill."""

    return _builtin_plugin_modules()


@lru_cache(maxsize=1)
def _builtin_plugin_modules() -> Tuple[object, ...]:
    from .builtin import BUILTIN_PLUGINS

    return BUILTIN_PLUGINS


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = create_plugin_manager()
    register_modules(manager, iter_plugin_modules())
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Clear cached plugin manager so future calls rebuild state."""

    _build_plugin_manager.cache_clear()
    _builtin_plugin_modules.cache_clear()


def load_format_contributions(
    config: SlidemillConfig,
) -> dict[str, FormatContribution]:
    """Collect output format contributions from all registered plugins."""

    manager = get_plugin_manager()

    contributions: dict[str, FormatContribution] = {}
    for contribution in iter_format_contributions(manager, config):
        key = contribution.format_id.lower()
        if key in contributions:
            raise PluginRegistrationError(
                f"Duplicate output format detected: '{contribution.format_id}'."
            )
        contributions[key] = contribution

    return contributions


def _ensure_iterable(
    contributions: object,
) -> TypingIterable[FormatContribution]:
    """Normalize hook return values to a concrete iterable of contributions."""

    if isinstance(contributions, FormatContribution):
        return (contributions,)

    if not isinstance(contributions, Iterable) or isinstance(
        contributions, (str, bytes)
    ):
        raise PluginRegistrationError(
            "Plugin hook did not return an iterable contribution collection."
        )

    normalized: list[FormatContribution] = []
    for item in contributions:
        if not isinstance(item, FormatContribution):
            raise PluginRegistrationError(
                "Format contributions must be FormatContribution instances."
            )
        normalized.append(item)
    return tuple(normalized)


__all__ = [
    "PluginRegistrationError",
    "create_plugin_manager",
    "get_plugin_manager",
    "iter_format_contributions",
    "iter_plugin_modules",
    "load_format_contributions",
    "load_plugin_entry_points",
    "register_modules",
    "reset_plugin_manager_cache",
]
