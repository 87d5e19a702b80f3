"""Rule registry — auto-discovers and registers all passive scan rules."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import TYPE_CHECKING

from cookie_scope import rules as rules_pkg

if TYPE_CHECKING:
    from cookie_scope.core.base import BaseRule

logger = logging.getLogger(__name__)

_registry: dict[str, BaseRule] = {}
_discovered = False


def _discover_rules() -> None:
    """Walk cookie_scope.rules.* and instantiate every BaseRule subclass."""
    global _discovered
    if _discovered:
        return

    from cookie_scope.core.base import BaseRule

    for _importer, modname, ispkg in pkgutil.iter_modules(
        rules_pkg.__path__, rules_pkg.__name__ + "."
    ):
        if not ispkg:
            continue
        # Import the rule.py inside each sub-package
        try:
            mod = importlib.import_module(f"{modname}.rule")
        except ImportError as e:
            logger.debug("Skipping %s: %s", modname, e)
            continue

        for attr_name in dir(mod):
            attr = getattr(mod, attr_name)
            if isinstance(attr, type) and issubclass(attr, BaseRule) and attr is not BaseRule:
                instance = attr()
                _registry[instance.name] = instance

    _discovered = True


def get_rule(name: str) -> BaseRule | None:
    """Get a rule by name."""
    _discover_rules()
    return _registry.get(name)


def get_rule_by_id(plugin_id: int) -> BaseRule | None:
    """Get a rule by its numeric plugin id."""
    _discover_rules()
    for rule in _registry.values():
        if rule.plugin_id == plugin_id:
            return rule
    return None


def get_all_rules() -> dict[str, BaseRule]:
    """Return all discovered rules."""
    _discover_rules()
    return dict(_registry)
