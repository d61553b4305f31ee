"""
app/campaign/plugins

Built-in campaign builder plugins.
"""
from typing import Dict, Iterable, List, Type

from app.campaign.plugins.email import EmailPlugin
from app.campaign.plugins.lead import LeadPlugin
from app.campaign.plugins.page import PagePlugin

BUILTIN_PLUGINS: Dict[str, Type] = {
    "lead": LeadPlugin,
    "email": EmailPlugin,
    "page": PagePlugin,
}


def get_builtin_plugins(names: Iterable[str]) -> List:
    """
    Instantiate built-in plugins by name, in the given order.

    Raises:
        KeyError: Unknown plugin name
    """
    plugins = []
    for name in names:
        if name not in BUILTIN_PLUGINS:
            raise KeyError(f"Unknown campaign plugin '{name}'. Available: {sorted(BUILTIN_PLUGINS)}")
        plugins.append(BUILTIN_PLUGINS[name]())
    return plugins


__all__ = ["BUILTIN_PLUGINS", "get_builtin_plugins", "EmailPlugin", "LeadPlugin", "PagePlugin"]
