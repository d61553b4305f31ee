"""
Campaign Plugin Protocol.

Defines the interface a plugin implements to contribute components
(lead actions, system actions, outcomes) to the campaign builder.
"""
from typing import Iterable, Protocol, Set, runtime_checkable
import logging

from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.events import CampaignEvents
from core.engine.event_bus import EventBus

logger = logging.getLogger(__name__)


@runtime_checkable
class CampaignPlugin(Protocol):
    """Protocol for plugins that register campaign builder components."""

    @property
    def name(self) -> str:
        """Plugin name (e.g., 'lead')."""
        ...

    def on_campaign_build(self, event: CampaignBuilderEvent) -> None:
        """Register this plugin's components on the build event."""
        ...


def _subscribed_plugin_names(bus: EventBus) -> Set[str]:
    """Names of plugins whose build listener is already on the bus"""
    names = set()
    for listener in bus.get_listener_callables(CampaignEvents.ON_BUILD.value):
        owner = getattr(listener, "__self__", None)
        if isinstance(owner, CampaignPlugin):
            names.add(owner.name)
    return names


def register_plugins(bus: EventBus, plugins: Iterable[CampaignPlugin], priority: int = 0) -> int:
    """
    Subscribe each plugin's build listener to ``campaign.on_build``.

    A plugin whose name is already subscribed on the bus is skipped, so
    wiring the same plugin set twice does not double its registrations.

    Returns:
        Number of plugins subscribed

    Raises:
        TypeError: An object does not satisfy CampaignPlugin
    """
    subscribed = _subscribed_plugin_names(bus)
    count = 0
    for plugin in plugins:
        if not isinstance(plugin, CampaignPlugin):
            raise TypeError(f"{plugin!r} does not implement CampaignPlugin")
        if plugin.name in subscribed:
            logger.info(f"Campaign plugin '{plugin.name}' already registered, skipped")
            continue
        bus.subscribe(CampaignEvents.ON_BUILD.value, plugin.on_campaign_build, priority=priority)
        subscribed.add(plugin.name)
        count += 1
        logger.info(f"Campaign plugin '{plugin.name}' registered")
    return count
