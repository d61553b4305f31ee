"""
app/campaign/builder_service.py

Builds the campaign builder component registry by dispatching
``campaign.on_build`` to every subscribed plugin.
"""
from typing import Callable, Optional
import logging

from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.descriptor import ActionCategory
from app.campaign.errors import PluginRegistrationError
from app.campaign.events import CampaignEvents
from app.campaign.schemas import BuilderComponent, BuilderComponents
from core.engine.event_bus import DispatchResult, EventBus
from core.i18n.translator import Translator

logger = logging.getLogger(__name__)


class CampaignBuilderService:
    """
    Campaign builder component service.

    The built event is cached on the service instance; create one service per
    request (or call ``build(refresh=True)``) to pick up new registrations.

    Args:
        bus: Event bus plugins are subscribed to
        translator_factory: Returns the translator for a new build event
        strict: Raise when any plugin listener fails instead of logging and
            continuing with the components that did register
    """

    def __init__(
        self,
        bus: EventBus,
        translator_factory: Callable[[], Translator],
        strict: bool = False,
    ):
        self._bus = bus
        self._translator_factory = translator_factory
        self._strict = strict
        self._event: Optional[CampaignBuilderEvent] = None
        self._last_result: Optional[DispatchResult] = None

    @property
    def last_result(self) -> Optional[DispatchResult]:
        """Dispatch result of the most recent build, if any"""
        return self._last_result

    def build(self, refresh: bool = False) -> CampaignBuilderEvent:
        """
        Dispatch the build event and return the populated registry.

        Raises:
            PluginRegistrationError: strict mode and at least one listener failed
        """
        if self._event is not None and not refresh:
            return self._event

        event = CampaignBuilderEvent(self._translator_factory())
        result = self._bus.dispatch(CampaignEvents.ON_BUILD.value, event)
        self._last_result = result

        if result.errors:
            if self._strict:
                first_error = result.errors[0][1]
                raise PluginRegistrationError(result.failure_count, first_error) from first_error
            for listener, error in result.errors:
                logger.warning(
                    f"Skipping components from {getattr(listener, '__qualname__', listener)!s}: {error}"
                )

        logger.info(
            "Campaign builder built: "
            f"{event.count(ActionCategory.LEAD_ACTION)} lead actions, "
            f"{event.count(ActionCategory.SYSTEM_ACTION)} system actions, "
            f"{event.count(ActionCategory.OUTCOME)} outcomes"
        )

        self._event = event
        return event

    def get_components(self) -> BuilderComponents:
        """Serialisable view of the built registry for the builder UI"""
        event = self.build()

        def convert(category: ActionCategory):
            return [
                BuilderComponent.from_descriptor(key, descriptor)
                for key, descriptor in event.list(category)
            ]

        return BuilderComponents(
            lead_actions=convert(ActionCategory.LEAD_ACTION),
            system_actions=convert(ActionCategory.SYSTEM_ACTION),
            outcomes=convert(ActionCategory.OUTCOME),
        )


__all__ = ["CampaignBuilderService"]
