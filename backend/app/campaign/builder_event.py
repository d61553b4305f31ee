"""
app/campaign/builder_event.py

The campaign builder registration event.

One instance is created per ``campaign.on_build`` dispatch. Every plugin
listener adds its components to it; the campaign builder reads the sorted
collections once the dispatch is done. The instance is discarded with the
request that built it.

Keys are unique per collection. A lead action and an outcome (or a lead
action and a system action) may share a key.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import logging

from app.campaign.callables import is_callable_reference
from app.campaign.descriptor import ActionCategory, ActionDescriptor
from app.campaign.errors import DuplicateKeyError, InvalidCallableError, MissingFieldError
from app.campaign.sorting import natural_sort_key
from core.engine.event_bus import Event
from core.i18n.translator import Translator

logger = logging.getLogger(__name__)

# Required keys and keys that must hold a callable reference, per category
_REQUIRED_FIELDS: Dict[ActionCategory, Tuple[str, ...]] = {
    ActionCategory.LEAD_ACTION: ("label",),
    ActionCategory.SYSTEM_ACTION: ("label",),
    ActionCategory.OUTCOME: ("label", "callback"),
}
_CALLABLE_FIELDS: Tuple[str, ...] = ("callback",)

SortedView = List[Tuple[str, ActionDescriptor]]


class CampaignBuilderEvent(Event):
    """
    Registry of campaign builder components.

    Holds three independent collections (lead actions, system actions,
    outcomes), each mapping a unique key to an ``ActionDescriptor``.

    Example:
        >>> event = CampaignBuilderEvent(translator)
        >>> event.add_lead_action("lead.changepoints", {
        ...     "label": "mautic.lead.lead.events.changepoints",
        ...     "formType": "leadpoints_action",
        ...     "callback": "app.campaign.plugins.lead:change_points",
        ... })
        >>> [key for key, _ in event.list(ActionCategory.LEAD_ACTION)]
        ['lead.changepoints']
    """

    def __init__(self, translator: Translator):
        self._translator = translator
        self._collections: Dict[ActionCategory, Dict[str, ActionDescriptor]] = {
            category: {} for category in ActionCategory
        }
        self._sorted: Dict[ActionCategory, Optional[SortedView]] = {
            category: None for category in ActionCategory
        }

    @property
    def translator(self) -> Translator:
        return self._translator

    # ----------------------------
    # Registration
    # ----------------------------
    def register(
        self,
        category: Union[ActionCategory, str],
        key: str,
        descriptor: Mapping[str, Any],
    ) -> None:
        """
        Add a component to one of the collections.

        Args:
            category: Target collection
            key: Unique identifier within the collection; namespacing is
                recommended, e.g. "lead.mytrigger"
            descriptor: Mapping with the keys
                'label'       (required) what to display in the list
                'description' (optional) short description of the component
                'formType'    (optional) name of the form type service
                'callback'    (optional, required for outcomes) callable
                              reference invoked when the event is triggered
                Any other keys are kept as extras.

        Raises:
            ValueError: Unknown category
            DuplicateKeyError: Key already registered in this collection
            MissingFieldError: A required key is absent
            InvalidCallableError: 'callback' is not a plausible callable reference
        """
        category = ActionCategory(category)
        collection = self._collections[category]

        if key in collection:
            raise DuplicateKeyError(category.value, key)

        self._verify_component(_REQUIRED_FIELDS[category], _CALLABLE_FIELDS, descriptor)

        entry = ActionDescriptor.from_mapping(descriptor)
        entry.label = self._translate(descriptor["label"])
        description = descriptor.get("description")
        entry.description = self._translate(description) if description else ""

        collection[key] = entry
        self._sorted[category] = None
        logger.debug(f"Registered {category.value}: {key} (label={entry.label!r})")

    def add_lead_action(self, key: str, action: Mapping[str, Any]) -> None:
        """Add a lead action; see ``register``."""
        self.register(ActionCategory.LEAD_ACTION, key, action)

    def add_system_action(self, key: str, action: Mapping[str, Any]) -> None:
        """Add a system action; see ``register``."""
        self.register(ActionCategory.SYSTEM_ACTION, key, action)

    def add_outcome(self, key: str, outcome: Mapping[str, Any]) -> None:
        """Add an outcome; 'callback' is required. See ``register``."""
        self.register(ActionCategory.OUTCOME, key, outcome)

    def _translate(self, message_id: Any) -> str:
        """Translate a display string; None becomes "" and non-strings are stringified."""
        if message_id is None:
            return ""
        translated = self._translator.trans(str(message_id))
        return "" if translated is None else str(translated)

    @staticmethod
    def _verify_component(
        required: Tuple[str, ...],
        callables: Tuple[str, ...],
        component: Mapping[str, Any],
    ) -> None:
        """Check required keys are present and callable fields look callable."""
        for name in required:
            if name not in component:
                raise MissingFieldError(name)

        for name in callables:
            value = component.get(name)
            if value is not None and not is_callable_reference(value):
                raise InvalidCallableError(value)

    # ----------------------------
    # Reading
    # ----------------------------
    def list(self, category: Union[ActionCategory, str]) -> SortedView:
        """
        Components of a collection sorted by label.

        Natural, case-insensitive order; equal labels keep registration
        order. Computed on first read and cached until the next registration
        into the same collection.
        """
        category = ActionCategory(category)
        cached = self._sorted[category]
        if cached is None:
            cached = sorted(
                self._collections[category].items(),
                key=lambda item: natural_sort_key(item[1].label),
            )
            self._sorted[category] = cached
        return list(cached)

    def get_lead_actions(self) -> Dict[str, ActionDescriptor]:
        return dict(self.list(ActionCategory.LEAD_ACTION))

    def get_system_actions(self) -> Dict[str, ActionDescriptor]:
        return dict(self.list(ActionCategory.SYSTEM_ACTION))

    def get_outcomes(self) -> Dict[str, ActionDescriptor]:
        return dict(self.list(ActionCategory.OUTCOME))

    def has(self, category: Union[ActionCategory, str], key: str) -> bool:
        return key in self._collections[ActionCategory(category)]

    def get(self, category: Union[ActionCategory, str], key: str) -> ActionDescriptor:
        """
        Raises:
            KeyError: Key not registered in the collection
        """
        return self._collections[ActionCategory(category)][key]

    def count(self, category: Union[ActionCategory, str]) -> int:
        return len(self._collections[ActionCategory(category)])


__all__ = ["CampaignBuilderEvent"]
