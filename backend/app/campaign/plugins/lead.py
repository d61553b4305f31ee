"""
Lead plugin - contact point and list components.
"""
import logging

from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.callables import CallbackContext

logger = logging.getLogger(__name__)


def change_points(context: CallbackContext) -> bool:
    """Apply the configured point delta to the lead."""
    if context.lead is None:
        return False
    delta = int(context.properties.get("points", 0))
    context.lead["points"] = int(context.lead.get("points", 0)) + delta
    logger.debug(f"Lead points changed by {delta}")
    return True


def change_lists(context: CallbackContext) -> bool:
    """Add the lead to / remove it from the configured lists."""
    if context.lead is None:
        return False
    lists = set(context.lead.get("lists", []))
    lists.update(context.properties.get("addToLists", []))
    lists.difference_update(context.properties.get("removeFromLists", []))
    context.lead["lists"] = sorted(lists)
    return True


def points_threshold(context: CallbackContext) -> bool:
    """Outcome: the lead's points reached the configured threshold."""
    if context.lead is None:
        return False
    return int(context.lead.get("points", 0)) >= int(context.properties.get("threshold", 0))


class LeadPlugin:
    """Registers lead point and list components."""

    @property
    def name(self) -> str:
        return "lead"

    def on_campaign_build(self, event: CampaignBuilderEvent) -> None:
        event.add_lead_action("lead.changepoints", {
            "label": "mautic.lead.lead.events.changepoints",
            "description": "mautic.lead.lead.events.changepoints_descr",
            "formType": "leadpoints_action",
            "callback": "app.campaign.plugins.lead:change_points",
            "group": "lead",
        })
        event.add_lead_action("lead.changelist", {
            "label": "mautic.lead.lead.events.changelist",
            "description": "mautic.lead.lead.events.changelist_descr",
            "formType": "leadlist_action",
            "callback": change_lists,
            "group": "lead",
        })
        event.add_outcome("lead.pointscheck", {
            "label": "mautic.lead.lead.events.pointscheck",
            "description": "mautic.lead.lead.events.pointscheck_descr",
            "formType": "leadpoints_outcome",
            "callback": "app.campaign.plugins.lead:points_threshold",
            "group": "lead",
        })
