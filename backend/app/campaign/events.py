"""
Campaign event names dispatched through the event bus.
"""
from enum import Enum


class CampaignEvents(str, Enum):
    """Campaign bundle event names"""

    # Dispatched once per build with a CampaignBuilderEvent; plugins register
    # their lead actions, system actions and outcomes while handling it
    ON_BUILD = "campaign.on_build"


__all__ = ["CampaignEvents"]
