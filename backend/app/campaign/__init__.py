"""
app/campaign/__init__.py

Campaign builder component registration
"""

from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.descriptor import ActionCategory, ActionDescriptor
from app.campaign.errors import (
    CampaignBuilderError,
    DuplicateKeyError,
    MissingFieldError,
    InvalidCallableError,
    PluginRegistrationError,
)
from app.campaign.events import CampaignEvents

# Export
__all__ = [
    "CampaignBuilderEvent",
    "ActionCategory",
    "ActionDescriptor",
    "CampaignBuilderError",
    "DuplicateKeyError",
    "MissingFieldError",
    "InvalidCallableError",
    "PluginRegistrationError",
    "CampaignEvents",
]
