"""
Campaign builder payload models for the builder UI.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from app.campaign.descriptor import ActionDescriptor


class BuilderComponent(BaseModel):
    """One component as shown in the builder palette"""
    key: str = Field(..., description="Unique component key, e.g. lead.changepoints")
    label: str = Field(..., description="Translated label")
    description: str = Field(default="", description="Translated description")
    form_type: Optional[str] = Field(None, description="Form type service name")
    has_callback: bool = Field(default=False, description="Whether a callback is attached")
    group: Optional[str] = Field(None, description="Optional palette group")

    @classmethod
    def from_descriptor(cls, key: str, descriptor: ActionDescriptor) -> "BuilderComponent":
        group = descriptor.extra.get("group")
        return cls(
            key=key,
            label=descriptor.label,
            description=descriptor.description,
            form_type=descriptor.form_type,
            has_callback=descriptor.has_callback,
            group=str(group) if group is not None else None,
        )


class BuilderComponents(BaseModel):
    """All components available to the campaign builder, each list sorted by label"""
    lead_actions: List[BuilderComponent] = Field(default_factory=list)
    system_actions: List[BuilderComponent] = Field(default_factory=list)
    outcomes: List[BuilderComponent] = Field(default_factory=list)
