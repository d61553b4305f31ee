"""
app/campaign/descriptor.py

Descriptor record for campaign builder components.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ActionCategory(str, Enum):
    """The three independent collections a plugin can register into."""

    LEAD_ACTION = "lead_action"
    SYSTEM_ACTION = "system_action"
    OUTCOME = "outcome"


# Keys of the incoming mapping that map onto dedicated descriptor fields
_FORM_TYPE_KEYS = ("formType", "form_type")
_KNOWN_KEYS = {"label", "description", "callback", *_FORM_TYPE_KEYS}


@dataclass
class ActionDescriptor:
    """
    Metadata for one registered action or outcome.

    Attributes:
        label: Display label (already translated once stored)
        description: Short description (already translated, "" when omitted)
        form_type: Name of the form-building service for the action's settings
        callback: Callable or callable reference; never invoked by the registry
        extra: Any further keys supplied by the plugin, kept verbatim
    """

    label: str
    description: str = ""
    form_type: Optional[str] = None
    callback: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ActionDescriptor":
        """Build a descriptor from a plugin supplied mapping (no validation)."""
        form_type = None
        for key in _FORM_TYPE_KEYS:
            if data.get(key) is not None:
                form_type = data[key]
                break

        return cls(
            label=data.get("label", ""),
            description=data.get("description") or "",
            form_type=form_type,
            callback=data.get("callback"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    @property
    def has_callback(self) -> bool:
        return self.callback is not None

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping view, in the shape plugins supplied it."""
        result: Dict[str, Any] = dict(self.extra)
        result.update({
            "label": self.label,
            "description": self.description,
            "formType": self.form_type,
            "callback": self.callback,
        })
        return result


__all__ = ["ActionCategory", "ActionDescriptor"]
