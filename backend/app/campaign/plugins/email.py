"""
Email plugin - send email action and email open outcome.
"""
from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.callables import CallbackContext


class EmailPlugin:
    """Registers email components."""

    @property
    def name(self) -> str:
        return "email"

    def send_email(self, context: CallbackContext) -> bool:
        """Queue the configured email for the lead."""
        email_id = context.properties.get("email")
        if context.lead is None or email_id is None:
            return False
        context.lead.setdefault("queued_emails", []).append(email_id)
        return True

    @staticmethod
    def email_opened(context: CallbackContext) -> bool:
        """Outcome: the opened email is the one this event is configured for."""
        passthrough = context.passthrough or {}
        return passthrough.get("email") == context.properties.get("email")

    def on_campaign_build(self, event: CampaignBuilderEvent) -> None:
        event.add_lead_action("email.send", {
            "label": "mautic.email.campaign.event.send",
            "description": "mautic.email.campaign.event.send_descr",
            "formType": "emailsend_list",
            "callback": (self, "send_email"),
            "group": "email",
        })
        event.add_outcome("email.open", {
            "label": "mautic.email.campaign.event.open",
            "description": "mautic.email.campaign.event.open_descr",
            "formType": "emailopen_list",
            "callback": "app.campaign.plugins.email.EmailPlugin::email_opened",
            "group": "email",
        })
