"""
Page plugin - page hit trigger and page publishing.
"""
from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.callables import CallbackContext


def page_hit(context: CallbackContext) -> bool:
    """Only continue for hits on the configured pages (all pages when none configured)."""
    pages = context.properties.get("pages") or []
    if not pages:
        return True
    hit = (context.passthrough or {}).get("page")
    return hit in pages


def publish_page(context: CallbackContext) -> bool:
    """Record the configured page as published on the passthrough mapping."""
    page = context.properties.get("page")
    if page is None:
        return False
    if isinstance(context.passthrough, dict):
        context.passthrough.setdefault("published", []).append(page)
    return True


class PagePlugin:
    """Registers landing page components."""

    @property
    def name(self) -> str:
        return "page"

    def on_campaign_build(self, event: CampaignBuilderEvent) -> None:
        event.add_lead_action("page.pagehit", {
            "label": "mautic.page.campaign.event.pagehit",
            "description": "mautic.page.campaign.event.pagehit_descr",
            "formType": "campaignevent_pagehit",
            "callback": "app.campaign.plugins.page.page_hit",
            "group": "page",
        })
        event.add_system_action("page.publish", {
            "label": "mautic.page.campaign.event.publish",
            "description": "mautic.page.campaign.event.publish_descr",
            "formType": "campaignevent_pagepublish",
            "callback": "app.campaign.plugins.page:publish_page",
            "group": "page",
        })
