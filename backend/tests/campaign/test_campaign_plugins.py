"""
tests/campaign/test_campaign_plugins.py

CampaignPlugin protocol, plugin subscription and the built-in plugins.
"""
import pytest

from app.campaign.builder_event import CampaignBuilderEvent
from app.campaign.callables import CallbackContext, invoke_callback, resolve_callable
from app.campaign.descriptor import ActionCategory
from app.campaign.events import CampaignEvents
from app.campaign.plugins import (
    BUILTIN_PLUGINS,
    EmailPlugin,
    LeadPlugin,
    PagePlugin,
    get_builtin_plugins,
)
from app.campaign_plugin import CampaignPlugin, register_plugins
from core.i18n.translator import CatalogTranslator, load_catalogs


@pytest.fixture
def english_event():
    from app.config import DEFAULT_TRANSLATIONS_DIR
    translator = CatalogTranslator(load_catalogs(DEFAULT_TRANSLATIONS_DIR), locale="en")
    return CampaignBuilderEvent(translator)


@pytest.fixture
def populated_event(english_event):
    for plugin in get_builtin_plugins(["lead", "email", "page"]):
        plugin.on_campaign_build(english_event)
    return english_event


class TestCampaignPluginProtocol:
    """CampaignPlugin is a runtime checkable Protocol"""

    def test_dummy_satisfies_protocol(self):
        class Dummy:
            @property
            def name(self):
                return "dummy"

            def on_campaign_build(self, event):
                pass

        assert isinstance(Dummy(), CampaignPlugin)

    def test_incomplete_class_does_not_satisfy(self):
        class Incomplete:
            @property
            def name(self):
                return "incomplete"

        assert not isinstance(Incomplete(), CampaignPlugin)

    @pytest.mark.parametrize("plugin_cls", [LeadPlugin, EmailPlugin, PagePlugin])
    def test_builtin_plugins_satisfy_protocol(self, plugin_cls):
        assert isinstance(plugin_cls(), CampaignPlugin)


class TestRegisterPlugins:
    """Subscribing plugins to campaign.on_build"""

    def test_subscribes_each_plugin(self, bus):
        count = register_plugins(bus, [LeadPlugin(), EmailPlugin()])

        assert count == 2
        listeners = bus.get_listeners(CampaignEvents.ON_BUILD)[CampaignEvents.ON_BUILD]
        assert len(listeners) == 2

    def test_rejects_non_plugin(self, bus):
        with pytest.raises(TypeError):
            register_plugins(bus, [object()])

    def test_same_plugin_name_subscribed_once(self, bus):
        assert register_plugins(bus, [LeadPlugin(), EmailPlugin()]) == 2
        assert register_plugins(bus, [LeadPlugin(), PagePlugin()]) == 1

        listeners = bus.get_listeners(CampaignEvents.ON_BUILD.value)[CampaignEvents.ON_BUILD.value]
        assert len(listeners) == 3

    def test_same_plugin_name_within_one_call(self, bus, identity_translator):
        assert register_plugins(bus, [LeadPlugin(), LeadPlugin()]) == 1

        result = bus.dispatch(CampaignEvents.ON_BUILD.value, CampaignBuilderEvent(identity_translator))
        assert result.ok
        assert result.listener_count == 1

    def test_subscribes_under_plain_event_name(self, bus):
        register_plugins(bus, [PagePlugin()])
        assert list(bus.get_listeners()) == ["campaign.on_build"]
        assert type(list(bus.get_listeners())[0]) is str

    def test_dispatch_populates_event(self, bus, identity_translator):
        register_plugins(bus, [PagePlugin()])
        event = CampaignBuilderEvent(identity_translator)

        result = bus.dispatch(CampaignEvents.ON_BUILD, event)

        assert result.ok
        assert event.has(ActionCategory.LEAD_ACTION, "page.pagehit")
        assert event.has(ActionCategory.SYSTEM_ACTION, "page.publish")


class TestBuiltinPlugins:
    """Components registered by the built-in plugins"""

    def test_get_builtin_plugins_order(self):
        plugins = get_builtin_plugins(["page", "lead"])
        assert [p.name for p in plugins] == ["page", "lead"]

    def test_unknown_plugin_name(self):
        with pytest.raises(KeyError):
            get_builtin_plugins(["nope"])

    def test_builtin_registry_names(self):
        assert set(BUILTIN_PLUGINS) == {"lead", "email", "page"}
        for name, plugin_cls in BUILTIN_PLUGINS.items():
            assert plugin_cls().name == name

    def test_registered_keys(self, populated_event):
        assert set(populated_event.get_lead_actions()) == {
            "lead.changepoints", "lead.changelist", "email.send", "page.pagehit",
        }
        assert set(populated_event.get_system_actions()) == {"page.publish"}
        assert set(populated_event.get_outcomes()) == {"lead.pointscheck", "email.open"}

    def test_labels_translated_and_sorted(self, populated_event):
        labels = [d.label for _, d in populated_event.list(ActionCategory.LEAD_ACTION)]
        assert labels == ["Adjust lead points", "Modify lead's lists", "Send email", "Visits a page"]

    def test_descriptions_translated(self, populated_event):
        descriptor = populated_event.get(ActionCategory.OUTCOME, "email.open")
        assert descriptor.description == "Continue when the lead opens the email."
        assert descriptor.form_type == "emailopen_list"
        assert descriptor.extra["group"] == "email"

    def test_all_callbacks_resolve(self, populated_event):
        for category in ActionCategory:
            for key, descriptor in populated_event.list(category):
                assert callable(resolve_callable(descriptor.callback)), key

    def test_plugins_twice_on_same_event_fail(self, english_event):
        LeadPlugin().on_campaign_build(english_event)
        with pytest.raises(ValueError):
            LeadPlugin().on_campaign_build(english_event)


class TestPluginCallbacks:
    """Built-in callbacks through the typed invocation entry point"""

    def test_change_points(self, populated_event):
        callback = populated_event.get(ActionCategory.LEAD_ACTION, "lead.changepoints").callback
        lead = {"points": 3}

        assert invoke_callback(callback, CallbackContext(event={"properties": {"points": -1}}, lead=lead))
        assert lead["points"] == 2

    def test_change_points_without_lead(self, populated_event):
        callback = populated_event.get(ActionCategory.LEAD_ACTION, "lead.changepoints").callback
        assert invoke_callback(callback, CallbackContext()) is False

    def test_change_lists(self, populated_event):
        callback = populated_event.get(ActionCategory.LEAD_ACTION, "lead.changelist").callback
        lead = {"lists": [1, 2]}
        context = CallbackContext(event={"properties": {"addToLists": [3], "removeFromLists": [1]}}, lead=lead)

        assert invoke_callback(callback, context)
        assert lead["lists"] == [2, 3]

    def test_points_threshold(self, populated_event):
        callback = populated_event.get(ActionCategory.OUTCOME, "lead.pointscheck").callback
        event = {"properties": {"threshold": 10}}

        assert invoke_callback(callback, CallbackContext(event=event, lead={"points": 10}))
        assert not invoke_callback(callback, CallbackContext(event=event, lead={"points": 9}))

    def test_send_email_bound_to_plugin_instance(self, populated_event):
        callback = populated_event.get(ActionCategory.LEAD_ACTION, "email.send").callback
        lead = {}

        assert invoke_callback(callback, CallbackContext(event={"properties": {"email": 7}}, lead=lead))
        assert lead["queued_emails"] == [7]

    def test_email_opened(self, populated_event):
        callback = populated_event.get(ActionCategory.OUTCOME, "email.open").callback
        event = {"properties": {"email": 7}}

        assert invoke_callback(callback, CallbackContext(event=event, passthrough={"email": 7}))
        assert not invoke_callback(callback, CallbackContext(event=event, passthrough={"email": 8}))

    def test_page_hit(self, populated_event):
        callback = populated_event.get(ActionCategory.LEAD_ACTION, "page.pagehit").callback

        assert invoke_callback(callback, CallbackContext())
        event = {"properties": {"pages": [1, 2]}}
        assert invoke_callback(callback, CallbackContext(event=event, passthrough={"page": 2}))
        assert not invoke_callback(callback, CallbackContext(event=event, passthrough={"page": 3}))

    def test_publish_page(self, populated_event):
        callback = populated_event.get(ActionCategory.SYSTEM_ACTION, "page.publish").callback
        passthrough = {}

        assert invoke_callback(callback, CallbackContext(event={"properties": {"page": 4}}, passthrough=passthrough))
        assert passthrough["published"] == [4]
        assert not invoke_callback(callback, CallbackContext())
