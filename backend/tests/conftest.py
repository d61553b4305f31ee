"""
Pytest 配置和共享 fixtures
"""
import pytest

from app.campaign.builder_event import CampaignBuilderEvent
from core.engine.event_bus import EventBus
from core.i18n.translator import CatalogTranslator, IdentityTranslator


class RecordingTranslator:
    """记录调用的翻译器：返回 "tr(<id>)" 便于断言"""

    def __init__(self):
        self.calls = []

    def trans(self, message_id: str) -> str:
        self.calls.append(message_id)
        return f"tr({message_id})"


@pytest.fixture
def identity_translator():
    return IdentityTranslator()


@pytest.fixture
def recording_translator():
    return RecordingTranslator()


@pytest.fixture
def catalog_translator():
    """英文/法文小目录"""
    return CatalogTranslator(
        {
            "en": {"greeting": "Hello", "farewell": "Goodbye"},
            "fr": {"greeting": "Bonjour"},
        },
        locale="en",
        fallback_locale="en",
    )


@pytest.fixture
def bus():
    """每个测试一个全新的事件总线"""
    return EventBus()


@pytest.fixture
def builder_event(identity_translator):
    """使用原样翻译器的构建事件"""
    return CampaignBuilderEvent(identity_translator)


@pytest.fixture
def translated_event(recording_translator):
    return CampaignBuilderEvent(recording_translator)
