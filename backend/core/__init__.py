"""
core - 框架层

独立于具体业务的通用组件：
- engine: 核心引擎（命名事件总线）
- i18n: 国际化（翻译协议、消息目录翻译器）

使用方式:
    >>> from core.engine import EventBus, Event
    >>> from core.i18n import CatalogTranslator, load_catalogs
"""

# 事件总线
from core.engine.event_bus import (
    Event,
    DispatchResult,
    EventBus,
    event_bus,
)

# 国际化
from core.i18n.translator import (
    Translator,
    IdentityTranslator,
    CatalogTranslator,
    load_catalogs,
)

__version__ = "0.1.0"

__all__ = [
    # 事件总线
    "Event",
    "DispatchResult",
    "EventBus",
    "event_bus",
    # 国际化
    "Translator",
    "IdentityTranslator",
    "CatalogTranslator",
    "load_catalogs",
]
