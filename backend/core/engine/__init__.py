"""
core/engine - 核心引擎模块

- event_bus: 命名事件总线（订阅/分发）

使用方式:
    >>> from core.engine import event_bus, EventBus, Event
"""

from core.engine.event_bus import (
    Event,
    EventListener,
    DispatchResult,
    EventBusStatistics,
    EventBus,
    event_bus,
)

__all__ = [
    "Event",
    "EventListener",
    "DispatchResult",
    "EventBusStatistics",
    "EventBus",
    "event_bus",
]
