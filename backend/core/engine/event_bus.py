"""
core/engine/event_bus.py

框架级事件总线 - 内存级命名事件分发
插件按事件名订阅监听器，支持优先级、传播中断和监听器错误隔离
"""
from typing import Callable, Dict, List, Optional, Protocol, Tuple
from dataclasses import dataclass, field
import logging
import threading

logger = logging.getLogger(__name__)


class Event:
    """
    可分发事件基类

    监听器可以调用 stop_propagation() 阻止后续监听器收到该事件。
    """

    _propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """阻止事件继续传播"""
        self._propagation_stopped = True

    @property
    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped


class EventListener(Protocol):
    """事件监听器协议"""

    def __call__(self, event: Event) -> None:
        ...


@dataclass
class DispatchResult:
    """
    事件分发结果

    Attributes:
        event_name: 事件名（如 "campaign.on_build"）
        listener_count: 监听器数量
        called_count: 实际被调用的监听器数量
        success_count: 成功执行的监听器数量
        failure_count: 失败的监听器数量
        errors: 监听器错误列表 (listener, exception) 元组
        propagation_stopped: 是否有监听器中断了传播
    """

    event_name: str
    listener_count: int
    called_count: int = 0
    success_count: int = 0
    failure_count: int = 0
    errors: List[Tuple[Callable, Exception]] = field(default_factory=list)
    propagation_stopped: bool = False

    @property
    def ok(self) -> bool:
        return self.failure_count == 0


@dataclass
class EventBusStatistics:
    """
    事件总线统计

    Attributes:
        total_dispatched: 总分发次数
        total_processed: 监听器成功次数
        total_failed: 监听器失败次数
        listener_count: 各事件名的监听器数量
    """

    total_dispatched: int = 0
    total_processed: int = 0
    total_failed: int = 0
    listener_count: Dict[str, int] = field(default_factory=dict)


def _listener_name(listener: Callable) -> str:
    return getattr(listener, "__qualname__", None) or getattr(
        listener, "__name__", repr(listener)
    )


class EventBus:
    """
    命名事件总线

    特性：
    - 按事件名订阅，优先级高的监听器先执行
    - 同优先级按订阅顺序执行
    - 监听器异常隔离，错误记录在 DispatchResult 中
    - 支持传播中断

    Example:
        >>> bus = EventBus()
        >>> def listener(event):
        ...     print(type(event).__name__)
        >>> bus.subscribe("campaign.on_build", listener)
        >>> bus.dispatch("campaign.on_build", Event())
    """

    def __init__(self):
        # {event_name: [(priority, sequence, listener)]}
        self._listeners: Dict[str, List[Tuple[int, int, EventListener]]] = {}
        self._sequence = 0
        self._lock = threading.RLock()
        self._stats = EventBusStatistics()
        logger.debug("EventBus initialized")

    def subscribe(self, event_name: str, listener: EventListener, priority: int = 0) -> None:
        """
        订阅事件

        Args:
            event_name: 事件名
            listener: 监听器，接收事件对象作为唯一参数
            priority: 优先级，越大越先执行
        """
        with self._lock:
            entries = self._listeners.setdefault(event_name, [])
            if any(existing == listener for _, _, existing in entries):
                logger.warning(
                    f"Listener {_listener_name(listener)} already subscribed to {event_name}"
                )
                return
            self._sequence += 1
            entries.append((priority, self._sequence, listener))
            entries.sort(key=lambda entry: (-entry[0], entry[1]))
            logger.info(
                f"Listener {_listener_name(listener)} subscribed to {event_name} (priority={priority})"
            )

    def unsubscribe(self, event_name: str, listener: EventListener) -> None:
        """取消订阅"""
        with self._lock:
            entries = self._listeners.get(event_name, [])
            remaining = [entry for entry in entries if entry[2] != listener]
            if len(remaining) != len(entries):
                self._listeners[event_name] = remaining
                logger.info(f"Listener {_listener_name(listener)} unsubscribed from {event_name}")

    def dispatch(self, event_name: str, event: Optional[Event] = None) -> DispatchResult:
        """
        分发事件（同步依次调用监听器）

        单个监听器抛出的异常不会影响其他监听器。

        Args:
            event_name: 事件名
            event: 事件对象，为空时创建一个基础 Event

        Returns:
            DispatchResult 对象
        """
        if event is None:
            event = Event()

        # 在锁内复制，避免监听器内订阅导致迭代出错
        with self._lock:
            listeners = [entry[2] for entry in self._listeners.get(event_name, [])]
            self._stats.total_dispatched += 1

        result = DispatchResult(event_name=event_name, listener_count=len(listeners))

        if listeners:
            logger.info(f"Dispatching {event_name} to {len(listeners)} listeners")

        for listener in listeners:
            if event.is_propagation_stopped:
                result.propagation_stopped = True
                logger.debug(f"Propagation of {event_name} stopped before {_listener_name(listener)}")
                break

            result.called_count += 1
            try:
                listener(event)
                result.success_count += 1
                with self._lock:
                    self._stats.total_processed += 1
            except Exception as e:
                result.failure_count += 1
                result.errors.append((listener, e))
                with self._lock:
                    self._stats.total_failed += 1
                logger.error(
                    f"Listener {_listener_name(listener)} error for {event_name}: {e}",
                    exc_info=True,
                )

        if event.is_propagation_stopped:
            result.propagation_stopped = True

        return result

    def has_listeners(self, event_name: str) -> bool:
        with self._lock:
            return bool(self._listeners.get(event_name))

    def get_listener_callables(self, event_name: str) -> List[EventListener]:
        """获取指定事件的监听器对象，按执行顺序排列"""
        with self._lock:
            return [entry[2] for entry in self._listeners.get(event_name, [])]

    def get_listeners(self, event_name: Optional[str] = None) -> Dict[str, List[str]]:
        """
        获取监听器信息（用于调试），按执行顺序排列

        Args:
            event_name: 可选，只返回指定事件
        """
        with self._lock:
            if event_name:
                entries = self._listeners.get(event_name, [])
                return {event_name: [_listener_name(entry[2]) for entry in entries]}
            return {
                name: [_listener_name(entry[2]) for entry in entries]
                for name, entries in self._listeners.items()
            }

    def get_statistics(self) -> EventBusStatistics:
        """返回统计信息的副本"""
        with self._lock:
            return EventBusStatistics(
                total_dispatched=self._stats.total_dispatched,
                total_processed=self._stats.total_processed,
                total_failed=self._stats.total_failed,
                listener_count={name: len(entries) for name, entries in self._listeners.items()},
            )

    def clear(self) -> None:
        """
        清空所有订阅和统计（用于测试）

        Warning:
            仅应在测试环境中使用。
        """
        with self._lock:
            self._listeners.clear()
            self._stats = EventBusStatistics()
        logger.info("All listeners cleared")


# 全局事件总线实例
event_bus = EventBus()


__all__ = [
    "Event",
    "EventListener",
    "DispatchResult",
    "EventBusStatistics",
    "EventBus",
    "event_bus",
]
