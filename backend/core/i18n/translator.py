"""
core/i18n/translator.py

翻译服务 - 基于消息目录的文本翻译
查找顺序：当前语言 -> 回退语言 -> 原始消息ID（保证总能返回结果）
"""
from typing import Dict, Optional, Protocol, runtime_checkable
from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)

# 类型别名
Catalog = Dict[str, str]
Catalogs = Dict[str, Catalog]


@runtime_checkable
class Translator(Protocol):
    """翻译服务协议"""

    def trans(self, message_id: str) -> str:
        """翻译消息ID，找不到时返回原值"""
        ...


class IdentityTranslator:
    """原样返回消息ID的翻译器（用于测试和未配置语言时）"""

    def trans(self, message_id: str) -> str:
        return message_id


class CatalogTranslator:
    """
    基于内存消息目录的翻译器

    Example:
        >>> translator = CatalogTranslator({"en": {"mautic.hello": "Hello"}}, locale="en")
        >>> translator.trans("mautic.hello")
        'Hello'
        >>> translator.trans("unknown.id")
        'unknown.id'
    """

    def __init__(self, catalogs: Catalogs, locale: str = "en", fallback_locale: Optional[str] = "en"):
        self._catalogs: Catalogs = {loc: dict(messages) for loc, messages in catalogs.items()}
        self._locale = locale
        self._fallback_locale = fallback_locale

        if locale not in self._catalogs:
            logger.warning(f"No catalog loaded for locale '{locale}', falling back to '{fallback_locale}'")

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def fallback_locale(self) -> Optional[str]:
        return self._fallback_locale

    def set_locale(self, locale: str) -> None:
        """
        切换当前语言

        Note:
            已经翻译并存储的文本不会随之更新。
        """
        logger.info(f"Translator locale switched from '{self._locale}' to '{locale}'")
        self._locale = locale

    def add_messages(self, locale: str, messages: Catalog) -> None:
        """向指定语言追加消息（后加入的覆盖已有ID）"""
        self._catalogs.setdefault(locale, {}).update(messages)

    def has(self, message_id: str, locale: Optional[str] = None) -> bool:
        return message_id in self._catalogs.get(locale or self._locale, {})

    def trans(self, message_id: str) -> str:
        """
        翻译消息ID

        Args:
            message_id: 消息ID（如 "mautic.lead.lead.events.changepoints"）

        Returns:
            翻译后的文本；当前语言和回退语言都没有时返回消息ID本身
        """
        messages = self._catalogs.get(self._locale, {})
        if message_id in messages:
            return messages[message_id]

        if self._fallback_locale and self._fallback_locale != self._locale:
            fallback = self._catalogs.get(self._fallback_locale, {})
            if message_id in fallback:
                logger.debug(f"Message '{message_id}' resolved from fallback locale '{self._fallback_locale}'")
                return fallback[message_id]

        return message_id


def _flatten(messages: dict, prefix: str = "") -> Catalog:
    """把嵌套的 JSON 对象展开为点分隔的消息ID"""
    flat: Catalog = {}
    for key, value in messages.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = str(value)
    return flat


def load_catalogs(directory) -> Catalogs:
    """
    从目录加载消息目录

    文件名格式为 <domain>.<locale>.json，例如 messages.en.json、
    flashes.zh_CN.json。同一语言的多个文件按文件名顺序合并，后者覆盖前者。

    Args:
        directory: 目录路径（str 或 Path）

    Returns:
        {locale: {message_id: text}}

    Raises:
        FileNotFoundError: 目录不存在
        ValueError: 文件内容不是 JSON 对象
    """
    path = Path(directory)
    if not path.is_dir():
        raise FileNotFoundError(f"Translations directory not found: {path}")

    catalogs: Catalogs = {}
    for file in sorted(path.glob("*.json")):
        parts = file.name.split(".")
        if len(parts) != 3:
            logger.warning(f"Skipping translation file with unexpected name: {file.name}")
            continue
        _, locale, _ = parts

        with open(file, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Translation file {file.name} must contain a JSON object")

        catalogs.setdefault(locale, {}).update(_flatten(data))
        logger.debug(f"Loaded {len(data)} top-level entries from {file.name}")

    logger.info(f"Loaded translation catalogs for locales: {sorted(catalogs)}")
    return catalogs


__all__ = [
    "Catalog",
    "Catalogs",
    "Translator",
    "IdentityTranslator",
    "CatalogTranslator",
    "load_catalogs",
]
