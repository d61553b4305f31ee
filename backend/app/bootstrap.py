"""
应用启动装配
settings -> translator -> event bus -> plugins -> builder service
"""
import logging
from typing import Iterable, Optional

from app.campaign.builder_service import CampaignBuilderService
from app.campaign.plugins import get_builtin_plugins
from app.campaign_plugin import CampaignPlugin, register_plugins
from app.config import Settings, settings as default_settings
from core.engine.event_bus import EventBus, event_bus as default_bus
from core.i18n.translator import CatalogTranslator, load_catalogs

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_builder_service(
    config: Optional[Settings] = None,
    bus: Optional[EventBus] = None,
    plugins: Optional[Iterable[CampaignPlugin]] = None,
) -> CampaignBuilderService:
    """
    装配活动构建器服务

    Args:
        config: 配置，默认使用全局 settings
        bus: 事件总线，默认使用全局 event_bus
        plugins: 插件列表，默认按 ENABLED_PLUGINS 创建内置插件

    Returns:
        CampaignBuilderService 实例
    """
    config = config or default_settings
    bus = bus if bus is not None else default_bus

    if plugins is None:
        plugins = get_builtin_plugins(config.ENABLED_PLUGINS)
    count = register_plugins(bus, plugins)

    catalogs = load_catalogs(config.TRANSLATIONS_DIR)

    def translator_factory() -> CatalogTranslator:
        return CatalogTranslator(catalogs, locale=config.LOCALE, fallback_locale=config.FALLBACK_LOCALE)

    logger.info(f"{config.APP_NAME}: {count} campaign plugins registered (locale={config.LOCALE})")
    return CampaignBuilderService(bus, translator_factory, strict=config.STRICT_PLUGIN_REGISTRATION)


def init_app(config: Optional[Settings] = None) -> CampaignBuilderService:
    """配置日志并返回装配好的构建器服务（应用入口使用）"""
    config = config or default_settings
    setup_logging("DEBUG" if config.DEBUG else config.LOG_LEVEL)
    return create_builder_service(config)
