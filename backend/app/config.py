"""
应用配置
从环境变量和 .env 读取配置
"""
from pathlib import Path
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

DEFAULT_TRANSLATIONS_DIR = str(Path(__file__).parent / "campaign" / "translations")


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Campaign Builder"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 翻译配置
    LOCALE: str = "en"
    FALLBACK_LOCALE: str = "en"
    TRANSLATIONS_DIR: str = DEFAULT_TRANSLATIONS_DIR

    # 插件配置
    # 为 True 时任一插件注册失败都会中断构建
    STRICT_PLUGIN_REGISTRATION: bool = False
    ENABLED_PLUGINS: List[str] = ["lead", "email", "page"]

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# 全局设置实例
settings = Settings()
