"""
core/i18n - 国际化模块

使用方式:
    >>> from core.i18n import CatalogTranslator, load_catalogs
"""

from core.i18n.translator import (
    Catalog,
    Catalogs,
    Translator,
    IdentityTranslator,
    CatalogTranslator,
    load_catalogs,
)

__all__ = [
    "Catalog",
    "Catalogs",
    "Translator",
    "IdentityTranslator",
    "CatalogTranslator",
    "load_catalogs",
]
