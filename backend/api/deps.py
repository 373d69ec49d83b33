"""
Shared API dependencies.

The technique catalog is loaded once from configuration and shared by
all requests and WebSocket sessions.
"""

import logging
from typing import Optional

from core.config import OverlayConfig, get_config
from core.services import TechniqueCatalog

logger = logging.getLogger(__name__)

_CATALOG: Optional[TechniqueCatalog] = None


def get_overlay_config() -> OverlayConfig:
    return get_config()


def get_catalog() -> TechniqueCatalog:
    """
    Shared technique catalog.

    Raises:
        MalformedRuleConfiguration: if the configured catalog file is invalid
    """
    global _CATALOG
    if _CATALOG is None:
        config = get_config()
        _CATALOG = TechniqueCatalog.from_config(
            config.rules.catalog_path,
            config.rules.default_tolerance,
        )
        logger.info(f"Technique catalog ready: {len(_CATALOG)} techniques")
    return _CATALOG

