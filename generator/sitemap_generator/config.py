from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from scrapy.settings import Settings

DEFAULT_SETTINGS_MODULE = "sitemap_generator.settings"


def get_sitemap_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    settings = Settings()
    module = os.environ.get("SITEMAP_SETTINGS_MODULE") or DEFAULT_SETTINGS_MODULE
    settings.setmodule(module, priority="project")
    if overrides:
        # None means "not given on the command line".
        settings.update(
            {key: value for key, value in overrides.items() if value is not None},
            priority="cmdline",
        )
    return settings
