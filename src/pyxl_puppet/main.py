"""Application entry point for Pyxl Puppet."""
from __future__ import annotations

import logging
from pathlib import Path

from pyxl_puppet.app.app import PuppetApp
from pyxl_puppet.core.config import AppConfig, load_app_config

logger = logging.getLogger(__name__)


def main() -> None:
    root = Path(__file__).resolve().parents[2]
    config_path = root / "config" / "app_config.json"
    app_config = load_app_config(config_path) if config_path.exists() else AppConfig()

    logging.basicConfig(level=app_config.logging.level, format=app_config.logging.format)
    if not config_path.exists():
        logger.info("No config at %s, using built-in defaults", config_path)

    app = PuppetApp(config=app_config)
    app.run()


if __name__ == "__main__":
    main()
