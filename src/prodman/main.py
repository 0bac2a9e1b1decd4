from __future__ import annotations

import logging
import sys

from prodman.application.container import build_container
from prodman.config import get_app_paths, load_api_config
from prodman.domain.errors import ConfigError
from prodman.logging_config import setup_logging
from prodman.ui.app import App

log = logging.getLogger(__name__)


def main() -> None:
    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)

    try:
        config = load_api_config()
    except ConfigError as e:
        log.error("config_invalid error=%s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        raise SystemExit(2)

    container = build_container(config)

    app = App(
        inventory_service=container.inventory,
        reporting_service=container.reporting,
        api_url=config.base_url,
        logs_dir=str(paths.logs_dir),
    )
    app.mainloop()


if __name__ == "__main__":
    main()
