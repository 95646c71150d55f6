#!/usr/bin/env python
"""Run the recipe proxy locally."""
from __future__ import annotations

import argparse
import logging
import sys

from recipe_proxy.config import ConfigurationError, DeploymentMode, load_settings
from recipe_proxy.main import run_local

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the recipe proxy on a local port")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--env-file", default=".env")
    parser.add_argument("--log-level")
    args = parser.parse_args(argv)

    overrides = {
        key: value
        for key, value in {"host": args.host, "port": args.port, "log_level": args.log_level}.items()
        if value is not None
    }
    try:
        settings = load_settings(DeploymentMode.LOCAL, env_file=args.env_file, **overrides)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run_local(settings)
    except ConfigurationError as exc:
        logger.error("Refusing to start: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
