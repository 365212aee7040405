"""Logging configuration for runtime entrypoints."""

import logging
import sys


def config_configure_logging(level: str = "INFO") -> None:
    """Configure process-wide logging to stdout.

    The root level is applied even when handlers were installed earlier, for
    example by an embedding server.

    Args:
        level: Logging level name such as `INFO` or `DEBUG`.

    Returns:
        None: Configures the root logger as side effect.
    """

    log_level = getattr(logging, level.strip().upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(log_level)
