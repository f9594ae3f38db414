"""
KubeBuddy Logger
================

This module provides pre-configured loggers for KubeBuddy with a
consistent format and log level.

Usage
-----

.. code-block:: python

    from kubebuddy.logger import get_logger

    logger = get_logger(__name__)
    logger.debug("Skipping node %s", node.id)

Configuration
-------------

- The log level is taken from ``KUBEBUDDY_LOG_LEVEL`` in the KubeBuddy configuration (default: ``WARNING``).
- The logger outputs to the standard error stream.
- Only one handler is attached to prevent duplicate logs when imported multiple times.
"""

import logging
import kubebuddy.config as config


def get_logger(name: str = "kubebuddy") -> logging.Logger:
    """
    Returns a configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure if it has no handlers (prevents duplicate logs)
    if not logger.handlers:
        log_level = str(config.KUBEBUDDY_LOG_LEVEL or "WARNING").upper()
        logger.setLevel(log_level)

        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
