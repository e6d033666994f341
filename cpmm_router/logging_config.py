"""structlog setup for applications embedding the router.

The library itself only calls structlog.get_logger(); the host decides the
rendering by calling configure_logging() once at startup.
"""

import logging

import structlog


def configure_logging(verbose: bool = False, json: bool = False) -> None:
    """Configure structlog processors and level filtering.

    Args:
        verbose: Emit debug events (pruned edges, per-route evaluations)
        json: Render JSON lines instead of the console renderer
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
