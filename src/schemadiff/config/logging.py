"""Shared logging helpers for schemadiff."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    Pass ``force=True`` to reconfigure, e.g. when ``--verbose`` lowers the
    level after an earlier call.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # keep per-request chatter out of normal runs
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
