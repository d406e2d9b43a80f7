from __future__ import annotations

import logging

_STATE = {"verbose": False}


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # client diagnostics follow -v; httpx noise stays off unless asked for
    logging.getLogger("servicehub_client").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.DEBUG if verbose else logging.WARNING)
    _STATE["verbose"] = verbose


def verbose_enabled() -> bool:
    return _STATE["verbose"]
