from __future__ import annotations

import logging
from pathlib import Path

from chrldb.chembl.store import CompoundStore
from chrldb.utils.settings import AppConfig, load_config, require_chembl_txtfile

logger = logging.getLogger(__name__)


def create_store(config: AppConfig | None = None) -> CompoundStore:
    """
    Build an empty store bound to the configured dump (CHRLDB_CHEMBL_TXTFILE).

    Nothing is read until ``load()`` is called on the result.
    Raises ConfigurationError if no dump path is configured.
    """
    cfg = config or load_config()
    path = require_chembl_txtfile(cfg)
    logger.debug("Creating store for %s (strict=%s)", path, cfg.strict_parsing)
    return CompoundStore(path, strict=cfg.strict_parsing, load=False)


def load_store(
    path: str | Path | None = None,
    config: AppConfig | None = None,
    strict: bool | None = None,
) -> CompoundStore:
    """
    Return a loaded store for ``path``, or for the configured dump if omitted.

    Configuration is only consulted for what the arguments leave open: the
    dump path when ``path`` is None, the parsing mode when ``strict`` is None.
    """
    if path is not None and strict is not None:
        return CompoundStore(path, strict=strict)
    cfg = config or load_config()
    if strict is None:
        strict = cfg.strict_parsing
    if path is None:
        path = require_chembl_txtfile(cfg)
    return CompoundStore(path, strict=strict)
