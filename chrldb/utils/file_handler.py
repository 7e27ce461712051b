import gzip
import logging
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

# utf-8-sig drops a leading byte-order mark; undecodable bytes become lone
# surrogates so the parser can reject the offending line on its own.
ENCODING = "utf-8-sig"
ERRORS = "surrogateescape"


def is_gzipped(path) -> bool:
    """True for ChEMBL's compressed dumps (``chembl_<n>_chemreps.txt.gz``)."""
    return Path(path).suffix.lower() == ".gz"


def open_text(path) -> TextIO:
    """Open a dump for line-by-line reading, decompressing .gz transparently.

    Missing or unreadable files raise ``OSError`` (``FileNotFoundError``,
    ``PermissionError``); corrupt gzip data raises ``gzip.BadGzipFile`` on
    read. Invalid UTF-8 never raises here; it surfaces per line as surrogate
    escapes.
    """
    p = Path(path)
    if is_gzipped(p):
        logger.debug("Opening gzip dump: %s", p)
        return gzip.open(p, "rt", encoding=ENCODING, errors=ERRORS, newline="")
    logger.debug("Opening text dump: %s", p)
    return open(p, "r", encoding=ENCODING, errors=ERRORS, newline="")

