from .record import CompoundRecord, CHEMBL_COLUMNS
from .parser import ParseError, SkippedLine, iter_records
from .store import CompoundStore, LoadReport

__all__ = [
    "CompoundRecord",
    "CHEMBL_COLUMNS",
    "ParseError",
    "SkippedLine",
    "iter_records",
    "CompoundStore",
    "LoadReport",
]
