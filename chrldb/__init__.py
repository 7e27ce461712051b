from .chembl import CompoundRecord, CompoundStore, LoadReport, ParseError
from .utils.settings import ConfigurationError
from .pipeline import create_store, load_store

__all__ = [
    "CompoundRecord",
    "CompoundStore",
    "LoadReport",
    "ParseError",
    "ConfigurationError",
    "create_store",
    "load_store",
]
