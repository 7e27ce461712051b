"""
In-memory index of the ChEMBL chemical representations dump.

Source: https://ftp.ebi.ac.uk/pub/databases/chembl/ChEMBLdb/latest/
(``chembl_<release>_chemreps.txt[.gz]``).
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from chrldb.chembl.parser import SkippedLine, iter_records
from chrldb.chembl.record import CompoundRecord
from chrldb.utils.file_handler import open_text
from chrldb.utils.settings import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """What a single ``CompoundStore.load`` call read, kept and skipped."""

    path: str
    records: int = 0
    lines: int = 0
    header_skipped: bool = False
    duplicates: list[str] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"{self.records} records from {self.path} "
            f"({self.lines} lines, {len(self.duplicates)} duplicate ids, "
            f"{len(self.skipped)} skipped lines, "
            f"header {'skipped' if self.header_skipped else 'absent'})"
        )


class CompoundStore:
    """
    ChEMBL compounds keyed by ChEMBL id.

    Passing ``path`` loads the file immediately, unless ``load=False`` binds
    the path without reading it. Without a path the store starts empty and
    ``load`` must be called. ``strict`` makes malformed lines abort
    the load with ParseError instead of being skipped. ``rng`` is the random
    source for ``choices`` (defaults to the process-wide ``random`` module).
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        strict: bool = False,
        rng: random.Random | None = None,
        load: bool = True,
    ) -> None:
        self.path = str(path) if path is not None else None
        self.strict = strict
        self._rng = rng
        self._data: dict[str, CompoundRecord] = {}
        self._population: list[CompoundRecord] = []
        self.last_report: LoadReport | None = None
        if path is not None and load:
            self.load()

    def load(self, path: str | Path | None = None) -> LoadReport:
        """
        Replace the store contents with a fresh read of ``path``.

        Falls back to the path given at construction or the last load. The
        new index is built aside and swapped in only once the whole file has
        been read, so a failing load (OSError, ParseError) leaves the previous
        contents in place.
        """
        source = str(path) if path is not None else self.path
        if source is None:
            raise ConfigurationError("No ChEMBL dump path given to load.")

        logger.info("Loading ChEMBL dump: %s", source)
        report = LoadReport(path=source)
        headers: list[int] = []
        data: dict[str, CompoundRecord] = {}
        with open_text(source) as fh:
            counted = _counting(fh, report)
            for line_number, record in iter_records(
                counted, strict=self.strict, skipped=report.skipped, headers=headers
            ):
                if record.chembl_id in data:
                    logger.debug("Duplicate id %s at line %d replaces earlier entry",
                                 record.chembl_id, line_number)
                    report.duplicates.append(record.chembl_id)
                data[record.chembl_id] = record

        report.header_skipped = bool(headers)
        report.records = len(data)
        self._data = data
        self._population = list(data.values())
        self.path = source
        self.last_report = report

        if report.duplicates:
            logger.warning("%d duplicate ids in %s; later lines kept",
                           len(report.duplicates), source)
        if report.skipped:
            logger.warning("%d malformed lines skipped in %s",
                           len(report.skipped), source)
        logger.info("Loaded %s", report)
        return report

    def get(self, chembl_id: str) -> CompoundRecord | None:
        return self._data.get(chembl_id)

    def get_all(self) -> Mapping[str, CompoundRecord]:
        """Read-only view of the whole index; iteration order is unspecified."""
        return MappingProxyType(self._data)

    def smiles_id_pairs(self) -> tuple[list[str], list[str]]:
        """Parallel SMILES and id lists: ``smiles[i]`` belongs to ``ids[i]``."""
        smiles: list[str] = []
        ids: list[str] = []
        for chembl_id, record in self._data.items():
            smiles.append(record.canonical_smiles)
            ids.append(chembl_id)
        return smiles, ids

    def choices(self, size: int, rng: random.Random | None = None) -> list[CompoundRecord]:
        """
        Uniform sample of ``size`` distinct records, without replacement.

        If ``size`` exceeds the number of records, every record is returned
        in random order.
        """
        if size < 0:
            raise ValueError(f"Sample size must be non-negative, got {size}.")
        source = rng or self._rng or random
        return source.sample(self._population, min(size, len(self._population)))

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, chembl_id: object) -> bool:
        return chembl_id in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, records={len(self)})"


def _counting(lines, report: LoadReport) -> Iterator[str]:
    for line in lines:
        report.lines += 1
        yield line
