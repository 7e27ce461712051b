from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Sequence

# Column order of the ChEMBL chemreps dump.
CHEMBL_COLUMNS = ("chembl_id", "canonical_smiles", "standard_inchi", "standard_inchi_key")


@dataclass(frozen=True)
class CompoundRecord:
    """One row of the ChEMBL chemical representations dump."""

    chembl_id: str
    canonical_smiles: str
    standard_inchi: str
    standard_inchi_key: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> CompoundRecord:
        """Build a record from the first four positional fields; extras are ignored."""
        chembl_id, smiles, inchi, inchi_key = fields[:4]
        return cls(chembl_id, smiles, inchi, inchi_key)

    def as_dict(self) -> dict[str, str]:
        return asdict(self)
