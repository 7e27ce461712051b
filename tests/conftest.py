import gzip
from pathlib import Path

import pytest

from chrldb.utils import settings

DATA_DIR = Path(__file__).parent / "data"
SAMPLE_DUMP = DATA_DIR / "chembl_sample.txt"
HEADER = ("chembl_id", "canonical_smiles", "standard_inchi", "standard_inchi_key")


@pytest.fixture(autouse=True)
def isolated_chrldb_env(tmp_path, monkeypatch):
    """
    Ensure all chrldb config reads and writes during tests go to a temporary
    file, not ~/.chrldb.env, and that no dump path leaks in from the shell.
    """
    env_file = tmp_path / "chrldb_test.env"
    monkeypatch.setenv("CHRLDB_ENV_FILE", str(env_file))
    monkeypatch.setattr(settings, "ENV_FILE", env_file)
    monkeypatch.delenv("CHRLDB_CHEMBL_TXTFILE", raising=False)
    monkeypatch.delenv("CHRLDB_STRICT_PARSING", raising=False)
    return env_file


def synthetic_row(i: int) -> tuple:
    return (
        f"CHEMBL9{i:05d}",
        "C" * (i % 12 + 1) + "O",
        f"InChI=1S/synthetic/{i}",
        f"SYNTHETIC{i:05d}-UHFFFAOYSA-N",
    )


def sample_rows() -> list:
    lines = SAMPLE_DUMP.read_text(encoding="utf-8").splitlines()
    return [tuple(line.split("\t")) for line in lines[1:]]


@pytest.fixture
def sample_dump() -> Path:
    return SAMPLE_DUMP


@pytest.fixture
def write_dump(tmp_path):
    """
    Factory writing a dump file from rows (tuples are tab-joined, strings
    written verbatim). ``header=True`` prepends the ChEMBL header row.
    """
    def _write(rows, name="dump.txt", header=True):
        lines = ["\t".join(HEADER)] if header else []
        lines += [r if isinstance(r, str) else "\t".join(r) for r in rows]
        text = "\n".join(lines) + "\n"
        path = tmp_path / name
        if name.endswith(".gz"):
            with gzip.open(path, "wt", encoding="utf-8") as fh:
                fh.write(text)
        else:
            path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def dump_100(write_dump) -> Path:
    """100 distinct compounds: the four real sample rows plus 96 synthetic ones."""
    rows = sample_rows() + [synthetic_row(i) for i in range(96)]
    return write_dump(rows, name="chembl_100.txt")
