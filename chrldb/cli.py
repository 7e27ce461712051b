from __future__ import annotations

import click
import json
import logging
import random
from logging import StreamHandler, FileHandler, Formatter

from chrldb.chembl.parser import ParseError
from chrldb.chembl.store import CompoundStore
from chrldb.pipeline import load_store
from chrldb.utils.settings import ConfigurationError, load_config, save_config


def _setup_logging(level: str, logfile: str | None) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)
    # Clear default handlers if any
    for h in list(root.handlers):
        root.removeHandler(h)
    fmt = Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    sh = StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(sh)
    if logfile:
        fh = FileHandler(logfile, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)


def _open_store(file_path: str | None) -> CompoundStore:
    """Load the dump given on the command line, else the configured one."""
    try:
        return load_store(file_path)
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    except ParseError as e:
        raise click.ClickException(f"Malformed dump: {e}")
    except OSError as e:
        raise click.ClickException(f"Cannot read dump: {e}")


file_option = click.option(
    "--file", "file_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="ChEMBL chemreps dump (.txt or .txt.gz); defaults to CHRLDB_CHEMBL_TXTFILE.",
)


@click.group()
@click.option("--log-level", type=click.Choice(["DEBUG","INFO","WARNING","ERROR","CRITICAL"]),
              default="INFO", show_default=True,
              help="Set logging verbosity.")
@click.option("--log-file", type=click.Path(dir_okay=False, writable=True), default=None,
              help="Also write logs to this file.")
def cli(log_level: str, log_file: str | None) -> None:
    """chrldb: in-memory ChEMBL compound lookup and sampling"""
    _setup_logging(log_level, log_file)


@cli.group()
def config() -> None:
    """Manage chrldb configuration"""
    pass


@config.command("set-file")
@click.argument("dump_path", type=click.Path(dir_okay=False))
def set_file(dump_path: str) -> None:
    """Set default ChEMBL dump path."""
    save_config(chembl_txtfile=dump_path)
    click.echo(f"Default ChEMBL dump set to: {dump_path}")


@config.command("set-strict")
@click.option("--strict/--lenient", default=True,
              help="Abort loads on malformed lines instead of skipping them.")
def set_strict(strict: bool) -> None:
    """Set how malformed dump lines are handled."""
    save_config(strict_parsing=strict)
    click.echo(f"Strict parsing {'enabled' if strict else 'disabled'}")


@config.command("show")
def show_cfg() -> None:
    """Show current chrldb configuration."""
    try:
        cfg = load_config()
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    click.echo(json.dumps(cfg.model_dump(), indent=2))


@cli.command("info")
@file_option
def info(file_path: str | None) -> None:
    """Load the dump and summarize it."""
    store = _open_store(file_path)
    click.echo(str(store.last_report))
    for skipped in store.last_report.skipped:
        click.echo(f"  skipped line {skipped.line_number}: {skipped.reason}")
    click.echo(f"Records: {len(store)}")


@cli.command("get")
@click.argument("chembl_id", type=str)
@file_option
def get(chembl_id: str, file_path: str | None) -> None:
    """Look up a compound by ChEMBL id."""
    store = _open_store(file_path)
    record = store.get(chembl_id)
    if record is None:
        raise click.ClickException(f"{chembl_id} not found in {store.path}")
    click.echo(json.dumps(record.as_dict(), indent=2))


@cli.command("sample")
@click.argument("size", type=click.IntRange(min=0))
@click.option("--seed", type=int, default=None, help="Seed for a reproducible sample.")
@file_option
def sample(size: int, seed: int | None, file_path: str | None) -> None:
    """Draw SIZE random compounds without replacement."""
    store = _open_store(file_path)
    rng = random.Random(seed) if seed is not None else None
    records = store.choices(size, rng=rng)
    if size > len(records):
        click.echo(f"Requested {size}, only {len(records)} records available", err=True)
    click.echo(json.dumps([r.as_dict() for r in records], indent=2))


@cli.command("pairs")
@file_option
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-",
              help="Where to write SMILES<TAB>chembl_id lines (default: stdout).")
def pairs(file_path: str | None, output) -> None:
    """Export SMILES and ChEMBL id pairs."""
    store = _open_store(file_path)
    smiles, ids = store.smiles_id_pairs()
    for smi, chembl_id in zip(smiles, ids):
        output.write(f"{smi}\t{chembl_id}\n")


if __name__ == "__main__":
    cli()
