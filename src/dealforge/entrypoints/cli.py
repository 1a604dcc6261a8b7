from __future__ import annotations

import dataclasses
import json
import math
from datetime import date
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import typer
from pydantic import ValidationError

from dealforge.analysis.engine import calculate, parse_deal_inputs
from dealforge.analysis.syndication import sensitivity_grid
from dealforge.domain.deals import SyndicationInputs
from dealforge.services.distress_scoring import (
    aggregates_from_frame,
    score_aggregates,
    score_frame,
)
from dealforge.services.portfolio import analyze_portfolio

app = typer.Typer(help="DealForge deal analysis and distress scoring.")


def _jsonable(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _dump(obj: Any) -> str:
    if dataclasses.is_dataclass(obj):
        obj = dataclasses.asdict(obj)
    return json.dumps(_jsonable(obj), indent=2, default=str)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except OSError as err:
        raise typer.BadParameter(f"cannot read {path}: {err}") from err
    except json.JSONDecodeError as err:
        raise typer.BadParameter(f"{path} is not valid JSON: {err}") from err


def _parse(payload: Any, path: Path):
    try:
        return parse_deal_inputs(payload)
    except ValidationError as err:
        raise typer.BadParameter(f"invalid deal in {path}:\n{err}") from err


def _parse_as_of(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as err:
        raise typer.BadParameter(f"--as-of must be YYYY-MM-DD, got {value!r}") from err


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="JSON file with one deal object or a list of deals"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results here instead of stdout"),
    n_jobs: int = typer.Option(1, "--n-jobs", help="Workers when analyzing a list of deals"),
) -> None:
    """
    Analyze a deal (or a portfolio of deals). Each deal needs a `deal_type`:
    rental, brrrr, flip, house_hack, multifamily, mh_park or syndication.
    """
    payload = _load_json(path)

    if isinstance(payload, list):
        deals = [_parse(item, path) for item in payload]
        analysis = analyze_portfolio(deals, n_jobs=n_jobs)
        text = _dump(
            {
                "results": [dataclasses.asdict(r) for r in analysis.results],
                "portfolio": dataclasses.asdict(analysis.metrics),
            }
        )
    else:
        text = _dump(calculate(_parse(payload, path)))

    if output is not None:
        output.write_text(text)
        typer.echo(f"Saved results to {output}")
    else:
        typer.echo(text)


@app.command("score-distress")
def score_distress_cmd(
    input_csv: Path = typer.Argument(..., help="CSV of lien aggregates, one row per property"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write the scored CSV"),
    county: Optional[str] = typer.Option(None, help="Only score properties in this county"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Score as of this date (YYYY-MM-DD)"),
    n_jobs: Optional[int] = typer.Option(None, "--n-jobs", help="Parallel workers (default from config)"),
    vectorized: bool = typer.Option(False, "--vectorized", help="Score the whole frame in one numpy pass"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the top scores, write nothing"),
    top: int = typer.Option(10, help="Rows to show in the summary"),
) -> None:
    """
    Score every property in INPUT_CSV for tax-lien distress (0-100).
    """
    as_of_date = _parse_as_of(as_of)
    try:
        df = pd.read_csv(input_csv)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as err:
        raise typer.BadParameter(f"cannot read {input_csv}: {err}") from err

    try:
        if vectorized:
            scored = score_frame(df, as_of=as_of_date, county=county)
        else:
            breakdowns = score_aggregates(
                aggregates_from_frame(df),
                as_of=as_of_date,
                county=county,
                n_jobs=n_jobs,
            )
            scored = pd.DataFrame([dataclasses.asdict(b) for b in breakdowns])
            if not scored.empty:
                scored = scored.rename(columns={"score": "distress_score"})
    except KeyError as err:
        raise typer.BadParameter(f"{input_csv}: {err}") from err
    except ValidationError as err:
        raise typer.BadParameter(f"invalid row in {input_csv}:\n{err}") from err
    except ValueError as err:
        raise typer.BadParameter(f"non-numeric value in {input_csv}: {err}") from err

    if scored.empty:
        typer.echo("No properties to score.")
        return

    typer.echo(f"Scored {len(scored)} properties")
    typer.echo(scored.head(top).to_string(index=False))

    if dry_run:
        typer.echo("Dry run: nothing written.")
        return
    if output is not None:
        scored.to_csv(output, index=False)
        typer.echo(f"Saved scores to {output}")


@app.command()
def sensitivity(
    path: Path = typer.Argument(..., help="JSON file with one syndication deal"),
) -> None:
    """
    LP/GP IRR and multiples across exit cap rate x rent growth offsets.
    """
    deal = _parse(_load_json(path), path)
    if not isinstance(deal, SyndicationInputs):
        raise typer.BadParameter(f"sensitivity needs a syndication deal, got {deal.deal_type}")

    rows = sensitivity_grid(deal)
    if not rows:
        typer.echo("No sensitivity points (every exit cap offset was non-positive).")
        return
    df = pd.DataFrame([dataclasses.asdict(r) for r in rows])
    typer.echo(df.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))


if __name__ == "__main__":
    app()
