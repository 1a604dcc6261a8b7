import json

import pandas as pd
import pytest

from fixtures.deals import brrrr_deal, rental_deal, syndication_deal


def _write_json(path, payload):
    path.write_text(json.dumps(payload))
    return path


def test_analyze_single_deal(runner, cli_app, tmp_path):
    path = _write_json(tmp_path / "rental.json", rental_deal().model_dump(mode="json"))

    result = runner.invoke(cli_app, ["analyze", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["loan_amount"] == pytest.approx(160_000.0)
    assert data["monthly_mortgage"] == pytest.approx(1064.48, abs=0.01)


def test_analyze_portfolio_writes_output_and_serializes_infinity(runner, cli_app, tmp_path):
    path = _write_json(
        tmp_path / "deals.json",
        [rental_deal().model_dump(mode="json"), brrrr_deal().model_dump(mode="json")],
    )
    out = tmp_path / "results.json"

    result = runner.invoke(cli_app, ["analyze", str(path), "--output", str(out)])

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["results"][1]["cash_on_cash_return"] == "inf"
    assert data["portfolio"]["n_infinite_coc"] == 1


def test_analyze_rejects_invalid_json(runner, cli_app, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = runner.invoke(cli_app, ["analyze", str(path)])
    assert result.exit_code != 0


def test_analyze_rejects_invalid_deal(runner, cli_app, tmp_path):
    path = _write_json(tmp_path / "bad.json", {"deal_type": "rental", "purchase_price": -1})
    result = runner.invoke(cli_app, ["analyze", str(path)])
    assert result.exit_code != 0


def test_sensitivity_prints_grid(runner, cli_app, tmp_path, default_sensitivity_steps):
    path = _write_json(tmp_path / "synd.json", syndication_deal().model_dump(mode="json"))
    result = runner.invoke(cli_app, ["sensitivity", str(path)])
    assert result.exit_code == 0, result.output
    assert "lp_irr" in result.output
    assert "exit_cap_rate" in result.output


def test_sensitivity_requires_syndication(runner, cli_app, tmp_path):
    path = _write_json(tmp_path / "rental.json", rental_deal().model_dump(mode="json"))
    result = runner.invoke(cli_app, ["sensitivity", str(path)])
    assert result.exit_code != 0


@pytest.fixture
def liens_csv(tmp_path):
    path = tmp_path / "liens.csv"
    pd.DataFrame(
        [
            dict(park_id="a", county="Wayne", active_lien_count=25, total_tax_owed=125_000.0,
                 most_recent_lien_date="2024-03-15", lot_count=50, distinct_tax_years_with_liens=2),
            dict(park_id="b", county="Kent", active_lien_count=1, total_tax_owed=2_000.0,
                 most_recent_lien_date="", lot_count=40, distinct_tax_years_with_liens=1),
        ]
    ).to_csv(path, index=False)
    return path


@pytest.mark.parametrize("engine_flag", [[], ["--vectorized"]])
def test_score_distress_writes_ranked_csv(runner, cli_app, tmp_path, liens_csv, engine_flag):
    out = tmp_path / "scored.csv"
    result = runner.invoke(
        cli_app,
        ["score-distress", str(liens_csv), "--as-of", "2024-06-15", "--output", str(out), "--n-jobs", "1"]
        + engine_flag,
    )

    assert result.exit_code == 0, result.output
    scored = pd.read_csv(out)
    assert list(scored["park_id"]) == ["a", "b"]
    assert scored["distress_score"].iloc[0] == pytest.approx(52.5)


def test_score_distress_dry_run_writes_nothing(runner, cli_app, tmp_path, liens_csv):
    out = tmp_path / "scored.csv"
    result = runner.invoke(
        cli_app,
        ["score-distress", str(liens_csv), "--dry-run", "--output", str(out), "--county", "kent"],
    )
    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert not out.exists()


def test_score_distress_bad_date(runner, cli_app, liens_csv):
    result = runner.invoke(cli_app, ["score-distress", str(liens_csv), "--as-of", "June 15"])
    assert result.exit_code != 0


@pytest.mark.parametrize("engine_flag", [[], ["--vectorized"]])
def test_score_distress_non_numeric_cell_is_a_usage_error(runner, cli_app, tmp_path, engine_flag):
    path = tmp_path / "liens.csv"
    pd.DataFrame(
        [
            dict(park_id="a", county="Wayne", active_lien_count=3, total_tax_owed=9_000.0,
                 most_recent_lien_date="2024-03-15", lot_count="unknown", distinct_tax_years_with_liens=1),
        ]
    ).to_csv(path, index=False)

    result = runner.invoke(cli_app, ["score-distress", str(path), "--as-of", "2024-06-15"] + engine_flag)

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
