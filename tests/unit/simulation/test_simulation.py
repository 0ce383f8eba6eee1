import io

import numpy as np
import pandas as pd
import pytest

import montyhall.simulation.simulation as sim
from montyhall.game.engine import LOSE, WIN, InvalidArgumentError
from montyhall.simulation.simulation import (
    RESULT_COLUMNS,
    TrialResult,
    _play_game,
    aggregate_metrics,
    outcome_table,
    play_game,
    play_n_games,
    play_trial,
    simulate_many_games,
    simulate_many_games_from_seeds,
    strategy_summary,
    validate_batch_args,
)


def _results(rows):
    """Build a results frame from ``(strategy, outcome)`` pairs."""
    return pd.DataFrame(
        [
            {"trial": i // 2, "strategy": s, "outcome": o}
            for i, (s, o) in enumerate(rows)
        ],
        columns=RESULT_COLUMNS,
    )


# ---------------------------------------------------------------------------
# Single trial
# ---------------------------------------------------------------------------


def test_play_trial_returns_stay_then_switch(rng):
    for _ in range(100):
        stay, switch = play_trial(rng)
        assert isinstance(stay, TrialResult)
        assert stay.strategy == "stay"
        assert switch.strategy == "switch"
        # exactly one of the two policies ends on the car
        assert {stay.outcome, switch.outcome} == {WIN, LOSE}


def test_trial_result_is_immutable():
    result = TrialResult("stay", WIN)
    with pytest.raises(AttributeError):
        result.outcome = LOSE  # type: ignore[misc]


def test_play_game_table_shape(rng):
    df = play_game(rng)
    assert list(df.columns) == ["strategy", "outcome"]
    assert df["strategy"].tolist() == ["stay", "switch"]
    assert set(df["outcome"]) <= {WIN, LOSE}


def test_play_trial_uses_same_reveal_for_both_strategies(monkeypatch):
    monkeypatch.setattr(sim, "create_game", lambda rng: ("goat", "car", "goat"))
    monkeypatch.setattr(sim, "select_door", lambda rng: 1)
    calls = []

    def fake_open(game, pick, rng):
        calls.append((game, pick))
        return 3

    monkeypatch.setattr(sim, "open_goat_door", fake_open)
    stay, switch = play_trial(np.random.default_rng(0))

    assert calls == [(("goat", "car", "goat"), 1)]
    assert stay == TrialResult("stay", LOSE)
    assert switch == TrialResult("switch", WIN)


def test_play_game_helper_is_seed_deterministic():
    assert _play_game(4, 99) == _play_game(4, 99)
    rows = _play_game(4, 99)
    assert [r["trial"] for r in rows] == [4, 4]
    assert [r["strategy"] for r in rows] == ["stay", "switch"]


# ---------------------------------------------------------------------------
# Batch simulation
# ---------------------------------------------------------------------------


def test_simulate_many_games_shape():
    df = simulate_many_games(n_games=25, seed=1)
    assert list(df.columns) == RESULT_COLUMNS
    assert len(df) == 50
    assert df["trial"].tolist() == [t for t in range(25) for _ in range(2)]
    assert (df["strategy"].value_counts() == 25).all()


def test_simulate_many_games_deterministic():
    df1 = simulate_many_games(n_games=40, seed=42)
    df2 = simulate_many_games(n_games=40, seed=42)
    pd.testing.assert_frame_equal(df1, df2)


def test_simulate_many_games_from_seeds_matches():
    rng = np.random.default_rng(42)
    seeds = rng.integers(0, 2**32 - 1, size=5, dtype=np.uint32).tolist()
    df1 = simulate_many_games_from_seeds(seeds=seeds, n_jobs=1)
    df2 = simulate_many_games(n_games=5, seed=42, n_jobs=1)
    pd.testing.assert_frame_equal(df1, df2)


def test_simulate_many_games_parallel_matches_serial():
    serial = simulate_many_games(n_games=30, seed=5, n_jobs=1)
    parallel = simulate_many_games(n_games=30, seed=5, n_jobs=2)
    pd.testing.assert_frame_equal(serial, parallel)


def test_simulate_many_games_none_jobs_is_serial():
    pd.testing.assert_frame_equal(
        simulate_many_games(n_games=3, seed=2, n_jobs=None),
        simulate_many_games(n_games=3, seed=2, n_jobs=1),
    )


@pytest.mark.parametrize("n", [0, -3, 2.5, "10", True, None])
def test_simulate_many_games_rejects_bad_counts(n):
    with pytest.raises(InvalidArgumentError, match="n_games must be a positive integer"):
        simulate_many_games(n_games=n)


@pytest.mark.parametrize("n_jobs", [0, -1, 1.5])
def test_simulate_many_games_rejects_bad_jobs(n_jobs):
    with pytest.raises(InvalidArgumentError, match="n_jobs"):
        simulate_many_games(n_games=3, n_jobs=n_jobs)


def test_validate_batch_args():
    assert validate_batch_args(10, None) == (10, 1)
    assert validate_batch_args(np.int64(4), 2) == (4, 2)
    with pytest.raises(InvalidArgumentError, match="n_games"):
        validate_batch_args(0, 1)
    with pytest.raises(InvalidArgumentError, match="n_jobs"):
        validate_batch_args(5, 0)


def test_simulate_many_games_from_seeds_rejects_empty():
    with pytest.raises(InvalidArgumentError):
        simulate_many_games_from_seeds(seeds=[])


def test_large_batch_win_rates():
    df = simulate_many_games(n_games=10_000, seed=2024)
    rates = aggregate_metrics(df)["win_rate"]
    assert rates["stay"] == pytest.approx(1 / 3, abs=0.03)
    assert rates["switch"] == pytest.approx(2 / 3, abs=0.03)
    assert rates["stay"] + rates["switch"] == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# play_n_games
# ---------------------------------------------------------------------------


def test_play_n_games_prints_table_and_returns_rows():
    buf = io.StringIO()
    df = play_n_games(50, seed=3, file=buf)
    printed = buf.getvalue()
    assert len(df) == 100
    assert "stay" in printed and "switch" in printed
    assert "WIN" in printed and "LOSE" in printed


def test_play_n_games_default_count(capsys):
    df = play_n_games(seed=0)
    assert len(df) == 200
    assert "switch" in capsys.readouterr().out


def test_play_n_games_rejects_non_positive():
    with pytest.raises(InvalidArgumentError):
        play_n_games(0)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def test_outcome_table_row_normalised():
    df = _results(
        [
            ("stay", WIN), ("switch", LOSE),
            ("stay", LOSE), ("switch", WIN),
            ("stay", LOSE), ("switch", WIN),
        ]
    )
    table = outcome_table(df)
    assert list(table.index) == ["stay", "switch"]
    assert list(table.columns) == [LOSE, WIN]
    assert table.loc["stay", WIN] == pytest.approx(0.33)
    assert table.loc["switch", WIN] == pytest.approx(0.67)
    assert table.sum(axis=1).tolist() == pytest.approx([1.0, 1.0], abs=0.011)


def test_outcome_table_fills_missing_outcomes():
    df = _results([("stay", WIN), ("switch", LOSE)])
    table = outcome_table(df, decimals=None)
    assert table.loc["stay"].tolist() == [0.0, 1.0]
    assert table.loc["switch"].tolist() == [1.0, 0.0]


def test_outcome_table_requires_columns():
    with pytest.raises(InvalidArgumentError, match="outcome"):
        outcome_table(pd.DataFrame({"strategy": ["stay"]}))


def test_strategy_summary_counts_and_interval():
    df = _results([("stay", WIN), ("switch", LOSE)] * 3 + [("stay", LOSE), ("switch", WIN)])
    summary = strategy_summary(df).set_index("strategy")
    assert summary.loc["stay", "games"] == 4
    assert summary.loc["stay", "wins"] == 3
    assert summary.loc["stay", "win_rate"] == pytest.approx(0.75)
    assert summary.loc["switch", "wins"] == 1
    for strategy in ("stay", "switch"):
        row = summary.loc[strategy]
        assert 0.0 <= row["ci_lower"] <= row["win_rate"] <= row["ci_upper"] <= 1.0


def test_strategy_summary_handles_missing_strategy():
    df = pd.DataFrame({"strategy": ["stay"], "outcome": [WIN]})
    summary = strategy_summary(df).set_index("strategy")
    assert summary.loc["switch", "games"] == 0
    assert np.isnan(summary.loc["switch", "win_rate"])


def test_aggregate_metrics_counts_games():
    df = _results([("stay", WIN), ("switch", LOSE), ("stay", LOSE), ("switch", WIN)])
    metrics = aggregate_metrics(df)
    assert metrics["games"] == 2
    assert metrics["win_rate"] == {"stay": 0.5, "switch": 0.5}


def test_aggregate_metrics_without_trial_column(rng):
    df = pd.concat([play_game(rng) for _ in range(3)], ignore_index=True)
    assert aggregate_metrics(df)["games"] == 3
