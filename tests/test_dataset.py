"""Tests for loading results and participant ratings."""

import pandas as pd
import polars as pl
import pytest

from rating_lifecycle import (
    Participant,
    RatingEntry,
    ResultDataset,
    ResultRecord,
    clone_ratings,
    ratings_from_dataframe,
    ratings_to_dataframe,
)


def generate_results_frame() -> pl.DataFrame:
    """Three days of results, deliberately out of order."""
    return pl.DataFrame({
        "CycleId": [201901] * 6,
        "Day": [2, 1, 3, 1, 2, 1],
        "Sequence": [1, 3, 1, 1, 2, 2],
        "EastId": [1, 1, 2, 3, 3, 2],
        "WestId": [2, 3, 3, 4, 1, 4],
        "EastWin": [True, False, True, True, False, True],
        "WestWin": [False, True, False, False, True, False],
    })


def test_results_sorted_by_day_and_sequence():
    dataset = ResultDataset.from_dataframe(generate_results_frame())
    records = dataset.to_records()

    assert [(r.day, r.sequence) for r in records] == [(1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (3, 1)]
    assert records[0] == ResultRecord(201901, 1, 1, 3, 4, True, False)
    assert len(dataset) == 6
    assert dataset.days == [1, 2, 3]
    assert dataset.num_days == 3
    assert dataset.participant_ids == [1, 2, 3, 4]


def test_iter_days_and_get_day():
    dataset = ResultDataset.from_dataframe(generate_results_frame())

    days = [(cycle_id, day, len(results)) for cycle_id, day, results in dataset.iter_days()]
    assert days == [(201901, 1, 3), (201901, 2, 2), (201901, 3, 1)]
    assert dataset.cycle_days == [(201901, 1), (201901, 2), (201901, 3)]

    day_two = dataset.get_day(2)
    assert [r.sequence for r in day_two] == [1, 2]
    assert all(isinstance(r.east_win, bool) for r in day_two)

    with pytest.raises(ValueError, match="No results found for day 9"):
        dataset.get_day(9)


def generate_multi_cycle_frame() -> pl.DataFrame:
    """Two cycles with the same day numbers, later cycle listed first."""
    return pl.DataFrame({
        "CycleId": [201903, 201901, 201903, 201901],
        "Day": [1, 2, 2, 1],
        "Sequence": [1, 1, 1, 1],
        "EastId": [1, 2, 3, 4],
        "WestId": [2, 3, 4, 1],
        "EastWin": [True, True, False, False],
        "WestWin": [False, False, True, True],
    })


def test_results_grouped_by_cycle_then_day():
    dataset = ResultDataset.from_dataframe(generate_multi_cycle_frame())

    assert [(r.cycle_id, r.day) for r in dataset.to_records()] == [
        (201901, 1), (201901, 2), (201903, 1), (201903, 2),
    ]
    assert dataset.cycle_days == [(201901, 1), (201901, 2), (201903, 1), (201903, 2)]
    assert dataset.num_days == 4
    assert dataset.days == [1, 2]
    assert dataset.cycle_ids == [201901, 201903]

    groups = [(cycle_id, day, [r.east_id for r in results]) for cycle_id, day, results in dataset.iter_days()]
    assert groups == [(201901, 1, [4]), (201901, 2, [2]), (201903, 1, [1]), (201903, 2, [3])]


def test_get_day_needs_cycle_when_day_repeats():
    dataset = ResultDataset.from_dataframe(generate_multi_cycle_frame())

    assert [r.east_id for r in dataset.get_day(1, cycle_id=201903)] == [1]
    assert [r.east_id for r in dataset.get_day(2, cycle_id=201901)] == [2]

    with pytest.raises(ValueError, match="pass cycle_id"):
        dataset.get_day(1)
    with pytest.raises(ValueError, match="No results found for day 1 of cycle 201905"):
        dataset.get_day(1, cycle_id=201905)


def test_from_pandas_and_parquet(tmp_path):
    df = generate_results_frame()
    from_pandas = ResultDataset.from_dataframe(df.to_pandas())
    assert from_pandas.to_records() == ResultDataset.from_dataframe(df).to_records()

    path = tmp_path / "results.parquet"
    df.write_parquet(path)
    assert ResultDataset.from_parquet(path).to_records() == from_pandas.to_records()


def test_from_records_preserves_data():
    records = ResultDataset.from_dataframe(generate_results_frame()).to_records()
    assert ResultDataset.from_records(records).to_records() == records


def test_missing_columns():
    with pytest.raises(ValueError, match="Missing required columns"):
        ResultDataset.from_dataframe(generate_results_frame().drop("WestWin"))


def test_empty_dataset():
    dataset = ResultDataset()
    assert len(dataset) == 0
    assert dataset.days == []
    assert dataset.cycle_days == []
    assert list(dataset.iter_days()) == []
    assert repr(dataset) == "ResultDataset(empty)"


def test_ratings_from_dataframe_fills_missing_ratings():
    df = pd.DataFrame({
        "id": [1, 2, 3],
        "name": ["Hakuho", "Kakuryu", "Kisenosato"],
        "rank": ["Y1e", "Y1w", None],
        "rating": [1600.0, None, 1450.0],
    })
    ratings = ratings_from_dataframe(df, initial_rating=1500.0)

    assert ratings[1] == RatingEntry(Participant(1, "Hakuho", "Y1e"), 1600.0)
    assert ratings[2].rating == 1500.0
    assert ratings[3].rank == ""


def test_ratings_from_dataframe_without_rating_column():
    ratings = ratings_from_dataframe(pl.DataFrame({"id": [5], "name": ["Tochinoshin"]}), initial_rating=1400.0)
    assert ratings[5].rating == 1400.0

    with pytest.raises(ValueError):
        ratings_from_dataframe(pl.DataFrame({"id": [5], "name": ["Tochinoshin"]}), initial_rating=None)
    with pytest.raises(ValueError, match="Missing required columns"):
        ratings_from_dataframe(pl.DataFrame({"id": [5]}))


def test_ratings_to_dataframe_and_clone():
    ratings = {
        2: RatingEntry(Participant(2, "Kakuryu", "Y1w"), 1400),
        1: RatingEntry(Participant(1, "Hakuho", "Y1e"), 1500),
    }
    df = ratings_to_dataframe(ratings)

    assert df["id"].to_list() == [1, 2]
    assert df["rating"].dtype == pl.Float64
    assert isinstance(ratings[2].rating, float)

    copy = clone_ratings(ratings)
    copy[1] = copy[1].with_rating(1234.0)
    assert ratings[1].rating == 1500.0
