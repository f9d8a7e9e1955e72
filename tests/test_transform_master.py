"""
End-to-end tests for the transform pipeline
"""

import pytest

from config import KEEP_COLUMNS, WEEKDAY_ORDER
from chi_crime_pipelines.errors import FormatError, ParseError, InputFileError
from chi_crime_pipelines.transform.transform_master import run_transforms
from chi_crime_pipelines.transform.temporal import DERIVED_COLUMNS
from chi_crime_pipelines.utils.logging import get_pipeline_log
from tests.conftest import make_row, write_crime_csv


def test_pipeline_row_counts_shrink_monotonically(crime_csv):
    out = run_transforms(crime_csv)

    assert len(out["loaded"]) == 8
    assert len(out["cleaned"]) == 6
    assert len(out["crimes"]) == 5
    assert len(out["crimes"]) <= len(out["cleaned"]) <= len(out["loaded"])


def test_pipeline_output_shape(crime_csv):
    crimes = run_transforms(crime_csv)["crimes"]

    assert list(crimes.columns) == KEEP_COLUMNS + DERIVED_COLUMNS
    assert crimes["year"].between(2012, 2016).all()
    assert set(crimes["weekday"]) <= set(WEEKDAY_ORDER)
    assert crimes["arrest"].dtype == bool
    assert not crimes.isna().any().any()


def test_pipeline_stages_do_not_share_tables(crime_csv):
    out = run_transforms(crime_csv)
    assert "year" not in out["cleaned"].columns
    assert out["loaded"]["arrest"].tolist()[0] == "True"


def test_pipeline_logs_every_stage(crime_csv):
    run_transforms(crime_csv)
    steps = [entry["step"] for entry in get_pipeline_log()]

    assert len(steps) == 5
    assert steps[0].startswith("Step 1")
    assert steps[-1].startswith("Step 5")


def test_pipeline_aborts_on_malformed_timestamp(tmp_path, raw_rows):
    raw_rows[2]["Date"] = "2015-07-04 12:30"
    path = write_crime_csv(tmp_path / "bad.csv", raw_rows)

    with pytest.raises(ParseError) as exc:
        run_transforms(path)
    assert exc.value.value == "2015-07-04 12:30"
    assert exc.value.row == 2


def test_pipeline_can_drop_malformed_timestamps(tmp_path, raw_rows):
    raw_rows[2]["Date"] = "2015-07-04 12:30"
    path = write_crime_csv(tmp_path / "bad.csv", raw_rows)

    crimes = run_transforms(path, on_parse_error="drop")["crimes"]
    assert "HW100003" not in crimes["case_number"].tolist()
    assert len(crimes) == 4


def test_pipeline_custom_year_range(tmp_path, raw_rows):
    raw_rows.append(
        make_row(8, "HW100008", "05/05/2017 04:00:00 PM", "001XX N STATE ST", "THEFT", "RETAIL THEFT",
                 "DEPARTMENT STORE", "False", "001", "41.883", "-87.628")
    )
    path = write_crime_csv(tmp_path / "wide.csv", raw_rows)

    crimes = run_transforms(path, years=range(2016, 2018))["crimes"]
    assert sorted(crimes["year"].unique().tolist()) == [2016, 2017]
    assert len(crimes) == 4


def test_pipeline_missing_input(tmp_path):
    with pytest.raises(InputFileError):
        run_transforms(tmp_path / "missing.csv")


def test_pipeline_errors_name_the_source_csv_row(tmp_path, raw_rows):
    # row 5 is dropped by the cleaner, so row 6 sits at position 5 afterwards
    raw_rows[6]["Date"] = "2017-01-02 08:00"
    path = write_crime_csv(tmp_path / "bad_date.csv", raw_rows)

    with pytest.raises(ParseError) as exc:
        run_transforms(path)
    assert exc.value.row == 6


def test_pipeline_coordinate_error_names_the_source_csv_row(tmp_path, raw_rows):
    raw_rows[6]["Latitude"] = "north"
    path = write_crime_csv(tmp_path / "bad_lat.csv", raw_rows)

    with pytest.raises(FormatError) as exc:
        run_transforms(path)
    assert exc.value.row == 6
    assert exc.value.value == "north"


def test_pipeline_tables_keep_source_row_numbers(crime_csv):
    out = run_transforms(crime_csv)
    assert out["cleaned"].index.tolist() == [0, 1, 2, 3, 4, 6]
    assert out["crimes"].index.tolist() == [0, 1, 2, 3, 4]


def test_pipeline_log_counts_removed_rows(crime_csv):
    run_transforms(crime_csv)
    removed = [entry["removed"] for entry in get_pipeline_log()]

    # cleaner drops rows 5 and 7, the year filter drops the 2017 row
    assert removed == [None, 2, 0, 0, 1]


def test_pipeline_log_counts_dropped_timestamps(tmp_path, raw_rows):
    raw_rows[2]["Date"] = "2015-07-04 12:30"
    path = write_crime_csv(tmp_path / "bad.csv", raw_rows)

    run_transforms(path, on_parse_error="drop")
    step4 = [e for e in get_pipeline_log() if e["step"].startswith("Step 4")][0]
    assert step4["removed"] == 1
    assert step4["rows"] == 5
