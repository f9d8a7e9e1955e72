"""
Shared fixtures: a small raw crime export in the Chicago CSV layout.
"""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from chi_crime_pipelines.utils.logging import clear_pipeline_log

RAW_COLUMNS = [
    "",
    "ID",
    "Case Number",
    "Date",
    "Block",
    "IUCR",
    "Primary Type",
    "Description",
    "Location Description",
    "Arrest",
    "Domestic",
    "Beat",
    "District",
    "Year",
    "Latitude",
    "Longitude",
    "Location",
]


def make_row(idx, case, date, block, ptype, desc, loc, arrest, district, lat, lon):
    return {
        "": str(idx),
        "ID": str(10000000 + idx),
        "Case Number": case,
        "Date": date,
        "Block": block,
        "IUCR": "0820",
        "Primary Type": ptype,
        "Description": desc,
        "Location Description": loc,
        "Arrest": arrest,
        "Domestic": "False",
        "Beat": "1113",
        "District": district,
        "Year": date[6:10] if date else "",
        "Latitude": lat,
        "Longitude": lon,
        "Location": f"({lat}, {lon})" if lat and lon else "",
    }


# 8 raw rows: 2 incomplete (dropped by cleaning), 1 from 2017 (dropped by the year filter),
# and one two-victim homicide sharing a case number.
RAW_ROWS = [
    make_row(0, "HW100001", "01/05/2013 11:40:00 PM", "001XX W MADISON ST", "THEFT", "$500 AND UNDER",
             "STREET", "True", "001", "41.881", "-87.631"),
    make_row(1, "HW100002", "03/10/2014 12:15:00 AM", "034XX W CHICAGO AVE", "THEFT", "OVER $500",
             "APARTMENT", "False", "011", "41.895", "-87.711"),
    make_row(2, "HW100003", "07/04/2015 12:30:00 PM", "064XX S COTTAGE GROVE AVE", "BATTERY", "SIMPLE",
             "STREET", "False", "003", "41.778", "-87.606"),
    make_row(3, "HW100004", "06/18/2016 02:05:00 AM", "071XX S HALSTED ST", "HOMICIDE", "FIRST DEGREE MURDER",
             "STREET", "True", "007", "41.765", "-87.644"),
    make_row(4, "HW100004", "06/18/2016 02:05:00 AM", "071XX S HALSTED ST", "HOMICIDE", "FIRST DEGREE MURDER",
             "STREET", "True", "007", "41.765", "-87.644"),
    make_row(5, "HW100005", "09/09/2014 09:00:00 AM", "", "NARCOTICS", "POSS: CANNABIS 30GMS OR LESS",
             "SIDEWALK", "True", "011", "41.880", "-87.720"),
    make_row(6, "HW100006", "01/02/2017 08:00:00 AM", "011XX N PULASKI RD", "NARCOTICS", "POSS: HEROIN",
             "STREET", "True", "011", "41.900", "-87.726"),
    make_row(7, "HW100007", "11/11/2012 05:45:00 PM", "016XX W 63RD ST", "ROBBERY", "ARMED: HANDGUN",
             "RESTAURANT", "False", "007", "", ""),
]


def write_crime_csv(path, rows):
    pd.DataFrame(rows, columns=RAW_COLUMNS).to_csv(path, index=False)
    return path


@pytest.fixture(autouse=True)
def fresh_pipeline_log():
    clear_pipeline_log()
    yield
    clear_pipeline_log()


@pytest.fixture
def raw_rows():
    return [dict(r) for r in RAW_ROWS]


@pytest.fixture
def crime_csv(tmp_path, raw_rows):
    return write_crime_csv(tmp_path / "crimes.csv", raw_rows)


@pytest.fixture
def clean_frame():
    """Already cleaned + coerced rows, before temporal features."""
    return pd.DataFrame(
        {
            "case_number": ["A1", "A2", "A3", "A4"],
            "date": [
                "01/05/2013 11:40:00 PM",
                "03/10/2014 12:15:00 AM",
                "07/04/2015 12:30:00 PM",
                "01/02/2017 08:00:00 AM",
            ],
            "primary_type": ["THEFT", "THEFT", "BATTERY", "NARCOTICS"],
            "arrest": [True, False, False, True],
            "district": ["001", "011", "003", "011"],
            "latitude": [41.881, 41.895, 41.778, 41.900],
            "longitude": [-87.631, -87.711, -87.606, -87.726],
        }
    )
