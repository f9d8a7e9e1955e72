from pathlib import Path

# Project Root
PROJECT_ROOT = Path(__file__).resolve().parent

# Data Directory
DATA_DIR = PROJECT_ROOT / "data"

RAW_DIR = DATA_DIR / "raw"
RAW_CRIMES_CSV = RAW_DIR / "Chicago_Crimes_2012_to_2017.csv"

# Reports
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"

# Columns kept after loading (standardized names, in output order)
KEEP_COLUMNS = [
    "case_number",
    "date",
    "block",
    "primary_type",
    "description",
    "location_description",
    "arrest",
    "district",
    "latitude",
    "longitude",
]

# Raw timestamp, e.g. "01/05/2013 11:40:00 PM"
TIMESTAMP_COL = "date"
TIMESTAMP_FORMAT = "%m/%d/%Y %I:%M:%S %p"

# "raise" aborts on the first malformed timestamp, "drop" removes the row
PARSE_FAILURE_POLICY = "raise"

# Calendar axes
YEARS = range(2012, 2017)
MONTHS = range(1, 13)
HOURS = range(24)
WEEKDAY_ORDER = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Summary thresholds
MIN_GROUP_COUNT = 1000
TOP_N = 10

HOMICIDE_TYPES = ["HOMICIDE"]

# Chicago bounding box (lat_min, lon_min, lat_max, lon_max)
CITY_BOUNDS = (41.64, -87.94, 42.03, -87.52)
