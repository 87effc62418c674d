import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
DEFAULT_SHIFTS = _constants["DEFAULT_SHIFTS"]
DEFAULT_SHIFT = _constants["DEFAULT_SHIFT"]

DEFAULT_REGION = _constants["DEFAULT_REGION"]
DEFAULT_SUBREGION = _constants["DEFAULT_SUBREGION"]

MAX_LOOKAHEAD_DAYS = _constants["MAX_LOOKAHEAD_DAYS"]
DAYS_PER_WEEK = _constants["DAYS_PER_WEEK"]

# Session hours are kept at this precision; sums are compared within one unit of it.
HOURS_DECIMALS = _constants["HOURS_DECIMALS"]
HOURS_TOLERANCE = 10 ** -HOURS_DECIMALS

MAX_CALENDAR_PASSES = _constants["MAX_CALENDAR_PASSES"]
