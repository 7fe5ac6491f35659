"""
Configuration constants for the grade-point engine.

Values here are shared by the engine, the presentation helpers and the
Streamlit page. Institution-specific numbers do not live here; they belong
to rule-set profiles in ``catalog.py``.
"""

import os

# ------------------------
# Reserved bucket keys
# ------------------------
OVERALL = "overall"
RECENT = "recent"
UNWEIGHTED = "unweighted"

# Label used whenever a classification cannot be made (no qualifying credits)
UNAVAILABLE = "Unavailable"

# ------------------------
# Defaults
# ------------------------
DEFAULT_RULE_SET_ID = "standard-4.0-plus-minus"

# Display rounding only; the engine never rounds
GPA_DISPLAY_PLACES = 2
CREDIT_DISPLAY_PLACES = 1

# ------------------------
# Logging
# ------------------------
LOG_LEVEL = os.environ.get("GRADEPOINT_LOG_LEVEL", "WARNING").upper()
