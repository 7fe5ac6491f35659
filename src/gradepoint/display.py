import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

import pandas as pd

from .config import CREDIT_DISPLAY_PLACES, GPA_DISPLAY_PLACES
from .models import CalculationResult

# ------------------------
# Presentation helpers (never fed back into the engine)
# ------------------------

def round_half_up(x: float, places: int = GPA_DISPLAY_PLACES) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_gpa(gpa: Optional[float], places: int = GPA_DISPLAY_PLACES) -> str:
    if gpa is None or (isinstance(gpa, float) and math.isnan(gpa)):
        return "N/A"
    return f"{round_half_up(gpa, places):.{places}f}"


def format_credits(credits: float, places: int = CREDIT_DISPLAY_PLACES) -> str:
    return f"{round_half_up(credits, places):.{places}f}"


def result_frame(result: CalculationResult, places: int = GPA_DISPLAY_PLACES) -> pd.DataFrame:
    """
    One row per bucket: Bucket, GPA (rounded for display, NaN when
    unavailable), Credits, Quality points.
    """
    rows = []
    for key, totals in result.by_category.items():
        rows.append({
            "Bucket": key,
            "GPA": float("nan") if totals.gpa is None else round_half_up(totals.gpa, places),
            "Credits": totals.credits,
            "Quality points": round_half_up(totals.quality_points, places),
        })
    return pd.DataFrame(rows, columns=["Bucket", "GPA", "Credits", "Quality points"])
