"""
Two-session attendance arithmetic.

A day is a full day when both the morning and afternoon sessions are present,
a half day when exactly one is, and absent otherwise. Percentages weigh half
days at 0.5.
"""

import math
from datetime import date
from typing import Any, Dict, Iterable, Optional, Tuple

from base.constants import ATTENDANCE_RULE_BANDS, DETENTION_THRESHOLD

PRESENT = "Present"
ABSENT = "Absent"

FULL_DAY = "full"
HALF_DAY = "half"
ABSENT_DAY = "absent"

EARTH_RADIUS_METERS = 6371e3

DateRange = Tuple[date, date]


def classify_day(morning: str, afternoon: str) -> str:
    present = (morning == PRESENT) + (afternoon == PRESENT)
    if present == 2:
        return FULL_DAY
    if present == 1:
        return HALF_DAY
    return ABSENT_DAY


def attendance_percentage(full_days: int, half_days: int, total_days: int) -> float:
    if total_days <= 0:
        return 0.0
    return round((full_days + 0.5 * half_days) / total_days * 100, 2)


def count_days(records: Iterable[Any]) -> Dict[str, int]:
    """Count full/half/absent days over records exposing morning and afternoon"""
    counts = {FULL_DAY: 0, HALF_DAY: 0, ABSENT_DAY: 0}
    for record in records:
        counts[classify_day(record.morning, record.afternoon)] += 1
    counts["total"] = sum(counts[k] for k in (FULL_DAY, HALF_DAY, ABSENT_DAY))
    return counts


def detailed_metrics(records: Iterable[Any]) -> Dict[str, Any]:
    """Per-person summary; duplicate dates keep the first record seen"""
    seen = {}
    for record in records:
        seen.setdefault(record.date, record)

    counts = count_days(seen.values())
    return {
        "totalDays": counts["total"],
        "presentDays": counts[FULL_DAY] + counts[HALF_DAY],
        "fullDays": counts[FULL_DAY],
        "halfDays": counts[HALF_DAY],
        "absentDays": counts[ABSENT_DAY],
        "percentage": attendance_percentage(
            counts[FULL_DAY], counts[HALF_DAY], counts["total"]
        ),
    }


def merge_session(existing: Optional[str], incoming: str) -> str:
    """An incoming Absent never overwrites a recorded session"""
    if incoming == ABSENT and existing:
        return existing
    return incoming


# ==================== DATE WINDOWS ====================


def semester_window(admission_year: int, semester: int) -> DateRange:
    """Odd semesters run July-December, even ones January-June of the next year"""
    start_year = admission_year + (int(semester) - 1) // 2
    if int(semester) % 2 == 1:
        return date(start_year, 7, 1), date(start_year, 12, 31)
    return date(start_year + 1, 1, 1), date(start_year + 1, 6, 30)


def academic_year_window(start_year: int) -> DateRange:
    return date(start_year, 7, 1), date(start_year + 1, 6, 30)


def intersect_windows(first: DateRange, second: DateRange) -> Optional[DateRange]:
    start = max(first[0], second[0])
    end = min(first[1], second[1])
    if start > end:
        return None
    return start, end


# ==================== RULES ====================


def attendance_rule_band(percentage: float) -> Dict[str, Any]:
    """Condonation band for an attendance percentage"""
    band = ATTENDANCE_RULE_BANDS[-1][1]
    for threshold, label in ATTENDANCE_RULE_BANDS:
        if math.floor(percentage) >= threshold:
            band = label
            break
    return {
        "percentage": percentage,
        "band": band,
        "detained": percentage < DETENTION_THRESHOLD,
    }


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
