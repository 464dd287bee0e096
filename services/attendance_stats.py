"""
Attendance calculations.

Formula: (present + late / 2) / (total - excused) * 100

- PRESENT counts as 1, LATE as 0.5 (two lates equal one absence), ABSENT as 0
- EXCUSED is left out of both numerator and denominator
- Exam-day lessons are filtered out before these functions are called
- No countable lessons gives a rate of None, never 0
"""

import math

from models import ATTENDANCE_STATUSES
from .record_filter import partition_by_academic_year

ATTENDANCE_REQUIRED = 75


def tally_statuses(records):
    """Count records by status."""
    counts = {'present': 0, 'late': 0, 'absent': 0, 'excused': 0}
    for record in records:
        if record.status in ATTENDANCE_STATUSES:
            counts[record.status.lower()] += 1
    return counts


def calculate_attendance_rate(counts):
    """Weighted attendance percentage, or None when nothing is countable."""
    total = counts['present'] + counts['late'] + counts['absent'] + counts['excused']
    countable = total - counts['excused']
    if countable <= 0:
        return None
    return (counts['present'] + counts['late'] / 2) / countable * 100


def meets_attendance_requirement(rate):
    # No lessons yet is provisionally on track
    return rate is None or rate >= ATTENDANCE_REQUIRED


def calculate_effective_absences(counts):
    return counts['absent'] + counts['late'] / 2


def calculate_absences_allowed(counts, remaining_lessons):
    """
    How many of the remaining lessons a student can miss and still finish at
    or above the attendance requirement. Negative once that is out of reach.
    """
    total = counts['present'] + counts['late'] + counts['absent'] + counts['excused']
    countable = total - counts['excused']
    effective_present = counts['present'] + counts['late'] / 2

    needed = ATTENDANCE_REQUIRED / 100 * (countable + remaining_lessons)
    return math.floor(effective_present + remaining_lessons - needed)


def summarize_attendance(records, all_lessons=None, remaining_lessons=None):
    """
    Build the attendance block of the analytics payload.

    Args:
        records: countable attendance records for one student (or a cohort).
        all_lessons: number of lessons with attendance taken in scope, shown
            for context; defaults to the number of records.
        remaining_lessons: when given, adds ``absencesAllowed``.

    Returns:
        dict: counts, ``totalLessons`` (records minus excused), ``percentage``
        (None without countable lessons) and ``met``.
    """
    counts = tally_statuses(records)
    total = sum(counts.values())
    effective_total = total - counts['excused']
    rate = calculate_attendance_rate(counts)

    summary = {
        'totalLessons': effective_total,
        'allLessons': total if all_lessons is None else all_lessons,
        'presentCount': counts['present'],
        'lateCount': counts['late'],
        'absentCount': counts['absent'],
        'excusedCount': counts['excused'],
        'effectivePresent': counts['present'] + counts['late'] / 2,
        'effectiveAbsences': calculate_effective_absences(counts),
        'percentage': rate,
        'met': meets_attendance_requirement(rate),
        'required': ATTENDANCE_REQUIRED,
    }
    if remaining_lessons is not None:
        summary['absencesAllowed'] = calculate_absences_allowed(counts, remaining_lessons)
    return summary


def attendance_by_year(records, academic_years=None):
    """
    Attendance summaries per academic year.

    When ``academic_years`` is given, every year appears in that order (years
    without records report a None rate); otherwise only years that have
    records appear.
    """
    by_year = partition_by_academic_year(records)
    if academic_years is None:
        return [
            dict(summarize_attendance(year_records), yearId=year_id)
            for year_id, year_records in by_year.items()
        ]

    results = []
    for year in academic_years:
        summary = summarize_attendance(by_year.get(year.id, []))
        summary.update({
            'yearId': year.id,
            'yearName': year.name,
            'isActive': year.is_active,
        })
        results.append(summary)
    return results
