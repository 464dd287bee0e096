"""
Business logic and services. Keeps app.py as glue-only (config, blueprints, extensions).

The analytics modules are pure functions over already-loaded records; only
activity_log touches the database.
"""

from .record_filter import (
    countable_records,
    partition_by_academic_year,
    exams_for_year_level,
    applicable_exams,
    scores_for_exams,
)
from .attendance_stats import (
    ATTENDANCE_REQUIRED,
    tally_statuses,
    calculate_attendance_rate,
    calculate_effective_absences,
    calculate_absences_allowed,
    summarize_attendance,
    attendance_by_year,
)
from .exam_stats import (
    REQUIRED_AVERAGE,
    REQUIRED_SECTION_MINIMUM,
    summarize_exams,
    cohort_section_averages,
    exam_averages_by_year,
    weakest_sections,
)
from .missing_exams import find_missing_exams
from .graduation import evaluate_graduation, build_student_analytics
from .cohort import (
    describe_issues,
    group_by_student,
    cohort_entry,
    evaluate_student,
    evaluate_cohort,
    rank_at_risk,
    partition_cohort,
    build_program_analytics,
)
from .activity_log import log_activity

__all__ = [
    'countable_records',
    'partition_by_academic_year',
    'exams_for_year_level',
    'applicable_exams',
    'scores_for_exams',
    'ATTENDANCE_REQUIRED',
    'tally_statuses',
    'calculate_attendance_rate',
    'calculate_effective_absences',
    'calculate_absences_allowed',
    'summarize_attendance',
    'attendance_by_year',
    'REQUIRED_AVERAGE',
    'REQUIRED_SECTION_MINIMUM',
    'summarize_exams',
    'cohort_section_averages',
    'exam_averages_by_year',
    'weakest_sections',
    'find_missing_exams',
    'evaluate_graduation',
    'build_student_analytics',
    'describe_issues',
    'group_by_student',
    'cohort_entry',
    'evaluate_student',
    'evaluate_cohort',
    'rank_at_risk',
    'partition_cohort',
    'build_program_analytics',
    'log_activity',
]
