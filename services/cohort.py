"""
Cohort-level analytics: at-risk detection, severity ranking and the
program-wide dashboard.

Every student in a cohort goes through the same per-student pipeline as the
student analytics endpoint, so a student flagged here is never shown as
eligible elsewhere.
"""

import logging

from .attendance_stats import attendance_by_year
from .exam_stats import exam_averages_by_year, weakest_sections
from .graduation import build_student_analytics
from .record_filter import countable_records

logger = logging.getLogger(__name__)


def describe_issues(attendance_summary, exam_summary):
    """Human-readable reasons a student is not on track."""
    issues = []
    rate = attendance_summary['percentage']
    if not attendance_summary['met'] and rate is not None:
        issues.append(f"Low attendance: {rate:.2f}%")

    average = exam_summary['overallAverage']
    if not exam_summary['overallAverageMet'] and average is not None:
        issues.append(f"Low exam average: {average:.2f}%")

    for section in exam_summary['sectionAverages']:
        if not section['passingMet']:
            issues.append(f"Failing section: {section['displayName']} ({section['average']:.2f}%)")
    return issues


def group_by_student(items):
    """Map student id to that student's items, keeping input order."""
    grouped = {}
    for item in items:
        grouped.setdefault(item.student_id, []).append(item)
    return grouped


def cohort_entry(enrollment, analytics):
    """Condense one student's analytics payload into a cohort entry."""
    attendance = analytics['attendance']
    exam_summary = analytics['exams']
    student = enrollment.student

    return {
        'id': enrollment.student_id,
        'name': student.name if student is not None else None,
        'yearLevel': enrollment.year_level,
        'attendanceRate': attendance['percentage'],
        'examAverage': exam_summary['overallAverage'],
        'missingExamCount': len(exam_summary['missingExams']),
        'eligible': analytics['graduation']['eligible'],
        'issues': describe_issues(attendance, exam_summary),
    }


def evaluate_student(enrollment, attendance_records, exam_scores, exams, now, carry_over=True,
                     academic_years=None):
    analytics = build_student_analytics(enrollment, attendance_records, exam_scores, exams, now,
                                        carry_over=carry_over, academic_years=academic_years)
    return cohort_entry(enrollment, analytics)


def evaluate_cohort(enrollments, attendance_records, exam_scores, exams, now, carry_over=True,
                    academic_years=None):
    """Evaluate every enrollment against the records that belong to its student."""
    records_by_student = group_by_student(attendance_records)
    scores_by_student = group_by_student(exam_scores)
    return [
        evaluate_student(
            enrollment,
            records_by_student.get(enrollment.student_id, []),
            scores_by_student.get(enrollment.student_id, []),
            exams,
            now,
            carry_over=carry_over,
            academic_years=academic_years,
        )
        for enrollment in enrollments
    ]


def _severity_key(entry):
    rate = entry['attendanceRate']
    average = entry['examAverage']
    worst = min(100 if rate is None else rate, 100 if average is None else average)
    return (-len(entry['issues']), worst)


def rank_at_risk(entries):
    """
    Most severe first: more simultaneous issues, then the lower of attendance
    rate and exam average. A missing metric counts as 100 on its axis.
    """
    return sorted(entries, key=_severity_key)


def partition_cohort(entries):
    at_risk = rank_at_risk([entry for entry in entries if not entry['eligible']])
    on_track = [entry for entry in entries if entry['eligible']]
    return {
        'atRisk': at_risk,
        'onTrack': on_track,
        'totalAtRisk': len(at_risk),
        'totalOnTrack': len(on_track),
    }


def build_program_analytics(academic_years, sections, enrollments, attendance_records, exam_scores,
                            exams, now, at_risk_limit=10, weakest_limit=3):
    """
    Admin dashboard payload across the whole program.

    ``enrollments`` should be the active enrollments; ``attendance_records``
    and ``exam_scores`` are every record in the program with lessons and
    exams attached.
    """
    cohort = partition_cohort(evaluate_cohort(enrollments, attendance_records, exam_scores, exams, now,
                                              academic_years=academic_years))
    logger.debug("Program analytics: %d at risk, %d on track", cohort['totalAtRisk'], cohort['totalOnTrack'])

    return {
        'examScoresByYear': exam_averages_by_year(exam_scores, academic_years, sections),
        'attendanceByYear': attendance_by_year(countable_records(attendance_records), academic_years),
        'atRiskStudents': cohort['atRisk'][:at_risk_limit],
        'weakestSections': weakest_sections(exam_scores, sections, limit=weakest_limit),
        'totalAtRisk': cohort['totalAtRisk'],
        'totalOnTrack': cohort['totalOnTrack'],
    }
