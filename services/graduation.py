"""
Graduation eligibility and the per-student analytics payload.

Eligibility is re-evaluated from current data on every call; nothing is
stored. A student graduates when attendance is at least 75%, the overall exam
average is at least 75% and every scored section averages at least 60%.
"""

from .record_filter import countable_records, applicable_exams, enrollment_exams, scores_for_exams
from .attendance_stats import summarize_attendance
from .exam_stats import summarize_exams
from .missing_exams import find_missing_exams


def evaluate_graduation(attendance_summary, exam_summary):
    attendance_met = attendance_summary['met']
    overall_average_met = exam_summary['overallAverageMet']
    all_sections_passing = exam_summary['allSectionsPassing']

    return {
        'eligible': attendance_met and overall_average_met and all_sections_passing,
        'attendanceMet': attendance_met,
        'overallAverageMet': overall_average_met,
        'allSectionsPassing': all_sections_passing,
    }


def build_student_analytics(enrollment, attendance_records, exam_scores, exams, now,
                            all_lessons=None, remaining_lessons=None, carry_over=True,
                            academic_years=None):
    """
    Compute the analytics for one student from an in-memory snapshot.

    Args:
        enrollment: the student's enrollment (``student_id``, ``year_level``, ``status``).
        attendance_records: the student's attendance records, lessons attached.
        exam_scores: the student's exam scores, exams and sections attached.
        exams: candidate exams; narrowed to the ones the student's year level owes.
        now: reference time for deciding which exams are past due.
        all_lessons: lessons with attendance taken in scope, for display.
        remaining_lessons: lessons still to come, enables ``absencesAllowed``.
        carry_over: YEAR_2 students also owe YEAR_1 exams (full-program view).
        academic_years: every academic year; when given, only exams from the
            years the enrollment covers are owed (see ``enrollment_exams``).

    Returns:
        dict: ``enrollment``, ``attendance``, ``exams`` and ``graduation`` blocks.
    """
    countable = countable_records(attendance_records)
    if academic_years is None:
        owed_exams = applicable_exams(exams, enrollment.year_level, carry_over=carry_over)
    else:
        owed_exams = enrollment_exams(exams, enrollment, academic_years, carry_over=carry_over)
    scores = scores_for_exams(exam_scores, owed_exams)

    attendance = summarize_attendance(countable, all_lessons=all_lessons,
                                      remaining_lessons=remaining_lessons)
    exam_summary = summarize_exams(scores, total_applicable_exams=len(owed_exams))
    exam_summary['missingExams'] = find_missing_exams(owed_exams, scores, enrollment.student_id, now)

    return {
        'enrollment': {
            'yearLevel': enrollment.year_level,
            'status': enrollment.status,
        },
        'attendance': attendance,
        'exams': exam_summary,
        'graduation': evaluate_graduation(attendance, exam_summary),
    }
