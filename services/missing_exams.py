"""
Detect applicable exams a student has not sat yet.
"""

from datetime import datetime


def is_past_due(exam_date, now):
    """True when ``exam_date`` is strictly before ``now``; date-only values compare by day."""
    if isinstance(exam_date, datetime):
        return exam_date < now
    return exam_date < now.date()


def serialize_missing_exam(exam):
    section = exam.exam_section
    return {
        'id': exam.id,
        'examDate': exam.exam_date.isoformat(),
        'totalPoints': exam.total_points,
        'yearLevel': exam.year_level,
        'sectionName': section.name if section else None,
        'sectionDisplayName': section.display_name if section else None,
    }


def find_missing_exams(applicable_exams, scores, student_id, now):
    """
    Past-due applicable exams with no score for ``student_id``, oldest first.

    Exams dated in the future are never missing.
    """
    scored_exam_ids = {score.exam.id for score in scores if score.student_id == student_id}
    missing = [
        exam for exam in applicable_exams
        if exam.id not in scored_exam_ids and is_past_due(exam.exam_date, now)
    ]
    missing.sort(key=lambda exam: exam.exam_date)
    return [serialize_missing_exam(exam) for exam in missing]
