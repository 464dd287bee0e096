"""
Per-student analytics routes.
"""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from decorators import admin_required
from models import StudentEnrollment
from services import build_student_analytics, group_by_student
from error_handler import handle_api_error, error_response
from .utils import (
    utcnow, get_int_arg, get_active_academic_year, load_academic_years, can_view_student,
    load_attendance_records, load_exam_scores, load_exams, count_lessons_with_attendance,
    count_remaining_lessons, load_active_enrollments, student_payload
)

bp = Blueprint('students', __name__)


def _round(value):
    return None if value is None else round(value, 1)


@bp.route('/students/<int:student_id>/analytics')
@login_required
def student_analytics(student_id):
    """
    Attendance, exam and graduation analytics for one student.

    Without ``academicYearId`` everything the student has on record counts,
    exams are limited to the enrollment's own years and a YEAR_2 student also
    owes the previous year's YEAR_1 exams. With it, only that year's lessons
    and that year level's exams count.
    """
    enrollment = StudentEnrollment.query.filter_by(student_id=student_id).first()
    if not can_view_student(student_id, enrollment):
        return error_response('Forbidden', 403)
    if enrollment is None:
        return error_response('Enrollment not found', 404)

    try:
        academic_year_id = get_int_arg('academicYearId')
        now = utcnow()

        remaining_year_id = academic_year_id
        if remaining_year_id is None:
            active_year = get_active_academic_year()
            remaining_year_id = active_year.id if active_year else None

        analytics = build_student_analytics(
            enrollment,
            load_attendance_records([student_id], academic_year_id),
            load_exam_scores([student_id], academic_year_id),
            load_exams(academic_year_id),
            now,
            all_lessons=count_lessons_with_attendance(academic_year_id),
            remaining_lessons=count_remaining_lessons(remaining_year_id, now),
            carry_over=academic_year_id is None,
            academic_years=load_academic_years() if academic_year_id is None else None,
        )
        analytics['enrollment'].update({
            'id': enrollment.id,
            'student': student_payload(enrollment.student),
            'mentor': student_payload(enrollment.mentor),
        })
        return jsonify(analytics)
    except Exception as e:
        return handle_api_error(e, 'Failed to fetch student analytics')


@bp.route('/students/analytics/batch')
@login_required
@admin_required
def batch_analytics():
    """Summary analytics for every active student in one academic year."""
    try:
        academic_year_id = get_int_arg('academicYearId', required=True)
        now = utcnow()

        enrollments = load_active_enrollments()
        student_ids = [e.student_id for e in enrollments]
        records = load_attendance_records(student_ids, academic_year_id)
        scores = load_exam_scores(student_ids, academic_year_id)
        exams = load_exams(academic_year_id)

        records_by_student = group_by_student(records)
        scores_by_student = group_by_student(scores)

        results = []
        for enrollment in enrollments:
            analytics = build_student_analytics(
                enrollment,
                records_by_student.get(enrollment.student_id, []),
                scores_by_student.get(enrollment.student_id, []),
                exams,
                now,
                carry_over=False,
            )
            attendance = analytics['attendance']
            exam_summary = analytics['exams']
            results.append({
                'studentId': enrollment.student_id,
                'studentName': enrollment.student.name if enrollment.student else None,
                'yearLevel': enrollment.year_level,
                'attendancePercentage': _round(attendance['percentage']),
                'totalLessons': attendance['totalLessons'],
                'attendedLessons': _round(attendance['effectivePresent']),
                'avgExamScore': _round(exam_summary['overallAverage']),
                'examCount': exam_summary['examsTaken'],
                'missingExamCount': len(exam_summary['missingExams']),
                'eligible': analytics['graduation']['eligible'],
            })

        current_app.logger.info(f"Batch analytics computed for {len(results)} students (year {academic_year_id})")
        return jsonify(results)
    except Exception as e:
        return handle_api_error(e, 'Failed to fetch batch analytics')
