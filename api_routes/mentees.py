"""
Mentee dashboard routes for mentors (and admins looking at a mentor's group).
"""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from decorators import student_viewer_required, is_admin
from services import build_student_analytics, cohort_entry, group_by_student, partition_cohort
from error_handler import handle_api_error, error_response
from .utils import (
    utcnow, get_int_arg, load_academic_years, load_active_enrollments, load_attendance_records,
    load_exam_scores, load_exams, student_payload
)

bp = Blueprint('mentees', __name__)


@bp.route('/mentees/analytics')
@login_required
@student_viewer_required
def mentee_analytics():
    """
    Full analytics for each active mentee plus an at-risk / on-track split.

    Mentors always get their own mentees; admins may pass ``mentorId``.
    """
    try:
        mentor_id = get_int_arg('mentorId')
        if mentor_id is None:
            mentor_id = current_user.id
        elif mentor_id != current_user.id and not is_admin(current_user.role):
            return error_response('Forbidden', 403)

        now = utcnow()
        enrollments = load_active_enrollments(mentor_id=mentor_id)
        student_ids = [e.student_id for e in enrollments]
        records_by_student = group_by_student(load_attendance_records(student_ids))
        scores_by_student = group_by_student(load_exam_scores(student_ids))
        exams = load_exams()
        academic_years = load_academic_years()

        mentees = []
        entries = []
        for enrollment in enrollments:
            analytics = build_student_analytics(
                enrollment,
                records_by_student.get(enrollment.student_id, []),
                scores_by_student.get(enrollment.student_id, []),
                exams,
                now,
                academic_years=academic_years,
            )
            mentees.append({
                'id': enrollment.id,
                'student': student_payload(enrollment.student),
                'yearLevel': enrollment.year_level,
                'status': enrollment.status,
                'analytics': analytics,
            })
            entries.append(cohort_entry(enrollment, analytics))

        return jsonify({
            'mentees': mentees,
            'summary': partition_cohort(entries),
        })
    except Exception as e:
        return handle_api_error(e, 'Failed to fetch mentee analytics')
