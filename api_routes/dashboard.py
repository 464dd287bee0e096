"""
Program-wide dashboard routes.
"""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from decorators import admin_required, student_viewer_required
from models import AcademicYear, ExamSection
from services import build_program_analytics, cohort_section_averages
from error_handler import handle_api_error
from .utils import utcnow, load_active_enrollments, load_attendance_records, load_exam_scores, load_exams

bp = Blueprint('dashboard', __name__)


@bp.route('/dashboard/analytics')
@login_required
@admin_required
def dashboard_analytics():
    """Yearly exam and attendance trends, at-risk students and weakest sections."""
    try:
        academic_years = AcademicYear.query.order_by(AcademicYear.start_date.desc()).all()
        sections = ExamSection.query.order_by(ExamSection.id).all()
        enrollments = load_active_enrollments()

        payload = build_program_analytics(
            academic_years,
            sections,
            enrollments,
            load_attendance_records(),
            load_exam_scores(),
            load_exams(),
            utcnow(),
            at_risk_limit=current_app.config['AT_RISK_DISPLAY_LIMIT'],
            weakest_limit=current_app.config['WEAKEST_SECTIONS_LIMIT'],
        )
        return jsonify(payload)
    except Exception as e:
        return handle_api_error(e, 'Failed to fetch analytics')


@bp.route('/dashboard/class-averages')
@login_required
@student_viewer_required
def class_averages():
    """Exam section averages across every active student."""
    try:
        sections = ExamSection.query.order_by(ExamSection.id).all()
        student_ids = [e.student_id for e in load_active_enrollments()]

        if not student_ids:
            return jsonify({
                'sectionAverages': [],
                'overallAverage': None,
                'totalStudents': 0,
                'totalScores': 0,
            })

        payload = cohort_section_averages(load_exam_scores(student_ids), sections)
        payload['totalStudents'] = len(student_ids)
        return jsonify(payload)
    except Exception as e:
        return handle_api_error(e, 'Failed to fetch class averages')
