"""
Exam score entry routes.
"""

import math
from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from decorators import admin_required
from models import db, Exam, ExamScore
from services import log_activity
from error_handler import handle_api_error, error_response

bp = Blueprint('exams', __name__)


@bp.route('/exams/<int:exam_id>/scores', methods=['POST'])
@login_required
@admin_required
def create_exam_score(exam_id):
    """Record one student's score for an exam. A student can only be scored once per exam."""
    data = request.get_json(silent=True) or {}
    student_id = data.get('studentId')
    score = data.get('score')

    if not student_id or score is None:
        return error_response('Missing required fields', 400)

    exam = db.session.get(Exam, exam_id)
    if exam is None:
        return error_response('Exam not found', 404)

    try:
        score = float(score)
    except (TypeError, ValueError):
        return error_response('Score must be a number', 400)
    if not math.isfinite(score):
        return error_response('Score must be a finite number', 400)
    if score < 0 or score > exam.total_points:
        return error_response(f"Score must be between 0 and {exam.total_points:g}", 400)

    if ExamScore.query.filter_by(exam_id=exam.id, student_id=student_id).first():
        return error_response('Score already exists for this student', 400)

    try:
        exam_score = ExamScore(
            exam_id=exam.id,
            student_id=student_id,
            score=score,
            notes=data.get('notes') or None,
            graded_by_id=current_user.id,
        )
        db.session.add(exam_score)
        db.session.commit()
        log_activity(
            user_id=current_user.id,
            action='exam_score_created',
            details={'exam_id': exam.id, 'student_id': student_id}
        )
        return jsonify({
            'id': exam_score.id,
            'examId': exam.id,
            'studentId': student_id,
            'score': exam_score.score,
            'percentage': exam_score.percentage,
            'notes': exam_score.notes,
        }), 201
    except Exception as e:
        return handle_api_error(e, 'Failed to create exam score')
