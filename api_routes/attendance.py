"""
Attendance entry routes.
"""

from datetime import datetime
from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from decorators import admin_required
from models import db, AttendanceRecord, Lesson, ATTENDANCE_STATUSES
from services import log_activity
from error_handler import handle_api_error, error_response, ValidationError

bp = Blueprint('attendance', __name__)


def _parse_arrival(value, lesson):
    """Combine an 'HH:MM' arrival time with the lesson date; unparseable values are dropped."""
    if not value or not str(value).strip():
        return None
    for fmt in ('%H:%M', '%H:%M:%S'):
        try:
            arrival = datetime.strptime(str(value).strip(), fmt).time()
        except ValueError:
            continue
        return datetime.combine(lesson.scheduled_date.date(), arrival)
    return None


@bp.route('/attendance/batch', methods=['POST'])
@login_required
@admin_required
def save_attendance_batch():
    """Create or update attendance for many students of one lesson in one transaction."""
    data = request.get_json(silent=True) or {}
    lesson_id = data.get('lessonId')
    records = data.get('records')

    if not lesson_id or not isinstance(records, list):
        return error_response('Missing lessonId or records array', 400)

    lesson = db.session.get(Lesson, lesson_id)
    if lesson is None:
        return error_response('Lesson not found', 404)

    try:
        existing = {
            r.student_id: r for r in AttendanceRecord.query.filter_by(lesson_id=lesson.id).all()
        }
        created = 0
        updated = 0
        for entry in records:
            student_id = entry.get('studentId')
            status = entry.get('status')
            if not student_id or status not in ATTENDANCE_STATUSES:
                raise ValidationError(f"Invalid attendance entry for student {student_id}: status {status!r}")

            record = existing.get(student_id)
            if record is None:
                record = AttendanceRecord(
                    lesson_id=lesson.id,
                    student_id=student_id,
                    recorded_by_id=current_user.id,
                )
                db.session.add(record)
                existing[student_id] = record
                created += 1
            else:
                updated += 1
            record.status = status
            record.arrived_at = _parse_arrival(entry.get('arrivedAt'), lesson)
            record.notes = entry.get('notes') or None

        db.session.commit()
        current_app.logger.info(f"Attendance saved for lesson {lesson.id}: {created} created, {updated} updated")
        log_activity(
            user_id=current_user.id,
            action='attendance_batch',
            details={'lesson_id': lesson.id, 'created': created, 'updated': updated}
        )
        return jsonify({'success': True, 'created': created, 'updated': updated})
    except Exception as e:
        db.session.rollback()
        return handle_api_error(e, 'Failed to save attendance')
