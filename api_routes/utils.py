"""
Shared query helpers for the API routes.

These load the snapshot of rows the analytics engine works on. Each request
loads its own snapshot; nothing is cached between requests.
"""

from datetime import datetime
from flask import request
from flask_login import current_user
from sqlalchemy.orm import joinedload
from models import (
    AcademicYear, AttendanceRecord, Exam, ExamScore, Lesson, StudentEnrollment, MENTOR, STUDENT
)
from decorators import is_admin, can_view_students
from error_handler import ValidationError


def utcnow():
    return datetime.utcnow()


def get_int_arg(name, required=False):
    """Read an integer query parameter; raises ValidationError when malformed or missing."""
    value = request.args.get(name)
    if value in (None, ''):
        if required:
            raise ValidationError(f"{name} is required")
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def get_active_academic_year():
    return AcademicYear.query.filter_by(is_active=True).order_by(AcademicYear.start_date.desc()).first()


def load_academic_years():
    return AcademicYear.query.order_by(AcademicYear.start_date).all()


def can_view_student(student_id, enrollment):
    """Students see themselves, admins see everyone, mentors see their mentees."""
    role = current_user.role
    if role == STUDENT:
        return current_user.id == student_id
    if is_admin(role):
        return True
    if role == MENTOR:
        return enrollment is not None and enrollment.mentor_id == current_user.id
    return can_view_students(role)


def load_attendance_records(student_ids=None, academic_year_id=None):
    """Attendance records with lessons attached, exam-day lessons excluded."""
    query = AttendanceRecord.query.join(Lesson).filter(Lesson.is_exam_day.is_(False))
    if student_ids is not None:
        query = query.filter(AttendanceRecord.student_id.in_(student_ids))
    if academic_year_id:
        query = query.filter(Lesson.academic_year_id == academic_year_id)
    return query.options(joinedload(AttendanceRecord.lesson)).all()


def load_exam_scores(student_ids=None, academic_year_id=None):
    """Exam scores with exam and section attached."""
    query = ExamScore.query.join(Exam)
    if student_ids is not None:
        query = query.filter(ExamScore.student_id.in_(student_ids))
    if academic_year_id:
        query = query.filter(Exam.academic_year_id == academic_year_id)
    return query.options(joinedload(ExamScore.exam).joinedload(Exam.exam_section)).all()


def load_exams(academic_year_id=None):
    query = Exam.query
    if academic_year_id:
        query = query.filter(Exam.academic_year_id == academic_year_id)
    return query.options(joinedload(Exam.exam_section)).order_by(Exam.exam_date).all()


def count_lessons_with_attendance(academic_year_id=None):
    """Non-exam lessons where attendance has been taken for at least one student."""
    query = Lesson.query.filter(Lesson.is_exam_day.is_(False), Lesson.attendance_records.any())
    if academic_year_id:
        query = query.filter(Lesson.academic_year_id == academic_year_id)
    return query.count()


def count_remaining_lessons(academic_year_id, now):
    """Scheduled instructional lessons still ahead in the given year."""
    if not academic_year_id:
        return None
    return Lesson.query.filter(
        Lesson.academic_year_id == academic_year_id,
        Lesson.is_exam_day.is_(False),
        Lesson.status == 'SCHEDULED',
        Lesson.scheduled_date >= now,
    ).count()


def load_active_enrollments(mentor_id=None):
    query = StudentEnrollment.query.filter_by(is_active=True)
    if mentor_id is not None:
        query = query.filter_by(mentor_id=mentor_id)
    return query.options(joinedload(StudentEnrollment.student)).all()


def student_payload(user):
    if user is None:
        return None
    return {'id': user.id, 'name': user.name, 'email': user.email}
