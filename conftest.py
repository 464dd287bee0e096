from datetime import datetime, timedelta
from itertools import count

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from config import TestingConfig
from models import (
    db, User, AcademicYear, ExamSection, Lesson, AttendanceRecord, Exam, ExamScore, StudentEnrollment
)

NOW = datetime(2026, 3, 1, 12, 0)


class SnapshotBuilder:
    """Builds unsaved model instances for exercising the analytics engine without a database."""

    def __init__(self):
        self._ids = count(1)
        self.now = NOW

    def section(self, name='DOGMA', display_name='Dogma'):
        return ExamSection(id=next(self._ids), name=name, display_name=display_name)

    def year(self, name='2025-2026', is_active=True, start_date=None):
        start_date = start_date or NOW.date()
        return AcademicYear(id=next(self._ids), name=name, is_active=is_active,
                            start_date=start_date, end_date=start_date + timedelta(days=300))

    def lesson(self, is_exam_day=False, status='COMPLETED', academic_year_id=1):
        return Lesson(id=next(self._ids), title='Lesson', is_exam_day=is_exam_day, status=status,
                      academic_year_id=academic_year_id, scheduled_date=NOW - timedelta(days=1))

    def record(self, student_id, status, lesson=None, **lesson_kwargs):
        lesson = lesson or self.lesson(**lesson_kwargs)
        return AttendanceRecord(id=next(self._ids), student_id=student_id, status=status,
                                lesson=lesson, lesson_id=lesson.id)

    def records(self, student_id, *statuses, **lesson_kwargs):
        return [self.record(student_id, status, **lesson_kwargs) for status in statuses]

    def exam(self, section, year_level='BOTH', days_from_now=-7, total_points=100, academic_year_id=1):
        return Exam(id=next(self._ids), exam_section=section, exam_section_id=section.id,
                    year_level=year_level, total_points=total_points, academic_year_id=academic_year_id,
                    exam_date=NOW + timedelta(days=days_from_now))

    def score(self, student_id, exam, score):
        return ExamScore(id=next(self._ids), student_id=student_id, exam=exam, exam_id=exam.id, score=score)

    def enrollment(self, student_id, year_level='YEAR_1', name=None, status='ACTIVE', academic_year_id=1):
        student = User(id=student_id, username=f'student{student_id}', name=name or f'Student {student_id}',
                       password_hash='x', role='STUDENT')
        return StudentEnrollment(id=next(self._ids), student_id=student_id, student=student,
                                 year_level=year_level, status=status, is_active=True,
                                 academic_year_id=academic_year_id)


@pytest.fixture
def snapshot():
    return SnapshotBuilder()


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(username, role, name=None, password='password123'):
        user = User(username=username, name=name or username.title(), role=role,
                    email=f'{username}@example.org', password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def login(client):
    def _login(username, password='password123'):
        response = client.post('/auth/login', json={'username': username, 'password': password})
        assert response.status_code == 200, response.get_json()
        return response
    return _login
