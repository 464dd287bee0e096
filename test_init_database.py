from models import ExamSection, User
from init_database import EXAM_SECTIONS, seed_exam_sections, seed_super_admin, init_database


def test_seed_exam_sections_is_idempotent(app):
    assert seed_exam_sections() == len(EXAM_SECTIONS)
    assert seed_exam_sections() == 0
    assert ExamSection.query.count() == len(EXAM_SECTIONS)


def test_seed_super_admin_once(app):
    assert seed_super_admin('root', 'secret-password') is True
    assert seed_super_admin('root', 'another-password') is False
    assert User.query.filter_by(username='root').one().role == 'SUPER_ADMIN'


def test_init_database_creates_admin_from_environment(app, monkeypatch):
    monkeypatch.setenv('SUPER_ADMIN_PASSWORD', 'secret-password')
    monkeypatch.setenv('SUPER_ADMIN_USERNAME', 'director')

    assert init_database(app) is True
    assert User.query.filter_by(username='director').count() == 1
    assert ExamSection.query.filter_by(name='DOGMA').one().display_name == 'Dogma'
