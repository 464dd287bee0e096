"""
Database initialization script.
Creates the tables, seeds the fixed exam sections and, when
SUPER_ADMIN_PASSWORD is set, a super admin account.
"""

import os
from werkzeug.security import generate_password_hash

from app import create_app
from models import db, ExamSection, User, SUPER_ADMIN

EXAM_SECTIONS = [
    ('BIBLE_STUDIES', 'Bible Studies'),
    ('DOGMA', 'Dogma'),
    ('COMPARATIVE_THEOLOGY', 'Comparative Theology'),
    ('RITUAL_THEOLOGY_SACRAMENTS', 'Ritual Theology & Sacraments'),
    ('CHURCH_HISTORY', 'Church History'),
    ('SPIRITUALITY', 'Spirituality'),
    ('PSYCHOLOGY_METHODOLOGY', 'Psychology & Methodology'),
    ('MISCELLANEOUS', 'Miscellaneous'),
]


def seed_exam_sections():
    """Insert missing sections and refresh display names. Returns how many were created."""
    created = 0
    for name, display_name in EXAM_SECTIONS:
        section = ExamSection.query.filter_by(name=name).first()
        if section is None:
            db.session.add(ExamSection(name=name, display_name=display_name))
            created += 1
        else:
            section.display_name = display_name
    db.session.commit()
    return created


def seed_super_admin(username, password):
    if User.query.filter_by(username=username).first():
        return False
    db.session.add(User(
        username=username,
        name='Super Admin',
        password_hash=generate_password_hash(password),
        role=SUPER_ADMIN,
    ))
    db.session.commit()
    return True


def init_database(app=None):
    """Initialize tables and seed data."""
    app = app or create_app()
    with app.app_context():
        db.create_all()
        created = seed_exam_sections()
        app.logger.info(f"Exam sections ready ({created} created)")

        password = os.environ.get('SUPER_ADMIN_PASSWORD')
        if password:
            username = os.environ.get('SUPER_ADMIN_USERNAME', 'admin')
            if seed_super_admin(username, password):
                app.logger.info(f"Super admin '{username}' created")
    return True


if __name__ == '__main__':
    init_database()
