from functools import wraps
from flask import abort
from flask_login import current_user

from models import SUPER_ADMIN, PRIEST, SERVANT_PREP, MENTOR, STUDENT

ADMIN_ROLES = [SUPER_ADMIN, PRIEST, SERVANT_PREP]
STUDENT_VIEWER_ROLES = ADMIN_ROLES + [MENTOR]

ROLE_DISPLAY_NAMES = {
    SUPER_ADMIN: 'Super Admin',
    PRIEST: 'Priest',
    SERVANT_PREP: 'Servants Prep Leader',
    MENTOR: 'Mentor',
    STUDENT: 'Student',
}


def is_admin(role):
    """Super admins, priests and servants prep leaders run the program."""
    return role in ADMIN_ROLES


def can_view_students(role):
    return role in STUDENT_VIEWER_ROLES


def role_display_name(role):
    return ROLE_DISPLAY_NAMES.get(role, role)


def admin_required(f):
    """Restricts access to admin roles."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)  # Unauthorized - not logged in
        if not is_admin(current_user.role):
            abort(403)  # Forbidden - wrong role
        return f(*args, **kwargs)
    return decorated_function


def student_viewer_required(f):
    """Restricts access to users who may look at student records (admins and mentors)."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if not can_view_students(current_user.role):
            abort(403)
        return f(*args, **kwargs)
    return decorated_function
