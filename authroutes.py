# Core Flask imports
from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user

# Database and model imports
from models import User

from decorators import role_display_name
from services import log_activity

# Werkzeug utilities
from werkzeug.security import check_password_hash

auth_blueprint = Blueprint('auth', __name__)


def _user_payload(user):
    return {
        'id': user.id,
        'username': user.username,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'roleDisplayName': role_display_name(user.role),
    }


@auth_blueprint.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or request.form
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    if not username or not password:
        return jsonify({'error': 'Username and password are required.'}), 400

    user = User.query.filter_by(username=username).first()
    if not user or not check_password_hash(user.password_hash, password):
        log_activity(
            user_id=user.id if user else None,
            action='login_failed',
            details={'username': username},
            success=False,
            error_message='invalid_credentials'
        )
        return jsonify({'error': 'Invalid username or password.'}), 401

    if not user.is_active:
        log_activity(user_id=user.id, action='login_failed', success=False, error_message='account_disabled')
        return jsonify({'error': 'This account has been disabled.'}), 403

    login_user(user, remember=bool(data.get('remember')))
    log_activity(user_id=user.id, action='login', details={'role': user.role})
    return jsonify({'user': _user_payload(user)})


@auth_blueprint.route('/logout', methods=['POST'])
@login_required
def logout():
    log_activity(user_id=current_user.id, action='logout', details={'role': current_user.role})
    logout_user()
    return jsonify({'success': True})


@auth_blueprint.route('/me')
@login_required
def me():
    return jsonify({'user': _user_payload(current_user)})
