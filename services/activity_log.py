"""
Audit trail for logins and data entry.
"""

import json
from flask import current_app, request, has_request_context
from extensions import db
from models import ActivityLog


def log_activity(user_id, action, details=None, success=True, error_message=None):
    """Write one ActivityLog row; failures are logged and never break the caller."""
    try:
        log_entry = ActivityLog(
            user_id=user_id,
            action=action,
            success=success,
            error_message=error_message,
        )
        if has_request_context():
            log_entry.ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            log_entry.user_agent = request.headers.get('User-Agent')
        if details:
            log_entry.details = json.dumps(details)
        db.session.add(log_entry)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to log activity '{action}': {str(e)}")
