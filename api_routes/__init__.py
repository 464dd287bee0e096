"""
API Routes Package

JSON endpoints grouped by functional area. Each module registers its own
blueprint on the main ``api`` blueprint.
"""

from flask import Blueprint

# Create the main API blueprint
api_blueprint = Blueprint('api', __name__)

# Import all route modules to register their routes
from . import (
    students,
    mentees,
    dashboard,
    attendance,
    exams,
)

api_blueprint.register_blueprint(students.bp, url_prefix='')
api_blueprint.register_blueprint(mentees.bp, url_prefix='')
api_blueprint.register_blueprint(dashboard.bp, url_prefix='')
api_blueprint.register_blueprint(attendance.bp, url_prefix='')
api_blueprint.register_blueprint(exams.bp, url_prefix='')
