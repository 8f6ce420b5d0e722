"""
Lesson Routes Package

Lesson listing, lesson pages, admin create/update/delete and the JSON
progress toggles, each in its own module.
"""

from flask import Blueprint

# Create the main lesson blueprint
lesson_blueprint = Blueprint('lesson', __name__)

# Import all route modules to register their routes
from . import (
    views,
    admin,
    progress
)

lesson_blueprint.register_blueprint(views.bp, url_prefix='')
lesson_blueprint.register_blueprint(admin.bp, url_prefix='')
lesson_blueprint.register_blueprint(progress.bp, url_prefix='')
