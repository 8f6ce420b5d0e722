"""
Error types and error handling helpers for the lesson pages.

Services raise LessonError subclasses; each view decides whether to log and
redirect or to answer with a JSON status.
"""

import traceback
from flask import current_app, flash, jsonify, redirect, render_template
from flask_wtf.csrf import CSRFError
from extensions import db


class LessonError(Exception):
    """Base class for lesson failures that carry an HTTP status."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class LessonNotFound(LessonError):
    status_code = 404


class LessonFormError(LessonError):
    status_code = 400


def log_application_error(error, context=None):
    """Log application errors with context."""
    error_message = str(error)
    if context:
        error_message = f"{error_message} | Context: {context}"
    if isinstance(error, LessonError):
        current_app.logger.warning(error_message)
    else:
        current_app.logger.error(f"{error_message}\n{traceback.format_exc()}")


def json_error_response(error):
    """JSON body for a failed JSON endpoint, status taken from the error or 500."""
    status = getattr(error, 'status_code', None) or 500
    return jsonify({'error': str(error)}), status


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('shared/error.html',
                               error_code=404,
                               error_message="The page you're looking for doesn't exist."), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"500 Error: {error}")
        return render_template('shared/error.html',
                               error_code=500,
                               error_message='Something went wrong on our end.'), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        flash('Invalid request. Please try again.', 'danger')
        return redirect(app.config['REDIRECTS']['classes'])
