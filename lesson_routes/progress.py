"""
JSON endpoints that flip a user's watched / checked-in flags for a lesson.
"""

from flask import Blueprint, jsonify
from flask_login import current_user
from decorators import login_required_json
from error_handler import json_error_response, log_application_error
from services.lessons import toggle_lesson_checked_in, toggle_lesson_watched

bp = Blueprint('progress', __name__)


@bp.route('/class/<int:lesson_id>/watched', methods=['POST'])
@login_required_json
def toggle_watched(lesson_id):
    try:
        toggle_lesson_watched(lesson_id, current_user.id)
        return jsonify({'msg': 'toggled lesson watched'})
    except Exception as e:
        log_application_error(e, context=f"toggling watched on class {lesson_id}")
        return json_error_response(e)


@bp.route('/class/<int:lesson_id>/checkedin', methods=['POST'])
@login_required_json
def toggle_checked_in(lesson_id):
    try:
        toggle_lesson_checked_in(lesson_id, current_user.id)
        return jsonify({'msg': 'toggled lesson checked in'})
    except Exception as e:
        log_application_error(e, context=f"toggling checked in on class {lesson_id}")
        return json_error_response(e)
