"""
Public lesson pages: the lesson list and a single lesson.
"""

from flask import Blueprint, render_template
from flask_login import current_user
from decorators import redirect_to
from error_handler import log_application_error
from services.lessons import get_all_lessons, get_all_lessons_progress, get_lesson_detail

bp = Blueprint('views', __name__)


@bp.route('/classes')
def all_lessons():
    """List every lesson, with the user's progress when logged in."""
    lessons = get_all_lessons()
    if current_user.is_authenticated:
        lessons = get_all_lessons_progress(current_user.id, lessons)
    return render_template('lesson/all_lessons.html', lessons=lessons)


@bp.route('/class/<permalink>')
def show_lesson(permalink):
    """Show one lesson with prev/next links and its assigned and due homework."""
    try:
        user_id = current_user.id if current_user.is_authenticated else None
        context = get_lesson_detail(permalink, user_id=user_id)
        return render_template('lesson/lesson.html', **context)
    except Exception as e:
        log_application_error(e, context=f"showing class '{permalink}'")
        return redirect_to('classes')
