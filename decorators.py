from functools import wraps
from flask import current_app, jsonify, redirect
from flask_login import current_user


def redirect_to(name):
    """Redirect to one of the named destinations in REDIRECTS."""
    return redirect(current_app.config['REDIRECTS'][name])


def admin_required(f):
    """Restricts access to admins; everyone else is sent to the home page."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin:
            return redirect_to('home')
        return f(*args, **kwargs)
    return decorated_function


def login_required_json(f):
    """Like login_required, but answers a JSON 401 instead of redirecting to the login page."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'msg': 'not logged in'}), 401
        return f(*args, **kwargs)
    return decorated_function
