from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash
from models import User

auth_blueprint = Blueprint('auth', __name__)


def _safe_next(target):
    # Only follow relative paths from the login form's ``next`` field
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_blueprint.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(current_app.config['REDIRECTS']['classes'])

    if request.method == 'POST':
        username = (request.form.get('username') or '').strip()
        password = request.form.get('password') or ''

        if not username or not password:
            flash('Username and password are required.', 'danger')
            return render_template('auth/login.html'), 400

        user = User.query.filter_by(username=username).first()
        if user and check_password_hash(user.password_hash, password):
            login_user(user)
            current_app.logger.info(f"User {user.username} logged in")
            return redirect(_safe_next(request.args.get('next'))
                            or current_app.config['REDIRECTS']['classes'])

        current_app.logger.warning(f"Failed login attempt for '{username}'")
        flash('Invalid username or password.', 'danger')
        return render_template('auth/login.html'), 401

    return render_template('auth/login.html')


@auth_blueprint.route('/logout')
@login_required
def logout():
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
