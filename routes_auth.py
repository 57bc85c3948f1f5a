"""
routes_auth.py
Authentication routes: sign in, sign up, sign out
"""
import logging
from urllib.parse import urlparse

import psycopg2
from flask import Blueprint, request, redirect, render_template, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from werkzeug.security import generate_password_hash, check_password_hash

from src.schema import UserForm

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__)

# db and User will be set by init_routes() in web_app.py
db = None
User = None

USER_FIELDS = ('nickname', 'email', 'password', 'password_confirmation')

INVALID_LOGIN_MESSAGE = 'Invalid Email or password.'
EMAIL_TAKEN_MESSAGE = 'Email has already been taken'


def init_routes(database, user_class):
    """Initialize routes with database and User class"""
    global db, User
    db = database
    User = user_class


def _safe_next(target):
    """Only follow same-site relative redirects"""
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith('/') or target.startswith('//'):
        return None
    return target


# =============================================================================
# SIGN IN
# =============================================================================

@auth_bp.route('/users/sign_in', methods=['GET', 'POST'])
def login():
    """Sign in with email and password."""
    if current_user.is_authenticated:
        flash('You are already signed in.', 'notice')
        return redirect(url_for('items.index'))

    next_url = _safe_next(request.args.get('next'))

    if request.method == 'GET':
        return render_template('users/sign_in.html', email='', next_url=next_url)

    email = (request.form.get('user[email]') or '').strip()
    password = request.form.get('user[password]') or ''

    user_data = db.get_user_by_email(email) if email else None
    if not user_data or not check_password_hash(user_data['password_hash'], password):
        logger.info("[LOGIN] Sign-in failed for %s", email or '<blank>')
        flash(INVALID_LOGIN_MESSAGE, 'alert')
        return render_template('users/sign_in.html', email=email, next_url=next_url), 401

    user = User.from_row(user_data)
    remember = request.form.get('user[remember_me]') == '1'
    login_user(user, remember=remember)
    db.update_last_login(user.id)
    logger.info("[LOGIN] User %s signed in", user.id)

    flash('Signed in successfully.', 'notice')
    return redirect(next_url or url_for('items.index'))


# =============================================================================
# SIGN UP
# =============================================================================

@auth_bp.route('/users/sign_up', methods=['GET'])
@auth_bp.route('/users', methods=['POST'])
def register():
    """Member registration"""
    if current_user.is_authenticated:
        return redirect(url_for('items.index'))

    if request.method == 'GET':
        return render_template('users/sign_up.html', user={}, errors=[])

    data = {field: request.form.get(f'user[{field}]', '') for field in USER_FIELDS}
    form, errors = UserForm.parse(data)

    if form and db.get_user_by_email(form.email):
        errors = [EMAIL_TAKEN_MESSAGE]

    if not errors:
        try:
            user_id = db.create_user(
                form.nickname, form.email, generate_password_hash(form.password)
            )
        except psycopg2.IntegrityError:
            # Lost a race with another sign-up for the same email
            errors = [EMAIL_TAKEN_MESSAGE]

    if errors:
        redisplay = {'nickname': data['nickname'], 'email': data['email']}
        return render_template('users/sign_up.html', user=redisplay, errors=errors), 422

    logger.info("[REGISTER] Created user %s", user_id)
    login_user(User(user_id, form.nickname, form.email))
    flash('Welcome! You have signed up successfully.', 'notice')
    return redirect(url_for('items.index'))


# =============================================================================
# SIGN OUT
# =============================================================================

@auth_bp.route('/users/sign_out', methods=['GET', 'POST'])
@login_required
def logout():
    """User logout"""
    logger.info("[LOGOUT] User %s signed out", current_user.id)
    logout_user()
    flash('Signed out successfully.', 'notice')
    return redirect(url_for('items.index'))
