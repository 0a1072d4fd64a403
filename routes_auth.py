"""
routes_auth.py
Authentication routes: login, logout (Supabase email/password)
"""
import logging
from flask import Blueprint, request, jsonify, redirect, render_template, url_for, flash, session
from flask_login import login_user, logout_user, login_required, current_user

from src.auth_utils import sign_in, sign_out
from src.notifications.toast import pending_toasts

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__)

# User will be set by init_routes() in web_app.py
User = None

def init_routes(user_class):
    """Initialize routes with the User class"""
    global User
    User = user_class


# =============================================================================
# LOGIN PAGE
# =============================================================================

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Handle user login - using Supabase email/password auth."""
    if current_user.is_authenticated:
        return redirect(url_for('reviews.list_reviews'))

    if request.method == 'GET':
        return render_template('login.html', toasts=pending_toasts())

    data = request.json if request.is_json else request.form
    email = data.get('email')
    password = data.get('password')

    if not email or not password:
        error_msg = 'Email and password required.'
        if request.is_json:
            return jsonify({'error': error_msg}), 400
        flash(error_msg, 'error')
        return render_template('login.html', toasts=pending_toasts()), 400

    logger.info("[LOGIN] Attempting Supabase login for email: %s", email)
    supabase_user = sign_in(email, password)

    if not supabase_user:
        error_msg = 'Invalid email or password.'
        if request.is_json:
            return jsonify({'error': error_msg}), 401
        flash(error_msg, 'error')
        return render_template('login.html', toasts=pending_toasts()), 401

    user = User(str(supabase_user.id), supabase_user.email)
    session['user_email'] = user.email
    login_user(user, remember=True)
    logger.info("[LOGIN] Login successful for %s (Supabase UID: %s)", user.email, user.id)

    next_url = request.args.get('next')
    if not next_url or not next_url.startswith('/') or next_url.startswith('//'):
        next_url = url_for('reviews.add_review')

    if request.is_json:
        return jsonify({'success': True, 'redirect': next_url})
    return redirect(next_url)


# =============================================================================
# LOGOUT
# =============================================================================

@auth_bp.route('/logout')
@login_required
def logout():
    """User logout"""
    logger.info("[LOGOUT] Logging out %s", current_user.email)
    sign_out()
    logout_user()
    session.pop('user_email', None)
    flash('Logged out successfully', 'info')
    return redirect(url_for('auth.login'))
