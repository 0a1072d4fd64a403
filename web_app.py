#!/usr/bin/env python3
"""
Review Poster Web App - Main Entry Point
========================================
Client-facing web application for submitting product reviews.

This file serves as the entry point that:
- Builds the Flask app from Config (environment / .env)
- Sets up server-side sessions (Redis or filesystem) and Flask-Login authentication
- Registers all route blueprints

Run locally:       python web_app.py
Run with gunicorn: gunicorn "web_app:create_app()"
"""

import os
import re
import logging
from pathlib import Path
from flask import Flask, redirect, url_for, session
from flask_login import LoginManager, UserMixin

from config import Config
from src.reviews import ReviewApiClient
from src.storage import PreviewStore

import routes_auth
import routes_reviews


logger = logging.getLogger(__name__)


# ============================================================================
# USER MODEL FOR FLASK-LOGIN
# ============================================================================

class User(UserMixin):
    """Signed-in user; the id is the Supabase UID"""

    def __init__(self, user_id, email):
        self.id = user_id
        self.email = email

    @staticmethod
    def get(user_id):
        """Rebuild the user from the current session"""
        email = session.get('user_email')
        if not email:
            return None
        return User(user_id, email)


# ============================================================================
# SESSION CONFIGURATION
# ============================================================================

def normalize_redis_url(redis_url: str) -> str:
    """
    Turn an Upstash-style Redis setting into a usable URL.

    Upstash gives: "redis-cli --tls -u redis://..."
    We need just: "rediss://..." (TLS)
    """
    if redis_url.startswith('redis-cli'):
        url_match = re.search(r'redis://[^\s]+', redis_url)
        if not url_match:
            raise ValueError(f"Failed to parse Redis URL from CLI format: {redis_url}")
        redis_url = url_match.group(0).replace('redis://', 'rediss://', 1)

    if redis_url.startswith('redis://') and 'upstash.io' in redis_url:
        redis_url = redis_url.replace('redis://', 'rediss://', 1)

    return redis_url


def configure_sessions(app: Flask):
    """
    Server-side sessions through Flask-Session.

    Redis when REDIS_URL is set, files under SESSION_FILE_DIR otherwise
    (local development).
    """
    from flask_session import Session

    redis_url = app.config.get('REDIS_URL')
    if redis_url:
        import redis

        app.config['SESSION_TYPE'] = 'redis'
        app.config['SESSION_REDIS'] = redis.from_url(
            normalize_redis_url(redis_url),
            decode_responses=False,  # Keep binary for session data
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        app.config['SESSION_PERMANENT'] = True
        app.config['SESSION_KEY_PREFIX'] = 'review_poster:session:'
        app.config['PERMANENT_SESSION_LIFETIME'] = 86400  # 24 hours
        Session(app)
        logger.info("Using Redis sessions")
        return

    logger.warning("REDIS_URL not set - using filesystem sessions (NOT for production!)")

    session_dir = Path(app.config['SESSION_FILE_DIR'])
    session_dir.mkdir(parents=True, exist_ok=True)

    app.config['SESSION_TYPE'] = 'filesystem'  # Store sessions on disk
    app.config['SESSION_FILE_DIR'] = str(session_dir)
    app.config['SESSION_PERMANENT'] = False  # Session expires when browser closes
    app.config['SESSION_FILE_THRESHOLD'] = 500  # Max number of session files
    Session(app)
    logger.info("Using filesystem sessions in %s", session_dir.absolute())


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(overrides: dict = None) -> Flask:
    """Build the web app; ``overrides`` replace Config values (used by tests)"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if app.config['SECRET_KEY'] == 'dev-secret-key-change-in-production' and not app.testing:
        logger.warning("SECRET_KEY not set or using default value!")

    is_production = os.getenv('FLASK_ENV') == 'production'
    app.config['SESSION_COOKIE_SECURE'] = is_production
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_NAME'] = 'review_poster_session'
    configure_sessions(app)

    # Flask-Login
    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'

    @login_manager.user_loader
    def load_user(user_id):
        """Load user for Flask-Login"""
        return User.get(user_id)

    # Route dependencies
    api_client = ReviewApiClient(app.config['REVIEW_API_URL'], timeout=app.config['REVIEW_API_TIMEOUT'])
    preview_store = PreviewStore(app.config['DRAFT_PHOTO_DIR'])
    preview_store.purge_older_than(app.config['PREVIEW_MAX_AGE'])

    routes_auth.init_routes(User)
    routes_reviews.init_routes(api_client, preview_store)

    app.register_blueprint(routes_auth.auth_bp)
    app.register_blueprint(routes_reviews.reviews_bp)

    @app.route('/')
    def index():
        return redirect(url_for('reviews.list_reviews'))

    return app


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == '__main__':
    app = create_app()
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    app.run(host='0.0.0.0', port=port, debug=debug)
