"""
Supabase Authentication Utilities
===================================
Email/password auth and session lookup with Supabase.
Based on: https://supabase.com/blog/oauth2-login-python-flask-apps

The client is created once per request and keeps its tokens in the Flask
session through FlaskSessionStorage.
"""

import logging
from typing import Optional

from flask import g, current_app
from werkzeug.local import LocalProxy
from supabase.client import Client, ClientOptions
from src.flask_storage import FlaskSessionStorage


logger = logging.getLogger(__name__)


def get_supabase_client() -> Optional[Client]:
    """
    Get or create the Supabase client for the current request.

    Returns:
        Supabase Client instance or None if not configured
    """
    if "supabase" not in g:
        supabase_url = current_app.config.get("SUPABASE_URL", "")
        supabase_key = current_app.config.get("SUPABASE_ANON_KEY", "")

        if not supabase_url or not supabase_key:
            return None

        try:
            g.supabase = Client(
                supabase_url,
                supabase_key,
                options=ClientOptions(storage=FlaskSessionStorage()),
            )
        except Exception as e:
            logger.error("[AUTH] Failed to create Supabase client: %s", e)
            return None

    return g.supabase


# Request-local proxy to the supabase client
supabase: Client = LocalProxy(get_supabase_client)


def get_session_user_id() -> Optional[str]:
    """
    Resolve the signed-in user's id from the Supabase session.

    Errors are logged, not raised.

    Returns:
        User id, or None when there is no session
    """
    client = get_supabase_client()
    if not client:
        logger.warning("[AUTH] Supabase client not configured")
        return None

    try:
        session = client.auth.get_session()
    except Exception as e:
        logger.error("[AUTH] Failed to get session: %s", e)
        return None

    if session and session.user:
        return str(session.user.id)
    return None


def sign_in(email: str, password: str):
    """
    Sign in with email and password.

    Returns:
        Supabase user on success, None otherwise
    """
    client = get_supabase_client()
    if not client:
        logger.error("[AUTH] Supabase client not configured")
        return None

    try:
        response = client.auth.sign_in_with_password({
            "email": email,
            "password": password
        })
    except Exception as e:
        logger.info("[AUTH] Sign-in failed for %s: %s", email, e)
        return None

    if not response or not response.user:
        return None
    return response.user


def sign_out():
    """Sign out of Supabase; failures are logged"""
    client = get_supabase_client()
    if not client:
        return
    try:
        client.auth.sign_out()
    except Exception as e:
        logger.warning("[AUTH] Sign-out failed: %s", e)
