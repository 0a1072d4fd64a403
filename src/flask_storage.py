"""
Flask Session Storage for Supabase Auth
Based on: https://supabase.com/blog/oauth2-login-python-flask-apps
"""

from typing import Optional

from flask import session
from supabase_auth import SyncSupportedStorage


class FlaskSessionStorage(SyncSupportedStorage):
    """
    Storage adapter that keeps Supabase Auth tokens in the Flask session.

    Keys are namespaced so they never collide with the review draft or
    Flask-Login entries sharing the same session.
    """

    prefix = "supabase:"

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        return session.get(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        session[self._key(key)] = value

    def remove_item(self, key: str) -> None:
        session.pop(self._key(key), None)
