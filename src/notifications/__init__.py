"""Notifications shown to the user"""

from .toast import Toast, notify, pending_toasts

__all__ = ['Toast', 'notify', 'pending_toasts']
