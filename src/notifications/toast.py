"""
Toast Notifications
===================
Dismissible, non-blocking messages shown on the next rendered page.

Toasts ride on Flask's flash messages. The message is a dict with
``title``, ``description`` and ``variant`` so templates can render all three.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List

from flask import flash, get_flashed_messages


DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Toast:
    title: str
    description: str
    variant: str = DEFAULT

    @property
    def category(self) -> str:
        """Flash category matching the variant"""
        return "error" if self.variant == DESTRUCTIVE else "success"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def notify(toast: Toast):
    """Queue a toast for display"""
    flash(toast.to_dict(), toast.category)


def pending_toasts() -> List[Dict[str, str]]:
    """Pop queued toasts, wrapping plain flash messages as toasts"""
    toasts = []
    for category, message in get_flashed_messages(with_categories=True):
        if isinstance(message, dict):
            toasts.append(message)
        else:
            variant = DESTRUCTIVE if category == "error" else DEFAULT
            toasts.append(Toast(title="", description=str(message), variant=variant).to_dict())
    return toasts
