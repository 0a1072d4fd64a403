"""
Review Draft
============
State of one visit to the add-review page, kept in the Flask session
between requests.

Form text is not stored: every interaction posts the whole form, so the
fields are rebuilt from the request each time.
"""

from dataclasses import dataclass, field
from typing import List, Optional, MutableMapping, Any

from .form import ReviewForm, ImageEntry


SESSION_KEY = "review_draft"


@dataclass
class ReviewDraft:
    form: ReviewForm = field(default_factory=ReviewForm)
    images: List[ImageEntry] = field(default_factory=list)
    user_id: Optional[str] = None
    loading: bool = False
    back_url: Optional[str] = None

    @classmethod
    def load(cls, store: MutableMapping[str, Any]) -> "ReviewDraft":
        """Read the draft from a session-like mapping (empty draft if absent)"""
        data = store.get(SESSION_KEY) or {}
        return cls(
            images=[ImageEntry.from_dict(item) for item in data.get("images", [])],
            user_id=data.get("user_id"),
            loading=bool(data.get("loading", False)),
            back_url=data.get("back_url"),
        )

    def save(self, store: MutableMapping[str, Any]):
        store[SESSION_KEY] = {
            "images": [image.to_dict() for image in self.images],
            "user_id": self.user_id,
            "loading": self.loading,
            "back_url": self.back_url,
        }

    def owns(self, token: str) -> bool:
        return any(image.token == token for image in self.images)
