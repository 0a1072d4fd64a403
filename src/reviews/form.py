"""
Review Form State
=================
Fields collected by the add-review page and the image entries attached to it.

Every value stays a string while it lives in the form; the backend API is
responsible for parsing price, shipping fee and date.
"""

from dataclasses import dataclass, asdict, fields
from typing import List, Dict, Any, Mapping, Optional


# (value, label) pairs rendered in the platform select
PLATFORMS = [
    ("coupang", "Coupang"),
    ("gmarket", "Gmarket"),
    ("11st", "11st"),
]

REQUIRED_FIELDS = ("platform", "productName", "reviewTitle", "reviewContent")


@dataclass
class ReviewForm:
    """Free-text, numeric and date fields of a review, all kept as strings"""
    platform: str = ""
    productName: str = ""
    optionName: str = ""
    price: str = ""
    shippingFee: str = ""
    seller: str = ""
    startDate: str = ""
    reviewTitle: str = ""
    reviewContent: str = ""

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ReviewForm":
        form = cls()
        form.update(data or {})
        return form

    def update(self, values: Mapping[str, Any]):
        """Copy known fields from submitted values, ignoring everything else"""
        for name in self.field_names():
            if name in values:
                value = values.get(name)
                setattr(self, name, "" if value is None else str(value))

    def missing_required(self) -> List[str]:
        """Names of required fields that are empty"""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def is_complete(self) -> bool:
        return not self.missing_required()

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ImageEntry:
    """A selected image file paired with its preview reference"""
    token: str
    filename: str
    mimetype: str
    preview: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImageEntry":
        return cls(
            token=data["token"],
            filename=data.get("filename", ""),
            mimetype=data.get("mimetype") or "application/octet-stream",
            preview=data.get("preview", ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def build_payload(form: ReviewForm, image_files: List[str], user_id: str) -> Dict[str, Any]:
    """
    Build the JSON body for POST /api/reviews.

    Args:
        form: Review form state
        image_files: Images encoded as data URLs, in selection order
        user_id: Resolved session user id

    Returns:
        Form fields plus ``imageFiles`` and ``userId``
    """
    payload = form.to_dict()
    payload["imageFiles"] = list(image_files)
    payload["userId"] = user_id
    return payload
