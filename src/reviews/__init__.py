"""Product review submission"""

from .form import ReviewForm, ImageEntry, PLATFORMS, REQUIRED_FIELDS, build_payload
from .draft import ReviewDraft
from .api_client import ReviewApiClient, ReviewSubmissionError
from .page import AddReviewPage

__all__ = [
    'ReviewForm',
    'ImageEntry',
    'PLATFORMS',
    'REQUIRED_FIELDS',
    'build_payload',
    'ReviewDraft',
    'ReviewApiClient',
    'ReviewSubmissionError',
    'AddReviewPage',
]
