"""
Review API Client
=================
Thin client for the backend that stores reviews.

Endpoints:
- POST /api/reviews  create a review from form fields, data-URL images and a user id
- GET  /api/storage  make sure the image bucket exists (best effort)
"""

import logging
import threading
from typing import Dict, Any, Optional

import requests


logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to register the review."


class ReviewSubmissionError(Exception):
    """Raised when the review API rejects or fails a submission"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ReviewApiClient:
    """Talks to the review backend over HTTP"""

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def create_review(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit a review.

        Args:
            payload: JSON body (form fields, ``imageFiles``, ``userId``)

        Returns:
            Parsed JSON response body

        Raises:
            ReviewSubmissionError: Non-2xx response or a body that is not
                JSON; carries the server's ``error`` text when it is a
                string, else the default message
            requests.RequestException: Network failure
        """
        response = requests.post(
            self._url('/api/reviews'),
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout
        )

        try:
            result = response.json()
        except ValueError:
            logger.warning("[REVIEWS] Review API returned %s with a non-JSON body", response.status_code)
            raise ReviewSubmissionError(DEFAULT_FAILURE_MESSAGE, response.status_code)

        if not response.ok:
            message = result.get('error') if isinstance(result, dict) else None
            if not isinstance(message, str):
                message = None
            logger.warning("[REVIEWS] Review API returned %s: %s", response.status_code, message)
            raise ReviewSubmissionError(message or DEFAULT_FAILURE_MESSAGE, response.status_code)

        return result

    def ensure_storage(self) -> bool:
        """
        Ping the storage initialization endpoint.

        The response is ignored and errors are swallowed.

        Returns:
            True if the request completed, False otherwise
        """
        try:
            requests.get(self._url('/api/storage'), timeout=self.timeout)
            return True
        except Exception as e:
            logger.info("[STORAGE] Storage initialization failed: %s", e)
            return False

    def ensure_storage_async(self) -> threading.Thread:
        """Fire-and-forget version of ensure_storage"""
        thread = threading.Thread(target=self.ensure_storage, daemon=True)
        thread.start()
        return thread
