"""
Add Review Page
===============
Controller behind the add-review form.

Lifecycle:
- mount: fresh form, stale previews purged, session user id resolved, storage pinged
- select_images / remove_image: manage image entries and their previews
- submit: validate, encode images, POST to the review API
- unmount: release every preview still held
"""

import logging
from typing import Callable, Iterable, Mapping, Any, Optional

from werkzeug.datastructures import FileStorage

from .api_client import ReviewApiClient
from .draft import ReviewDraft
from .encoding import encode_images
from .form import ReviewForm, ImageEntry, build_payload
from ..notifications.toast import Toast, DESTRUCTIVE, notify as flash_toast
from ..storage.preview_store import PreviewStore


logger = logging.getLogger(__name__)

MISSING_FIELDS_TOAST = Toast(
    title="Missing required fields",
    description="Please fill in all required fields.",
    variant=DESTRUCTIVE,
)
LOGIN_REQUIRED_TOAST = Toast(
    title="Login required",
    description="You need to log in to register a review.",
    variant=DESTRUCTIVE,
)
SUCCESS_TOAST = Toast(
    title="Review registered",
    description="Your review was registered successfully.",
)
ERROR_TITLE = "An error occurred"
DEFAULT_ERROR_MESSAGE = "An error occurred while registering the review."


class AddReviewPage:
    """Page controller for submitting a product review"""

    def __init__(
        self,
        draft: ReviewDraft,
        store: PreviewStore,
        api_client: ReviewApiClient,
        preview_url: Callable[[str], str],
        resolve_user_id: Callable[[], Optional[str]],
        notify: Callable[[Toast], None] = flash_toast,
        encode_workers: int = 4,
        preview_max_age: Optional[float] = None,
    ):
        self.draft = draft
        self.store = store
        self.api_client = api_client
        self.preview_url = preview_url
        self.resolve_user_id = resolve_user_id
        self.notify = notify
        self.encode_workers = encode_workers
        self.preview_max_age = preview_max_age

    @property
    def form(self) -> ReviewForm:
        return self.draft.form

    @property
    def images(self):
        return self.draft.images

    @property
    def loading(self) -> bool:
        return self.draft.loading

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self):
        """Start a new visit: reset state, resolve the user, ping storage"""
        self.unmount()
        if self.preview_max_age is not None:
            self.store.purge_older_than(self.preview_max_age)
        self.draft.form = ReviewForm()
        self.draft.loading = False

        try:
            self.draft.user_id = self.resolve_user_id()
        except Exception as e:
            logger.error("[REVIEWS] Failed to resolve session: %s", e)
            self.draft.user_id = None

        self.api_client.ensure_storage_async()

    def unmount(self):
        """Release every preview reference held by the draft"""
        images, self.draft.images = self.draft.images, []
        for image in images:
            self.store.revoke(image.token)

    # ------------------------------------------------------------------
    # Form and images
    # ------------------------------------------------------------------

    def update_form(self, values: Mapping[str, Any]):
        self.draft.form.update(values)

    def select_images(self, files: Iterable[FileStorage]) -> int:
        """
        Append newly chosen files to the image list.

        Returns:
            Number of entries added
        """
        added = 0
        for file in files:
            if not file or not file.filename:
                continue
            token, filename, mimetype = self.store.create(file)
            self.draft.images.append(ImageEntry(
                token=token,
                filename=filename,
                mimetype=mimetype,
                preview=self.preview_url(token),
            ))
            added += 1
        return added

    def remove_image(self, index: int) -> bool:
        """Release the preview and drop the entry at ``index``"""
        if index < 0 or index >= len(self.draft.images):
            logger.warning("[REVIEWS] No image at index %s", index)
            return False
        image = self.draft.images.pop(index)
        self.store.revoke(image.token)
        return True

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    def submit(self) -> bool:
        """
        Validate and send the review.

        Every failure is turned into a toast. The loading flag is cleared
        whatever the outcome.

        Returns:
            True when the review was registered and the page should navigate
            to the review list
        """
        self.draft.loading = True
        try:
            if not self.form.is_complete():
                self.notify(MISSING_FIELDS_TOAST)
                return False

            if not self.draft.user_id:
                self.notify(LOGIN_REQUIRED_TOAST)
                return False

            image_files = encode_images(self.draft.images, self.store, self.encode_workers)
            payload = build_payload(self.form, image_files, self.draft.user_id)
            self.api_client.create_review(payload)

            self.notify(SUCCESS_TOAST)
            logger.info("[REVIEWS] Review registered for user %s with %d image(s)",
                        self.draft.user_id, len(image_files))
            self.unmount()
            self.draft.form = ReviewForm()
            return True

        except Exception as e:
            logger.error("[REVIEWS] Review submission failed: %s", e)
            self.notify(Toast(
                title=ERROR_TITLE,
                description=str(e) or DEFAULT_ERROR_MESSAGE,
                variant=DESTRUCTIVE,
            ))
            return False

        finally:
            self.draft.loading = False
