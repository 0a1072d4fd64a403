# tests/test_page.py

import os
import time
from unittest.mock import MagicMock

import pytest
import requests

from src.reviews.api_client import ReviewSubmissionError, DEFAULT_FAILURE_MESSAGE
from src.reviews.draft import ReviewDraft
from src.reviews.page import (
    AddReviewPage,
    MISSING_FIELDS_TOAST,
    LOGIN_REQUIRED_TOAST,
    SUCCESS_TOAST,
    DEFAULT_ERROR_MESSAGE,
)

COMPLETE = {
    "platform": "gmarket",
    "productName": "Desk lamp",
    "reviewTitle": "Bright enough",
    "reviewContent": "Good light for reading.",
}


@pytest.fixture
def api_client():
    client = MagicMock()
    client.create_review.return_value = {"success": True}
    return client


@pytest.fixture
def toasts():
    return []


@pytest.fixture
def page(store, api_client, toasts):
    return AddReviewPage(
        ReviewDraft(),
        store,
        api_client,
        preview_url=lambda token: f"/previews/{token}",
        resolve_user_id=lambda: "user-1",
        notify=toasts.append,
        encode_workers=2,
    )


def test_mount_resolves_user_and_pings_storage(page, api_client):
    page.mount()
    assert page.draft.user_id == "user-1"
    api_client.ensure_storage_async.assert_called_once()


def test_mount_survives_session_errors(page):
    def broken():
        raise RuntimeError("auth down")
    page.resolve_user_id = broken

    page.mount()

    assert page.draft.user_id is None


def test_mount_releases_leftover_images(page, store, make_file):
    page.select_images([make_file()])
    token = page.images[0].token

    page.mount()

    assert page.images == []
    assert store.path_for(token) is None


def test_selecting_n_files_yields_n_distinct_previews(page, make_file):
    added = page.select_images([make_file("a.png"), make_file("b.png"), make_file("c.png")])

    assert added == 3
    assert len(page.images) == 3
    assert len({image.preview for image in page.images}) == 3


def test_selection_appends_and_skips_empty_inputs(page, make_file):
    page.select_images([make_file("a.png")])
    page.select_images([make_file("b.png"), make_file(name="")])

    assert [image.filename for image in page.images] == ["a.png", "b.png"]


def test_remove_image_releases_its_reference(page, store, make_file):
    page.select_images([make_file("a.png"), make_file("b.png")])
    removed = page.images[0]

    assert page.remove_image(0) is True

    assert len(page.images) == 1
    assert page.images[0].filename == "b.png"
    assert store.path_for(removed.token) is None


def test_remove_image_out_of_range(page, make_file):
    page.select_images([make_file()])
    assert page.remove_image(3) is False
    assert page.remove_image(-1) is False
    assert len(page.images) == 1


@pytest.mark.parametrize("field", ["platform", "productName", "reviewTitle", "reviewContent"])
def test_missing_required_field_blocks_submission(page, api_client, toasts, field):
    page.mount()
    page.update_form(dict(COMPLETE, **{field: ""}))

    assert page.submit() is False

    api_client.create_review.assert_not_called()
    assert toasts == [MISSING_FIELDS_TOAST]
    assert page.loading is False


def test_missing_session_blocks_submission(page, api_client, toasts):
    page.resolve_user_id = lambda: None
    page.mount()
    page.update_form(COMPLETE)

    assert page.submit() is False

    api_client.create_review.assert_not_called()
    assert toasts == [LOGIN_REQUIRED_TOAST]
    assert page.loading is False


def test_successful_submission(page, api_client, store, toasts, make_file):
    page.mount()
    page.update_form(dict(COMPLETE, price="25000", seller="Lamp Shop"))
    page.select_images([make_file("a.png", b"aaa"), make_file("b.jpg", b"bbb", "image/jpeg")])
    tokens = [image.token for image in page.images]

    assert page.submit() is True

    payload = api_client.create_review.call_args[0][0]
    assert payload["userId"] == "user-1"
    assert payload["price"] == "25000"
    assert payload["seller"] == "Lamp Shop"
    assert payload["imageFiles"][0].startswith("data:image/png;base64,")
    assert payload["imageFiles"][1].startswith("data:image/jpeg;base64,")
    assert toasts == [SUCCESS_TOAST]

    assert page.images == []
    assert all(store.path_for(token) is None for token in tokens)
    assert page.form.productName == ""
    assert page.loading is False


def test_server_error_is_shown_verbatim(page, api_client, toasts):
    api_client.create_review.side_effect = ReviewSubmissionError("Duplicate review", 409)
    page.mount()
    page.update_form(COMPLETE)

    assert page.submit() is False

    assert toasts[0].description == "Duplicate review"
    assert toasts[0].variant == "destructive"
    assert page.form.productName == "Desk lamp"
    assert page.loading is False


def test_server_error_without_text_uses_default(page, api_client, toasts):
    api_client.create_review.side_effect = ReviewSubmissionError(DEFAULT_FAILURE_MESSAGE, 500)
    page.mount()
    page.update_form(COMPLETE)

    page.submit()

    assert toasts[0].description == DEFAULT_FAILURE_MESSAGE


def test_network_error_becomes_toast(page, api_client, toasts):
    api_client.create_review.side_effect = requests.ConnectionError("connection refused")
    page.mount()
    page.update_form(COMPLETE)

    assert page.submit() is False

    assert toasts[0].description == "connection refused"
    assert page.loading is False


def test_error_without_message_uses_default(page, api_client, toasts):
    api_client.create_review.side_effect = RuntimeError()
    page.mount()
    page.update_form(COMPLETE)

    page.submit()

    assert toasts[0].description == DEFAULT_ERROR_MESSAGE


def test_images_kept_after_failed_submission(page, api_client, store, make_file):
    api_client.create_review.side_effect = ReviewSubmissionError("nope")
    page.mount()
    page.update_form(COMPLETE)
    page.select_images([make_file()])

    page.submit()

    assert len(page.images) == 1
    assert store.path_for(page.images[0].token) is not None


def test_mount_purges_abandoned_previews(store, api_client, toasts, make_file):
    abandoned, _, _ = store.create(make_file("left-behind.png"))
    two_hours_ago = time.time() - 2 * 3600
    os.utime(store.path_for(abandoned), (two_hours_ago, two_hours_ago))

    page = AddReviewPage(
        ReviewDraft(),
        store,
        api_client,
        preview_url=lambda token: f"/previews/{token}",
        resolve_user_id=lambda: "user-1",
        notify=toasts.append,
        preview_max_age=3600,
    )
    page.mount()

    assert store.path_for(abandoned) is None
