"""
routes_reviews.py
Review routes: add-review page, image previews, review list
"""

import logging
from urllib.parse import urlparse

from flask import (
    Blueprint, request, jsonify, render_template, redirect, url_for,
    session, send_file, abort, current_app
)

from src.auth_utils import get_session_user_id
from src.notifications.toast import Toast, DESTRUCTIVE, pending_toasts
from src.reviews import AddReviewPage, ReviewDraft, PLATFORMS


logger = logging.getLogger(__name__)

# Create blueprint
reviews_bp = Blueprint('reviews', __name__)

# api_client and preview_store will be set by init_routes() in web_app.py
api_client = None
preview_store = None

def init_routes(client, store):
    """Initialize routes with the review API client and preview store"""
    global api_client, preview_store
    api_client = client
    preview_store = store


def _build_page(draft: ReviewDraft) -> AddReviewPage:
    return AddReviewPage(
        draft,
        preview_store,
        api_client,
        preview_url=lambda token: url_for('reviews.preview_image', token=token),
        resolve_user_id=get_session_user_id,
        encode_workers=current_app.config.get('IMAGE_ENCODE_WORKERS', 4),
        preview_max_age=current_app.config.get('PREVIEW_MAX_AGE'),
    )


def _render(page: AddReviewPage):
    return render_template(
        'reviews/add.html',
        form=page.form,
        images=page.images,
        platforms=PLATFORMS,
        loading=page.loading,
        toasts=pending_toasts(),
    )


def _safe_back_url(url):
    """Only same-host referrers that are not the add page itself"""
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.netloc and parsed.netloc != request.host:
        return None
    if parsed.path == url_for('reviews.add_review'):
        return None
    return url


# -------------------------------------------------------------------------
# ADD REVIEW PAGE
# -------------------------------------------------------------------------

@reviews_bp.route('/client/reviews/add', methods=['GET'])
def add_review():
    """Open the add-review page with a fresh form"""
    draft = ReviewDraft.load(session)
    page = _build_page(draft)
    page.mount()
    draft.back_url = _safe_back_url(request.referrer)
    draft.save(session)
    return _render(page)


@reviews_bp.route('/client/reviews/add', methods=['POST'])
def add_review_action():
    """
    Handle an interaction with the add-review form.

    The whole form is posted on every interaction. ``action`` selects what
    happens after the field values are copied into the draft:
    add_images, remove:<index>, submit, cancel.
    """
    draft = ReviewDraft.load(session)
    page = _build_page(draft)
    page.update_form(request.form)

    # Picking files appends them whatever button was pressed
    page.select_images(request.files.getlist('images'))

    action = request.form.get('action', 'submit')
    try:
        if action == 'add_images':
            pass

        elif action.startswith('remove:'):
            try:
                index = int(action.split(':', 1)[1])
            except ValueError:
                abort(400)
            page.remove_image(index)

        elif action == 'cancel':
            back_url = draft.back_url or url_for('reviews.list_reviews')
            page.unmount()
            draft.back_url = None
            return redirect(back_url)

        elif action == 'submit':
            if page.submit():
                return redirect(url_for('reviews.list_reviews'))

        else:
            abort(400)

    finally:
        draft.save(session)

    return _render(page)


# -------------------------------------------------------------------------
# IMAGE PREVIEWS
# -------------------------------------------------------------------------

@reviews_bp.route('/client/reviews/add/previews/<token>', methods=['GET'])
def preview_image(token):
    """Serve a selected image that belongs to the current draft"""
    draft = ReviewDraft.load(session)
    entry = next((image for image in draft.images if image.token == token), None)
    if entry is None:
        abort(404)

    path = preview_store.path_for(token)
    if path is None:
        abort(404)

    return send_file(path, mimetype=entry.mimetype)


# -------------------------------------------------------------------------
# REVIEW LIST
# -------------------------------------------------------------------------

@reviews_bp.route('/client/reviews', methods=['GET'])
def list_reviews():
    """Review list page; landing page after a successful submission"""
    return render_template('reviews/list.html', toasts=pending_toasts())


# -------------------------------------------------------------------------
# ERRORS
# -------------------------------------------------------------------------

@reviews_bp.app_errorhandler(413)
def too_large(e):
    """Uploaded images exceed MAX_CONTENT_LENGTH; stay on the add page"""
    error_msg = 'Uploaded images are too large'
    logger.warning("[REVIEWS] Upload rejected: %s", e)
    if request.is_json or request.accept_mimetypes.best == 'application/json':
        return jsonify({'error': error_msg}), 413

    # The request body is never read, so only the stored draft is available
    page = _build_page(ReviewDraft.load(session))
    page.notify(Toast(title='Upload failed', description=error_msg, variant=DESTRUCTIVE))
    return _render(page), 413
