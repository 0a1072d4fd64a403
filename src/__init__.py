"""
Review Poster
=============
Web page for submitting product reviews with images.

Main components:
- reviews: form state, page controller, image encoding, review API client
- storage: local preview storage for selected images
- notifications: toast messages shown on the page
- auth_utils: Supabase session lookup and sign-in
"""

__version__ = "1.0.0"
