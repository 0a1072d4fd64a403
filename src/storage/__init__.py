"""Storage for selected review images"""

from .preview_store import PreviewStore

__all__ = ['PreviewStore']
