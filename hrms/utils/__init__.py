# hrms/utils/__init__.py

from .validators import base_mime, is_markup_mime

__all__ = [
    # validators
    "base_mime", "is_markup_mime",
]
