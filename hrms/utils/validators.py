# hrms/utils/validators.py
# utilities for control and validation

# content types a backend serves for pages, never for stored files
MARKUP_MIME = {"text/html", "application/xhtml+xml"}


def base_mime(content_type: str) -> str:
    # "text/html; charset=utf-8" -> "text/html"
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_markup_mime(content_type: str) -> bool:
    mime = base_mime(content_type)
    return mime in MARKUP_MIME or "text/html" in (content_type or "").lower()
