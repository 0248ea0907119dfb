# hrms/reports/attachments.py
# passthrough retrieval of files attached to leave requests
from __future__ import annotations

import re
from urllib.parse import quote
from typing import Any, Mapping, Optional

import httpx

from config import Config
from hrms.logger import logger
from hrms.reports.errors import MissingReference, NotFound, RetrievalError
from hrms.reports.handlers import BinaryResult, Retriever
from hrms.utils.validators import is_markup_mime


MISSING_STATUSES = {404, 410}

_FILENAME_RE = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


def leave_path_segment(leave_id: Any) -> str:
    """Escape a leave id so it stays one path segment, never a path or query of its own."""
    segment = quote(str(leave_id), safe="")
    if segment in (".", ".."):
        segment = segment.replace(".", "%2E")
    return segment


class AttachmentTransport:
    """
    Thin httpx wrapper around the backend endpoint serving leave attachments.
    Retry policy, if any, belongs here (none configured).
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url or Config.BACKEND_BASE_URL
        self.timeout = timeout if timeout is not None else Config.ATTACHMENT_TIMEOUT
        self._transport = transport

    async def fetch(self, leave_id: Any) -> httpx.Response:
        url = Config.ATTACHMENT_URL_TEMPLATE.format(leave_id=leave_path_segment(leave_id))
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                     transport=self._transport) as client:
            return await client.get(url)


def _filename(response: httpx.Response, leave_id: Any) -> str:
    m = _FILENAME_RE.search(response.headers.get("content-disposition", ""))
    if m:
        return m.group(1).strip()
    return f"leave_{leave_id}_attachment"


class LeaveAttachmentRetriever(Retriever):
    key = "viewAttachment"
    reference_key = "leave_id"

    def __init__(self, transport: Optional[AttachmentTransport] = None):
        self.transport = transport or AttachmentTransport()

    async def retrieve(self, reference: Mapping[str, Any]) -> BinaryResult:
        leave_id = (reference or {}).get(self.reference_key)
        if leave_id is None or leave_id == "":
            raise MissingReference(self.reference_key)

        try:
            response = await self.transport.fetch(leave_id)
        except httpx.HTTPError as e:
            logger.error(f"[leave_attachment] Transport error for leave {leave_id}: {e}")
            raise RetrievalError(f"Could not fetch attachment for leave {leave_id}: {e}", cause=e) from e

        if response.status_code in MISSING_STATUSES:
            raise NotFound(f"No attachment stored for leave {leave_id}.")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"[leave_attachment] HTTP {response.status_code} for leave {leave_id}")
            raise RetrievalError(f"Backend answered {response.status_code} for leave {leave_id}", cause=e) from e

        # backend may serve its app shell for unmatched routes with 200 OK
        content_type = response.headers.get("content-type", "application/octet-stream")
        if is_markup_mime(content_type):
            logger.warning(f"[leave_attachment] Leave {leave_id}: got '{content_type}' instead of a file")
            raise NotFound(f"Attachment for leave {leave_id} not found (server returned HTML instead of a file).")

        return BinaryResult(
            content=response.content,
            content_type=content_type,
            filename=_filename(response, leave_id),
        )
