# tests/test_attachments.py
# unit tests for hrms/reports/attachments.py (backend mocked via httpx.MockTransport)

import httpx
import pytest

from hrms.reports.attachments import AttachmentTransport, LeaveAttachmentRetriever, leave_path_segment
from hrms.reports.errors import MissingReference, NotFound, RetrievalError
from hrms.reports.handlers import BinaryResult
from hrms.utils.validators import base_mime, is_markup_mime


@pytest.fixture
def retriever(attachment_transport):
    return LeaveAttachmentRetriever(attachment_transport)


@pytest.mark.asyncio
async def test_retrieve_binary(retriever):
    result = await retriever.retrieve({"leave_id": 1})
    assert isinstance(result, BinaryResult)
    assert result.content == b"%PDF-1.4 medical certificate"
    assert result.content_type == "application/pdf"
    assert result.filename == "certificate.pdf"


@pytest.mark.asyncio
async def test_html_response_is_not_found(retriever):
    with pytest.raises(NotFound):
        await retriever.retrieve({"leave_id": 2})


@pytest.mark.asyncio
async def test_html_content_type_wins_over_body():
    def backend(request):
        return httpx.Response(200, content=b"%PDF-1.7 looks like a file", headers={"content-type": "text/html"})

    retriever = LeaveAttachmentRetriever(AttachmentTransport("http://backend.test", 5, httpx.MockTransport(backend)))
    with pytest.raises(NotFound):
        await retriever.retrieve({"leave_id": 9})


@pytest.mark.asyncio
async def test_missing_status_is_not_found(retriever):
    with pytest.raises(NotFound):
        await retriever.retrieve({"leave_id": 404})


@pytest.mark.asyncio
async def test_missing_reference(retriever):
    with pytest.raises(MissingReference) as exc:
        await retriever.retrieve({})
    assert exc.value.key == "leave_id"


@pytest.mark.asyncio
async def test_transport_error_keeps_cause(retriever):
    with pytest.raises(RetrievalError) as exc:
        await retriever.retrieve({"leave_id": 3})
    assert isinstance(exc.value.cause, httpx.ConnectError)
    assert exc.value.__cause__ is exc.value.cause


@pytest.mark.asyncio
async def test_server_error_is_retrieval_error(retriever):
    with pytest.raises(RetrievalError) as exc:
        await retriever.retrieve({"leave_id": 4})
    assert isinstance(exc.value.cause, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_no_retry_on_failure():
    calls = []

    def backend(request):
        calls.append(request.url.path)
        raise httpx.ReadTimeout("slow", request=request)

    retriever = LeaveAttachmentRetriever(AttachmentTransport("http://backend.test", 5, httpx.MockTransport(backend)))
    with pytest.raises(RetrievalError):
        await retriever.retrieve({"leave_id": 8})
    assert calls == ["/api/leave/8/attachment"]


@pytest.mark.asyncio
async def test_default_filename_without_disposition():
    def backend(request):
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

    retriever = LeaveAttachmentRetriever(AttachmentTransport("http://backend.test", 5, httpx.MockTransport(backend)))
    result = await retriever.retrieve({"leave_id": 12})
    assert result.filename == "leave_12_attachment"
    assert result.content_type == "image/png"


def test_markup_mime_detection():
    assert is_markup_mime("text/html")
    assert is_markup_mime("Text/HTML; charset=UTF-8")
    assert is_markup_mime("application/xhtml+xml")
    assert not is_markup_mime("application/pdf")
    assert not is_markup_mime("")
    assert base_mime("image/jpeg; q=0.9") == "image/jpeg"


@pytest.mark.asyncio
@pytest.mark.parametrize("leave_id, raw_path", [
    ("../../payroll/export?x=", b"/api/leave/..%2F..%2Fpayroll%2Fexport%3Fx%3D/attachment"),
    ("..", b"/api/leave/%2E%2E/attachment"),
    ("12#frag", b"/api/leave/12%23frag/attachment"),
])
async def test_leave_id_stays_one_path_segment(leave_id, raw_path):
    seen = []

    def backend(request):
        seen.append(request.url)
        return httpx.Response(404)

    retriever = LeaveAttachmentRetriever(AttachmentTransport("http://backend.test", 5, httpx.MockTransport(backend)))
    with pytest.raises(NotFound):
        await retriever.retrieve({"leave_id": leave_id})
    assert seen[0].raw_path == raw_path
    assert seen[0].query == b""
    assert seen[0].host == "backend.test"


def test_leave_path_segment():
    assert leave_path_segment(17) == "17"
    assert leave_path_segment("a/b") == "a%2Fb"
    assert leave_path_segment(".") == "%2E"
