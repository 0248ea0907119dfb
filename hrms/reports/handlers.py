from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

from hrms.reports.context import ReportContext


@dataclass(frozen=True)
class DocumentResult:
    content: bytes
    filename: str
    media_type: str = "application/pdf"


@dataclass(frozen=True)
class BinaryResult:
    content: bytes
    content_type: str
    filename: str


# build signature: (ctx, data, params) -> bytes (PDF)
DocumentBuilder = Callable[[ReportContext, Dict[str, Any], Mapping[str, Any]], bytes]


@dataclass(frozen=True)
class Synthesizer:
    """
    Builds a document from already aggregated data.
    `dependencies` names the aggregator outputs the builder expects in `data`.
    """

    key: str
    build: DocumentBuilder
    dependencies: Tuple[str, ...] = ()

    def synthesize(self, ctx: ReportContext, data: Dict[str, Any], params: Mapping[str, Any]) -> bytes:
        return self.build(ctx, data, params)


class Retriever:
    """
    Fetches a previously stored binary payload.
    Subclasses implement `retrieve(reference)` as a coroutine.
    """

    key: str = ""
    reference_key: str = ""

    async def retrieve(self, reference: Mapping[str, Any]) -> BinaryResult:
        raise NotImplementedError
