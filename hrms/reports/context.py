from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ReportContext:
    generated_on: date
    company_name: str
    user_email: Optional[str] = None
