from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Funding:
    id: str
    amount: int
    donor_email: Optional[str]
    donor_name: Optional[str] = None
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
