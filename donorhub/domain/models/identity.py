"""Caller identity resolved from a verified bearer credential."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class Identity:
    email: str
    name: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)
