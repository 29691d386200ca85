from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Payee:
    id: str
    name: str
    email: str
    cnic: str
