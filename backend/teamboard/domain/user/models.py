"""User domain model: pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class User:
    id: str
    email: str
    name: str
    hashed_password: str
    score: int
    created_at: str = ""
