"""Utility functions and helpers for the ifnamectl application."""
from typing import List, Optional


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated option, trimming whitespace and dropping empty items."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
