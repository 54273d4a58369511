"""Utility modules for namecraft."""

from namecraft.utils.config import resolve_setting
from namecraft.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
    "resolve_setting",
]
