from __future__ import annotations

from enum import Enum


class PlatformType(str, Enum):
    """Profession platform a request belongs to."""

    DOCTOR = "apen"
    NURSE = "nurse"
    PHARMACIST = "phar"
