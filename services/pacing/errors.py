"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations


class InvalidRoute(ValueError):
    """Raised when track samples cannot form a single route segment."""

    def __init__(self, sample_count: int) -> None:
        super().__init__(f"Route needs at least 2 valid samples, got {sample_count}")
        self.sample_count = sample_count
