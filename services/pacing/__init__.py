"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.pacing_service import RacePacingService as RacePacingService


def __getattr__(name: str) -> object:
    if name == "RacePacingService":
        from services.pacing_service import RacePacingService

        return RacePacingService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RacePacingService"]
