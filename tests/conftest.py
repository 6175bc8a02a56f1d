import math
import sys
from pathlib import Path
from typing import Optional, Sequence

import pytest


# Ensure project root is importable for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from config import EARTH_RADIUS_KM
from services.pacing.models import AidStation, Leg, TrackSample
from services.pacing_service import RacePacingService

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180.0


def meridian_samples(
    distances_km: Sequence[float], elevations: Optional[Sequence[Optional[float]]] = None
) -> list[TrackSample]:
    """Track samples heading due north from (45, 5) at the given cumulative distances."""
    if elevations is None:
        elevations = [None] * len(distances_km)
    return [
        TrackSample(latitude=45.0 + km / KM_PER_DEGREE, longitude=5.0, elevation=ele)
        for km, ele in zip(distances_km, elevations)
    ]


def station_leg(start_km: float, end_km: float, station: AidStation, index: int) -> Leg:
    return Leg(
        label=f"{start_km:.1f} km → {station.name}",
        start_km=start_km,
        end_km=end_km,
        station=station,
        station_index=index,
    )


def finish_leg(start_km: float, end_km: float) -> Leg:
    return Leg(label=f"{start_km:.1f} km → Finish", start_km=start_km, end_km=end_km)


@pytest.fixture
def pacing_service() -> RacePacingService:
    return RacePacingService()


@pytest.fixture
def hilly_samples() -> list[TrackSample]:
    return meridian_samples(
        [0.0, 1.0, 2.0, 3.0, 4.0, 5.0],
        [100.0, 130.0, 90.0, 160.0, 150.0, 200.0],
    )


@pytest.fixture
def flat_samples() -> list[TrackSample]:
    return meridian_samples([0.0, 5.0, 10.0])
