"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

GPX file parser for route and track data.

Extracts the ordered track points (position and optional elevation) of GPX 1.0
and 1.1 files. Timestamps are ignored: pacing works on route-only files.
"""

from __future__ import annotations

from typing import Optional

from lxml import etree
from streamlit.logger import get_logger

from services.pacing.models import TrackSample
from utils.coercion import finite_float_optional

logger = get_logger(__name__)


def _element_elevation(trkpt: etree._Element) -> Optional[float]:
    ele_elem = trkpt.xpath("./*[local-name()='ele']")
    if not ele_elem or not ele_elem[0].text:
        return None
    return finite_float_optional(ele_elem[0].text)


def parse_gpx_to_samples(gpx_bytes: bytes) -> list[TrackSample]:
    """Parse GPX file into ordered track samples.

    Args:
        gpx_bytes: Raw GPX file content as bytes

    Returns:
        List of TrackSample; empty if parsing fails or no track point exists.
        Points with missing or invalid coordinates are skipped.
    """
    try:
        root = etree.fromstring(gpx_bytes)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Invalid GPX XML: {e}", exc_info=True)
        return []

    # Match trkpt in any GPX namespace version
    trkpts = root.xpath(".//*[local-name()='trkpt']")
    if not trkpts:
        logger.debug("No track points found in GPX")
        return []

    samples = []
    for trkpt in trkpts:
        lat = finite_float_optional(trkpt.get("lat"))
        lon = finite_float_optional(trkpt.get("lon"))
        if lat is None or lon is None:
            logger.debug("Skipping invalid track point: lat=%r lon=%r", trkpt.get("lat"), trkpt.get("lon"))
            continue
        samples.append(TrackSample(latitude=lat, longitude=lon, elevation=_element_elevation(trkpt)))

    logger.debug(f"Parsed GPX: {len(samples)} points")
    return samples
