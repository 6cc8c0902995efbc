from __future__ import annotations

import base64
import re

_SVG_RE = re.compile(r"<svg\s+[^>]*>.*?</svg>", re.DOTALL | re.IGNORECASE)


def extract_svg(text: str) -> str | None:
    """Return the first complete <svg ...>...</svg> block in ``text``."""
    match = _SVG_RE.search(text or "")
    return match.group(0) if match else None


def svg_data_url(svg: str) -> str:
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
