from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackerConfig:
    url: str
    overrides_path: str | None = None  # dev-tools local override of the page
    data_dir: str = "data"
    capture: str = "browser"  # "browser" (Playwright) or "http" (httpx)
    wait_until: str = "networkidle"
    headless: bool = True
    viewport_width: int = 1440
    viewport_height: int = 900
    timeout_ms: int = 60000
    clean: bool = False  # empty data and overrides folders on start
