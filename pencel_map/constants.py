"""
Defaults and tunables used across the project.

- Grid size, kernel and metric defaults
- Console glyphs and PNG cell size
- Threading thresholds
"""
from __future__ import annotations

# =========================
# Pipeline defaults
# =========================
DEFAULT_GRID_WIDTH: int = 32
DEFAULT_GRID_HEIGHT: int = 32
DEFAULT_KERNEL: str = "bilinear"
DEFAULT_METRIC: str = "redmean"

# =========================
# Rendering
# =========================
HEAVY_GLYPH: str = "HH"
LIGHT_GLYPH: str = "LL"
DEFAULT_CELL_PX: int = 16
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"}

# =========================
# Threading
# =========================
# Row bands smaller than this are not worth a thread hop.
MIN_ROWS_PER_WORKER: int = 64
