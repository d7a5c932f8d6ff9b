"""
Saved palette storage.

Palettes are kept as a JSON list in a single file. Reads tolerate a
missing or corrupt file (the store simply starts empty); writes that fail
are surfaced to the caller.
"""

import json
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from palette_studio.config import config
from palette_studio.exceptions import (
    PaletteNotFoundError, PaletteStorageError, PaletteValidationError
)
from palette_studio.services.colors.utils import Color, rgb_to_hsl
from palette_studio.utils.ids import generate_palette_id


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Palette:
    """A named, ordered list of curated colors."""
    id: str
    name: str
    colors: List[Color]
    created: str = field(default_factory=_utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "colors": [{"r": c.r, "g": c.g, "b": c.b} for c in self.colors],
            "created": self.created,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Palette":
        return cls(
            id=str(payload["id"]),
            name=str(payload["name"]),
            colors=[Color(c["r"], c["g"], c["b"]) for c in payload["colors"]],
            created=str(payload.get("created") or _utc_now_iso()),
        )


class PaletteStore:
    """Thread-safe JSON file store for saved palettes."""

    def __init__(self, path: Union[str, Path], max_colors: int = None):
        self._path = Path(path)
        self._max_colors = max_colors or config.MAX_PALETTE_COLORS
        self._lock = threading.Lock()
        self._palettes: List[Palette] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def list_palettes(self) -> List[Palette]:
        """All palettes in creation order."""
        with self._lock:
            return list(self._palettes)

    def get(self, palette_id: str) -> Palette:
        with self._lock:
            for palette in self._palettes:
                if palette.id == palette_id:
                    return palette
        raise PaletteNotFoundError(f"Palette not found: {palette_id}")

    def save(self, colors: List[Color], name: Optional[str] = None) -> Palette:
        """
        Persist a new palette.

        Args:
            colors: 1..max_colors colors, in display order
            name: Optional display name; blank names become "Palette N"

        Returns:
            The stored palette

        Raises:
            PaletteValidationError: For an empty or oversized color list
            PaletteStorageError: If the store file cannot be written
        """
        if not colors:
            raise PaletteValidationError("No colors in palette to save")
        if len(colors) > self._max_colors:
            raise PaletteValidationError(
                f"Maximum {self._max_colors} colors allowed in a palette, got {len(colors)}"
            )

        with self._lock:
            clean_name = (name or "").strip() or f"Palette {len(self._palettes) + 1}"
            palette = Palette(id=generate_palette_id(), name=clean_name, colors=list(colors))
            self._persist(self._palettes + [palette])
            self._palettes.append(palette)

        logger.info(f"Saved palette {palette.id} ({palette.name}) with {len(colors)} colors")
        return palette

    def delete(self, palette_id: str) -> None:
        with self._lock:
            remaining = [p for p in self._palettes if p.id != palette_id]
            if len(remaining) == len(self._palettes):
                raise PaletteNotFoundError(f"Palette not found: {palette_id}")
            self._persist(remaining)
            self._palettes = remaining
        logger.info(f"Deleted palette {palette_id}")

    def _load(self) -> List[Palette]:
        if not self._path.exists():
            return []
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
            return [Palette.from_dict(item) for item in payload]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to load palettes from {self._path}: {e}")
            return []

    def _persist(self, palettes: List[Palette]) -> None:
        body = json.dumps([p.to_dict() for p in palettes], ensure_ascii=False, indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(body, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as e:
            logger.error(f"Failed to save palettes to {self._path}: {e}")
            raise PaletteStorageError(f"Failed to save palettes: {e}")


def export_palette(palette: Palette) -> Dict[str, Any]:
    """Shareable representation with hex, CSS rgb() and HSL for each color."""
    return {
        "name": palette.name,
        "colors": [
            {
                "hex": color.hex,
                "rgb": f"rgb({color.r}, {color.g}, {color.b})",
                "hsl": rgb_to_hsl(color),
            }
            for color in palette.colors
        ],
        "exported": _utc_now_iso(),
    }


def export_filename(name: str) -> str:
    """File name for an exported palette, e.g. 'Sunset #2' -> 'sunset__2_palette.json'."""
    slug = re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE).lower()
    return f"{slug}_palette.json"
