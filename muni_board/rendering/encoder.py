"""PNG output helpers for rendered boards."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image

from muni_board.rendering.surface import RenderError


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise RenderError(f"PNG encoding failed: {exc}") from exc
    return buffer.getvalue()


def save_frame(image: Image.Image, path: str = "output/stops.png") -> None:
    """Save a board image to disk as a PNG."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(encode_png(image))


__all__ = ["encode_png", "save_frame"]
