from __future__ import annotations

import sys
import logging
from pathlib import Path
from typing import Dict

import pygame

logger = logging.getLogger(__name__)


class AssetError(RuntimeError):
    """ An asset file could not be read or decoded. Not recoverable. """


# --- Project / assets root ----------------------------------------------------

def _project_root() -> Path:
    """
    Works in dev and with PyInstaller-like bundles.
    """
    if getattr(sys, "_MEIPASS", None):  # PyInstaller temp dir
        return Path(sys._MEIPASS)  # type: ignore[attr-defined]
    return Path(__file__).resolve().parents[1]  # engine/ -> [project root]

_ASSETS_ROOT = _project_root() / "game" / "assets"


def project_path(*parts: str) -> str:
    """ Absolute path of a project-relative file, e.g. project_path("game/config/defaults.yaml"). """
    return str(_project_root().joinpath(*parts))


def asset_path(*parts: str) -> str:
    """
    Build an absolute path into game/assets. Example:
        asset_path("images", "trees.png")
    """
    return str(_ASSETS_ROOT.joinpath(*parts))


# --- Image cache + loading ----------------------------------------------------

_image_cache: Dict[str, pygame.Surface] = {}


def _display_ready() -> bool:
    try:
        return pygame.display.get_init() and pygame.display.get_surface() is not None
    except pygame.error:
        return False


def _convert_for_display(surf: pygame.Surface) -> pygame.Surface:
    """
    Convert surface to the current display format, preserving alpha if present.
    Before the window exists this is a no-op.
    """
    if not _display_ready():
        return surf
    if surf.get_alpha() is not None:
        return surf.convert_alpha()
    return surf.convert()


def load_image(relpath: str) -> pygame.Surface:
    """
    Load and cache an image from game/assets by relative path, e.g. "images/trees.png".
    Raises AssetError when the file is missing or cannot be decoded; the story
    is loaded once at startup, so there is nothing sensible to fall back to.
    """
    cached = _image_cache.get(relpath)
    if cached is not None:
        return cached

    abs_path = asset_path(*Path(relpath).parts)
    try:
        surf = pygame.image.load(abs_path)
    except (pygame.error, OSError) as e:
        logger.error("Could not load image '%s': %s", abs_path, e)
        raise AssetError(f"cannot load image {abs_path}: {e}") from e

    surf = _convert_for_display(surf)
    _image_cache[relpath] = surf
    logger.debug("loaded image %s (%dx%d)", relpath, *surf.get_size())
    return surf
