from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from engine.resources import project_path
from engine.ui.style import Theme

logger = logging.getLogger(__name__)

DEFAULTS_PATH = "game/config/defaults.yaml"

@dataclass
class WindowCfg:
    width: int = 640
    height: int = 480
    title: str = "But I have to try"
    resizable: bool = True

@dataclass
class InputCfg:
    debounce_ms: int = 200          # Minimum gap between two accepted clicks

@dataclass
class LayoutCfg:
    image_top: int = 40             # Illustration band, scaled to fit
    image_band_h: int = 240
    text_top: int = 300             # Baseline of the first story line
    line_advance: int = 20          # Baseline-to-baseline for text and choices
    text_margin: int = 20           # Left/right margin for wrapping
    quit_label: str = "[Quit]"
    quit_offset_right: int = 80     # Quit label x = viewport width - this
    quit_top: int = 10
    end_label: str = "--- The End ---"
    restart_label: str = "[Restart]"
    end_left: int = 20

@dataclass
class StoryCfg:
    path: str = "game/content/crossing.yaml"

@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    input: InputCfg = field(default_factory=InputCfg)
    layout: LayoutCfg = field(default_factory=LayoutCfg)
    story: StoryCfg = field(default_factory=StoryCfg)
    theme: Theme = field(default_factory=Theme)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def load_ui_defaults(path: str = DEFAULTS_PATH) -> Dict[str, Any]:
    """ Raw YAML mapping, or {} if the file is missing. """
    p = Path(path)
    if not p.is_absolute() and not p.exists():
        p = Path(project_path(path))
    if not p.exists():
        logger.warning("settings file %s not found; using defaults", path)
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data

def build_theme_from_defaults(defaults: Dict[str, Any]) -> Theme:
    tdata = defaults.get("theme", {}) or {}
    th = Theme()
    th.font_path  = tdata.get("font_path", th.font_path)
    th.font_size  = int(tdata.get("font_size", th.font_size))
    th.text_rgb   = tuple(tdata.get("text_rgb", th.text_rgb))
    th.bg_rgb     = tuple(tdata.get("bg_rgb", th.bg_rgb))
    th.hover_cursor = bool(tdata.get("hover_cursor", th.hover_cursor))
    return th

def load_settings(path: str = DEFAULTS_PATH) -> AppCfg:
    data = load_ui_defaults(path)
    d = LayoutCfg()

    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", 640)),
            height=int(_get(data, "window.height", 480)),
            title=str(_get(data, "window.title", "But I have to try")),
            resizable=bool(_get(data, "window.resizable", True)),
        ),
        input=InputCfg(
            debounce_ms=int(_get(data, "input.debounce_ms", 200)),
        ),
        layout=LayoutCfg(
            image_top=int(_get(data, "layout.image.top", d.image_top)),
            image_band_h=int(_get(data, "layout.image.band_height", d.image_band_h)),
            text_top=int(_get(data, "layout.text.top", d.text_top)),
            line_advance=int(_get(data, "layout.text.line_advance", d.line_advance)),
            text_margin=int(_get(data, "layout.text.margin", d.text_margin)),
            quit_label=str(_get(data, "layout.quit.label", d.quit_label)),
            quit_offset_right=int(_get(data, "layout.quit.offset_right", d.quit_offset_right)),
            quit_top=int(_get(data, "layout.quit.top", d.quit_top)),
            end_label=str(_get(data, "layout.ending.label", d.end_label)),
            restart_label=str(_get(data, "layout.ending.restart_label", d.restart_label)),
            end_left=int(_get(data, "layout.ending.left", d.end_left)),
        ),
        story=StoryCfg(
            path=str(_get(data, "story.path", "game/content/crossing.yaml")),
        ),
        theme=build_theme_from_defaults(data),
    )
