from dataclasses import dataclass

@dataclass
class Theme:
    font_path: str | None = None        # None = pygame's bundled default font
    font_size: int = 18
    text_rgb: tuple[int, int, int] = (255, 255, 255)
    bg_rgb: tuple[int, int, int] = (0, 0, 0)
    hover_cursor: bool = True           # Hand cursor over clickable labels
