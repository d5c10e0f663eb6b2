"""QSS stylesheet and colours for WodTimer."""

from __future__ import annotations

from ..timer.session import PHASE_COLORS, PHASE_PREPARE

PALETTE: dict[str, str] = {
    "bg":           "#0A0A0A",
    "surface":      "#171717",
    "accent":       "#A3E635",   # lime
    "accent_hover": "#84CC16",
    "text":         "#FAFAFA",
    "text_muted":   "#A3A3A3",
    "border":       "#2E2E2E",
    "prepare":      PHASE_COLORS[PHASE_PREPARE],
}


def time_label_style(color: str, size_px: int) -> str:
    return (
        f"color: {color}; font-size: {size_px}px; font-weight: 700;"
        " font-family: 'Menlo', 'DejaVu Sans Mono', monospace;"
    )


def build_stylesheet(p: dict[str, str] | None = None) -> str:
    p = p or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}
    QFrame#card {{
        background-color: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 16px;
    }}
    QLabel#roundLabel {{
        color: {p['accent']};
        font-size: 22px;
        font-weight: 700;
    }}
    QLabel#totalLabel, QLabel#modeHint {{
        color: {p['text_muted']};
    }}
    QLineEdit, QComboBox {{
        background-color: {p['bg']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 8px;
    }}
    QLineEdit:disabled {{
        color: {p['text_muted']};
    }}
    QPushButton {{
        border-radius: 8px;
        padding: 10px 18px;
        border: 1px solid {p['border']};
        background-color: transparent;
    }}
    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: #000000;
        border: none;
        font-weight: 600;
    }}
    QPushButton#primaryButton:hover {{
        background-color: {p['accent_hover']};
    }}
    QPushButton#iconButton {{
        padding: 6px 10px;
    }}
    """
