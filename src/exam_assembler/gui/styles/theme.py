"""
Theme definitions for the Exam Assembler GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY_BLUE = "#0364B8"
    PRIMARY_BLUE_HOVER = "#0A2767"

    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    HOVER = "#f0f0f0"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"
    TEXT_ON_PRIMARY = "#ffffff"

    # Borders
    BORDER = "#e0e0e0"

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"
    INFO = "#1976d2"

    # Marked rows
    MARK_BG = "#1490DF"
    MARK_TEXT = "#ffffff"


class ColorsDark:
    """Dark theme color palette."""

    PRIMARY_BLUE = "#3794FF"
    PRIMARY_BLUE_HOVER = "#4FA3FF"

    BACKGROUND = "#1e1e1e"
    SURFACE = "#252526"
    HOVER = "#21262D"

    TEXT_PRIMARY = "#E6EDF3"
    TEXT_SECONDARY = "#8B949E"
    TEXT_ON_PRIMARY = "#FFFFFF"

    BORDER = "#30363D"

    ERROR = "#F85149"
    SUCCESS = "#3FB950"
    WARNING = "#D29922"
    INFO = "#58A6FF"

    MARK_BG = "#3794FF"
    MARK_TEXT = "#FFFFFF"


class Fonts:
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"
    MONO_FONT = "Consolas, Monaco, Menlo, 'Courier New', monospace"

    H2 = "16pt"
    BODY = "13pt"
    SMALL = "11pt"
    CONSOLE = "12pt"


def _stylesheet(C) -> str:
    return f"""
    * {{
        font-family: {Fonts.UI_FONT};
        font-size: {Fonts.BODY};
        color: {C.TEXT_PRIMARY};
    }}

    QMainWindow, QWidget {{
        background-color: {C.BACKGROUND};
    }}

    QLabel {{
        background-color: transparent;
    }}

    QGroupBox {{
        background-color: {C.SURFACE};
        border: 1px solid {C.BORDER};
        border-radius: 6px;
        margin-top: 12px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 8px;
        padding: 0 4px;
        background-color: {C.BACKGROUND};
    }}

    QListWidget {{
        background-color: {C.SURFACE};
        border: 1px solid {C.BORDER};
        border-radius: 4px;
    }}
    QListWidget::item:hover {{
        background-color: {C.HOVER};
    }}

    QPushButton {{
        background-color: {C.PRIMARY_BLUE};
        color: {C.TEXT_ON_PRIMARY};
        border: none;
        border-radius: 4px;
        padding: 6px 14px;
    }}
    QPushButton:hover {{
        background-color: {C.PRIMARY_BLUE_HOVER};
    }}
    QPushButton:disabled {{
        background-color: {C.BORDER};
        color: {C.TEXT_SECONDARY};
    }}
"""


GLOBAL_STYLESHEET = _stylesheet(Colors)
GLOBAL_STYLESHEET_DARK = _stylesheet(ColorsDark)

_is_dark_mode = False


def set_dark_mode(is_dark: bool):
    """Explicitly set the dark mode state. Called by MainWindow._apply_theme."""
    global _is_dark_mode
    _is_dark_mode = is_dark


def get_colors():
    """Get the appropriate color palette based on current theme."""
    return ColorsDark if _is_dark_mode else Colors
