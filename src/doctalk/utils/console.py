"""Console text styling.

Styling is pure: functions return Rich markup and never touch terminal state.
The closing tag is the reset marker; only the Console renders it.
"""

from rich.markup import escape

WARNING = "yellow"
ACCENT = "blue"
TITLE = "bold white"


def style(text: str, color: str | None = None) -> str:
    """Wrap text in Rich markup for the given color.

    Args:
        text: Plain text (markup characters are escaped)
        color: Rich style name, None for unstyled text

    Returns:
        Markup string such as "[yellow]text[/yellow]"
    """
    safe = escape(text)
    if not color:
        return safe
    return f"[{color}]{safe}[/{color}]"
