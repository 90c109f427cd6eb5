# Flagwork CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Flagwork CLI applications."""
from rich.console import Console
from rich.theme import Theme

flagwork_theme = Theme(
    {
        "flag": "bold cyan",
        "subcommand": "bold green",
        "required": "bold yellow",
        "error": "bold red",
        "default": "dim",
    }
)

console = Console(theme=flagwork_theme)
