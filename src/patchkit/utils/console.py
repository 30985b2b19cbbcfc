"""Console utility functions for formatting and output."""

import logging
from typing import Optional

import click
from colorama import Fore, Style, init
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm
from rich.syntax import Syntax

init(autoreset=True)


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✨',
    'running': '🚀',
    'gear': '⚙️',
    'info': '💡',
    'warning': '⚠️',
    'error': '❌',
    'check': '✅',
    'list': '📋',
    'preview': '👀',
    'package': '📦',
}

_COLORAMA_COLORS = {
    'red': Fore.RED,
    'green': Fore.GREEN,
    'yellow': Fore.YELLOW,
    'blue': Fore.BLUE,
    'cyan': Fore.CYAN,
    'white': Fore.WHITE,
    'magenta': Fore.MAGENTA,
    'muted': Fore.WHITE,
}


def _get_console() -> Console:
    """Get a Rich console bound to the current stdout."""
    return Console(soft_wrap=True)


def _rich_echo(message: str, color: str = "white", bold: bool = False, symbol: Optional[str] = None):
    """Echo message with Rich formatting, falling back to plain colorama output."""
    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    style = f"bold {color}" if bold else color
    try:
        _get_console().print(message, style=style, markup=False, highlight=False)
    except UnicodeEncodeError:
        # Legacy consoles that cannot render the status symbols
        color_code = _COLORAMA_COLORS.get(color, Fore.WHITE)
        style_code = Style.BRIGHT if bold else ""
        click.echo(f"{color_code}{style_code}{message}{Style.RESET_ALL}")


def _rich_success(message: str, symbol: Optional[str] = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: Optional[str] = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: Optional[str] = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: Optional[str] = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_panel(content: str, title: Optional[str] = None, style: str = "cyan"):
    """Display content in a Rich panel."""
    _get_console().print(Panel(content, title=title, border_style=style))


def _rich_diff(diff_text: str):
    """Display a unified diff with syntax highlighting."""
    _get_console().print(Syntax(diff_text, "diff", theme="ansi_dark", word_wrap=True))


def _rich_confirm(prompt: str) -> bool:
    """Ask a yes/no question on the console."""
    return Confirm.ask(prompt, console=_get_console())


def configure_logging(verbose: bool = False) -> None:
    """Route diagnostic logging through Rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )
