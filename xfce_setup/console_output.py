# Gentoo-Xfce-Setup/xfce_setup/console_output.py

import sys
from typing import Any, Optional
from rich.console import Console
from rich.text import Text
from rich.style import Style
from rich.prompt import Confirm
from rich.rule import Rule
from rich.padding import Padding
from rich.panel import Panel

# highlight=False: styling comes only from explicit markup.
console = Console(highlight=False)

PROMPT_STYLE = Style(color="magenta")

# --- Output Functions ---

def print_info(message: Any, icon: bool = True):
    """Prints an informational message using Rich markup."""
    prefix = "[bold blue]INFO:[/] " if icon else ""
    console.print(f"{prefix}{message}")

def print_plain(message: Any):
    """Prints an unstyled progress line."""
    console.print(message, markup=False)

def print_warning(message: Any, icon: bool = True):
    """Prints a warning message using Rich markup."""
    prefix = "[bold yellow]WARNING:[/] " if icon else ""
    console.print(f"{prefix}{message}")

def print_error(
    message: Any,
    icon: bool = True,
    exit_after: bool = False,
    exit_code: int = 1
):
    """
    Prints an error message in bold red.
    Optionally exits the program with the given exit_code.
    """
    prefix = "[bold red]ERROR:[/] " if icon else ""
    console.print(f"{prefix}[bold red]{message}[/]")
    if exit_after:
        console.print(f"[dim red]Exiting with code {exit_code}...[/]")
        sys.exit(exit_code)

def print_success(message: Any, icon: bool = True):
    """Prints a success message using Rich markup."""
    prefix = "[bold green]SUCCESS:[/] " if icon else ""
    console.print(f"{prefix}{message}")

def print_step(title: str, char: str = "="):
    """Prints a major step title, styled as a Rich Rule."""
    console.print(Rule(f"[bold magenta]{title}[/]", style="magenta", characters=char))

def print_sub_step(message: str, indent: int = 2):
    """Prints an indented sub-step line with a leading marker."""
    console.print(Padding(f"[bright_blue]>[/] {message}", (0, 0, 0, indent)))

def print_panel(
    content: Any,
    title: Optional[str] = None,
    style: str = "blue",
    padding: tuple = (1, 2)
):
    """Prints content within a Rich Panel sized to its content."""
    console.print(
        Panel(
            content,
            title=f"[bold]{title}[/]" if title else None,
            border_style=style,
            padding=padding,
            expand=False
        )
    )

# --- Input Functions ---

def confirm_action(prompt_message: str, default: bool = False) -> bool:
    """
    Asks a yes/no confirmation question.

    Args:
        prompt_message (str): The confirmation message.
        default (bool): The default choice (True for yes, False for no).

    Returns:
        bool: True if the user confirms (yes), False otherwise (no).
    """
    rich_prompt = Text.assemble(
        (f"{prompt_message}", PROMPT_STYLE),
        (" (y/n)", "dim white")
    )
    return Confirm.ask(rich_prompt, default=default, console=console)
