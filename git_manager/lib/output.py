"""
User-facing console output.

Branch names and git diagnostics are printed with markup disabled so that
brackets in them are shown literally.
"""

from rich.console import Console

console = Console(highlight=False, soft_wrap=True)


def heading(text: str) -> None:
    console.print(f"\n{text}", style="bold cyan", markup=False)


def step(text: str) -> None:
    console.print(text, style="yellow", markup=False)


def info(text: str) -> None:
    console.print(text, markup=False)


def detail(text: str) -> None:
    console.print(f"  {text}", style="dim", markup=False)


def success(text: str) -> None:
    console.print(f"✓ {text}", style="green", markup=False)


def warning(text: str) -> None:
    console.print(f"Warning: {text}", style="yellow", markup=False)


def error(text: str) -> None:
    console.print(f"Error: {text}", style="bold red", markup=False)
