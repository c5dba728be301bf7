"""Colored console output utilities using Rich."""

from rich.console import Console

console = Console(stderr=True)


def print_step(step: str, message: str) -> None:
    """Print a step indicator: [1/3] Retrieving key..."""
    console.print(f"\n[blue][{step}][/blue] {message}")


def print_success(message: str) -> None:
    """Print success message with green checkmark."""
    console.print(f"   [green]✓[/green] {message}")


def print_warning(message: str) -> None:
    """Print warning message with yellow indicator."""
    console.print(f"   [yellow]![/yellow] {message}")


def print_error(message: str) -> None:
    """Print error message with red X."""
    console.print(f"   [red]✗[/red] {message}")


def print_header(title: str, emoji: str = "🔏") -> None:
    """Print signing header."""
    console.print(f"[blue]{emoji} {title}[/blue]")
    console.print("=" * 30)


def print_config(
    secret_id: str,
    key_user: str,
    file_count: int,
    profile: str | None = None,
) -> None:
    """Print configuration summary."""
    console.print("[blue]📋 Configuration:[/blue]")
    console.print(f"   Secret: {secret_id}")
    console.print(f"   Key:    {key_user}")
    console.print(f"   Files:  {file_count}")
    if profile:
        console.print(f"   Profile: {profile}")


def print_final_success(message: str = "Done!") -> None:
    """Print final success message."""
    console.print()
    console.print(f"[green]✅ {message}[/green]")
