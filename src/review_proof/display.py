import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from review_proof.utils import EmployeeOption, StagedFile, Status, StatusKind

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)

STATUS_STYLES = {
    StatusKind.SUCCESS: ("Success", "green"),
    StatusKind.ERROR: ("Error", "red"),
    StatusKind.INFO: ("Info", "cyan"),
}


def setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def info_panel(title: str, msg: str, style: str = "cyan"):
    console.print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def warn_panel(title: str, msg: str):
    info_panel(title, msg, style="yellow")


def error_panel(title: str, msg: str):
    info_panel(title, msg, style="red")


def status_banner(status: Status):
    """Render the current status; an empty status prints nothing."""
    if not status.message or status.kind is None:
        return
    title, style = STATUS_STYLES[status.kind]
    info_panel(title, status.message, style=style)


def staged_file_panel(staged: StagedFile, preview_path=None):
    lines = [f"File: {staged.name}", f"Type: {staged.mime_type or 'unknown'}"]
    try:
        lines.append(f"Size: {staged.path.stat().st_size / 1024:.1f} KB")
    except OSError:
        lines.append("Size: unreadable")
    if preview_path is not None:
        lines.append(f"Preview: {preview_path}")
    info_panel("📸 Evidence", "\n".join(lines))


def employees_table(options) -> Table:
    table = Table(title="👥 Employees")
    table.add_column("Value", style="info")
    table.add_column("Label")
    for opt in options:
        table.add_row(opt.value, opt.label)
    return table


def print_rule(title: Optional[str] = None):
    if title:
        console.rule(f"[info]{title}[/info]")
    else:
        console.rule()


def employee_display(opt: Optional[EmployeeOption], raw: str) -> str:
    return f"{opt.label} ({opt.value})" if opt and opt.label != opt.value else raw
