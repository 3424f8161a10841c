from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import AudioBookFileInfo, StackResult

SUCCESS_COLOR = "green"
DIM_COLOR = "dim"

STACK_SYMBOL = "✓"
UNSTACKED_SYMBOL = "○"
SKIP_SYMBOL = "⊘"


class StackTableRenderer:
    """Renders stack resolution results as Rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def build_stack_table(self, result: StackResult) -> Table:
        table = Table(title="Stacks", title_justify="left", show_lines=True)
        table.add_column("#", justify="right", style=DIM_COLOR)
        table.add_column("Name", style="bold")
        table.add_column("Kind")
        table.add_column("Members")
        for number, stack in enumerate(result.stacks, 1):
            kind = "folder" if stack.is_folder_stack else "file"
            members = "\n".join(f"[{SUCCESS_COLOR}]{STACK_SYMBOL}[/{SUCCESS_COLOR}] {escape(path)}" for path in stack.files)
            table.add_row(str(number), escape(stack.name), kind, members)
        return table

    def render(self, result: StackResult, *, show_skipped: bool = False) -> None:
        if result.stacks:
            self.console.print(self.build_stack_table(result))
        else:
            self.console.print(f"[{DIM_COLOR}]No stacks found.[/{DIM_COLOR}]")

        for path in result.unstacked:
            self.console.print(f"[{DIM_COLOR}]{UNSTACKED_SYMBOL} unstacked[/{DIM_COLOR}] {escape(path)}")
        if show_skipped:
            for path in result.skipped:
                self.console.print(f"[{DIM_COLOR}]{SKIP_SYMBOL} skipped[/{DIM_COLOR}] {escape(path)}")

    def render_audiobooks(self, rows: List[tuple[str, Optional[AudioBookFileInfo]]]) -> None:
        table = Table(title="Audiobook Files", title_justify="left")
        table.add_column("Path")
        table.add_column("Container")
        table.add_column("Chapter", justify="right")
        table.add_column("Part", justify="right")
        for path, info in rows:
            if info is None:
                table.add_row(escape(path), f"[{DIM_COLOR}]unsupported[/{DIM_COLOR}]", "", "")
                continue
            table.add_row(
                escape(path),
                info.container,
                "" if info.chapter_number is None else str(info.chapter_number),
                "" if info.part_number is None else str(info.part_number),
            )
        self.console.print(table)


def result_to_dict(result: StackResult) -> Dict[str, Any]:
    return {
        "stacks": [
            {
                "name": stack.name,
                "expression": stack.expression,
                "is_folder_stack": stack.is_folder_stack,
                "files": list(stack.files),
            }
            for stack in result.stacks
        ],
        "unstacked": list(result.unstacked),
        "skipped": list(result.skipped),
    }
