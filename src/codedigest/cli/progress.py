"""
Console progress reporting for the summary command.
"""

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TextColumn

from codedigest.services.digest_models import completion_percent


class ConsoleProgressReporter:
    """
    Progress callback printing status lines above a single progress bar.

    Use as a context manager and pass the instance as progress_callback;
    it is called as reporter(current, total, message).
    """

    def __init__(self, console: Console):
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]Progress: {task.fields[percent]}%"),
            console=console,
        )
        self._task: TaskID | None = None

    @property
    def percent(self) -> int:
        """Percentage currently shown next to the bar."""
        if self._task is None:
            return 0
        return self._progress.tasks[0].fields["percent"]

    def __enter__(self) -> "ConsoleProgressReporter":
        self._progress.start()
        self._task = self._progress.add_task("Summary", total=None, percent=0)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._progress.stop()

    def __call__(self, current: int, total: int, message: str) -> None:
        self._progress.console.print(message, markup=False, highlight=False)
        if self._task is not None and total:
            self._progress.update(
                self._task,
                completed=current,
                total=total,
                percent=completion_percent(current, total),
            )
