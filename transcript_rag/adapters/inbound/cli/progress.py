"""Rich progress displays for long-running CLI steps."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from ....core.domain import EmbeddingProgress


def _progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


@contextmanager
def embedding_progress(console: Console, title: str) -> Iterator[Callable[[EmbeddingProgress], None]]:
    """Yield a callback that advances a bar for each embedded chunk."""
    with _progress(console) as progress:
        task = progress.add_task(f"Embedding {title}", total=None)

        def update(event: EmbeddingProgress) -> None:
            progress.update(task, total=event.total, completed=event.current)

        yield update


@contextmanager
def stage_progress(console: Console) -> Iterator[Callable[[str, int, int], None]]:
    """Yield a callback for ``(stage, current, total)`` A/B progress events.

    Top-level stages drive the main bar; per-chunk events from each
    summary pass drive a second bar that is reset for every pass.
    """
    with _progress(console) as progress:
        stages = progress.add_task("A/B summaries", total=3)
        chunks = progress.add_task("Waiting", total=None, visible=False)

        def update(stage: str, current: int, total: int) -> None:
            if stage.startswith("Summary "):
                progress.update(chunks, description=stage, total=total, completed=current, visible=True)
            else:
                progress.update(stages, description=stage, completed=current - 1)
                progress.reset(chunks, visible=False)

        yield update
        progress.update(stages, completed=3)
