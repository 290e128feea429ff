"""Rich console rendering of classification results."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from cifar_compare.schemas.prediction import ComparisonResult, InferenceResult


def predictions_table(result: InferenceResult) -> Table:
    """Top-K table for a single model."""
    table = Table(
        title=f"{result.model_name} Top {len(result.predictions)}",
        header_style="bold magenta",
        box=box.SQUARE,
    )
    table.add_column("Rank", justify="right")
    table.add_column("Class", style="cyan")
    table.add_column("Probability", justify="right", style="green")
    for rank, pred in enumerate(result.predictions, start=1):
        table.add_row(str(rank), pred.label, f"{pred.confidence * 100:.2f}%")
    return table


def comparison_table(result: ComparisonResult) -> Table:
    """Latency / agreement summary for two models."""
    base, cand = result.baseline, result.candidate
    table = Table(
        title="Performance Comparison",
        header_style="bold magenta",
        box=box.SQUARE,
        show_lines=True,
    )
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row(f"{base.model_name} time", f"{base.elapsed_ms:.2f} ms")
    table.add_row(f"{cand.model_name} time", f"{cand.elapsed_ms:.2f} ms")
    speedup = (
        f"{result.speed_ratio:.2f}×" if result.speed_ratio is not None else "n/a"
    )
    table.add_row(f"Speed-up ({base.model_name}/{cand.model_name})", speedup)
    table.add_row("Top-1 agrees", "yes" if result.top1_agrees else "no")
    return table


def render_result(
    result: InferenceResult | ComparisonResult, console: Console | None = None
) -> None:
    console = console or Console()
    if isinstance(result, ComparisonResult):
        console.print(comparison_table(result))
        console.print(predictions_table(result.baseline))
        console.print(predictions_table(result.candidate))
    else:
        console.print(f"Inference time: {result.elapsed_ms:.2f} ms")
        console.print(predictions_table(result))
