import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from overlap_expansion.config import ExpansionSettings
from overlap_expansion.expander import InMemoryGraphExpander
from overlap_expansion.logging_config import setup_logging
from overlap_expansion.models import ExpansionResult
from overlap_expansion.variants import DEFAULT_VARIANT_ID, VARIANTS, create_expansion


app = typer.Typer(help="Sample the between-graph of N seed nodes with overlap-based expansion.")
console = Console()
logger = logging.getLogger(__name__)


def load_graph(path: Path) -> InMemoryGraphExpander:
    """
    Load a JSON graph of the form
    ``{"edges": [[source, target, type?], ...], "nodes": [...], "directed": false}``.

    Raises:
        ValueError: If the file has no edge list or a node id contains "->"
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or "edges" not in data:
        raise ValueError(f"{path} must contain a JSON object with an 'edges' list")
    return InMemoryGraphExpander.from_edge_list(
        ([str(part) for part in row] for row in data["edges"]),
        directed=bool(data.get("directed", False)),
        nodes=[str(n) for n in data.get("nodes", [])],
    )


def render_result(result: ExpansionResult, seeds: List[str]) -> None:
    metadata = result.overlap_metadata
    table = Table(title="Overlap-based expansion")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Seeds", ", ".join(seeds))
    table.add_row("Termination", metadata.termination_reason.value)
    table.add_row("Iterations", str(metadata.iterations))
    table.add_row("Nodes expanded", str(result.stats.nodes_expanded))
    table.add_row("Sampled nodes", str(len(result.sampled_nodes)))
    table.add_row("Sampled edges", str(len(result.sampled_edges)))
    table.add_row("Overlap events", str(len(metadata.overlap_events)))
    table.add_row("Paths", str(len(result.paths)))
    console.print(table)

    for path in result.paths:
        console.print(f"[bold]{path.from_seed} -> {path.to_seed}[/bold]: {' -> '.join(path.nodes)}")


@app.command()
def run(
    graph: Path = typer.Option(..., "--graph", "-g", exists=True, dir_okay=False, help="JSON edge-list graph file."),
    seeds: List[str] = typer.Option(..., "--seed", "-s", help="Seed node id; repeat for N seeds."),
    variant: str = typer.Option(DEFAULT_VARIANT_ID, "--variant", "-v", help="Variant id (see 'variants')."),
    max_iterations: Optional[int] = typer.Option(None, "--max-iterations", help="Safety cap on loop iterations."),
    total_nodes: Optional[int] = typer.Option(None, "--total-nodes", help="Graph size for N=1 coverage; defaults to the loaded node count."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    plain_logs: bool = typer.Option(False, "--plain-logs", help="Plain timestamped log lines instead of Rich output."),
):
    """
    Run one expansion variant over a graph file and print a summary.
    """
    settings = ExpansionSettings.from_env()
    setup_logging(level=log_level or settings.log_level, use_rich=not plain_logs)

    expander = load_graph(graph)
    overrides = {"total_nodes": total_nodes if total_nodes is not None else expander.node_count}
    if max_iterations is not None:
        overrides["max_iterations"] = max_iterations

    expansion = create_expansion(variant, expander, seeds, settings=settings, **overrides)
    logger.info(f"Running {variant} with {len(seeds)} seed(s) over {expander.node_count} nodes")
    result = asyncio.run(expansion.run())
    render_result(result, seeds)


@app.command()
def variants():
    """
    List every registered variant.
    """
    table = Table(title=f"{len(VARIANTS)} overlap-based variants")
    table.add_column("Id")
    table.add_column("Name")
    for variant_id, spec in VARIANTS.items():
        table.add_row(variant_id, spec.name)
    console.print(table)


if __name__ == "__main__":
    app()
