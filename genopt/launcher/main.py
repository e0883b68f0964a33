#!/usr/bin/env python3
"""
🚀 genopt Launcher
Command line driver that maximizes an example objective with the genetic engine
"""

import json
import math
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from genopt import __version__
from genopt.core.config import get_settings
from genopt.core.exceptions import GenOptError
from genopt.core.logger import get_logger
from genopt.core.random_source import NumpyRandomSource
from genopt.genetic import Chromosome, ClosedInterval, GeneticOptimizer
from genopt.utils import FitnessTracker

console = Console()
logger = get_logger("genopt.launcher")
app = typer.Typer(help="🧬 genopt - binary genetic algorithm on a closed interval")

# name -> (objective, default domain, description)
OBJECTIVES: Dict[str, Tuple[Callable[[float], float], Tuple[float, float], str]] = {
    "sin-ridge": (
        lambda x: x + abs(math.sin(32 * x)),
        (0.0, math.pi),
        "x + |sin(32x)|",
    ),
    "parabola": (
        lambda x: 1.0 - (x - 0.5) ** 2,
        (0.0, 1.0),
        "1 - (x - 0.5)^2",
    ),
    "bump": (
        lambda x: math.exp(-((x - 2.0) ** 2)),
        (-5.0, 5.0),
        "exp(-(x - 2)^2)",
    ),
}


def save_results(results: Dict[str, Any], path: Path) -> Path:
    """Write run results as JSON"""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, default=str)

    logger.info(f"Results saved to {path}")
    return path


def display_banner():
    """Startup banner"""
    banner = Text.assemble(
        ("🧬 ", "bold blue"),
        ("GENOPT", "bold white"),
        (f" v{__version__}\n", "dim"),
        ("Binary genetic algorithm", "italic")
    )
    console.print(Panel(banner, border_style="blue", padding=(0, 2)))


def display_summary(results: Dict[str, Any], objective: str):
    """Summary table of a finished run"""
    table = Table(title=f"Results for {objective}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    config = results['optimization_config']
    table.add_row("Generations", str(results['generations_completed']))
    table.add_row("Population size", str(config['popsize']))
    table.add_row("Crossover rate", str(config['crossover_rate']))
    table.add_row("Mutation rate", str(config['mutation_rate']))
    table.add_row("Final best value", f"{results['best_value']:.10f}")
    table.add_row("Final best fitness", f"{results['best_fitness']:.10f}")
    if results['best_ever_value'] is not None:
        table.add_row("Best value seen", f"{results['best_ever_value']:.10f}")
        table.add_row("Best fitness seen", f"{results['best_ever_fitness']:.10f}")

    console.print(table)


@app.command()
def optimize(
    objective: str = typer.Option("sin-ridge", help="Named objective function (see 'objectives')"),
    low: Optional[float] = typer.Option(None, help="Lower bound of the domain"),
    high: Optional[float] = typer.Option(None, help="Upper bound of the domain"),
    popsize: Optional[int] = typer.Option(None, help="Population size"),
    crossover_rate: Optional[float] = typer.Option(None, help="Crossover probability per pair"),
    mutation_rate: Optional[float] = typer.Option(None, help="Mutation probability per bit"),
    generations: Optional[int] = typer.Option(None, help="Number of generations"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    output: Optional[Path] = typer.Option(None, help="Write results to this JSON file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the best value"),
):
    """🎯 Maximize an objective and print the best value"""
    settings = get_settings()

    if objective not in OBJECTIVES:
        console.print(f"[red]Unknown objective '{escape(objective)}'. Choose from: {', '.join(OBJECTIVES)}[/red]")
        raise typer.Exit(1)

    objective_fn, (default_low, default_high), _ = OBJECTIVES[objective]
    domain = ClosedInterval(
        default_low if low is None else low,
        default_high if high is None else high,
    )
    seed = settings.random_seed if seed is None else seed
    generations = settings.generations if generations is None else generations

    if not quiet:
        display_banner()

    try:
        optimizer = GeneticOptimizer(
            Chromosome,
            popsize=settings.popsize if popsize is None else popsize,
            crossover_rate=settings.crossover_rate if crossover_rate is None else crossover_rate,
            mutation_rate=settings.mutation_rate if mutation_rate is None else mutation_rate,
            random_source=NumpyRandomSource(seed),
            objective_fn=objective_fn,
            domain=domain,
        )
        results = optimizer.run(generations, tracker=FitnessTracker())
    except GenOptError as e:
        console.print(f"[red]❌ {type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    results['objective'] = objective
    results['domain'] = [domain.l, domain.h]
    results['seed'] = seed

    if output is not None:
        save_results(results, output)

    if quiet:
        console.print(results['best_value'])
    else:
        display_summary(results, objective)


@app.command()
def objectives():
    """📋 List the named objective functions"""
    table = Table(title="Objectives")
    table.add_column("Name", style="cyan")
    table.add_column("f(x)", style="white")
    table.add_column("Domain", style="green")

    for name, (_, (low, high), description) in OBJECTIVES.items():
        table.add_row(name, escape(description), escape(f"[{low:g}, {high:g}]"))

    console.print(table)


@app.command()
def version():
    """📦 Print the version"""
    console.print(f"genopt {__version__}")


if __name__ == "__main__":
    app()
