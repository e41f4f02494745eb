"""Define a command-line interface for solving planning problems described in YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from backchain.io.domain_loader import PlanningProblem, load_planning_problem
from backchain.io.logging import console, log_info
from backchain.planning import Heuristic, Planner


def _render_plan_table(planner: Planner) -> Table:
    """Render a numbered table of the steps in the planner's most recent plan."""
    table = Table(title="Plan", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Action", style="bold")
    table.add_column("Arguments", style="magenta")

    for idx, entry in enumerate(planner.result, start=1):
        args = ", ".join(map(str, entry.binding))
        table.add_row(str(idx), entry.action.name, args or "-")
    return table


def run_search(planner: Planner, max_steps: int | None = None) -> bool:
    """Drive a resumable search until it finishes or exhausts its step budget.

    :param planner: Planner configured with a complete planning problem
    :param max_steps: Maximum number of search steps (if None, search runs to completion)
    :return: True if a plan was found, otherwise False
    """
    if not planner.init_search():
        return False

    while planner.step():
        if max_steps is not None and planner.steps_taken >= max_steps:
            console.print(f"[yellow]Search stopped after {max_steps} steps.[/]")
            break

    planner.finalize()
    return planner.success


@click.command()
@click.argument("problem_yaml", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-steps", type=click.IntRange(min=1), default=None, help="Step budget.")
@click.option(
    "--heuristic",
    type=click.Choice([h.value for h in Heuristic]),
    default=None,
    help="Override the heuristic given in the problem file.",
)
@click.option("--verbose", is_flag=True, help="Log every search event.")
def cli(problem_yaml: Path, max_steps: int | None, heuristic: str | None, verbose: bool) -> None:
    """Search for a plan solving the planning problem in PROBLEM_YAML."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        problem: PlanningProblem = load_planning_problem(problem_yaml)
    except (KeyError, RuntimeError, ValueError, ValidationError, yaml.YAMLError) as err:
        console.print(f"[red]Could not load planning problem: {err}[/]")
        raise SystemExit(2) from err

    log_info(f"Loaded planning problem from {problem_yaml}.")
    if heuristic is not None:
        problem.heuristic = Heuristic(heuristic)

    planner = problem.make_planner()
    found = run_search(planner, max_steps)

    if not found:
        console.print(Panel.fit("[bold red]No plan found.[/]", border_style="red"))
        planner.log_info()
        raise SystemExit(1)

    summary = f"[bold]Plan found: {len(planner.result)} steps[/]"
    console.print(Panel.fit(summary, border_style="green"))
    console.print(_render_plan_table(planner))
    planner.log_info()
