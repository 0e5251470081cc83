"""Command-line entry point for BudgetFlow analytics."""

from __future__ import annotations

import json
from pathlib import Path

import click

from .config import MATCH_MODES, BaseConfig
from .logging_config import get_logger, setup_logging
from .services.allocation import SimulationParameters, plan_goals
from .services.cashflow import cash_flow_summary
from .services.category_forecast import forecast_expenses
from .services.forecasting import forecast_series
from .services.health import health_label, health_metrics, health_score, strategic_insights
from .services.history_io import HistoryFormatError, load_history
from .services.insights import compare_performance, generate_insights
from .services.totals import compute_totals

logger = get_logger("cli")

history_argument = click.argument(
    "history_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


def _emit(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _load(path: Path, zero_based: bool):
    try:
        periods = load_history(path, zero_based_months=zero_based)
    except HistoryFormatError as exc:
        logger.warning("Rejected history file", extra={"path": str(path), "error": str(exc)})
        raise click.ClickException(str(exc)) from exc
    if not periods:
        raise click.ClickException(f"{path} contains no budget periods")
    return periods


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for logs (defaults to BUDGETFLOW_DATA_DIR).",
)
@click.option(
    "--zero-based-months",
    is_flag=True,
    default=False,
    help="History files store months as 0-11.",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, zero_based_months: bool) -> None:
    """Forecast, plan and review budget history stored as JSON."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if data_dir is not None:
        data_dir.mkdir(parents=True, exist_ok=True)
        config.DATA_DIR = data_dir.resolve()
    setup_logging(config)
    ctx.obj = {"config": config, "zero_based": zero_based_months}


@main.command()
@history_argument
@click.pass_obj
def totals(obj: dict, history_file: Path) -> None:
    """Totals for the latest period."""

    periods = _load(history_file, obj["zero_based"])
    _emit(compute_totals(periods[-1]).to_dict())


@main.command()
@history_argument
@click.option("--match-by", type=click.Choice(MATCH_MODES), default=None)
@click.option("--top", "top_n", type=click.IntRange(min=0), default=None)
@click.pass_obj
def forecast(obj: dict, history_file: Path, match_by: str | None, top_n: int | None) -> None:
    """Next-period expense forecast by category."""

    config: BaseConfig = obj["config"]
    periods = _load(history_file, obj["zero_based"])
    expenses = forecast_expenses(
        periods,
        match_by=match_by or config.CATEGORY_MATCH,
        top_n=config.TOP_CATEGORIES if top_n is None else top_n,
    )
    left = forecast_series(periods, "left_to_spend")
    _emit(
        {
            "expenses": expenses.to_dict(),
            "left_to_spend": left.to_dict() if left else None,
        }
    )


@main.command()
@history_argument
@click.pass_obj
def insights(obj: dict, history_file: Path) -> None:
    """Spending insights and performance against recent periods."""

    config: BaseConfig = obj["config"]
    periods = _load(history_file, obj["zero_based"])
    comparison = compare_performance(periods)
    _emit(
        {
            "insights": [i.to_dict() for i in generate_insights(periods, limit=config.INSIGHT_LIMIT)],
            "performance": comparison.to_dict() if comparison else None,
            "cash_flow": cash_flow_summary(periods).to_dict(),
        }
    )


@main.command()
@history_argument
@click.option("--income-adj", type=float, default=0.0, show_default=True, help="Income change in percent.")
@click.option("--expense-adj", type=float, default=0.0, show_default=True, help="Expense change in percent.")
@click.option("--priority", "priority_ids", multiple=True, help="Goal id to prioritise (repeatable).")
@click.pass_obj
def plan(
    obj: dict,
    history_file: Path,
    income_adj: float,
    expense_adj: float,
    priority_ids: tuple[str, ...],
) -> None:
    """Simulate goal completion under adjusted income and expenses."""

    periods = _load(history_file, obj["zero_based"])
    params = SimulationParameters(
        income_adjustment_pct=income_adj,
        expense_adjustment_pct=expense_adj,
        priority_goal_ids=frozenset(priority_ids),
    )
    _emit(plan_goals(periods[-1], params).to_dict())


@main.command()
@history_argument
@click.pass_obj
def health(obj: dict, history_file: Path) -> None:
    """Financial health score for the latest period."""

    periods = _load(history_file, obj["zero_based"])
    metrics = health_metrics(periods[-1])
    score = health_score(metrics)
    _emit(
        {
            "score": score,
            "label": health_label(score),
            "metrics": metrics.to_dict(),
            "insights": [i.to_dict() for i in strategic_insights(metrics, score)],
        }
    )


if __name__ == "__main__":  # pragma: no cover
    main()
