"""Read and write budget history as JSON."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from ..logging_config import get_logger
from ..models.period import BudgetPeriod, sort_history

logger = get_logger("services.history_io")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


class HistoryFormatError(ValueError):
    """Raised when a history document cannot be interpreted."""


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _normalize_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {_snake(str(k)): _normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_keys(v) for v in value]
    return value


def _unwrap(entry: Any) -> dict:
    """Return the period mapping, unwrapping saved-file envelopes."""

    if not isinstance(entry, dict):
        raise HistoryFormatError(f"Expected a period object, got {type(entry).__name__}")
    inner = entry.get("data")
    if isinstance(inner, dict) and "expenses" not in entry:
        return inner
    return entry


def parse_history(payload: Any, *, zero_based_months: bool = False) -> list[BudgetPeriod]:
    """Build periods from decoded JSON, oldest first.

    ``payload`` may be a list of periods, a single period, or saved-file
    envelopes (``{"data": {...}}``). camelCase keys are accepted.
    """

    if isinstance(payload, dict):
        entries = payload.get("history") if isinstance(payload.get("history"), list) else [payload]
    elif isinstance(payload, list):
        entries = payload
    else:
        raise HistoryFormatError(f"History must be a list or object, got {type(payload).__name__}")

    periods: list[BudgetPeriod] = []
    for index, entry in enumerate(entries):
        data = _normalize_keys(_unwrap(entry))
        if zero_based_months and "month" in data:
            try:
                data["month"] = int(data["month"]) + 1
            except (TypeError, ValueError):
                data.pop("month")
        try:
            periods.append(BudgetPeriod.model_validate(data))
        except ValidationError as exc:
            raise HistoryFormatError(f"Period #{index} is invalid: {exc}") from exc

    logger.debug("Parsed history", extra={"periods": len(periods)})
    return sort_history(periods)


def load_history(path: Path, *, zero_based_months: bool = False) -> list[BudgetPeriod]:
    """Load a JSON history file from disk."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise HistoryFormatError(f"{path} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise HistoryFormatError(f"Cannot read {path}: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise HistoryFormatError(f"{path} is not valid JSON: {exc}") from exc
    return parse_history(payload, zero_based_months=zero_based_months)


def dump_history(periods: Iterable[BudgetPeriod], path: Path) -> Path:
    """Write periods to ``path`` as a JSON list, oldest first."""

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    rows = [p.model_dump(mode="json") for p in sort_history(periods)]
    output.write_text(json.dumps(rows, indent=2), encoding="utf-8")
    return output


__all__ = ["HistoryFormatError", "dump_history", "load_history", "parse_history"]
