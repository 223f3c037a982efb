"""CLI commands for replaying and validating trending rankings."""

import json
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import TypeVar

import click
import structlog
from pydantic import ValidationError

from trendscore.config.error_hints import format_validation_error
from trendscore.config.loader import (
    ConfigValidationError,
    ScoringConfigLoader,
    load_scoring_config,
)
from trendscore.data_model import StrictBaseModel
from trendscore.observability.logging import bind_run_context, configure_logging
from trendscore.ranker import (
    AuthorProfile,
    ContentItem,
    EngagementStats,
    HistoricalBaseline,
    InputError,
    RankCategory,
    ScoringInput,
    TrendingRanker,
)
from trendscore.ranker.time_decay import parse_timestamp
from trendscore.settings import get_settings


logger = structlog.get_logger()

CATEGORY_CHOICES = [c.value for c in RankCategory]

M = TypeVar("M", bound=StrictBaseModel)


def load_fixture(fixture_path: Path) -> tuple[str | None, list[ScoringInput]]:
    """Load a JSON replay fixture.

    The fixture is an object with an optional ``now`` and a ``notes`` list;
    each note has ``item`` and optional ``stats``, ``author``, ``baseline``.

    Args:
        fixture_path: Path to the fixture file.

    Returns:
        Tuple of (raw reference time or None, scoring inputs).

    Raises:
        click.ClickException: If the fixture is malformed.
    """
    try:
        payload = json.loads(fixture_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {fixture_path}: {e}"
        raise click.ClickException(msg) from e

    if not isinstance(payload, dict) or not isinstance(payload.get("notes"), list):
        msg = f"{fixture_path} must contain an object with a 'notes' list"
        raise click.ClickException(msg)

    inputs: list[ScoringInput] = []
    for index, note in enumerate(payload["notes"]):
        try:
            inputs.append(
                ScoringInput(
                    item=ContentItem.model_validate(note["item"]),
                    stats=_optional(EngagementStats, note.get("stats")),
                    author=_optional(AuthorProfile, note.get("author")),
                    baseline=_optional(HistoricalBaseline, note.get("baseline")),
                )
            )
        except (KeyError, TypeError, ValidationError) as e:
            msg = f"Invalid note at index {index}: {e}"
            raise click.ClickException(msg) from e

    return payload.get("now"), inputs


def _optional(model: type[M], data: object) -> M | None:
    """Validate an optional sub-object of a fixture note."""
    if data is None:
        return None
    return model.model_validate(data)


def _resolve_now(cli_now: str | None, fixture_now: str | None) -> datetime:
    """Pick the reference time; the command line wins over the fixture."""
    raw = cli_now or fixture_now
    if raw is None:
        msg = "A reference time is required: pass --now or set 'now' in the fixture"
        raise click.UsageError(msg)
    try:
        return parse_timestamp(raw)
    except InputError as e:
        raise click.BadParameter(e.message, param_hint="--now") from e


@click.group()
def cli() -> None:
    """Trending score engine for notes."""


@cli.command()
@click.argument(
    "fixture_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--category",
    "-c",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    default=RankCategory.TRENDING.value,
    show_default=True,
    help="Feed category to rank.",
)
@click.option("--now", "now_value", default=None, help="Reference time (ISO-8601).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Scoring configuration YAML.",
)
@click.option(
    "--max-workers",
    type=click.IntRange(min=1, max=64),
    default=None,
    help="Worker threads for batch scoring.",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "console"]),
    default=None,
    help="Log output format (logs go to stderr).",
)
def rank(  # noqa: PLR0913
    fixture_path: Path,
    category: str,
    now_value: str | None,
    config_path: Path | None,
    max_workers: int | None,
    log_format: str | None,
) -> None:
    """Score and rank a replay fixture, printing the result as JSON."""
    settings = get_settings()
    json_logs = settings.log_json if log_format is None else log_format == "json"
    configure_logging(
        level=settings.log_level_number, output=sys.stderr, json_format=json_logs
    )

    run_id = uuid.uuid4().hex[:12]
    bind_run_context(run_id)

    fixture_now, inputs = load_fixture(fixture_path)
    now = _resolve_now(now_value, fixture_now)
    logger.info("fixture_loaded", fixture_path=str(fixture_path), notes=len(inputs))

    try:
        config = load_scoring_config(config_path or settings.config_path, run_id)
    except ConfigValidationError as e:
        for err in e.errors:
            click.echo(
                format_validation_error(err["loc"], err["msg"], err["type"]), err=True
            )
        raise click.ClickException(str(e)) from e

    ranker = TrendingRanker(
        run_id=run_id,
        now=now,
        config=config,
        max_workers=max_workers or settings.max_workers,
    )
    result = ranker.rank_notes(inputs, category)

    click.echo(json.dumps(result.to_json_dict(), indent=2, sort_keys=True))


@cli.command("validate-config")
@click.argument("config_path", type=click.Path(path_type=Path))
def validate_config(config_path: Path) -> None:
    """Validate a scoring configuration YAML file."""
    configure_logging(output=sys.stderr, json_format=False)
    loader = ScoringConfigLoader(run_id="validate")
    try:
        config = loader.load(config_path)
    except ConfigValidationError as e:
        click.echo(f"Invalid configuration: {config_path}", err=True)
        for err in e.errors:
            click.echo(
                "  " + format_validation_error(err["loc"], err["msg"], err["type"]),
                err=True,
            )
        sys.exit(1)

    click.echo(
        f"OK: {config_path} (version {config.version}, "
        f"sha256 {loader.file_checksum})"
    )


if __name__ == "__main__":
    cli()
