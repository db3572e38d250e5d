import dataclasses
import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import pandas as pd
import typer
from loguru import logger

from skillstream import app as main_app
from skillstream.config import Settings
from skillstream.exceptions import ProviderError
from skillstream.skillshare.cursor import CursorTable, SortKey
from skillstream.skillshare.mapper import to_episodes
from skillstream.skillshare.models import CourseSummary, LoadData
from skillstream.skillshare.provider import SkillshareProvider

# Create a local Typer app for skillshare subcommands
app = typer.Typer(help="SkillShare listing, search and lesson commands")


class Listing(str, Enum):
    popular = "popular"
    trending = "trending"


_LISTING_SORT = {
    Listing.popular: SortKey.SIX_MONTHS_ENGAGEMENT,
    Listing.trending: SortKey.ML_TRENDINESS,
}

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="YAML file with endpoint and timeout settings"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(help="Write the results to this CSV file instead of stdout"),
]


def _load_settings(config: Path | None) -> Settings:
    try:
        return Settings.load(config)
    except (OSError, ValueError) as e:
        raise typer.BadParameter(str(e)) from e


def _write_summaries(items: list[CourseSummary], output: Path | None) -> None:
    """Print one class per line, or save them all to a CSV file."""
    if output is None:
        for item in items:
            typer.echo(f"{item.title}\t{item.to_load_data().to_json()}")
        return
    frame = pd.DataFrame(
        [dataclasses.asdict(item) for item in items],
        columns=[f.name for f in dataclasses.fields(CourseSummary)],
    )
    output.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output, index=False)
    logger.success(f"Wrote {len(frame)} classes to {output}")


@app.command()
def browse(
    sort: Annotated[Listing, typer.Option(help="Which listing to page through")] = Listing.popular,
    page: Annotated[int, typer.Option(min=1, help="Page number; 1 restarts the listing")] = 1,
    output: OutputOption = None,
    config: ConfigOption = None,
):
    """List one page of popular or trending classes.

    The cursor of each listing is kept between runs, so `--page 2` continues
    from the last page fetched.
    """
    settings = _load_settings(config)
    cursors = CursorTable.load(settings.cursor_state_path)
    provider = SkillshareProvider(settings, cursors=cursors)
    try:
        items, has_more = provider.fetch_page(_LISTING_SORT[sort], page)
    except ProviderError as e:
        logger.error(f"Could not fetch {sort.value} page {page}: {e}")
        raise typer.Exit(1) from e
    finally:
        provider.close()
    cursors.save(settings.cursor_state_path)
    _write_summaries(items, output)
    if not has_more:
        logger.info(f"No more {sort.value} classes.")


@app.command()
def search(
    term: Annotated[str, typer.Argument(help="Search terms")],
    output: OutputOption = None,
    config: ConfigOption = None,
):
    """Search SkillShare classes."""
    provider = SkillshareProvider(_load_settings(config))
    try:
        items = provider.search(term)
    except ProviderError as e:
        logger.error(f"Search for {term!r} failed: {e}")
        raise typer.Exit(1) from e
    finally:
        provider.close()
    _write_summaries(items, output)


@app.command()
def load(
    payload: Annotated[
        str, typer.Argument(help="Class payload as printed by `browse` or `search`")
    ],
    config: ConfigOption = None,
):
    """Print the lessons of a class as JSON."""
    try:
        data = LoadData.from_json(payload)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if not data.course_id:
        raise typer.BadParameter("Payload has no courseId")

    provider = SkillshareProvider(_load_settings(config))
    try:
        detail = provider.resolve_course(data.course_id)
    except ProviderError as e:
        logger.error(f"Could not load {data.title or data.course_id}: {e}")
        raise typer.Exit(1) from e
    finally:
        provider.close()
    episodes = [dataclasses.asdict(episode) for episode in to_episodes(detail)]
    typer.echo(
        json.dumps(
            {"title": data.title or detail.title, "episodes": episodes}, indent=2
        )
    )


@app.command()
def links(
    url: Annotated[str, typer.Argument(help="Lesson URL from `load`")],
    config: ConfigOption = None,
):
    """Print the stream link emitted for a lesson."""
    provider = SkillshareProvider(_load_settings(config))
    emitted = []
    try:
        provider.resolve_links(url, callback=emitted.append)
    finally:
        provider.close()
    for link in emitted:
        typer.echo(json.dumps(dataclasses.asdict(link)))


@app.command("reset-cursors")
def reset_cursors(config: ConfigOption = None):
    """Forget the saved listing cursors."""
    path = _load_settings(config).cursor_state_path
    if path.exists():
        path.unlink()
        logger.info(f"Removed {path}")
    else:
        logger.info(f"No cursor state at {path}")


# Register the skillshare app as a subcommand with the main app
main_app.add_typer(app, name="skillshare")
