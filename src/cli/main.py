"""CLI principal (Typer).

Cada comando construye una query, la ejecuta con `asyncio.run` y pinta el
resultado con Rich. `--show-request` imprime el request serializado sin tocar
la red.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_response_json
from cli import doctor
from cli.ui_components import (
    build_author_panel,
    build_comments_table,
    build_error_panel,
    build_meta_line,
    build_product_panel,
    build_questions_table,
    build_request_table,
    build_reviews_table,
    print_banner,
)
from core.domain.fields import ContentType, FilterOperator, QuestionField, ReviewField, SortOrder
from core.domain.response import QueryFailure, QuerySuccess
from core.queries import AuthorQuery, CommentsQuery, ProductQuery, QuestionQuery, ReviewQuery
from core.queries.base import ConversationsQuery

app = typer.Typer(no_args_is_help=True, help="Query the Conversations API from the terminal.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_INCLUDE_OPTION = typer.Option([], "--include", "-i", case_sensitive=False, help="Related content to include.")
_JSON_OPTION = typer.Option(None, "--json", help="Write the response envelope to this JSON file.")
_SHOW_REQUEST_OPTION = typer.Option(False, "--show-request", help="Print the serialized request and exit.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    if banner:
        print_banner(_console)


def _run(query: ConversationsQuery[Any], *, show_request: bool, json_path: Optional[Path]) -> Optional[QuerySuccess[Any]]:
    if show_request:
        _console.print(build_request_table(query.build_request()))
        return None

    response = asyncio.run(query.fetch())
    if json_path is not None:
        export_response_json(response=response, output_path=json_path)
        _console.print(f"[green]Saved response to:[/green] {json_path}")

    if isinstance(response, QueryFailure):
        _console.print(build_error_panel(response))
        raise typer.Exit(code=1)
    _console.print(build_meta_line(response.meta))
    return response


@app.command()
def product(
    product_id: str = typer.Argument(..., help="Product identifier."),
    include: List[ContentType] = _INCLUDE_OPTION,
    stats: List[ContentType] = typer.Option([], "--stats", "-s", case_sensitive=False),
    show_request: bool = _SHOW_REQUEST_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
) -> None:
    """Display a product with its included reviews/questions."""

    query = ProductQuery(product_id)
    for kind in include:
        query.include(kind)
    for kind in stats:
        query.stats(kind)

    response = _run(query, show_request=show_request, json_path=json_path)
    if response is None or not response.results:
        return
    item = response.results[0]
    _console.print(build_product_panel(item))
    if item.reviews:
        _console.print(build_reviews_table(item.reviews))
    if item.questions:
        _console.print(build_questions_table(item.questions))


@app.command()
def questions(
    product_id: str = typer.Argument(..., help="Product identifier."),
    limit: Optional[int] = typer.Option(None, min=0, help="Page size (defaults to settings)."),
    offset: int = typer.Option(0, min=0),
    answered: bool = typer.Option(False, "--answered", help="Only questions with answers."),
    include: List[ContentType] = _INCLUDE_OPTION,
    show_request: bool = _SHOW_REQUEST_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
) -> None:
    """List questions for a product."""

    query = QuestionQuery(product_id, limit=limit, offset=offset).sort(
        QuestionField.SUBMISSION_TIME, SortOrder.DESCENDING
    )
    for kind in include:
        query.include(kind)
    if answered:
        query.filter((QuestionField.HAS_ANSWERS, FilterOperator.EQUAL_TO, True))

    response = _run(query, show_request=show_request, json_path=json_path)
    if response is not None:
        _console.print(build_questions_table(response.results))


@app.command()
def reviews(
    product_id: str = typer.Argument(..., help="Product identifier."),
    limit: Optional[int] = typer.Option(None, min=0, help="Page size (defaults to settings)."),
    offset: int = typer.Option(0, min=0),
    rating: List[int] = typer.Option([], "--rating", "-r", help="Ratings to keep (OR)."),
    include: List[ContentType] = _INCLUDE_OPTION,
    show_request: bool = _SHOW_REQUEST_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
) -> None:
    """List reviews for a product."""

    query = ReviewQuery(product_id, limit=limit, offset=offset)
    for kind in include:
        query.include(kind)
    if rating:
        query.filter(*[(ReviewField.RATING, FilterOperator.EQUAL_TO, value) for value in rating])

    response = _run(query, show_request=show_request, json_path=json_path)
    if response is not None:
        _console.print(build_reviews_table(response.results))


@app.command()
def author(
    author_id: str = typer.Argument(..., help="Author identifier."),
    include: List[ContentType] = _INCLUDE_OPTION,
    show_request: bool = _SHOW_REQUEST_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
) -> None:
    """Display an author profile."""

    query = AuthorQuery(author_id)
    for kind in include:
        query.include(kind)

    response = _run(query, show_request=show_request, json_path=json_path)
    if response is not None and response.results:
        _console.print(build_author_panel(response.results[0]))


@app.command()
def comments(
    review_id: str = typer.Argument(..., help="Review identifier."),
    limit: Optional[int] = typer.Option(None, min=0, help="Page size (defaults to settings)."),
    offset: int = typer.Option(0, min=0),
    show_request: bool = _SHOW_REQUEST_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
) -> None:
    """List comments for a review."""

    query = CommentsQuery(review_id, limit=limit, offset=offset).include(ContentType.REVIEWS, limit=0)

    response = _run(query, show_request=show_request, json_path=json_path)
    if response is not None:
        _console.print(build_comments_table(response.results))


def run() -> None:
    app()
