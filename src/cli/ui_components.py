"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Author, Comment, Product, Question, Review
from core.domain.response import PageMeta, QueryFailure
from core.interfaces.transport import RequestDescriptor


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("conversations-client", style="bold cyan")
    subtitle = Text("Reviews • Questions • Products", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _short(value: str | None, width: int = 80) -> str:
    text = (value or "").strip().replace("\n", " ")
    return text if len(text) <= width else text[: width - 1] + "…"


def build_request_table(request: RequestDescriptor, *, hide_secrets: bool = True) -> Table:
    table = Table(title=request.url)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in request.params:
        if hide_secrets and key == "passkey":
            value = "***"
        table.add_row(key, value)
    return table


def build_reviews_table(reviews: list[Review]) -> Table:
    table = Table(title="Reviews")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Rating", style="yellow")
    table.add_column("Author", style="white")
    table.add_column("Title", style="magenta")
    for review in reviews:
        table.add_row(
            review.id,
            "" if review.rating is None else str(review.rating),
            review.user_nickname or "",
            _short(review.title),
        )
    return table


def build_questions_table(questions: list[Question]) -> Table:
    table = Table(title="Questions")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Answers", style="green")
    table.add_column("Summary", style="white")
    for question in questions:
        count = question.total_answer_count
        table.add_row(question.id, "" if count is None else str(count), _short(question.question_summary))
    return table


def build_comments_table(comments: list[Comment]) -> Table:
    table = Table(title="Comments")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Author", style="white")
    table.add_column("Text", style="magenta")
    for comment in comments:
        table.add_row(comment.id, comment.user_nickname or "", _short(comment.comment_text))
    return table


def build_product_panel(product: Product) -> Panel:
    body = Text()
    body.append(f"{product.name or product.id}\n", style="bold")
    if product.brand and product.brand.name:
        body.append(f"Brand: {product.brand.name}\n")
    if product.category_id:
        body.append(f"Category: {product.category_id}\n", style="dim")
    stats = product.review_statistics or {}
    if stats:
        body.append(
            f"\nReviews: {stats.get('TotalReviewCount', 0)} • "
            f"Average: {stats.get('AverageOverallRating') or '-'}"
        )
    return Panel(body, title=Text("Product", style="bold yellow"), border_style="yellow")


def build_author_panel(author: Author) -> Panel:
    body = Text()
    body.append(f"{author.user_nickname or author.id}\n", style="bold")
    if author.location:
        body.append(f"Location: {author.location}\n")
    body.append(
        f"\nReviews: {len(author.review_ids)} • Questions: {len(author.question_ids)} • "
        f"Answers: {len(author.answer_ids)}",
        style="dim",
    )
    return Panel(body, title=Text("Author", style="bold yellow"), border_style="yellow")


def build_meta_line(meta: PageMeta) -> Text:
    return Text(
        f"total={meta.total_results} limit={meta.limit} offset={meta.offset} locale={meta.locale}",
        style="dim",
    )


def build_error_panel(failure: QueryFailure) -> Panel:
    error = failure.error
    body = Text(f"{type(error).__name__}: {error}")
    status = getattr(error, "status_code", None)
    if status is not None:
        body.append(f"\nHTTP status: {status}", style="dim")
    return Panel(body, title=Text("Request failed", style="bold red"), border_style="red")
