# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Command line front end.

Settings come from the environment (``QUIP_TOKEN`` or ``QuipApiKey``,
``QUIP_API_VERSION``, ``QUIP_MY_EMAIL``...) and can be overridden with the
global options. API errors are printed to stderr and exit with status 1.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
from pydantic import ValidationError

from ..client import QuipClient
from ..config import QuipSettings
from ..exceptions import QuipApiError, QuipClientError
from ..identifiers import resolve_thread_identifier
from ..models import DocumentFormat, DocumentLocation, DocumentType, MessageFrame
from ..observability import RateLimitMetricsCollector
from ..retry import RetryDriver
from ..traversal import FolderWalker
from . import display
from .log_setup import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="quip",
    help="Command line client for the Quip API with adaptive rate limiting.",
    add_completion=False,
    no_args_is_help=True,
)


class Location(str, Enum):
    """Command line names for edit locations."""

    APPEND = "append"
    PREPEND = "prepend"
    AFTER_SECTION = "after-section"
    BEFORE_SECTION = "before-section"
    REPLACE_SECTION = "replace-section"
    DELETE_SECTION = "delete-section"

    def to_document_location(self) -> DocumentLocation:
        return DocumentLocation[self.name]


@dataclass
class CliState:
    settings: QuipSettings
    verbose: bool = False


def build_client(settings: QuipSettings) -> QuipClient:
    """Create the client used by every command."""
    return QuipClient.from_settings(settings)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@contextmanager
def client_session(ctx: typer.Context) -> Iterator[QuipClient]:
    """
    Yield a client and turn library failures into a clean exit.

    QuipApiError is printed as ``An error occurred (<error>, code: <n>):
    <description>``; other library and network errors get a one-line message.
    """
    try:
        with build_client(_state(ctx).settings) as client:
            yield client
    except QuipApiError as e:
        typer.echo(
            f"An error occurred ({e.error}, code: {e.error_code}): "
            f"{e.error_description}",
            err=True,
        )
        raise typer.Exit(code=1) from e
    except QuipClientError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    except httpx.TransportError as e:
        typer.echo(f"Network error: {e}", err=True)
        raise typer.Exit(code=1) from e


ThreadArgument = Annotated[str, typer.Argument(help="Thread id, secret path or URL.")]
LimitOption = Annotated[
    int, typer.Option("--limit", "-l", min=1, help="Number of threads to return.")
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    token: Annotated[
        Optional[str],
        typer.Option("--token", help="API token (default: QUIP_TOKEN / QuipApiKey)."),
    ] = None,
    api_version: Annotated[
        Optional[int], typer.Option("--api-version", help="API version, 1 or 2.")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging.")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only log warnings and errors.")
    ] = False,
) -> None:
    """Quip API client."""
    setup_logging(verbose=verbose, quiet=quiet)

    overrides: dict[str, object] = {}
    if token is not None:
        overrides["token"] = token
    if api_version is not None:
        overrides["api_version"] = api_version
    try:
        settings = QuipSettings(**overrides)
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2) from e

    ctx.obj = CliState(settings=settings, verbose=verbose)


@app.command()
def recent(
    ctx: typer.Context,
    limit: LimitOption = 10,
    my: Annotated[
        bool,
        typer.Option(
            "--my", "-m", help="Only my threads and messages (needs QUIP_MY_EMAIL)."
        ),
    ] = False,
) -> None:
    """
    List the most recent threads, like the inbox view.

    Each thread is shown with its shared folders and its messages. With
    ``--my``, only messages and threads authored by QUIP_MY_EMAIL are shown.
    """
    settings = _state(ctx).settings
    if my and not settings.my_email:
        typer.echo("Error: --my requires QUIP_MY_EMAIL to be set", err=True)
        raise typer.Exit(code=2)

    with client_session(ctx) as client:
        if settings.my_email:
            me = client.users.get_user(settings.my_email)
            documents = client.threads.get_recent_by_members([me.id], limit)
        else:
            me = None
            documents = client.threads.get_recent(limit)

        if not documents:
            display.print_text("No threads found")
        my_id = me.id if my and me is not None else None
        for document in documents.values():
            thread_info = document.thread
            thread_messages = client.messages.get_messages_for_thread(thread_info.id)

            for shared_folder_id in document.shared_folder_ids:
                shared = client.folders.get_folder(shared_folder_id)
                display.print_folder(shared, show_children=False)

            thread_printed = False
            for message in thread_messages:
                if my_id is not None and message.author_id != my_id:
                    continue
                display.print_message(message)
                display.print_thread(thread_info)
                thread_printed = True

            if my_id is not None and thread_info.author_id != my_id:
                continue
            if not thread_printed:
                display.print_thread(thread_info)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Option("--title", "-t", help="Document title.")],
    content: Annotated[
        Optional[str], typer.Option("--content", "-c", help="Document body.")
    ] = None,
    file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="Read the body from a file.",
        ),
    ] = None,
    directory: Annotated[
        Optional[str],
        typer.Option("--directory", "-d", help="Folder id to create the document in."),
    ] = None,
    doc_type: Annotated[
        DocumentType, typer.Option("--type", help="Document kind.")
    ] = DocumentType.DOCUMENT,
    doc_format: Annotated[
        DocumentFormat, typer.Option("--format", help="Body format.")
    ] = DocumentFormat.MARKDOWN,
) -> None:
    """Create a document or spreadsheet and print its link."""
    if (content is None) == (file is None):
        typer.echo("Error: pass exactly one of --content or --file", err=True)
        raise typer.Exit(code=2)
    body = content if file is None else file.read_text(encoding="utf-8")

    with client_session(ctx) as client:
        document = client.threads.new_document(
            title,
            body,
            member_ids=[directory] if directory else None,
            type=doc_type,
            format=doc_format,
        )
        display.print_text(document.thread.link or document.thread.id)


@app.command()
def thread(
    ctx: typer.Context,
    identifier: ThreadArgument,
    v2: Annotated[bool, typer.Option("--v2", help="Use the v2 thread endpoint.")] = False,
) -> None:
    """Show thread metadata."""
    with client_session(ctx) as client:
        thread_id = resolve_thread_identifier(identifier)
        if v2:
            display.print_thread(client.threads.get_thread_v2(thread_id))
        else:
            display.print_thread(client.threads.get_thread(thread_id).thread)


@app.command()
def html(
    ctx: typer.Context,
    identifier: ThreadArgument,
    paginated: Annotated[
        bool, typer.Option("--paginated", help="Fetch a single page only.")
    ] = False,
    cursor: Annotated[
        Optional[str], typer.Option("--cursor", help="Cursor of the page to fetch.")
    ] = None,
    limit: Annotated[
        Optional[int], typer.Option("--limit", min=1, help="Page-size hint.")
    ] = None,
    include_metadata: Annotated[
        bool,
        typer.Option("--include-metadata", help="Print the next cursor after the page."),
    ] = False,
    max_pages: Annotated[
        Optional[int],
        typer.Option("--max-pages", min=1, help="Fail if more pages are needed."),
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write HTML to a file.")
    ] = None,
) -> None:
    """Print a thread's HTML, assembled from every page unless --paginated."""
    with client_session(ctx) as client:
        thread_id = resolve_thread_identifier(identifier)
        next_cursor = None
        if paginated:
            page = client.threads.get_thread_html_v2(thread_id, cursor, limit)
            content, next_cursor = page.content, page.next_cursor
        else:
            content = client.threads.get_complete_thread_html_v2(
                thread_id, limit=limit, max_pages=max_pages
            )

    if output is not None:
        output.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(content)} chars to {output}")
    else:
        typer.echo(content)
    if paginated and include_metadata:
        typer.echo(f"next_cursor: {next_cursor or ''}")


@app.command()
def messages(ctx: typer.Context, thread_id: str) -> None:
    """List the messages of a thread."""
    with client_session(ctx) as client:
        for message in client.messages.get_messages_for_thread(thread_id):
            display.print_message(message)


@app.command(name="post-message")
def post_message(
    ctx: typer.Context,
    thread_id: str,
    content: str,
    frame: Annotated[
        MessageFrame, typer.Option("--frame", help="Message frame.")
    ] = MessageFrame.BUBBLE,
) -> None:
    """Post a message to a thread."""
    with client_session(ctx) as client:
        message = client.messages.add_message_for_thread(thread_id, frame, content)
        display.print_message(message)


@app.command()
def edit(
    ctx: typer.Context,
    thread_id: str,
    content: Annotated[str, typer.Option("--content", "-c", help="Content to insert.")],
    section_id: Annotated[
        Optional[str], typer.Option("--section-id", help="Anchor section.")
    ] = None,
    doc_format: Annotated[
        DocumentFormat, typer.Option("--format", help="Content format.")
    ] = DocumentFormat.MARKDOWN,
    location: Annotated[
        Location, typer.Option("--location", help="Where to place the content.")
    ] = Location.APPEND,
) -> None:
    """Edit an existing document."""
    if location not in (Location.APPEND, Location.PREPEND) and not section_id:
        typer.echo(f"Error: --location {location.value} requires --section-id", err=True)
        raise typer.Exit(code=2)

    with client_session(ctx) as client:
        document = client.threads.edit_document(
            thread_id,
            content,
            section_id=section_id,
            format=doc_format,
            location=location.to_document_location(),
        )
        display.print_thread(document.thread)


@app.command()
def folder(ctx: typer.Context, folder_id: str) -> None:
    """Show a folder and its children."""
    with client_session(ctx) as client:
        display.print_folder(client.folders.get_folder(folder_id))


@app.command()
def user(
    ctx: typer.Context,
    id_or_email: Annotated[
        Optional[str], typer.Argument(help="User id or email; omit for yourself.")
    ] = None,
) -> None:
    """Show a user."""
    with client_session(ctx) as client:
        if id_or_email:
            display.print_user(client.users.get_user(id_or_email))
        else:
            display.print_user(client.users.get_current_user())


@app.command()
def contacts(ctx: typer.Context) -> None:
    """List your contacts."""
    with client_session(ctx) as client:
        for contact in client.users.get_contacts():
            display.print_user(contact)


@app.command()
def walk(
    ctx: typer.Context,
    folder_id: str,
    output: Annotated[
        Path, typer.Option("--output", "-o", file_okay=False, help="Download directory.")
    ],
    checkpoint: Annotated[
        Optional[Path],
        typer.Option("--checkpoint", help="Progress file to resume from and update."),
    ] = None,
    page_size: Annotated[
        Optional[int], typer.Option("--page-size", min=1, help="HTML page-size hint.")
    ] = None,
) -> None:
    """Download every document below a folder."""
    settings = _state(ctx).settings
    with client_session(ctx) as client:
        collector = RateLimitMetricsCollector()
        detach = collector.attach(client.coordinator)
        try:
            walker = FolderWalker(
                client,
                output,
                checkpoint_path=checkpoint,
                retry=RetryDriver.from_config(settings.retry_config()),
                page_size=page_size,
            )
            summary = walker.walk(folder_id)
        finally:
            detach()

    display.print_walk_summary(summary)
    metrics = collector.get_metrics()
    display.print_text(
        f"Rate limit waits: {sum(metrics['delays_total'].values())} "
        f"({metrics['delay_seconds_total']:.1f}s)"
    )
    if not summary.ok:
        raise typer.Exit(code=1)


@app.command(name="rate-limit")
def rate_limit(ctx: typer.Context) -> None:
    """Make one request and show the observed rate limit state."""
    with client_session(ctx) as client:
        client.users.get_current_user()
        display.print_text(client.api_info())
        display.print_text(client.coordinator.status())


def main() -> None:
    app()


__all__ = ["app", "build_client", "main"]
