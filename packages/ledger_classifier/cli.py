# ruff: noqa: I001
"""CLI for the ``ledger_classifier`` package.

This module exposes callable command handlers (``cmd_classify``,
``cmd_classify_file``, ``cmd_parse``, ``cmd_seed_taxonomy``) and a Typer-based
console interface on top of them. Environment variables (notably
``DATABASE_URL``) are loaded from a local ``.env`` using ``python-dotenv``
before delegating to command logic; ``--database-url`` overrides the
environment. Business logic lives in :mod:`ledger_classifier.classify` and
:mod:`ledger_classifier.legacy`.

Handlers return a process exit code. User-correctable failures (no amount,
foreign wallet, blank text) and storage failures are reported on stderr as
``Error: ...`` with exit code 1.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from .classify import classify, classify_many
from .errors import ClassificationError, WalletNotFound
from .legacy import parse_and_create_transaction
from .logging_setup import configure_logging, level_from_name
from .models import ClassificationRequest, TransactionDraft, UserContext
from .persistence import SqlCategoryCatalog, SqlTransactionSink, SqlWalletDirectory
from .seed_taxonomy import DEFAULT_SEED_FILE, seed_taxonomy

console = Console()
err_console = Console(stderr=True)

# Failures reported as "Error: ..." instead of a traceback.
_REPORTED_ERRORS = (
    ClassificationError,
    WalletNotFound,
    ValidationError,
    SQLAlchemyError,
    RuntimeError,
)


def _error(message: str) -> int:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    return 1


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(e["msg"] for e in exc.errors())
    if isinstance(exc, WalletNotFound):
        return f"{exc} (wallet {exc.wallet_id})"
    return str(exc)


def _draft_table(draft: TransactionDraft) -> Table:
    table = Table(title="Transaction draft", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    flag = "[green]yes[/green]" if draft.category_matched else "[yellow]no[/yellow]"
    table.add_row("Wallet", str(draft.wallet_id))
    table.add_row("Type", draft.type.value)
    table.add_row("Amount", str(draft.amount))
    table.add_row("Date", draft.date.isoformat() + ("" if draft.date_detected else " (default)"))
    table.add_row("Category", f"{escape(draft.category)} (matched: {flag})")
    table.add_row("Subcategory", escape(draft.subcategory))
    table.add_row("Description", escape(draft.description))
    return table


def _as_date(value: dt.datetime | None) -> dt.date | None:
    return value.date() if value is not None else None


# ---- Command handlers --------------------------------------------------------


def cmd_classify(
    text: str,
    *,
    wallet_id: int,
    user_id: int,
    database_url: str | None = None,
    as_json: bool = False,
    today: dt.date | None = None,
) -> int:
    """Classify one utterance against the database catalog and print the draft."""

    try:
        draft = classify(
            ClassificationRequest(wallet_id=wallet_id, text=text),
            UserContext(user_id=user_id),
            catalog=SqlCategoryCatalog(database_url=database_url),
            wallets=SqlWalletDirectory(database_url=database_url),
            today=today,
        )
    except _REPORTED_ERRORS as e:
        return _error(_describe(e))

    if as_json:
        typer.echo(json.dumps(draft.model_dump(mode="json"), ensure_ascii=False))
    else:
        console.print(_draft_table(draft))
    return 0


def cmd_classify_file(
    path: Path,
    *,
    wallet_id: int,
    user_id: int,
    database_url: str | None = None,
    concurrency: int | None = None,
    today: dt.date | None = None,
) -> int:
    """Classify one utterance per non-blank line of ``path``; print JSON lines.

    The batch is all-or-nothing: the first failing line aborts the command
    and nothing is printed.
    """

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return _error(f"File not found: {path}")
    except PermissionError:
        return _error(f"Permission denied: {path}")

    texts = [ln for ln in lines if ln.strip()]
    if not texts:
        console.print("No utterances to classify.")
        return 0

    try:
        drafts = classify_many(
            [ClassificationRequest(wallet_id=wallet_id, text=t) for t in texts],
            UserContext(user_id=user_id),
            catalog=SqlCategoryCatalog(database_url=database_url),
            wallets=SqlWalletDirectory(database_url=database_url),
            today=today,
            concurrency=concurrency,
        )
    except _REPORTED_ERRORS as e:
        return _error(_describe(e))
    except ValueError as e:
        # p_map rejects a non-positive concurrency
        return _error(str(e))

    for draft in drafts:
        typer.echo(json.dumps(draft.model_dump(mode="json"), ensure_ascii=False))
    return 0


def cmd_parse(
    text: str,
    *,
    wallet_id: int,
    user_id: int,
    database_url: str | None = None,
    today: dt.date | None = None,
) -> int:
    """Legacy one-step parse: classify with the reduced vocabulary and store it."""

    try:
        stored = parse_and_create_transaction(
            ClassificationRequest(wallet_id=wallet_id, text=text),
            UserContext(user_id=user_id),
            wallets=SqlWalletDirectory(database_url=database_url),
            sink=SqlTransactionSink(database_url=database_url),
            today=today,
        )
    except _REPORTED_ERRORS as e:
        return _error(_describe(e))

    typer.echo(
        json.dumps(
            {
                "id": stored.id,
                "wallet_id": stored.wallet_id,
                "type": stored.type.value,
                "amount": str(stored.amount),
                "date": stored.date.isoformat(),
                "category": stored.category,
                "subcategory": stored.subcategory,
                "description": stored.description,
            },
            ensure_ascii=False,
        )
    )
    return 0


def cmd_seed_taxonomy(*, database_url: str | None = None, file: Path = DEFAULT_SEED_FILE) -> int:
    try:
        inserted = seed_taxonomy(database_url=database_url, file=file)
    except FileNotFoundError:
        return _error(f"File not found: {file}")
    except (ValidationError, ValueError, SQLAlchemyError, RuntimeError) as e:
        return _error(_describe(e))

    if inserted:
        console.print(f"Seeded {inserted} default categories.")
    else:
        console.print("Default taxonomy already present; nothing to do.")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Classify free-text transaction descriptions (Portuguese/English) into "
        "transaction drafts. Loads DATABASE_URL from a local .env before running."
    ),
)

WalletIdOption = Annotated[int, typer.Option("--wallet-id", help="Target wallet id.")]
UserIdOption = Annotated[int, typer.Option("--user-id", help="Requesting user id.")]
DatabaseUrlOption = Annotated[
    str | None, typer.Option("--database-url", help="Override DATABASE_URL (falls back to env var).")
]
TodayOption = Annotated[
    dt.datetime | None,
    typer.Option(
        "--today",
        formats=["%Y-%m-%d"],
        help="Reference date for relative markers such as 'ontem' (default: current date).",
    ),
]


@app.command("classify")
def classify_cmd(
    text: Annotated[str, typer.Argument(help="Utterance to classify, e.g. 'gastei 20 no café'.")],
    wallet_id: WalletIdOption,
    user_id: UserIdOption,
    database_url: DatabaseUrlOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the draft as JSON.")] = False,
    today: TodayOption = None,
) -> None:
    """Classify one utterance into a transaction draft (nothing is stored)."""

    code = cmd_classify(
        text,
        wallet_id=wallet_id,
        user_id=user_id,
        database_url=database_url,
        as_json=as_json,
        today=_as_date(today),
    )
    raise typer.Exit(code)


@app.command("classify-file")
def classify_file_cmd(
    path: Annotated[
        Path, typer.Argument(help="Text file with one utterance per line.", dir_okay=False)
    ],
    wallet_id: WalletIdOption,
    user_id: UserIdOption,
    database_url: DatabaseUrlOption = None,
    concurrency: Annotated[
        int | None,
        typer.Option(help="Worker threads (default: LEDGER_CLASSIFIER_MAX_WORKERS or 8)."),
    ] = None,
    today: TodayOption = None,
) -> None:
    """Classify every non-blank line of a file; prints one JSON draft per line."""

    code = cmd_classify_file(
        path,
        wallet_id=wallet_id,
        user_id=user_id,
        database_url=database_url,
        concurrency=concurrency,
        today=_as_date(today),
    )
    raise typer.Exit(code)


@app.command("parse")
def parse_cmd(
    text: Annotated[str, typer.Argument(help="Utterance to parse and store.")],
    wallet_id: WalletIdOption,
    user_id: UserIdOption,
    database_url: DatabaseUrlOption = None,
    today: TodayOption = None,
) -> None:
    """Legacy one-step flow: parse an utterance and store the transaction."""

    code = cmd_parse(
        text,
        wallet_id=wallet_id,
        user_id=user_id,
        database_url=database_url,
        today=_as_date(today),
    )
    raise typer.Exit(code)


@app.command("seed-taxonomy")
def seed_taxonomy_cmd(
    database_url: DatabaseUrlOption = None,
    file: Annotated[
        Path, typer.Option("--file", help="Taxonomy seed JSON.", dir_okay=False)
    ] = DEFAULT_SEED_FILE,
) -> None:
    """Insert the default category/subcategory catalog when none exists."""

    raise typer.Exit(cmd_seed_taxonomy(database_url=database_url, file=file))


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level, e.g. DEBUG (default: LEDGER_CLASSIFIER_LOG_LEVEL or INFO).",
        ),
    ] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    if log_level is not None and level_from_name(log_level) is None:
        raise typer.BadParameter(f"unknown level {log_level!r}", param_hint="--log-level")
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    # Running as a module: `python -m ledger_classifier.cli`
    app()
