"""Mini README: Typer command dispatcher for the expense tracker.

Structure:
    * HELP_TEXT - static usage text printed by ``help``.
    * ExpenseTrackerContext - explicit handle carrying the store and the
      confirmation callback into each command.
    * ExpenseCommandGroup - routes unknown commands to ``help``.
    * cli - the Typer application exposing help, list, add, search, delete
      and clear.
    * main - console-script entry point.

Commands validate only the presence of their operands and delegate the rest
to the store. ``_finish`` is the single place that turns a store failure
into exit status 1; user mistakes are reported and exit 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import typer
from sqlalchemy.exc import SQLAlchemyError
from typer.core import TyperGroup

from .configuration import get_settings
from .logging_utils import configure_root_logger, get_logger
from .storage import ExpenseStore, StoreResult

LOGGER = get_logger(__name__)

HELP_TEXT = """An expense recording system

Commands:

add AMOUNT MEMO [DATE] - record a new expense
clear - delete all expenses
list - list all expenses
delete NUMBER - remove expense with id NUMBER
search QUERY - list expenses with a matching memo field"""

CLEAR_PROMPT = "This will remove all expenses. Are you sure? (y/n) "


def prompt_confirmation(message: str) -> bool:
    """Ask on the terminal; only an exact ``y`` counts as consent."""

    try:
        answer = typer.prompt(message, default="", show_default=False, prompt_suffix="")
    except typer.Abort:
        # Closed stdin or Ctrl-D declines like any other answer.
        return False
    return answer == "y"


@dataclass
class ExpenseTrackerContext:
    """Per-invocation handle passed to every command through ``ctx.obj``."""

    store_factory: Callable[[], ExpenseStore]
    confirm: Callable[[str], bool] = prompt_confirmation
    _store: Optional[ExpenseStore] = field(default=None, repr=False)

    @classmethod
    def for_store(
        cls, store: ExpenseStore, confirm: Callable[[str], bool] = prompt_confirmation
    ) -> "ExpenseTrackerContext":
        return cls(store_factory=lambda: store, confirm=confirm, _store=store)

    @classmethod
    def from_settings(cls) -> "ExpenseTrackerContext":
        settings = get_settings()
        return cls(
            store_factory=lambda: ExpenseStore.from_url(
                settings.database_url, echo=settings.echo_sql
            )
        )

    @property
    def store(self) -> ExpenseStore:
        """Build the store on first use so ``help`` never touches the database."""

        if self._store is None:
            self._store = self.store_factory()
        return self._store


class ExpenseCommandGroup(TyperGroup):
    """Treat any unrecognised first token as a request for help."""

    def resolve_command(self, ctx: typer.Context, args: List[str]):
        if args and args[0] not in self.commands:
            LOGGER.debug("Unknown command %r, showing help", args[0])
            args = ["help"]
        return super().resolve_command(ctx, args)


cli = typer.Typer(
    cls=ExpenseCommandGroup,
    add_completion=False,
    invoke_without_command=True,
    help="Record, list, search and delete expenses.",
)

# Surplus operands end up in ctx.args and are ignored.
OPERANDS = {"ignore_unknown_options": True, "allow_extra_args": True}


def _context(ctx: typer.Context) -> ExpenseTrackerContext:
    return ctx.obj


def _finish(result: StoreResult) -> None:
    """Echo a store result, exiting with status 1 on fatal failures."""

    if result.failure is None:
        for line in result.lines:
            typer.echo(line)
        return
    if result.fatal:
        LOGGER.error(
            "Aborting after %s failure: %s", result.failure.kind.value, result.failure.message
        )
        typer.echo(f"Error: {result.failure.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(result.failure.message)


def _store(ctx: typer.Context) -> ExpenseStore:
    try:
        return _context(ctx).store
    except SQLAlchemyError as error:
        LOGGER.error("Could not configure the database: %s", error)
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error


@cli.callback()
def entry(ctx: typer.Context) -> None:
    """Build the store handle unless one was injected, then route to the command."""

    if ctx.obj is None:
        ctx.obj = ExpenseTrackerContext.from_settings()
    if ctx.invoked_subcommand is None:
        typer.echo(HELP_TEXT)


@cli.command("help", context_settings=OPERANDS)
def show_help() -> None:
    """Print usage information."""

    typer.echo(HELP_TEXT)


@cli.command("list", context_settings=OPERANDS)
def list_command(ctx: typer.Context) -> None:
    """List all expenses."""

    _finish(_store(ctx).list_expenses())


@cli.command("add", context_settings=OPERANDS)
def add_command(
    ctx: typer.Context,
    amount: Optional[str] = typer.Argument(None, help="Amount spent, e.g. 12.50."),
    memo: Optional[str] = typer.Argument(None, help="What the money was spent on."),
    created_on: Optional[str] = typer.Argument(
        None, metavar="[DATE]", help="Date of the expense (YYYY-MM-DD). Defaults to today."
    ),
) -> None:
    """Record a new expense."""

    if not amount or not memo:
        typer.echo("You must provide an amount and memo.")
        return
    _finish(_store(ctx).add_expense(amount, memo, created_on))


@cli.command("search", context_settings=OPERANDS)
def search_command(
    ctx: typer.Context,
    term: Optional[str] = typer.Argument(None, help="Text to look for in memos."),
) -> None:
    """List expenses with a matching memo."""

    if not term:
        typer.echo("You must provide a search term")
        return
    _finish(_store(ctx).search_expenses(term))


@cli.command("delete", context_settings=OPERANDS)
def delete_command(
    ctx: typer.Context,
    expense_id: Optional[str] = typer.Argument(None, metavar="NUMBER", help="Expense id."),
) -> None:
    """Remove the expense with the given id."""

    if not expense_id:
        typer.echo("You must provide an id.")
        return
    _finish(_store(ctx).delete_expense(expense_id))


@cli.command("clear", context_settings=OPERANDS)
def clear_command(ctx: typer.Context) -> None:
    """Delete all expenses after confirmation."""

    if not _context(ctx).confirm(CLEAR_PROMPT):
        LOGGER.debug("Clear declined")
        return
    _finish(_store(ctx).clear_expenses())


def main() -> None:
    """Console-script entry point."""

    configure_root_logger(get_settings().log_level)
    cli()


if __name__ == "__main__":
    main()
