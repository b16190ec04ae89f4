"""Mini README: Relational persistence for expenses.

Structure:
    * FailureKind - categories of store failure the dispatcher reacts to.
    * StoreFailure / StoreResult - typed outcome of every store operation.
    * ExpenseStore - owns the engine and runs each operation on its own
      short-lived connection.

Every public operation follows the same sequence: connect, ensure the
``expenses`` table exists, run the primary statement, render the output and
close the connection. The connection is closed on both the success and the
failure path. Operations never terminate the process; they report failures
through ``StoreResult.failure`` and leave the exit decision to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, List, Optional, Union

from sqlalchemy import create_engine, delete, inspect, insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from ..logging_utils import get_logger
from .models import EXPENSES_TABLE, METADATA, Expense
from .rendering import format_expense, render_listing

LOGGER = get_logger(__name__)

DateInput = Union[str, date, None]


class FailureKind(str, Enum):
    """Enumerate why a store operation did not complete."""

    CONNECTION = "connection"
    QUERY = "query"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True, slots=True)
class StoreFailure:
    kind: FailureKind
    message: str


@dataclass(slots=True)
class StoreResult:
    """Rendered output plus the expenses an operation touched."""

    lines: List[str] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    failure: Optional[StoreFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def fatal(self) -> bool:
        """True for connection and query failures; bad input is not fatal."""

        return self.failure is not None and self.failure.kind is not FailureKind.INVALID_INPUT

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "StoreResult":
        return cls(failure=StoreFailure(kind=kind, message=message))


def _describe(error: SQLAlchemyError) -> str:
    """Prefer the driver's message over SQLAlchemy's statement dump."""

    original = getattr(error, "orig", None)
    return str(original if original is not None else error).strip()


def _parse_amount(value: Union[str, Decimal]) -> Decimal:
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as error:
        raise ValueError(f"'{value}' is not a valid amount.") from error
    if not amount.is_finite():
        raise ValueError(f"'{value}' is not a valid amount.")
    return amount


def _parse_date(value: DateInput) -> date:
    """Default to today's local date, otherwise accept ISO strings or dates."""

    if value is None:
        return date.today()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError as error:
        raise ValueError(f"'{value}' is not a valid date. Use YYYY-MM-DD.") from error


def _parse_id(value: Union[str, int]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class ExpenseStore:
    """Run expense operations against a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> "ExpenseStore":
        """Create a store for ``url``. No connection is opened until first use."""

        return cls(create_engine(url, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    def _run(self, operation: str, work: Callable[[Connection], StoreResult]) -> StoreResult:
        """Connect, ensure the schema, run ``work`` in a transaction, disconnect."""

        LOGGER.debug("Starting %s", operation)
        try:
            connection = self._engine.connect()
        except SQLAlchemyError as error:
            LOGGER.error("Could not connect for %s: %s", operation, _describe(error))
            return StoreResult.failed(
                FailureKind.CONNECTION, f"Could not connect to the database: {_describe(error)}"
            )

        try:
            with connection:
                with connection.begin():
                    self._create_schema_if_missing(connection)
                    result = work(connection)
        except (IntegrityError, DataError) as error:
            LOGGER.warning("%s rejected by the database: %s", operation, _describe(error))
            return StoreResult.failed(FailureKind.INVALID_INPUT, _describe(error))
        except SQLAlchemyError as error:
            LOGGER.error("%s failed: %s", operation, _describe(error))
            return StoreResult.failed(FailureKind.QUERY, _describe(error))

        LOGGER.debug("Finished %s", operation)
        return result

    @staticmethod
    def _create_schema_if_missing(connection: Connection) -> None:
        if inspect(connection).has_table(EXPENSES_TABLE.name):
            return
        LOGGER.info("Creating the %s table", EXPENSES_TABLE.name)
        METADATA.create_all(connection, tables=[EXPENSES_TABLE])

    @staticmethod
    def _select_ordered():
        return select(EXPENSES_TABLE).order_by(
            EXPENSES_TABLE.c.created_on, EXPENSES_TABLE.c.id
        )

    @staticmethod
    def _fetch(connection: Connection, statement) -> List[Expense]:
        return [Expense.from_row(row) for row in connection.execute(statement).mappings()]

    def ensure_schema(self) -> StoreResult:
        """Create the expenses table when it does not exist yet."""

        return self._run("ensure_schema", lambda connection: StoreResult())

    def list_expenses(self) -> StoreResult:
        def work(connection: Connection) -> StoreResult:
            expenses = self._fetch(connection, self._select_ordered())
            return StoreResult(lines=render_listing(expenses), expenses=expenses)

        return self._run("list", work)

    def add_expense(
        self, amount: Union[str, Decimal], memo: str, created_on: DateInput = None
    ) -> StoreResult:
        """Insert one expense. Positivity and precision are checked by the table."""

        try:
            parsed_amount = _parse_amount(amount)
            parsed_date = _parse_date(created_on)
        except ValueError as error:
            return StoreResult.failed(FailureKind.INVALID_INPUT, str(error))

        def work(connection: Connection) -> StoreResult:
            inserted = connection.execute(
                insert(EXPENSES_TABLE).values(
                    amount=parsed_amount, memo=memo, created_on=parsed_date
                )
            )
            new_id = inserted.inserted_primary_key[0]
            expenses = self._fetch(
                connection, select(EXPENSES_TABLE).where(EXPENSES_TABLE.c.id == new_id)
            )
            LOGGER.info("Recorded expense %s", new_id)
            return StoreResult(expenses=expenses)

        return self._run("add", work)

    def search_expenses(self, term: str) -> StoreResult:
        """Find expenses whose memo contains ``term``, ignoring case."""

        def work(connection: Connection) -> StoreResult:
            statement = self._select_ordered().where(
                EXPENSES_TABLE.c.memo.icontains(term, autoescape=True)
            )
            expenses = self._fetch(connection, statement)
            return StoreResult(lines=render_listing(expenses), expenses=expenses)

        return self._run("search", work)

    def delete_expense(self, expense_id: Union[str, int]) -> StoreResult:
        """Delete the expense with ``expense_id`` if, and only if, it exists."""

        parsed_id = _parse_id(expense_id)

        def work(connection: Connection) -> StoreResult:
            matches: List[Expense] = []
            if parsed_id is not None:
                matches = self._fetch(
                    connection, select(EXPENSES_TABLE).where(EXPENSES_TABLE.c.id == parsed_id)
                )
            if len(matches) != 1:
                return StoreResult(lines=[f"There is no expense with the id '#{expense_id}'."])
            connection.execute(delete(EXPENSES_TABLE).where(EXPENSES_TABLE.c.id == parsed_id))
            LOGGER.info("Deleted expense %s", parsed_id)
            return StoreResult(
                lines=["The following expense has been deleted:", format_expense(matches[0])],
                expenses=matches,
            )

        return self._run("delete", work)

    def clear_expenses(self) -> StoreResult:
        def work(connection: Connection) -> StoreResult:
            removed = connection.execute(delete(EXPENSES_TABLE)).rowcount
            LOGGER.info("Cleared %s expenses", removed)
            return StoreResult(lines=["All expenses have been deleted."])

        return self._run("clear", work)
