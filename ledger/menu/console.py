"""
Console Front End

Drives the MenuMachine from standard input. Everything shown to the user
goes through `output`; everything read comes from `read_line`, so the
whole flow can be scripted in tests.
"""

from typing import Callable, Optional

import structlog

from ledger.audit import configure_logging
from ledger.config import get_settings
from ledger.menu.state import MenuAction, MenuMachine
from ledger.models.query import SearchFilters
from ledger.models.transaction import Transaction
from ledger.orchestrator import Ledger, LedgerSession, create_ledger, parse_amount_input
from ledger.queries.formatting import TABLE_HEADER, format_table_row
from ledger.queries.reports import ReportKind


logger = structlog.get_logger(__name__)

REPORT_ACTIONS = {
    MenuAction.MONTH_TO_DATE: ReportKind.MONTH_TO_DATE,
    MenuAction.PREVIOUS_MONTH: ReportKind.PREVIOUS_MONTH,
    MenuAction.YEAR_TO_DATE: ReportKind.YEAR_TO_DATE,
    MenuAction.PREVIOUS_YEAR: ReportKind.PREVIOUS_YEAR,
}


class ConsoleApp:
    """Interactive ledger session on a terminal."""

    def __init__(
        self,
        ledger: Ledger,
        read_line: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self._ledger = ledger
        self._read_line = read_line
        self._output = output
        self._machine = MenuMachine()
        self.session: Optional[LedgerSession] = None

    def login(self) -> LedgerSession:
        self.session = self._ledger.authenticate(self._read_line, self._output)
        self._output(f"Hello, {self.session.user.display_name}!")
        return self.session

    def run(self) -> None:
        """Log in and process commands until the user exits or input ends."""
        try:
            self.login()
            while not self._machine.finished:
                step = self._machine.handle(self._read_line(self._machine.prompt + " "))
                self.perform(step.action)
        except EOFError:
            logger.info("console_input_closed")
        self._output("Exiting...")

    def perform(self, action: MenuAction) -> None:
        if action == MenuAction.INVALID:
            self._output("Invalid operation... Try again.")
        elif action == MenuAction.ADD_DEPOSIT:
            self.record(deposit=True)
        elif action == MenuAction.MAKE_PAYMENT:
            self.record(deposit=False)
        elif action == MenuAction.LOG_OUT:
            self.log_out()
        elif action == MenuAction.SHOW_ALL:
            self.show(self.session.all_transactions())
        elif action == MenuAction.SHOW_DEPOSITS:
            self.show(self.session.deposits())
        elif action == MenuAction.SHOW_PAYMENTS:
            self.show(self.session.payments())
        elif action in REPORT_ACTIONS:
            self.report(REPORT_ACTIONS[action])
        elif action == MenuAction.SEARCH_VENDOR:
            needle = self._read_line("Enter vendor name: ")
            self.show(self.session.search_by_vendor(needle), empty="No matching transactions.")
        elif action == MenuAction.SEARCH_DESCRIPTION:
            needle = self._read_line("Enter transaction description: ")
            self.show(self.session.search_by_description(needle), empty="No matching transactions.")
        elif action == MenuAction.CUSTOM_SEARCH:
            self.custom_search()

    def show(self, transactions: list[Transaction], empty: str = "No transactions to display.") -> None:
        if not transactions:
            self._output(empty)
            return
        self._output(TABLE_HEADER)
        for transaction in transactions:
            self._output(format_table_row(transaction))

    def report(self, kind: ReportKind) -> None:
        start, end = self.session.report_range(kind)
        self._output(f"Displaying transactions between {start} and {end}")
        self.show(self.session.report(kind))

    def custom_search(self) -> None:
        self._output("CUSTOM SEARCH")
        filters = SearchFilters(
            start_date=self._read_line("Start Date (YYYY-MM-DD) or leave it blank: "),
            end_date=self._read_line("End Date (YYYY-MM-DD) or leave it blank: "),
            description=self._read_line("Description contains (blank to skip): "),
            vendor=self._read_line("Vendor contains (blank to skip): "),
            amount=self._read_line("Amount or leave it blank: "),
        )
        result = self.session.custom_search(filters)
        self.show(result.transactions, empty="No transactions match your filters.")

    def read_amount(self) -> str:
        while True:
            raw = self._read_line("Enter the amount: ")
            try:
                parse_amount_input(raw)
                return raw
            except ValueError:
                self._output("Invalid number. Please enter a numeric amount (e.g., 123.45 or -67.89).")

    def record(self, deposit: bool) -> None:
        self._output("DEPOSIT SCREEN" if deposit else "PAYMENT SCREEN")
        description = self._read_line("Enter the Transaction Description: ")
        vendor = self._read_line("Enter the name of the vendor: ")
        amount = self.read_amount()
        try:
            if deposit:
                _, _, message = self.session.record_deposit(description, vendor, amount)
            else:
                _, _, message = self.session.record_payment(description, vendor, amount)
        except ValueError as e:
            self._output(f"Could not record transaction: {e}")
            return
        self._output(message)

    def log_out(self) -> None:
        self._output(f"Logging out... {self.session.user.name}")
        self._ledger.log_out(self.session)
        self._machine.reset()
        self.login()


def main() -> None:
    """Entry point for `python -m ledger` and the `ledger` script."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    ledger = create_ledger(settings)
    ConsoleApp(ledger).run()
