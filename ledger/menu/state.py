"""
Menu State Machine

The console menus as an explicit finite-state model. The machine does no
I/O: it maps (state, command token) to (next state, action) and the
console runner performs the action.

States and their commands:

    HOME     d deposit   p payment   l -> LEDGER   o log out   x -> EXIT
    LEDGER   a all       d deposits  p payments    r -> REPORTS   h -> HOME
    REPORTS  1 month to date   2 previous month   3 year to date
             4 previous year   5 vendor search    6 -> SEARCH    0 -> LEDGER
    SEARCH   1 vendor    2 description   3 custom search   0 -> REPORTS
"""

from enum import Enum
from typing import NamedTuple, Optional


class MenuState(str, Enum):
    HOME = "home"
    LEDGER = "ledger"
    REPORTS = "reports"
    SEARCH = "search"
    EXIT = "exit"


class MenuAction(str, Enum):
    NONE = "none"  # pure navigation
    INVALID = "invalid"
    ADD_DEPOSIT = "add_deposit"
    MAKE_PAYMENT = "make_payment"
    LOG_OUT = "log_out"
    SHOW_ALL = "show_all"
    SHOW_DEPOSITS = "show_deposits"
    SHOW_PAYMENTS = "show_payments"
    MONTH_TO_DATE = "month_to_date"
    PREVIOUS_MONTH = "previous_month"
    YEAR_TO_DATE = "year_to_date"
    PREVIOUS_YEAR = "previous_year"
    SEARCH_VENDOR = "search_vendor"
    SEARCH_DESCRIPTION = "search_description"
    CUSTOM_SEARCH = "custom_search"


class MenuStep(NamedTuple):
    state: MenuState
    action: MenuAction


TRANSITIONS: dict[MenuState, dict[str, MenuStep]] = {
    MenuState.HOME: {
        "d": MenuStep(MenuState.HOME, MenuAction.ADD_DEPOSIT),
        "p": MenuStep(MenuState.HOME, MenuAction.MAKE_PAYMENT),
        "l": MenuStep(MenuState.LEDGER, MenuAction.NONE),
        "o": MenuStep(MenuState.HOME, MenuAction.LOG_OUT),
        "x": MenuStep(MenuState.EXIT, MenuAction.NONE),
    },
    MenuState.LEDGER: {
        "a": MenuStep(MenuState.LEDGER, MenuAction.SHOW_ALL),
        "d": MenuStep(MenuState.LEDGER, MenuAction.SHOW_DEPOSITS),
        "p": MenuStep(MenuState.LEDGER, MenuAction.SHOW_PAYMENTS),
        "r": MenuStep(MenuState.REPORTS, MenuAction.NONE),
        "h": MenuStep(MenuState.HOME, MenuAction.NONE),
    },
    MenuState.REPORTS: {
        "1": MenuStep(MenuState.REPORTS, MenuAction.MONTH_TO_DATE),
        "2": MenuStep(MenuState.REPORTS, MenuAction.PREVIOUS_MONTH),
        "3": MenuStep(MenuState.REPORTS, MenuAction.YEAR_TO_DATE),
        "4": MenuStep(MenuState.REPORTS, MenuAction.PREVIOUS_YEAR),
        "5": MenuStep(MenuState.REPORTS, MenuAction.SEARCH_VENDOR),
        "6": MenuStep(MenuState.SEARCH, MenuAction.NONE),
        "0": MenuStep(MenuState.LEDGER, MenuAction.NONE),
    },
    MenuState.SEARCH: {
        "1": MenuStep(MenuState.SEARCH, MenuAction.SEARCH_VENDOR),
        "2": MenuStep(MenuState.SEARCH, MenuAction.SEARCH_DESCRIPTION),
        "3": MenuStep(MenuState.SEARCH, MenuAction.CUSTOM_SEARCH),
        "0": MenuStep(MenuState.REPORTS, MenuAction.NONE),
    },
    MenuState.EXIT: {},
}


MENU_TEXT: dict[MenuState, str] = {
    MenuState.HOME: """
Welcome to the Ledger!
What would you like to do?
D) Add Deposits
P) Make Payment (Debit)
L) Ledger
O) Log Out
X) Exit
Enter command:""",
    MenuState.LEDGER: """
LEDGER MENU
What would you like to do?
A) View All Transactions
D) View Deposits Only
P) View Payments Only
R) View Reports
H) Return to Home
Enter command:""",
    MenuState.REPORTS: """
REPORT MENU
What would you like to do?
1) Month To Date
2) Previous Month
3) Year To Date
4) Previous Year
5) Search By Vendor
6) Custom Search
0) Back
Enter command:""",
    MenuState.SEARCH: """
SEARCH MENU
What would you like to search by?
1) Vendor Name
2) Transaction Description
3) Search for a specific transaction
0) Back
Enter command:""",
}


def command_token(raw: Optional[str]) -> str:
    """First character of the trimmed, lower-cased input ('' if blank)."""
    if not raw:
        return ""
    text = raw.strip().lower()
    return text[:1]


class MenuMachine:
    """Tracks the current menu and applies commands to it."""

    def __init__(self, state: MenuState = MenuState.HOME):
        self.state = state

    @property
    def finished(self) -> bool:
        return self.state == MenuState.EXIT

    @property
    def prompt(self) -> str:
        return MENU_TEXT.get(self.state, "")

    def handle(self, raw: Optional[str]) -> MenuStep:
        """
        Apply one line of input.

        Unknown commands leave the state unchanged and report INVALID.
        """
        step = TRANSITIONS[self.state].get(command_token(raw))
        if step is None:
            return MenuStep(self.state, MenuAction.INVALID)
        self.state = step.state
        return step

    def reset(self) -> None:
        self.state = MenuState.HOME
