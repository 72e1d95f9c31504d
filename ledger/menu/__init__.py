"""Menu model and console front end."""

from ledger.menu.state import MenuAction, MenuMachine, MenuState, MenuStep, command_token

__all__ = [
    "MenuAction",
    "MenuMachine",
    "MenuState",
    "MenuStep",
    "command_token",
]
