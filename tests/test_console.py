"""Scripted tests for the console front end."""

from structlog.testing import capture_logs

from ledger.menu.console import ConsoleApp
from ledger.queries import TABLE_HEADER


def run_console(ledger, answers):
    """Run the console against scripted input; input ends with EOF."""
    remaining = list(answers)
    output = []

    def read_line(_prompt):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    ConsoleApp(ledger, read_line=read_line, output=output.append).run()
    return output


class TestConsoleApp:
    """Tests for ConsoleApp."""

    def test_login_and_exit(self, ledger):
        """Test greeting and exit message."""
        output = run_console(ledger, ["1", "1111", "x"])
        assert output[0] == "Hello, Alice!"
        assert output[-1] == "Exiting..."

    def test_end_of_input_exits(self, ledger):
        """Test closed input ends the program cleanly."""
        with capture_logs() as logs:
            output = run_console(ledger, ["1", "1111"])
        assert output[-1] == "Exiting..."
        assert "console_input_closed" in [entry["event"] for entry in logs]

    def test_bad_login_reprompts(self, ledger):
        """Test login errors are shown and retried."""
        output = run_console(ledger, ["abc", "1", "1111", "x"])
        assert output[0] == "User id must be numeric. Try again."
        assert output[1] == "Hello, Alice!"

    def test_invalid_command(self, ledger):
        """Test an unknown command."""
        output = run_console(ledger, ["1", "1111", "z", "x"])
        assert "Invalid operation... Try again." in output

    def test_show_all(self, ledger):
        """Test the ledger table for a user."""
        output = run_console(ledger, ["1", "1111", "l", "a", "h", "x"])
        header = output.index(TABLE_HEADER)
        assert "Groceries" in output[header + 1]
        assert "Salary" in output[header + 2]
        assert not any("Refund" in line for line in output)

    def test_deposit_reprompts_for_amount(self, ledger):
        """Test a bad amount is asked again and the deposit saved."""
        output = run_console(ledger, ["1", "1111", "d", "Paycheck", "Employer", "abc", "25", "x"])
        assert "DEPOSIT SCREEN" in output
        assert "Invalid number. Please enter a numeric amount (e.g., 123.45 or -67.89)." in output
        assert "Deposit added successfully! (Amount: 25.00)" in output
        assert len(ledger.store) == 4

    def test_oversized_amount_reprompts(self, ledger):
        """Test an amount too large for cents is asked again instead of crashing."""
        answers = ["1", "1111", "d", "Paycheck", "Employer", "1e30", "25", "x"]
        output = run_console(ledger, answers)
        assert "Invalid number. Please enter a numeric amount (e.g., 123.45 or -67.89)." in output
        assert "Deposit added successfully! (Amount: 25.00)" in output
        assert output[-1] == "Exiting..."

    def test_payment_with_bad_text(self, ledger):
        """Test a rejected entry is reported, not raised."""
        output = run_console(ledger, ["1", "1111", "p", "Lunch|Dinner", "Deli", "10", "x"])
        assert any(line.startswith("Could not record transaction:") for line in output)
        assert len(ledger.store) == 3

    def test_month_to_date_report(self, ledger):
        """Test a preset report prints its range."""
        output = run_console(ledger, ["9", "0000", "l", "r", "1", "0", "h", "x"])
        assert "Displaying transactions between 2024-02-01 and 2024-02-15" in output

    def test_vendor_search_no_match(self, ledger):
        """Test the empty-result message for searches."""
        output = run_console(ledger, ["1", "1111", "l", "r", "6", "1", "nowhere", "0", "0", "h", "x"])
        assert "No matching transactions." in output

    def test_custom_search_no_match(self, ledger):
        """Test the empty-result message for custom search."""
        answers = ["1", "1111", "l", "r", "6", "3", "", "", "", "", "999", "0", "0", "h", "x"]
        output = run_console(ledger, answers)
        assert "CUSTOM SEARCH" in output
        assert "No transactions match your filters." in output

    def test_log_out_logs_in_next_user(self, ledger):
        """Test log out returns to the login prompt."""
        output = run_console(ledger, ["1", "1111", "o", "2", "2222", "x"])
        assert "Logging out... Alice" in output
        assert "Hello, Bob!" in output
        assert output[-1] == "Exiting..."
