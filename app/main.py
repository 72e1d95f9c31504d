"""
Streamlit Frontend for the Ledger

Web view over the same Ledger the console uses.

DESIGN PRINCIPLES:
1. Log in first; every page shows only what the session may see
2. New entries report clearly whether they were saved
3. No hidden actions

One Ledger is shared by every browser session (cached resource); the
logged-in user lives in each browser session's own state.
"""

from datetime import date

import streamlit as st

from ledger.audit import configure_logging
from ledger.config import get_settings
from ledger.models.query import SearchFilters, TransactionKind
from ledger.models.transaction import Transaction
from ledger.orchestrator import Ledger, LedgerSession, create_ledger
from ledger.queries.reports import ReportKind
from ledger.store import AuthenticationError


# Page configuration
st.set_page_config(
    page_title="Ledger",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_ledger() -> Ledger:
    """Get or create the shared ledger (cached)."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    return create_ledger(settings)


def transactions_table(transactions: list[Transaction]) -> list[dict]:
    """Rows for st.dataframe."""
    return [
        {
            "Date": t.date.isoformat(),
            "Time": t.time.strftime("%H:%M:%S"),
            "Description": t.description,
            "Vendor": t.vendor,
            "Amount": float(t.amount_cents),
            "Type": t.transaction_type.value,
            "Owner": t.owner_id,
        }
        for t in transactions
    ]


def show_transactions(transactions: list[Transaction], empty: str = "No transactions to display.") -> None:
    if not transactions:
        st.info(empty)
        return
    st.caption(f"{len(transactions)} transaction(s), newest first")
    st.dataframe(transactions_table(transactions), use_container_width=True, hide_index=True)


def current_session(ledger: Ledger):
    """Rebuild the LedgerSession for this browser session, if logged in."""
    user = st.session_state.get("user")
    if user is None:
        return None
    return LedgerSession(ledger, user)


def render_login_page(ledger: Ledger) -> None:
    st.title("📒 Ledger")
    st.markdown("Log in with your user id and PIN.")

    with st.form("login"):
        user_id = st.text_input("User id")
        pin = st.text_input("PIN", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

    if submitted:
        try:
            session = ledger.login(user_id, pin)
        except AuthenticationError as e:
            st.error(str(e))
        else:
            st.session_state.user = session.user
            st.rerun()


def render_ledger_page(session: LedgerSession) -> None:
    st.title("📊 Ledger")
    kind = st.radio(
        "Show",
        options=list(TransactionKind),
        format_func=lambda k: {"all": "All", "debit": "Deposits", "credit": "Payments"}[k.value],
        horizontal=True,
    )
    show_transactions(session.by_type(kind))


def render_reports_page(session: LedgerSession) -> None:
    st.title("🗓️ Reports")
    kind = st.selectbox(
        "Report",
        options=list(ReportKind),
        format_func=lambda k: k.label,
    )
    start, end = session.report_range(kind)
    st.markdown(f"Transactions between **{start}** and **{end}**")
    show_transactions(session.report(kind))

    st.markdown("---")
    st.subheader("Custom range")
    col1, col2 = st.columns(2)
    with col1:
        range_start = st.date_input("From", value=start, key="range_start")
    with col2:
        range_end = st.date_input("To", value=end, key="range_end")
    if st.button("Show range"):
        show_transactions(session.transactions_in_range(range_start, range_end))


def render_search_page(session: LedgerSession) -> None:
    st.title("🔍 Search")
    st.markdown("*Every field is optional. Leave a field blank to skip it.*")

    with st.form("search"):
        col1, col2 = st.columns(2)
        with col1:
            start_date = st.text_input("Start date (YYYY-MM-DD)")
            description = st.text_input("Description contains")
            amount = st.text_input("Exact amount")
        with col2:
            end_date = st.text_input("End date (YYYY-MM-DD)")
            vendor = st.text_input("Vendor contains")
        submitted = st.form_submit_button("Search", type="primary")

    if submitted:
        result = session.custom_search(
            SearchFilters(
                start_date=start_date,
                end_date=end_date,
                description=description,
                vendor=vendor,
                amount=amount,
            )
        )
        st.caption(result.query_description)
        show_transactions(result.transactions, empty="No transactions match your filters.")


def render_entry_page(session: LedgerSession) -> None:
    st.title("➕ New Entry")

    with st.form("entry", clear_on_submit=True):
        entry_type = st.radio("Type", options=["Deposit", "Payment"], horizontal=True)
        description = st.text_input("Description")
        vendor = st.text_input("Vendor")
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        try:
            if entry_type == "Deposit":
                _, saved, message = session.record_deposit(description, vendor, f"{amount:.2f}")
            else:
                _, saved, message = session.record_payment(description, vendor, f"{amount:.2f}")
        except ValueError as e:
            st.error(f"Could not record transaction: {e}")
            return
        if saved:
            st.success(message)
        else:
            st.warning(message)


def main():
    """Main application entry point."""
    ledger = get_ledger()
    session = current_session(ledger)

    if session is None:
        render_login_page(ledger)
        return

    st.sidebar.title("📒 Ledger")
    st.sidebar.markdown(f"Logged in as **{session.user.display_name}**")
    if st.sidebar.button("Log out"):
        ledger.log_out(session)
        st.session_state.user = None
        st.rerun()
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Ledger", "🗓️ Reports", "🔍 Search", "➕ New Entry"],
        index=0,
    )
    st.sidebar.caption(f"Today: {date.today().isoformat()}")

    if page == "📊 Ledger":
        render_ledger_page(session)
    elif page == "🗓️ Reports":
        render_reports_page(session)
    elif page == "🔍 Search":
        render_search_page(session)
    elif page == "➕ New Entry":
        render_entry_page(session)


if __name__ == "__main__":
    main()
