# budgetbuddy/streamlit_app.py
# Run with: streamlit run budgetbuddy/streamlit_app.py
import logging

import pandas as pd
import streamlit as st

from budgetbuddy.api import ApiClient
from budgetbuddy.auth import AuthController
from budgetbuddy.config import Settings
from budgetbuddy.errors import AuthError, BudgetBuddyError
from budgetbuddy.session_store import FileSessionStore, StreamlitSessionStore
from budgetbuddy.state import LOGIN, REGISTER, AuthFormState, PanelPhase, TransactionPanel
from budgetbuddy.transactions import TransactionFetcher, clear_user_cache, get_user_profile

# ---------------- Configuration ----------------
settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("budgetbuddy-client")

st.set_page_config(page_title="BudgetBuddy", layout="wide", page_icon="💸")


# ---------------- Session State Management ----------------
def init_session_state():
    if "auth_form" not in st.session_state:
        st.session_state.auth_form = AuthFormState()
    if "panel" not in st.session_state:
        st.session_state.panel = None
    if "token" not in st.session_state:
        st.session_state.token = None


def get_store():
    if settings.token_file:
        return FileSessionStore(settings.token_file)
    return StreamlitSessionStore(st.session_state)


def get_auth_client():
    if "auth_client" not in st.session_state:
        st.session_state.auth_client = ApiClient(settings.auth_url, timeout=settings.timeout)
    return st.session_state.auth_client


def get_fetcher():
    if "fetcher" not in st.session_state:
        finance = ApiClient(settings.finance_url, timeout=settings.timeout)
        st.session_state.fetcher = TransactionFetcher(finance, auth=get_auth_client())
    return st.session_state.fetcher


init_session_state()


# ---------------- Auth Form ----------------
def on_form_switch():
    form = st.session_state.auth_form
    form.switch_form(st.session_state.form_type_choice)
    for key in ("email_input", "password_input", "name_input", "confirm_input"):
        st.session_state[key] = ""


def render_auth_form():
    form = st.session_state.auth_form
    st.radio(
        "Action", [LOGIN, REGISTER], horizontal=True, key="form_type_choice",
        format_func=lambda t: "Login" if t == LOGIN else "Register",
        on_change=on_form_switch,
    )

    with st.form("auth_form"):
        if form.form_type == REGISTER:
            form.name = st.text_input("👤 Name", key="name_input")
        form.email = st.text_input("📧 Email", key="email_input")
        form.password = st.text_input("🔒 Password", type="password", key="password_input")
        if form.form_type == REGISTER:
            form.confirm_password = st.text_input("🔒 Confirm password", type="password", key="confirm_input")

        label = "Register" if form.form_type == REGISTER else "Log in"
        submitted = st.form_submit_button(label, use_container_width=True, disabled=form.is_loading)

    if submitted:
        controller = AuthController(get_auth_client(), get_store(), form)
        with st.spinner("Contacting server..."):
            try:
                controller.submit()
            except AuthError:
                pass  # already recorded on the form state
        if form.is_authenticated:
            # New view for the freshly authenticated user
            if st.session_state.panel is not None:
                st.session_state.panel.unmount()
            st.session_state.panel = None
            clear_user_cache(st.session_state)

    if form.error_message:
        st.error(f"❌ {form.error_message}")
    if form.success_message:
        st.success(f"✅ {form.success_message}")


# ---------------- Transactions ----------------
def render_transactions():
    st.header("💳 Transactions")

    panel = st.session_state.panel
    if panel is None:
        panel = st.session_state.panel = TransactionPanel()

    if panel.phase is None:
        with st.spinner("Loading transactions..."):
            panel.mount(get_store(), get_fetcher())

    if panel.phase is PanelPhase.ERRORED:
        st.error(f"❌ {panel.error_message}")
    elif panel.is_empty:
        st.info("No transactions yet")
    elif panel.phase is PanelPhase.LOADED:
        df = pd.DataFrame([
            {
                "date": tx.date,
                "type": tx.type,
                "amount": tx.amount,
                "description": tx.description,
                "category_id": tx.category_id,
            }
            for tx in panel.transactions
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)


def render_profile():
    token = get_store().get()
    if not token:
        return
    try:
        profile = get_user_profile(st.session_state, token, get_fetcher())
    except BudgetBuddyError as e:
        st.warning(f"⚠️ Could not load profile: {e.message}")
        return
    st.success(f"Logged in as **{profile.name or profile.email}**")


# ---------------- Main App ----------------
def main():
    st.title("💰 Welcome to BudgetBuddy")

    with st.sidebar:
        st.title("🔐 Account")
        render_auth_form()
        render_profile()

    render_transactions()


if __name__ == "__main__":
    main()
