import logging

import streamlit as st

import config
from constant import PAGE_TITLE, UI_CSS
from error_tracking import SentryClient
from log_config import configure_logging, set_session_id
from ui import render_client_scripts, streamlit_request_context

# Configure logging
configure_logging(config.LOG_FILE)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon="🛰️",
    layout="centered",
)

st.markdown(
    UI_CSS,
    unsafe_allow_html=True,
)


def initialize_sentry() -> SentryClient:
    """Build and initialize the reporting component for this run."""
    client = SentryClient.from_config(context_provider=streamlit_request_context)
    client.initialize()
    return client


request = streamlit_request_context()
if request is not None and request.session_id:
    set_session_id(request.session_id)

sentry = initialize_sentry()

if "user_name" not in st.session_state:
    st.session_state.user_name = ""

st.markdown(f'<div class="main-header">{PAGE_TITLE}</div>', unsafe_allow_html=True)

user_name = st.text_input("User name", key="user_name")
if user_name:
    sentry.set_user_context({"username": user_name})

col_message, col_exception = st.columns(2)

with col_message:
    if st.button("Send test message"):
        event_id = sentry.capture_message("Test message from the demo page", level="info")
        if event_id is None:
            st.warning("Server-side reporting is not configured")

with col_exception:
    if st.button("Raise test exception"):
        try:
            raise RuntimeError("Test exception from the demo page")
        except RuntimeError as e:
            logger.warning("Demo exception raised: %s", e)
            event_id = sentry.capture_exception(e)
            if event_id is None:
                st.warning("Server-side reporting is not configured")

if sentry.last_event_id and config.SENTRY_PROJECT_URL:
    st.markdown(
        f'<div class="event-link"><a href="{sentry.get_last_event_url()}">'
        "View the last reported event</a></div>",
        unsafe_allow_html=True,
    )

render_client_scripts(sentry.client_script)
