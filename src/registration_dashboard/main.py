"""
Streamlit dashboard for event registrations.

Single page:
- Event tag filter
- Overview counts
- Completed / incomplete session tabs with Excel export
"""

import streamlit as st

from registration_dashboard.api import FormDataAPIClient
from registration_dashboard.config import get_settings
from registration_dashboard.core.display import to_display_frame
from registration_dashboard.core.export import export_basename, workbook_bytes
from registration_dashboard.models import KNOWN_TAGS, TAG_COLORS
from registration_dashboard.services import DashboardState, LoadStatus
from registration_dashboard.utils.logging import setup_logging

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def setup_page_config() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Form Responses Manager",
        page_icon="📋",
        layout="wide",
        initial_sidebar_state="expanded"
    )


@st.cache_resource
def get_api_client() -> FormDataAPIClient:
    """Get or create API client instance (cached)."""
    settings = get_settings()
    return FormDataAPIClient(
        url=settings.form_data_api_url,
        token=settings.form_data_api_token,
        timeout=settings.form_data_api_timeout
    )


def initialize_session_state() -> None:
    """Initialize Streamlit session state variables."""
    if 'dashboard_state' not in st.session_state:
        st.session_state.dashboard_state = DashboardState()


def tag_badge(tag: str) -> str:
    color = TAG_COLORS.get(tag, "#6b7280")
    return (
        f"<span style='background:{color};color:#ffffff;border-radius:9999px;"
        f"padding:2px 10px;font-size:0.85rem;font-weight:600'>{tag}</span>"
    )


def render_sidebar(state: DashboardState) -> None:
    """Render sidebar with reload and filter mode controls."""
    st.sidebar.title("📋 Registrations")

    st.sidebar.markdown("### 🔍 Filter Mode")
    state.match_all = st.sidebar.checkbox(
        "Require all selected events",
        value=state.match_all,
        help="Off: a registrant matches if they picked any selected event"
    )

    st.sidebar.markdown("### 🔄 Data")
    if st.sidebar.button("Reload Data"):
        del st.session_state.dashboard_state
        for tag in KNOWN_TAGS:
            st.session_state.pop(f"tag_{tag}", None)
        st.rerun()


def render_tag_filter(state: DashboardState) -> None:
    """Render one checkbox per event tag."""
    st.markdown("### Filter by Events")
    columns = st.columns(len(KNOWN_TAGS))
    for column, tag in zip(columns, KNOWN_TAGS):
        with column:
            st.markdown(tag_badge(tag), unsafe_allow_html=True)
            st.checkbox(
                tag,
                value=tag in state.selected_tags,
                key=f"tag_{tag}",
                on_change=state.toggle,
                args=(tag,),
                label_visibility="collapsed"
            )


def render_overview_metrics(state: DashboardState) -> None:
    """Render key metrics overview."""
    overview = state.overview()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("👥 Total Sessions", f"{overview['total_sessions']:,}")
    with col2:
        st.metric("✅ Completed (filtered)", f"{overview['completed']:,}")
    with col3:
        st.metric("⏳ Incomplete (filtered)", f"{overview['incomplete']:,}")

    with st.expander("Registrations per event", expanded=False):
        counts = overview["tag_counts"]
        st.dataframe(
            {"Event": list(counts.keys()), "Registrants": list(counts.values())},
            hide_index=True,
            use_container_width=True
        )


def render_sessions_tab(title: str, partition: str, state: DashboardState) -> None:
    """Render one partition as a table with its export button."""
    settings = get_settings()
    records = state.filtered().get(partition)
    basename = export_basename(partition)

    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(f"#### {title}")
    with col2:
        st.download_button(
            "⬇️ Export to Excel",
            data=workbook_bytes(records, settings.display_timezone),
            file_name=f"{basename}.xlsx",
            mime=XLSX_MIME,
            key=f"export_{partition}"
        )

    if not records:
        st.info("No sessions match the selected events")
        return

    st.dataframe(
        to_display_frame(records, settings.proof_base_url, settings.display_timezone),
        column_config={
            "Events": st.column_config.ListColumn("Events"),
            "Payment Proof": st.column_config.LinkColumn("Payment Proof", display_text="👁 Payment Proof"),
        },
        hide_index=True,
        use_container_width=True
    )


def main() -> None:
    """Main dashboard application."""
    setup_page_config()
    setup_logging()
    initialize_session_state()

    state: DashboardState = st.session_state.dashboard_state

    st.title("Form Responses Manager")

    if state.status is LoadStatus.LOADING:
        with st.spinner("Loading..."):
            state.load(get_api_client())

    if state.status is LoadStatus.ERROR:
        st.error(state.error)
        return

    render_sidebar(state)
    render_tag_filter(state)
    render_overview_metrics(state)

    completed_tab, incomplete_tab = st.tabs(["Completed Sessions", "Incomplete Sessions"])
    with completed_tab:
        render_sessions_tab("Completed Sessions", "completed", state)
    with incomplete_tab:
        render_sessions_tab("Incomplete Sessions", "incomplete", state)


if __name__ == "__main__":
    main()
