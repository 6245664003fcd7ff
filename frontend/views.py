from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import streamlit as st

from frontend import ui_components
from services import reporting
from services.cda_parser import CDAParser


def _ensure_state() -> None:
    state = st.session_state
    state.setdefault("last_stats", None)
    state.setdefault("rejected_files", [])


def get_parser(config: dict[str, Any]) -> CDAParser:
    """Return the session's parser, creating it on first use."""
    state = st.session_state
    if "cda_parser" not in state:
        state["cda_parser"] = CDAParser(
            reference_year=config["reference_year"],
            top_n=config["top_n"],
        )
    return state["cda_parser"]


def _accepted_uploads(uploads, max_bytes: int) -> tuple[list[tuple[str, bytes]], list[str]]:
    accepted: list[tuple[str, bytes]] = []
    rejected: list[str] = []
    for upload in uploads or []:
        if upload.size > max_bytes:
            rejected.append(upload.name)
            continue
        accepted.append((upload.name, upload.getvalue()))
    return accepted, rejected


def render_upload(parser: CDAParser, config: dict[str, Any]) -> bool:
    """Render the upload sidebar. Returns True when there are results to show."""
    _ensure_state()
    state = st.session_state
    uploads = ui_components.sidebar_file_uploader(config["max_file_size_mb"])
    process, clear = ui_components.sidebar_actions()

    if clear:
        parser.clear()
        state["last_stats"] = None
        state["rejected_files"] = []

    if process:
        files, rejected = _accepted_uploads(uploads, config["max_file_size_mb"] * 1024 * 1024)
        state["rejected_files"] = rejected
        if files:
            with st.spinner(f"Parsing {len(files)} documents..."):
                state["last_stats"] = parser.parse_batch(files)
        else:
            st.sidebar.warning("Select at least one valid file to process.")

    for name in state["rejected_files"]:
        st.sidebar.error(f"Skipped {name}: larger than {config['max_file_size_mb']} MB.")
    for name, error in parser.last_batch_errors.items():
        st.sidebar.error(f"Failed to parse {name}: {error}")

    if state["last_stats"] is None and not parser.get_documents():
        st.info("<- Upload CDA documents from the sidebar and press Process")
        return False
    return True


def _show_ranking(title: str, frame: pd.DataFrame, empty_message: str) -> None:
    st.subheader(title)
    if frame.empty:
        st.info(empty_message)
        return
    st.bar_chart(frame.set_index("name")["count"])
    st.dataframe(frame, use_container_width=True, hide_index=True)


def show_statistics(parser: CDAParser, stats: Optional[dict[str, Any]] = None) -> None:
    state = st.session_state
    stats = stats or state.get("last_stats") or parser.get_statistics()

    st.header("Corpus Overview")
    cols = st.columns(4)
    cols[0].metric("Documents", stats["total_documents"])
    cols[1].metric("Patients", stats["total_patients"])
    cols[2].metric("Average age", f"{stats['average_age']:.1f}")
    cols[3].metric("Processing time", f"{stats['processing_time_ms']} ms")

    frames = reporting.statistics_frames(stats)
    left, middle, right = st.columns(3)
    with left:
        st.subheader("Gender Distribution")
        genders = frames["Gender distribution"]
        if genders.empty:
            st.info("No demographic information found.")
        else:
            st.dataframe(genders, use_container_width=True, hide_index=True)
    with middle:
        _show_ranking("Top Diagnoses", frames["Top diagnoses"], "No diagnoses found.")
    with right:
        _show_ranking("Top Medications", frames["Top medications"], "No medications found.")


def show_documents(parser: CDAParser) -> None:
    documents = parser.get_documents()
    st.header("Documents")
    if not documents:
        st.info("No documents parsed.")
        return
    st.dataframe(reporting.documents_frame(documents), use_container_width=True, hide_index=True)
    for document in documents:
        with st.expander(document["file_name"]):
            st.markdown("**Diagnoses**")
            if document["diagnoses"]:
                st.dataframe(pd.DataFrame(document["diagnoses"]), use_container_width=True, hide_index=True)
            else:
                st.info("None recorded.")
            st.markdown("**Medications**")
            if document["medications"]:
                st.dataframe(pd.DataFrame(document["medications"]), use_container_width=True, hide_index=True)
            else:
                st.info("None recorded.")
