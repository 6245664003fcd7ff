import streamlit as st


def sidebar_file_uploader(max_file_size_mb):
    st.sidebar.header("CDA Documents")
    return st.sidebar.file_uploader(
        f"Upload .xml or .cda files (max {max_file_size_mb} MB each)",
        type=["xml", "cda"],
        accept_multiple_files=True,
    )


def sidebar_actions():
    cols = st.sidebar.columns(2)
    with cols[0]:
        process = st.button("Process", type="primary")
    with cols[1]:
        clear = st.button("Clear")
    return process, clear
