import logging

import streamlit as st

from frontend import views
from services.config import load_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()  # Log to console/streamlit
    ]
)

CONFIG = load_config()


def _divider():
    if hasattr(st, "divider"):
        st.divider()
    else:
        st.markdown("---")


st.set_page_config(page_title=CONFIG["page_title"], layout=CONFIG["layout"])
st.title(CONFIG["page_title"])

parser = views.get_parser(CONFIG)
show_results = views.render_upload(parser, CONFIG)
if show_results:
    _divider()
    views.show_statistics(parser)
    _divider()
    views.show_documents(parser)
