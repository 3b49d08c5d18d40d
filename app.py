"""Streamlit interface for removing emoji from pasted text or uploaded files."""

from __future__ import annotations

from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

from nomoji.config import NomojiConfig
from nomoji.postprocessing.emoji_cleaner import scrub
from nomoji.services.file_service import DecodeFailure, decode_bytes

load_dotenv()
load_dotenv(Path(__file__).resolve().parent / ".env")

st.set_page_config(page_title="nomoji", layout="wide")
st.title("Remove Emoji")

try:
    CONFIG = NomojiConfig.from_env()
except ValueError as exc:
    st.error(f"Invalid configuration: {exc}")
    st.stop()

with st.form("input_form"):
    pasted = st.text_area("Text", height=240, placeholder="Paste text containing emoji...")
    uploaded = st.file_uploader("...or upload a text file")
    dry_run = st.checkbox("Dry run (count only)")
    submitted = st.form_submit_button("Clean")

if submitted:
    source_name = "pasted text"
    text = pasted
    if uploaded is not None:
        source_name = uploaded.name
        try:
            text = decode_bytes(uploaded.getvalue(), CONFIG.processing.encoding)
        except DecodeFailure as exc:
            st.error(str(exc))
            st.stop()

    if not text:
        st.error("Please paste some text or upload a file.")
    else:
        result = scrub(text, max_length=CONFIG.classifier.max_sequence_length)
        verb = "found" if dry_run else "removed"
        st.success(f"{result.removed_count} emoji {verb} in {source_name}.")

        counts = result.kind_counts()
        if counts:
            st.subheader("Sequences by kind")
            st.table({"kind": list(counts), "count": list(counts.values())})

        if not dry_run:
            st.subheader("Cleaned text")
            st.text_area("Output", value=result.output, height=240)
            file_name = uploaded.name if uploaded is not None else "cleaned.txt"
            st.download_button(
                label="Download cleaned text",
                data=result.output.encode(CONFIG.processing.encoding),
                file_name=file_name,
                mime="text/plain",
            )
