"""Import, export and reset page."""

from __future__ import annotations

import streamlit as st

from app.layout import card
from app.state import commit, pop_flash, push_flash
from config import Settings
from core.export import CSV_FILENAME, JSON_FILENAME, export_csv, export_json
from core.ledger import reset_document
from core.models import BudgetDocument, PaydayDashboard
from core.serialization import DocumentImportError, ImportPreview, parse_import_payload

_PENDING_IMPORT_KEY = "pending_import"


def _render_export_card(document: BudgetDocument) -> None:
    st.caption("Download a copy of everything. Exports are not re-imported from CSV.")
    cols = st.columns(2)
    cols[0].download_button(
        "Export CSV",
        data=export_csv(document),
        file_name=CSV_FILENAME,
        mime="text/csv",
        use_container_width=True,
    )
    cols[1].download_button(
        "Export JSON",
        data=export_json(document),
        file_name=JSON_FILENAME,
        mime="application/json",
        use_container_width=True,
    )


def _read_import_source() -> str | None:
    uploaded = st.file_uploader("Upload a JSON backup", type=["json"])
    pasted = st.text_area("…or paste JSON", height=160, placeholder='{"categories": [], ...}')

    if uploaded is not None:
        return uploaded.getvalue().decode("utf-8", errors="replace")
    if pasted and pasted.strip():
        return pasted
    return None


def _render_import_card() -> None:
    text = _read_import_source()
    if st.button("Preview import", disabled=text is None):
        try:
            preview = parse_import_payload(text or "")
        except DocumentImportError as exc:
            st.session_state.pop(_PENDING_IMPORT_KEY, None)
            st.error(str(exc))
        else:
            st.session_state[_PENDING_IMPORT_KEY] = preview

    preview: ImportPreview | None = st.session_state.get(_PENDING_IMPORT_KEY)
    if preview is None:
        return

    if preview.migrated:
        st.info("This backup came from the older payday calculator and was converted to the current format.")

    imported = preview.document
    calculator = imported.payday_calculator
    cols = st.columns(3)
    cols[0].metric("Categories", len(imported.categories))
    cols[1].metric("Expenses", len(imported.daily_expenses))
    cols[2].metric("Bills", len(calculator.bills))
    st.warning("Importing replaces all current data.")

    confirm_col, cancel_col = st.columns(2)
    if confirm_col.button("Replace my data", type="primary", use_container_width=True):
        st.session_state.pop(_PENDING_IMPORT_KEY, None)
        if commit(imported):
            push_flash("Data imported successfully!")
            st.rerun()
    if cancel_col.button("Cancel", use_container_width=True):
        st.session_state.pop(_PENDING_IMPORT_KEY, None)
        st.rerun()


def _render_reset_card(document: BudgetDocument) -> None:
    st.caption("Remove every category, expense, bill and payday setting.")
    confirmed = st.checkbox("I understand this cannot be undone", key="confirm-reset")
    nothing_to_reset = document == reset_document()
    if st.button("Reset all data", disabled=not confirmed or nothing_to_reset):
        if commit(reset_document()):
            st.session_state.pop("confirm-reset", None)
            push_flash("All data has been reset.")
            st.rerun()


def render_page(document: BudgetDocument, dashboard: PaydayDashboard, settings: Settings) -> None:
    """Render the import / export page."""

    st.title("Import / Export")
    st.caption(f"Data is stored locally at {settings.data_path}.")
    message = pop_flash()
    if message:
        st.success(message)

    export_col, reset_col = st.columns([2, 1], gap="medium")
    with export_col:
        with card("Export", suffix="CSV · JSON"):
            _render_export_card(document)
    with reset_col:
        with card("Reset", suffix="Danger zone"):
            _render_reset_card(document)

    with card("Import", suffix="JSON backup"):
        _render_import_card()


__all__ = ["render_page"]
