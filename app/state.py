"""Session-scoped access to the budget document and its store."""

from __future__ import annotations

import logging
from datetime import date
from typing import MutableMapping

import streamlit as st

from core.models import BudgetDocument
from core.store import BudgetStore
from core.summary_service import refresh_category_spent

logger = logging.getLogger(__name__)

DOCUMENT_KEY = "budget_document"
STORE_KEY = "budget_store"
HORIZON_KEY = "category_horizon_months"
FLASH_KEY = "flash_message"


def bind_store(store: BudgetStore, horizon_months: int) -> BudgetDocument:
    """Attach ``store`` to the session, loading the document on first use."""

    st.session_state[STORE_KEY] = store
    st.session_state[HORIZON_KEY] = horizon_months
    if DOCUMENT_KEY not in st.session_state:
        st.session_state[DOCUMENT_KEY] = store.load()
        logger.info("Loaded budget document from %s", store.path)
    return st.session_state[DOCUMENT_KEY]


def commit(document: BudgetDocument, today: date | None = None) -> bool:
    """Refresh category totals, keep ``document`` in the session and persist it.

    Returns ``False`` when the write failed; the session copy is kept either way.
    """

    horizon = int(st.session_state.get(HORIZON_KEY, 3))
    document = refresh_category_spent(document, today or date.today(), horizon)
    st.session_state[DOCUMENT_KEY] = document

    store: BudgetStore | None = st.session_state.get(STORE_KEY)
    if store is None:
        return True
    try:
        store.save(document)
    except OSError as exc:
        logger.error("%s", exc)
        st.error("Could not save your budget data. Changes are kept for this session only.")
        return False
    return True


def push_flash(message: str, state: MutableMapping | None = None) -> None:
    """Queue ``message`` to be shown once after the next rerun."""

    state = st.session_state if state is None else state
    state[FLASH_KEY] = message


def pop_flash(state: MutableMapping | None = None) -> str | None:
    state = st.session_state if state is None else state
    return state.pop(FLASH_KEY, None)


__all__ = ["DOCUMENT_KEY", "FLASH_KEY", "STORE_KEY", "bind_store", "commit", "pop_flash", "push_flash"]
