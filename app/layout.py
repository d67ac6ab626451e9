"""Shared layout primitives for the Payday Planner Streamlit app."""

from __future__ import annotations

import html
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

import streamlit as st
from streamlit.components.v1 import html as components_html


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("budget", "Budget Planner"),
    NavigationLink("payday", "Payday Calculator"),
    NavigationLink("data", "Import / Export"),
)


_CSS = """
<style>
  :root {
    --pp-gap: 18px;
    --pp-radius: 10px;
    --pp-border: #E3E8F0;
  }

  [data-testid="stAppViewContainer"] > .main {
    background: #F5F7FA;
  }

  .block-container {
    max-width: 1180px;
    padding-top: 2rem;
  }

  .pp-nav {
    display: flex;
    flex-wrap: wrap;
    align-items: baseline;
    justify-content: space-between;
    gap: 1rem;
    padding-bottom: 0.75rem;
    border-bottom: 1px solid var(--pp-border);
    margin-bottom: 1rem;
  }

  .pp-nav__brand {
    font-size: 1.4rem;
    font-weight: 700;
    color: #1F4FD1;
  }

  .pp-nav__links {
    display: flex;
    gap: 1.5rem;
  }

  .pp-nav__link, .pp-nav__link:visited,
  .pp-sidebar-link, .pp-sidebar-link:visited {
    color: #56607A;
    font-weight: 600;
    text-decoration: none;
  }

  .pp-nav__link.is-active, .pp-sidebar-link.is-active {
    color: #1F4FD1;
    border-bottom: 2px solid #F08A24;
  }

  .pp-sidebar-links {
    display: flex;
    flex-direction: column;
    align-items: flex-start;
    gap: 0.5rem;
  }

  .pp-card-anchor {
    display: none;
  }

  [data-testid="stVerticalBlock"]:has(> .pp-card-anchor) {
    background: #FFFFFF;
    border: 1px solid var(--pp-border);
    border-radius: var(--pp-radius);
    padding: 18px;
    margin-bottom: var(--pp-gap);
  }

  .pp-card__head {
    display: flex;
    justify-content: space-between;
    align-items: center;
    font-weight: 600;
    font-size: 1.05rem;
  }

  .pp-chip {
    font-size: 12px;
    padding: 2px 8px;
    border-radius: 999px;
    background: #EEF2FF;
    color: #1F4FD1;
  }

  .pp-status {
    font-size: 12px;
    font-weight: 600;
    padding: 2px 10px;
    border-radius: 999px;
    white-space: nowrap;
  }

  .pp-status--ok { background: #DCFCE7; color: #15803D; }
  .pp-status--near { background: #FEF3C7; color: #B45309; }
  .pp-status--over { background: #FEE2E2; color: #B91C1C; }

  .pp-insights {
    padding-left: 1.1rem;
    color: #4B5563;
  }

  .pp-insights li {
    margin-bottom: 0.5rem;
  }
</style>
"""


def inject_css() -> None:
    """Inject the app's card, navigation and badge styling."""

    st.markdown(_CSS, unsafe_allow_html=True)


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a titled card; ``suffix`` shows as a chip."""

    chip_html = f'<span class="pp-chip">{html.escape(suffix)}</span>' if suffix else ""
    with st.container():
        st.markdown('<div class="pp-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="pp-card__head"><span>{html.escape(title)}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def status_badge(status: str) -> str:
    """Return badge markup for an ``ok``/``near``/``over`` category status."""

    labels = {"ok": "On track", "near": "Near limit", "over": "Over budget"}
    key = status if status in labels else "ok"
    return f"<span class='pp-status pp-status--{key}'>{labels[key]}</span>"


def render_insight_list(items: Iterable[str]) -> None:
    markup = "".join(f"<li>{item}</li>" for item in items)
    st.markdown(f"<ul class='pp-insights'>{markup}</ul>", unsafe_allow_html=True)


def sidebar_link(label: str, page: str, active_page: str) -> str:
    """Return sidebar link markup with active state handling."""

    is_active = page == active_page
    css_classes = "pp-sidebar-link" + (" is-active" if is_active else "")
    aria_current = ' aria-current="page"' if is_active else ""
    return f"<a href='?page={page}' class='{css_classes}'{aria_current} target='_self'>{label}</a>"


def render_navbar(active_page: str) -> None:
    """Render the navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "pp-nav__link"
        aria_current = ""
        if link.slug == active_page:
            css_class += " is-active"
            aria_current = ' aria-current="page"'
        link_markup.append(
            f'<a class="{css_class}" href="?page={link.slug}"{aria_current} target="_self">{link.label}</a>'
        )

    st.markdown(
        '<nav class="pp-nav"><div class="pp-nav__brand">Payday Planner</div>'
        f'<div class="pp-nav__links">{"".join(link_markup)}</div></nav>',
        unsafe_allow_html=True,
    )
    _enforce_same_tab_navigation()


def render_sidebar(active_page: str, data_path: str, has_data: bool) -> None:
    """Render the sidebar with page links and the storage location."""

    with st.sidebar:
        st.markdown("### Pages")
        st.markdown(
            "<div class='pp-sidebar-links'>"
            + "".join(sidebar_link(link.label, link.slug, active_page) for link in NAV_LINKS)
            + "</div>",
            unsafe_allow_html=True,
        )
        st.markdown("---")
        st.markdown("### Storage")
        st.caption(f"Saved to `{data_path}`")
        if not has_data:
            st.info("No budget data yet. Add a category or import a backup to get started.")


def _enforce_same_tab_navigation() -> None:
    """Ensure navigation links stay within the same browser tab."""

    components_html(
        """
        <script>
        (function() {
          if (window.parent && !window.parent.__ppNavSameTab) {
            window.parent.__ppNavSameTab = true;
            const enforce = () => {
              const anchors = window.parent.document.querySelectorAll('a.pp-nav__link, a.pp-sidebar-link');
              anchors.forEach((anchor) => {
                if (anchor.target && anchor.target.toLowerCase() !== '_self') {
                  anchor.target = '_self';
                }
              });
            };
            enforce();
            const observer = new MutationObserver(enforce);
            observer.observe(window.parent.document.body, { childList: true, subtree: true });
          }
        })();
        </script>
        """,
        height=0,
        width=0,
    )


def determine_active_page(valid_pages: Iterable[str], default: str = "budget") -> str:
    """Determine the active page from the query params or session state."""

    params = st.query_params
    default_page = st.session_state.get("active_page", default)
    raw_page = params.get("page", default_page)
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else default

    if st.session_state.get("active_page") != page:
        st.session_state["active_page"] = page

    current_param = params.get("page")
    if isinstance(current_param, list):
        current_param = current_param[0]

    if current_param != page:
        st.query_params["page"] = page

    return page


__all__ = [
    "NavigationLink",
    "NAV_LINKS",
    "card",
    "determine_active_page",
    "inject_css",
    "render_insight_list",
    "render_navbar",
    "render_sidebar",
    "sidebar_link",
    "status_badge",
]
