"""
navigation.py — routes backend navigation intents to Streamlit pages.

Join and team endpoints answer with an ``intent`` (e.g. "live_quiz") plus a
payload.  ``dispatch`` stashes the payload in session state under ``nav`` and
switches to the page that renders that intent.
"""
from enum import Enum


class Intent(str, Enum):
    DASHBOARD = "dashboard"
    JOIN_QUIZ = "join_quiz"
    CREATE_TEAM = "create_team"
    JOIN_TEAM = "join_team"
    CONFIRM_REJOIN = "confirm_rejoin"
    PICK_TEAM = "pick_team"
    SHOW_TEAM_CODE = "show_team_code"
    LIVE_QUIZ = "live_quiz"
    RESULTS = "results"
    LOGIN = "login"


_PAGES = {
    Intent.DASHBOARD:      "Home.py",
    Intent.LOGIN:          "pages/0_Login.py",
    Intent.JOIN_QUIZ:      "pages/1_Join_Quiz.py",
    Intent.CONFIRM_REJOIN: "pages/1_Join_Quiz.py",
    Intent.PICK_TEAM:      "pages/1_Join_Quiz.py",
    Intent.CREATE_TEAM:    "pages/2_Team.py",
    Intent.JOIN_TEAM:      "pages/2_Team.py",
    Intent.SHOW_TEAM_CODE: "pages/2_Team.py",
    Intent.LIVE_QUIZ:      "pages/3_Live_Quiz.py",
    Intent.RESULTS:        "pages/4_Results.py",
}


def page_for(intent) -> str:
    """Page script for an Intent or its wire value; unknown values go to the dashboard."""
    try:
        return _PAGES[Intent(intent)]
    except ValueError:
        return _PAGES[Intent.DASHBOARD]


def dispatch(intent, state=None, switch_page=None, **payload) -> str:
    """
    Record *payload* for the target page and switch to it.

    *state* and *switch_page* default to ``st.session_state`` and
    ``st.switch_page``.  Returns the page path.
    """
    if state is None or switch_page is None:
        import streamlit as st
        state = st.session_state if state is None else state
        switch_page = st.switch_page if switch_page is None else switch_page

    try:
        resolved = Intent(intent)
    except ValueError:
        resolved = Intent.DASHBOARD

    state["nav"] = {"intent": resolved.value, **payload}
    page = page_for(resolved)
    switch_page(page)
    return page


def dispatch_outcome(outcome: dict, state=None, switch_page=None) -> str:
    """Dispatch a join/team response body as returned by the API."""
    payload = {k: v for k, v in outcome.items() if k != "intent"}
    return dispatch(outcome.get("intent"), state=state, switch_page=switch_page, **payload)


def nav_payload(state, *intents) -> dict:
    """The pending navigation payload if its intent is one of *intents*, else {}."""
    nav = state.get("nav") or {}
    if intents and nav.get("intent") not in {Intent(i).value for i in intents}:
        return {}
    return nav
