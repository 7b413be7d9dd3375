# frontend/Home.py
import time

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Procurement Hub", layout="wide")

from api_client import (  # noqa: E402
    DEFAULT_API_BASE, ApiError, get_json, post_json, normalize_token, show_api_error,
)

if "jwt" not in st.session_state:
    st.session_state["jwt"] = ""

# --------- Sidebar: settings / sign-in / health ---------
with st.sidebar:
    st.header("Settings")
    api_base = st.text_input("API base", value=DEFAULT_API_BASE, key="api_base")
    API_BASE = (api_base or DEFAULT_API_BASE).strip().rstrip("/")

    st.divider()
    if not st.session_state["jwt"]:
        mode = st.radio("Account", ["Sign in", "Sign up"], horizontal=True)
        email = st.text_input("Email", key="email")
        password = st.text_input("Password", type="password", key="password")
        full_name = st.text_input("Full name", key="full_name") if mode == "Sign up" else None
        if st.button(mode, key="btn_auth"):
            try:
                if mode == "Sign in":
                    res = post_json(f"{API_BASE}/auth/login", {}, {"email": email, "password": password})
                else:
                    res = post_json(f"{API_BASE}/auth/signup", {},
                                    {"email": email, "password": password, "fullName": full_name})
                st.session_state["jwt"] = normalize_token(res["data"]["access_token"])
                st.rerun()
            except ApiError as ex:
                show_api_error(ex)
    else:
        st.success("Signed in")
        if st.button("Sign out", key="btn_logout"):
            try:
                post_json(f"{API_BASE}/auth/logout",
                          {"Authorization": f"Bearer {st.session_state['jwt']}"}, {})
            except ApiError as ex:
                st.warning(f"Sign-out: {ex}")
            st.session_state["jwt"] = ""
            st.rerun()

    st.divider()
    try:
        get_json(f"{API_BASE}/health", {})
        st.success("API: OK")
    except ApiError as ex:
        st.error(f"API unreachable: {ex}")

TOKEN = st.session_state.get("jwt", "")
HDRS = {"Authorization": f"Bearer {TOKEN}"} if TOKEN else {}

if not TOKEN:
    st.title("Procurement Hub")
    st.info("Sign in from the sidebar to see the dashboard.")
    st.stop()

status = st.empty()
try:
    status.info("Loading…")
    res = get_json(f"{API_BASE}/dashboard", HDRS)
    summary = res.get("data", {})
    welcome = (res.get("meta") or {}).get("welcome", "User")

    st.title(f"Welcome, {welcome}")
    st.caption("Manage your procurement operations efficiently")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total purchase orders", summary.get("totalPOs", 0),
              help=f"{summary.get('activePOs', 0)} pending")
    c2.metric("Products", summary.get("totalProducts", 0))
    c3.metric("Suppliers", summary.get("totalSuppliers", 0))
    c4.metric("Total value", f"${float(summary.get('totalValue', 0)):,.2f}")

    st.subheader("Recent purchase orders")
    df = pd.DataFrame(summary.get("recentOrders", []))
    if df.empty:
        st.info("No purchase orders yet. Create your first one from the Purchase Orders page.")
    else:
        df = df[["po_number", "supplier_name", "status", "total_amount", "created_at"]]
        st.dataframe(df, use_container_width=True, height=240)

        by_status = df.groupby("status", as_index=False)["total_amount"].sum()
        fig = go.Figure(data=[go.Bar(x=by_status["status"], y=by_status["total_amount"],
                                     text=by_status["total_amount"], textposition="outside",
                                     texttemplate="%{text:.2f}")])
        fig.update_layout(margin=dict(l=10, r=10, t=30, b=10), height=300,
                          title="Recent order value by status")
        st.plotly_chart(fig, use_container_width=True, key="chart_status")

    status.success("Ready: " + time.strftime("%H:%M:%S"))
except ApiError as ex:
    status.error(f"Error: {ex}")
    if ex.status == 401:
        st.session_state["jwt"] = ""
