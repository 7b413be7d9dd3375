# frontend/pages/suppliers.py
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Suppliers", layout="wide")

from api_client import ApiError, get_api_base_and_token, get_json, post_json, ensure_array, show_api_error  # noqa: E402

API_BASE, TOKEN, HDRS = get_api_base_and_token()

st.title("Suppliers")
if not TOKEN:
    st.warning("Sign in from the Home page first.")
    st.stop()

with st.form("new_supplier", clear_on_submit=True):
    st.subheader("Add supplier")
    c1, c2 = st.columns(2)
    name = c1.text_input("Name *")
    contact = c2.text_input("Contact person")
    email = c1.text_input("Email")
    phone = c2.text_input("Phone")
    address = st.text_area("Address")
    if st.form_submit_button("Create supplier"):
        try:
            res = post_json(f"{API_BASE}/suppliers", HDRS, {
                "name": name, "contactPerson": contact, "email": email,
                "phone": phone, "address": address,
            })
            st.success(f"Supplier created: {res['data']['name']}")
        except ApiError as ex:
            show_api_error(ex)

st.subheader("All suppliers")
try:
    df = pd.DataFrame(ensure_array(get_json(f"{API_BASE}/suppliers", HDRS)))
    if df.empty:
        st.info("No suppliers yet.")
    else:
        st.dataframe(df[["name", "contact_person", "email", "phone", "address"]],
                     use_container_width=True, height=320)
except ApiError as ex:
    show_api_error(ex)
