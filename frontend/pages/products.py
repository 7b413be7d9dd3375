# frontend/pages/products.py
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Products", layout="wide")

from api_client import ApiError, get_api_base_and_token, get_json, post_json, ensure_array, show_api_error  # noqa: E402

API_BASE, TOKEN, HDRS = get_api_base_and_token()

st.title("Products")
if not TOKEN:
    st.warning("Sign in from the Home page first.")
    st.stop()

with st.form("new_product", clear_on_submit=True):
    st.subheader("Add product")
    c1, c2, c3 = st.columns([2, 1, 1])
    name = c1.text_input("Name *")
    unit = c2.text_input("Unit of measure *", value="pcs")
    cost = c3.number_input("Cost", min_value=0.0, step=0.01, value=0.0, format="%.2f")
    description = st.text_area("Description")
    if st.form_submit_button("Create product"):
        try:
            res = post_json(f"{API_BASE}/products", HDRS, {
                "name": name, "unitOfMeasure": unit, "cost": f"{cost:.2f}",
                "description": description,
            })
            st.success(f"Product created, SKU {res['data']['sku']}")
        except ApiError as ex:
            show_api_error(ex)

st.subheader("All products")
try:
    df = pd.DataFrame(ensure_array(get_json(f"{API_BASE}/products", HDRS)))
    if df.empty:
        st.info("No products yet.")
    else:
        st.dataframe(df[["sku", "name", "unit_of_measure", "cost", "quantity_on_hand"]],
                     use_container_width=True, height=320)
except ApiError as ex:
    show_api_error(ex)
