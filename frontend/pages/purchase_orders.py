# frontend/pages/purchase_orders.py
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Purchase Orders", layout="wide")

from api_client import ApiError, get_api_base_and_token, get_json, post_json, ensure_array, show_api_error  # noqa: E402

API_BASE, TOKEN, HDRS = get_api_base_and_token()

st.title("🧾 Purchase Orders")
if not TOKEN:
    st.warning("Sign in from the Home page first.")
    st.stop()

try:
    suppliers = ensure_array(get_json(f"{API_BASE}/suppliers", HDRS))
    products = ensure_array(get_json(f"{API_BASE}/products", HDRS))
except ApiError as ex:
    show_api_error(ex)
    st.stop()

# ---------- New order ----------
st.subheader("🆕 Create purchase order")
if not suppliers or not products:
    st.info("You need to add suppliers and products before creating a purchase order.")
else:
    sup_by_name = {s["name"]: s["id"] for s in suppliers}
    prod_by_label = {f"{p['name']} ({p['sku']})": p for p in products}

    supplier_name = st.selectbox("Supplier", list(sup_by_name))
    notes = st.text_area("Notes")

    first = next(iter(prod_by_label.values()))
    seed_rows = pd.DataFrame([{
        "product": next(iter(prod_by_label)), "quantity": 1, "unitPrice": float(first["cost"]),
    }])
    items_df = st.data_editor(
        seed_rows,
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "product": st.column_config.SelectboxColumn("Product", options=list(prod_by_label), required=True),
            "quantity": st.column_config.NumberColumn("Quantity", min_value=1, step=1, required=True),
            "unitPrice": st.column_config.NumberColumn("Unit price", min_value=0.0, step=0.01, format="%.2f"),
        },
        key="po_items",
    )
    items_df = items_df.dropna(subset=["product", "quantity"])
    est_total = float((items_df["quantity"].fillna(0) * items_df["unitPrice"].fillna(0)).sum())
    st.caption(f"Estimated total: ${est_total:,.2f}")

    if st.button("Create purchase order"):
        payload = {
            "supplierId": sup_by_name[supplier_name],
            "notes": notes,
            "items": [
                {
                    "productId": prod_by_label[r["product"]]["id"],
                    "quantity": int(r["quantity"]),
                    "unitPrice": f"{float(r['unitPrice'] or 0):.2f}",
                }
                for _, r in items_df.iterrows()
            ],
        }
        try:
            res = post_json(f"{API_BASE}/purchase-orders", HDRS, payload)
            st.session_state["last_po"] = res["data"]["id"]
            st.success(f"Created {res['data']['po_number']}, total ${res['data']['total_amount']:,.2f}")
        except ApiError as ex:
            show_api_error(ex)

st.markdown("---")

# ---------- List ----------
st.subheader("📋 All purchase orders")
try:
    df_po = pd.DataFrame(ensure_array(get_json(f"{API_BASE}/purchase-orders", HDRS)))
    if df_po.empty:
        st.info("No purchase orders yet. Create your first one to get started.")
    else:
        st.dataframe(df_po[["po_number", "supplier_name", "status", "total_amount", "created_at"]],
                     use_container_width=True, height=300)

        po_ids = dict(zip(df_po["po_number"], df_po["id"]))
        default = next((n for n, i in po_ids.items() if i == st.session_state.get("last_po")), None)
        labels = list(po_ids)
        pick = st.selectbox("Details for", labels, index=labels.index(default) if default else 0)
        detail = get_json(f"{API_BASE}/purchase-orders/{po_ids[pick]}", HDRS)["data"]
        st.write(f"**{detail['po_number']}** · {detail['supplier_name']} · {detail['status']}")
        if detail.get("notes"):
            st.caption(detail["notes"])
        st.dataframe(pd.DataFrame(detail["items"])[
            ["product_sku", "product_name", "quantity", "unit_price", "total_price"]
        ], use_container_width=True)
except ApiError as ex:
    show_api_error(ex)
