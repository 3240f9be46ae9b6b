import os
from datetime import UTC, datetime

import requests
import streamlit as st

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_AUTH_TOKEN = os.getenv("API_AUTH_TOKEN", "")
MODERATOR_NAME = os.getenv("MODERATOR_NAME", "moderator")

BADGE_COLORS = {"yellow": "orange", "red": "red", "green": "green", "gray": "gray"}


def _headers(idempotency_key: str | None = None) -> dict[str, str]:
    headers: dict[str, str] = {"X-Actor": MODERATOR_NAME}
    if API_AUTH_TOKEN:
        headers["X-API-Key"] = API_AUTH_TOKEN
    if idempotency_key:
        headers["Idempotency-Key"] = idempotency_key
    return headers


def _unwrap(response: requests.Response) -> dict:
    payload = response.json()
    return payload.get("data") if isinstance(payload, dict) and "data" in payload else payload


def _badge(descriptor: dict, raw_status: str) -> str:
    color = BADGE_COLORS.get(descriptor["color"], "gray")
    label = descriptor["label"] if descriptor["recognized"] else raw_status or descriptor["label"]
    return f":{color}[**{label}**]"


st.set_page_config(page_title="Health Content Moderation", layout="wide")
st.title("Health Content Moderation")

taxonomy: dict = {}
taxonomy_resp = requests.get(f"{API_BASE_URL}/v1/statuses", headers=_headers(), timeout=20)
if taxonomy_resp.ok:
    taxonomy = _unwrap(taxonomy_resp)
status_labels = {item["status"]: item["label"] for item in taxonomy.get("statuses", [])}

queue_tab, library_tab, statuses_tab = st.tabs(["Moderation Queue", "Public Library", "Status Reference"])

with queue_tab:
    col1, col2 = st.columns(2)
    with col1:
        kind = st.selectbox("Content type", ["all", "document", "video"])
    with col2:
        status_filter = st.selectbox(
            "Status", ["all", *status_labels.keys()], format_func=lambda s: status_labels.get(s, "All statuses")
        )

    count_params = {"kind": kind} if kind != "all" else {}
    counts_resp = requests.get(
        f"{API_BASE_URL}/v1/content/status-counts", params=count_params, headers=_headers(), timeout=20
    )
    if counts_resp.ok:
        counts = _unwrap(counts_resp)
        metric_cols = st.columns(4)
        metric_cols[0].metric("Pending", counts["pending"])
        metric_cols[1].metric("Verified", counts["verified"])
        metric_cols[2].metric("Rejected", counts["rejected"])
        metric_cols[3].metric("Unrecognized", counts["unrecognized"])

    params: dict = {"show_all": True, "limit": 200}
    if kind != "all":
        params["kind"] = kind
    if status_filter != "all":
        params["status"] = status_filter

    resp = requests.get(f"{API_BASE_URL}/v1/content", params=params, headers=_headers(), timeout=20)
    if resp.ok:
        data = _unwrap(resp)
        st.caption(f"Items: {data.get('total', 0)}")
        for item in data.get("items", []):
            header = f"{_badge(item['descriptor'], item['raw_status'])} {item['title']} ({item['kind']})"
            with st.expander(header):
                st.write(item.get("description") or "")
                st.caption(f"Author: {item['author']} | Category: {item.get('category_name') or '-'}")
                if not item["descriptor"]["recognized"]:
                    st.warning(f"Stored status {item['raw_status']!r} is not recognized; hidden from public listings.")

                action_cols = st.columns(len(item["allowed_next_states"]))
                for col, target in zip(action_cols, item["allowed_next_states"]):
                    with col:
                        if st.button(f"Mark {status_labels.get(target, target)}", key=f"{item['id']}-{target}"):
                            requests.post(
                                f"{API_BASE_URL}/v1/content/{item['id']}/status",
                                json={"target": target, "current": item["raw_status"]},
                                headers=_headers(f"status-{item['id']}-{datetime.now(UTC).timestamp()}"),
                                timeout=20,
                            )
                            st.rerun()
    else:
        st.error(resp.text)

with library_tab:
    search = st.text_input("Search titles and descriptions")
    params = {"limit": 200}
    if search:
        params["search"] = search
    resp = requests.get(f"{API_BASE_URL}/v1/content", params=params, headers=_headers(), timeout=20)
    if resp.ok:
        rows = [
            {"title": item["title"], "kind": item["kind"], "author": item["author"], "category": item["category_name"]}
            for item in _unwrap(resp).get("items", [])
        ]
        st.dataframe(rows, use_container_width=True)
    else:
        st.error(resp.text)

with statuses_tab:
    st.subheader("Canonical statuses")
    st.dataframe(taxonomy.get("statuses", []), use_container_width=True)
    st.subheader("Legacy aliases")
    st.dataframe(
        [{"stored value": raw, "resolves to": status} for raw, status in taxonomy.get("aliases", {}).items()],
        use_container_width=True,
    )

    st.subheader("Check a stored value")
    raw_value = st.text_input("Raw status")
    if raw_value:
        check = requests.get(
            f"{API_BASE_URL}/v1/statuses/resolve", params={"raw": raw_value}, headers=_headers(), timeout=20
        )
        if check.ok:
            st.json(_unwrap(check))
        else:
            st.error(check.text)
