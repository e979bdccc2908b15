import os

import requests
import streamlit as st

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
SEAT_CLASSES = ["first", "business", "economy"]


def get_flights() -> list[dict]:
    resp = requests.get(f"{BACKEND_URL}/flights", timeout=10)
    resp.raise_for_status()
    return resp.json()


def get_flight_info(flight_number: int) -> dict | None:
    resp = requests.get(f"{BACKEND_URL}/flights/{flight_number}/info", timeout=10)
    if resp.status_code == 404:
        return None
    resp.raise_for_status()
    return resp.json()


def post_seat_action(flight_number: int, action: str, name: str, seat_class: str) -> dict:
    resp = requests.post(
        f"{BACKEND_URL}/flights/{flight_number}/{action}",
        json={"name": name, "class": seat_class},
        timeout=10,
    )
    data = resp.json()
    if not resp.ok:
        raise RuntimeError(data.get("error", resp.text))
    return data


def get_passenger_status(name: str) -> dict:
    resp = requests.get(
        f"{BACKEND_URL}/passengers/status", params={"name": name}, timeout=10
    )
    return resp.json()


def post_reset() -> dict:
    resp = requests.post(f"{BACKEND_URL}/reset", timeout=10)
    resp.raise_for_status()
    return resp.json()


st.set_page_config(page_title="Flight Scheduler", layout="wide")
st.title("Flight Scheduler")
st.caption("Backend: FastAPI | UI: Streamlit | Seats, waitlists and cancellations")

try:
    flights = get_flights()
except Exception as exc:  # noqa: BLE001
    st.error(f"Failed to load flights: {exc}")
    st.stop()

labels = {
    f"{f['flightNumber']} {f['departureAirport']} → {f['arrivalAirport']} ({f['departureDate']})": f[
        "flightNumber"
    ]
    for f in flights
}
selected = st.sidebar.selectbox("Flight", options=list(labels.keys()))
flight_number = labels[selected]

with st.sidebar.form("seat_form"):
    st.subheader("Book or cancel")
    passenger = st.text_input("Passenger name")
    seat_class = st.selectbox("Class", options=SEAT_CLASSES, index=2)
    book_clicked = st.form_submit_button("Book")
    cancel_clicked = st.form_submit_button("Cancel")

if book_clicked or cancel_clicked:
    action = "book" if book_clicked else "cancel"
    try:
        result = post_seat_action(flight_number, action, passenger, seat_class)
        st.sidebar.success(result)
    except Exception as exc:  # noqa: BLE001
        st.sidebar.error(f"{action.title()} failed: {exc}")

with st.sidebar.form("status_form"):
    st.subheader("Passenger status")
    status_name = st.text_input("Name")
    if st.form_submit_button("Look up"):
        st.json(get_passenger_status(status_name))

if st.sidebar.button("Reset all flights"):
    post_reset()
    st.sidebar.success("Inventory reset")

info = get_flight_info(flight_number)
if info is None:
    st.warning("No seat state for this flight yet. Reset the inventory to create it.")
    if st.button("Reset inventory"):
        post_reset()
        st.rerun()
    st.stop()

cols = st.columns(len(SEAT_CLASSES))
for col, class_name in zip(cols, SEAT_CLASSES):
    class_data = info["classes"][class_name]
    with col:
        st.subheader(class_name.upper())
        st.table(
            [
                {"Seat": seat["seatNumber"], "Passenger": seat["passenger"] or "empty"}
                for seat in class_data["seats"]
            ]
        )
        if class_data["waitlist"]:
            st.markdown(f"**Waitlist:** {', '.join(class_data['waitlist'])}")
