from datetime import datetime

from storefront.domain.timeline import ORDER_STATUS_STEPS, build_timeline


def test_timeline_has_five_labelled_steps():
    timeline = build_timeline("order_placed", [])

    assert [step["status"] for step in timeline] == list(ORDER_STATUS_STEPS)
    assert [step["label"] for step in timeline] == [
        "Order Placed",
        "Payment Confirmed",
        "Shipped",
        "Out for Delivery",
        "Delivered",
    ]


def test_shipped_backfills_earlier_steps_without_history():
    placed_at = datetime(2024, 3, 1, 10, 0, 0)
    shipped_at = datetime(2024, 3, 2, 9, 30, 0)
    history = [
        {"status": "order_placed", "details": "Order created successfully.", "created_at": placed_at},
        {"status": "shipped", "details": "DHL 123", "created_at": shipped_at},
    ]

    timeline = {step["status"]: step for step in build_timeline("shipped", history)}

    assert timeline["order_placed"]["completed"]
    assert timeline["payment_confirmed"]["completed"]
    assert timeline["payment_confirmed"]["timestamp"] is None
    assert timeline["shipped"]["completed"]
    assert timeline["shipped"]["timestamp"] == shipped_at.isoformat()
    assert timeline["shipped"]["details"] == "DHL 123"
    assert not timeline["out_for_delivery"]["completed"]
    assert not timeline["delivered"]["completed"]


def test_history_row_marks_step_completed_even_past_current_status():
    history = [{"status": "delivered", "details": None, "created_at": "2024-03-05T12:00:00"}]

    timeline = {step["status"]: step for step in build_timeline("order_placed", history)}

    assert timeline["delivered"]["completed"]
    assert timeline["delivered"]["timestamp"] == "2024-03-05T12:00:00"
    assert not timeline["shipped"]["completed"]


def test_unknown_status_backfills_nothing():
    timeline = build_timeline("cancelled", [])
    assert not any(step["completed"] for step in timeline)


def test_first_history_row_wins_and_bad_timestamp_is_dropped():
    history = [
        {"status": "order_placed", "details": "first", "created_at": "garbage"},
        {"status": "order_placed", "details": "second", "created_at": "2024-01-01T00:00:00"},
    ]

    step = build_timeline("order_placed", history)[0]

    assert step["details"] == "first"
    assert step["timestamp"] is None
