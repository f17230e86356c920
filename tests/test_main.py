from fastapi import FastAPI

from tests.conftest import create_access_token


def test_module_level_app_serves_all_routes():
    from storefront.main import app

    assert isinstance(app, FastAPI)
    paths = {route.path for route in app.routes}
    assert {
        "/health",
        "/cart/add",
        "/cart/{user_id}",
        "/checkout",
        "/orders/{order_id}",
        "/orders/{order_id}/status",
    } <= paths
    assert app.state.sessionmaker is not None


def test_expired_token_is_rejected(client):
    token = create_access_token({"id": 1, "userType": "customer"}, expires_minutes=-1)

    response = client.get("/cart/1", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid or expired token"}
