from datetime import datetime


def test_list_form_data_includes_null_query(client, form_data) -> None:
    response = client.get("/form-data")
    assert response.status_code == 200
    body = response.json()
    assert body["statusCode"] == 200
    assert body["data"]["total"] == 1
    record = body["data"]["formData"][0]
    assert record == {"id": form_data.id, "question": "Is X present?", "answer": "Yes", "query": None}


def test_created_query_round_trips_through_listing(client, form_data) -> None:
    client.post("/queries", json={"title": "Q", "description": "D", "formDataId": form_data.id})
    record = client.get("/form-data").json()["data"]["formData"][0]
    assert record["query"]["title"] == "Q"
    assert record["query"]["description"] == "D"
    assert record["query"]["status"] == "OPEN"
    assert record["query"]["formDataId"] == form_data.id


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_demo_data_seeded_on_startup(settings, memory_store) -> None:
    from dataclasses import replace

    from fastapi.testclient import TestClient

    from query_tracker_api.app.main import create_app
    from query_tracker_api.app.services.form_data_service import DEMO_FORM_DATA

    app = create_app(settings=replace(settings, seed_demo_data=True), store=memory_store)
    with TestClient(app) as client:
        body = client.get("/form-data").json()
    assert body["data"]["total"] == len(DEMO_FORM_DATA)


def test_api_prefix(settings, store) -> None:
    from dataclasses import replace

    from fastapi.testclient import TestClient

    from query_tracker_api.app.main import create_app

    app = create_app(settings=replace(settings, api_prefix="/api/"), store=store)
    with TestClient(app) as client:
        assert client.get("/api/form-data").status_code == 200
        assert client.get("/form-data").status_code == 404
    assert app.state.store is store
    assert not hasattr(app.state, "settings")
