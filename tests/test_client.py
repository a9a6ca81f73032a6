import requests

from query_tracker_client import QueryTrackerAPI

FORM_DATA_ID = "3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b"


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else b"{}"
        self.text = ""

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.requests.append((method, url, json))
        return self.responses.pop(0)


def test_list_form_data_unwraps_envelope() -> None:
    session = FakeSession(
        FakeResponse(200, {"statusCode": 200, "data": {"total": 1, "formData": [{"id": FORM_DATA_ID}]}, "message": ""})
    )
    api = QueryTrackerAPI(base_url="http://api.test/", session=session)
    records, error = api.list_form_data()
    assert error is None
    assert records == [{"id": FORM_DATA_ID}]
    assert session.requests[0][:2] == ("GET", "http://api.test/form-data")


def test_create_query_for_form_data_uses_question_as_title() -> None:
    session = FakeSession(FakeResponse(201, {"statusCode": 201, "data": {"id": "q1"}, "message": ""}))
    api = QueryTrackerAPI(base_url="http://api.test", session=session)
    query, error = api.create_query_for_form_data(
        {"id": FORM_DATA_ID, "question": "Is X present?"}, "Needs review"
    )
    assert error is None
    assert query == {"id": "q1"}
    assert session.requests[0] == (
        "POST",
        "http://api.test/queries",
        {"title": "Is X present?", "formDataId": FORM_DATA_ID, "description": "Needs review"},
    )


def test_resolve_query_sends_status_and_description() -> None:
    session = FakeSession(FakeResponse(200, {"statusCode": 200, "data": {"status": "RESOLVED"}, "message": ""}))
    api = QueryTrackerAPI(base_url="http://api.test", session=session)
    query, error = api.resolve_query("q1", "Confirmed present")
    assert query == {"status": "RESOLVED"}
    assert session.requests[0] == (
        "PUT",
        "http://api.test/queries/q1",
        {"status": "RESOLVED", "description": "Confirmed present"},
    )


def test_error_message_is_returned() -> None:
    session = FakeSession(FakeResponse(404, {"statusCode": 404, "message": "Query not found"}))
    api = QueryTrackerAPI(base_url="http://api.test", session=session)
    deleted, error = api.delete_query("q1")
    assert deleted is False
    assert error == {"status_code": 404, "message": "Query not found"}


def test_delete_with_empty_body_succeeds() -> None:
    session = FakeSession(FakeResponse(204))
    api = QueryTrackerAPI(base_url="http://api.test", session=session)
    assert api.delete_query("q1") == (True, None)


def test_update_without_fields_is_refused_locally() -> None:
    session = FakeSession()
    api = QueryTrackerAPI(base_url="http://api.test", session=session)
    result, error = api.update_query("q1")
    assert result is None
    assert error["message"] == "Nothing to update"
    assert session.requests == []
