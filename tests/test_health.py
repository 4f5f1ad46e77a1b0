# tests/test_health.py
from fastapi import status


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_service(client) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "MediaRoom"
    assert body["docs"] == "/docs"


def test_openapi_documents_error_envelope(client) -> None:
    schema = client.get("/openapi.json").json()

    envelope = schema["components"]["schemas"]["ErrorResponse"]
    assert {"kind", "detail"} <= set(envelope["required"])

    ref = "#/components/schemas/ErrorResponse"
    search = schema["paths"]["/api/v1/search"]["get"]["responses"]
    assert search["400"]["content"]["application/json"]["schema"]["$ref"] == ref
    assert "401" not in search

    unread = schema["paths"]["/api/v1/notifications/unread-count"]["get"]["responses"]
    for code in ("400", "401", "403", "404", "500"):
        assert unread[code]["content"]["application/json"]["schema"]["$ref"] == ref
