import json
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from showcase_site.api.endpoints.contact import FAILURE_MESSAGE, SUCCESS_MESSAGE, UNCONFIGURED_MESSAGE
from showcase_site.core.intake import INVALID_EMAIL_MESSAGE, MISSING_FIELDS_MESSAGE


def valid_payload(**overrides):
    payload = {"name": "Jane Doe", "email": "jane@example.com", "message": "I would like to advertise."}
    payload.update(overrides)
    return payload


def test_valid_submission_is_forwarded(client, provider_stub):
    response = client.post("/api/contact", json=valid_payload())

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": SUCCESS_MESSAGE}
    assert len(provider_stub.requests) == 1


@pytest.mark.parametrize("missing", ["name", "email", "message"])
def test_missing_fields_are_rejected_without_calling_provider(client, provider_stub, missing):
    payload = valid_payload()
    del payload[missing]

    response = client.post("/api/contact", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": MISSING_FIELDS_MESSAGE}
    assert provider_stub.requests == []


def test_invalid_email_is_rejected(client, provider_stub):
    response = client.post("/api/contact", json=valid_payload(email="jane.example.com"))

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": INVALID_EMAIL_MESSAGE}
    assert provider_stub.requests == []


def test_email_format_policy_can_be_relaxed(make_client, provider_stub):
    client = make_client(require_valid_email=False)
    response = client.post("/api/contact", json=valid_payload(email="jane.example.com"))
    assert response.status_code == 200
    assert len(provider_stub.requests) == 1


def test_partnership_form_aliases_are_forwarded(client, provider_stub):
    payload = {
        "contactName": "Sam Partner",
        "companyName": "Acme",
        "email": "sam@acme.com",
        "message": "Let's work together",
        "partnershipType": "sponsorship",
        "formType": "partnership",
    }

    response = client.post("/api/contact", json=payload)

    assert response.status_code == 200
    fields = parse_qs(provider_stub.requests[0].content.decode())
    assert fields["subject"] == ["New Partnership Request from Sam Partner"]
    text = fields["text"][0]
    assert "Name: Sam Partner" in text
    assert "Company: Acme" in text
    assert "Partnership Type: sponsorship" in text
    assert "Form Type: Partnership Inquiry" in text


def test_general_form_subject_has_no_partnership(client, provider_stub):
    client.post("/api/contact", json=valid_payload(formType="general"))
    fields = parse_qs(provider_stub.requests[0].content.decode())
    assert "Partnership" not in fields["subject"][0]


def test_form_encoded_submission_is_accepted(client, provider_stub):
    response = client.post("/api/contact", data=valid_payload(companyName="Acme"))

    assert response.status_code == 200
    fields = parse_qs(provider_stub.requests[0].content.decode())
    assert "Company: Acme" in fields["text"][0]


def test_unparsable_json_counts_as_missing_fields(client, provider_stub):
    response = client.post(
        "/api/contact", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == MISSING_FIELDS_MESSAGE


@pytest.mark.parametrize(
    "responder",
    [
        lambda request: httpx.Response(200, json={"message": "'to' parameter is not a valid address"}),
        lambda request: httpx.Response(401, json={"message": "Forbidden - invalid api key"}),
        lambda request: httpx.Response(503, text="<html>Service Unavailable</html>"),
    ],
    ids=["no-id", "unauthorized", "unavailable"],
)
def test_provider_failures_return_generic_message(client, provider_stub, responder):
    provider_stub.respond = responder

    response = client.post("/api/contact", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": FAILURE_MESSAGE}
    assert "Forbidden" not in response.text
    assert "not a valid address" not in response.text


def test_network_error_returns_generic_message(client, provider_stub):
    def refuse(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    provider_stub.respond = refuse

    response = client.post("/api/contact", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": FAILURE_MESSAGE}


def test_missing_credential_reports_unconfigured(make_client, provider_stub):
    client = make_client(mailgun_api_key=None)

    response = client.post("/api/contact", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": UNCONFIGURED_MESSAGE}
    assert provider_stub.requests == []


def test_web3forms_provider_is_used_when_selected(make_client, provider_stub):
    provider_stub.respond = lambda request: httpx.Response(200, json={"success": True, "message": "Email sent"})
    client = make_client(mail_provider="web3forms", web3forms_access_key="access-test")

    response = client.post("/api/contact", json=valid_payload(companyName="Acme"))

    assert response.status_code == 200
    request = provider_stub.requests[0]
    assert request.url.host == "api.web3forms.com"
    assert json.loads(request.content)["company"] == "Acme"


def test_oversized_body_is_rejected(make_client, provider_stub):
    client = make_client(max_body_bytes=200)

    response = client.post("/api/contact", json=valid_payload(message="x" * 500))

    assert response.status_code == 413
    assert response.json()["success"] is False
    assert provider_stub.requests == []


def test_unhandled_errors_use_generic_envelope(make_client):
    client = make_client(raise_server_exceptions=False)

    class BrokenForwarder:
        async def forward(self, submission):
            raise RuntimeError("database exploded")

    client.app.state.forwarder = BrokenForwarder()

    response = client.post("/api/contact", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Something went wrong!"}


def test_health_reports_ok_with_current_timestamp(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    timestamp = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    assert abs(datetime.now(timezone.utc) - timestamp) < timedelta(minutes=1)


def test_unknown_paths_fall_back_to_home_page(client):
    response = client.get("/about/team")
    assert response.status_code == 200
    assert "Showcase home" in response.text


def test_static_files_are_served(client):
    response = client.get("/styles.css")
    assert response.status_code == 200
    assert "margin" in response.text


def test_path_traversal_falls_back_to_home_page(client):
    response = client.get("/..%2F..%2Fetc%2Fpasswd")
    assert response.status_code == 200
    assert "Showcase home" in response.text


def test_unknown_api_paths_are_not_found(client):
    response = client.get("/api/missing")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not found"}


def test_large_multipart_message_under_body_limit_is_accepted(client, provider_stub):
    long_message = "x" * (2 * 1024 * 1024)

    response = client.post(
        "/api/contact",
        data=valid_payload(message=long_message),
        files={"attachment": ("note.txt", b"see message", "text/plain")},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": SUCCESS_MESSAGE}
    fields = parse_qs(provider_stub.requests[0].content.decode())
    assert long_message in fields["text"][0]


def test_json_sent_as_plain_text_is_not_parsed(client, provider_stub):
    response = client.post(
        "/api/contact",
        content=json.dumps(valid_payload()).encode(),
        headers={"content-type": "text/plain"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": MISSING_FIELDS_MESSAGE}
    assert provider_stub.requests == []


def test_chunked_body_over_limit_is_rejected(make_client, provider_stub):
    client = make_client(max_body_bytes=200)

    def chunks():
        for _ in range(5):
            yield b"x" * 100

    response = client.post("/api/contact", content=chunks(), headers={"content-type": "application/json"})

    assert response.status_code == 413
    assert response.json()["success"] is False
    assert provider_stub.requests == []
