"""Tests for the generateContent HTTP client."""
import pytest
import httpx

from generative_api import ApiError, GenerativeClient, MalformedResponse

SCHEMA = {"type": "ARRAY", "items": {"type": "STRING"}}


def make_client(session) -> GenerativeClient:
    return GenerativeClient(
        api_key="test-key",
        model="gemini-test",
        base_url="https://example.test/v1beta/",
        session=session,
    )


def test_request_carries_prompt_schema_and_key(fake_session, fake_response, wrap_answer) -> None:
    """One POST to the model endpoint, credential in the query string."""
    session = fake_session(fake_response(200, wrap_answer(["a", "b"])))

    result = make_client(session).generate("List things", SCHEMA)

    assert result == ["a", "b"]
    assert len(session.posts) == 1
    post = session.posts[0]
    assert post["url"] == "https://example.test/v1beta/models/gemini-test:generateContent"
    assert post["params"] == {"key": "test-key"}
    assert post["timeout"] is None
    assert post["json"] == {
        "contents": [{"role": "user", "parts": [{"text": "List things"}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": SCHEMA,
        },
    }


def test_rate_limit_surfaces_status_and_server_message(fake_session, fake_response) -> None:
    """HTTP 429 becomes ApiError carrying the status and the server's message."""
    body = {"error": {"code": 429, "message": "Resource has been exhausted (e.g. check quota).",
                      "status": "RESOURCE_EXHAUSTED"}}
    session = fake_session(fake_response(429, body, reason="Too Many Requests"))

    with pytest.raises(ApiError) as excinfo:
        make_client(session).generate("prompt", SCHEMA)

    assert excinfo.value.status == 429
    assert excinfo.value.message == "Resource has been exhausted (e.g. check quota)."
    assert len(session.posts) == 1


def test_unparseable_error_body_falls_back_to_status_line(fake_session, fake_response) -> None:
    session = fake_session(fake_response(502, "<html>Bad Gateway</html>", reason="Bad Gateway"))

    with pytest.raises(ApiError) as excinfo:
        make_client(session).generate("prompt", SCHEMA)

    assert excinfo.value.status == 502
    assert excinfo.value.message == "502 Bad Gateway"


def test_error_body_without_message_is_dumped(fake_session, fake_response) -> None:
    session = fake_session(fake_response(400, {"detail": "bad"}, reason="Bad Request"))

    with pytest.raises(ApiError) as excinfo:
        make_client(session).generate("prompt", SCHEMA)

    assert excinfo.value.message == '{"detail": "bad"}'


def test_transport_failure_is_api_error_without_status(fake_session) -> None:
    session = fake_session(httpx.ConnectError("connection refused"))

    with pytest.raises(ApiError) as excinfo:
        make_client(session).generate("prompt", SCHEMA)

    assert excinfo.value.status is None
    assert "connection refused" in excinfo.value.message


@pytest.mark.parametrize("body", [
    {},
    {"candidates": []},
    {"candidates": [{"content": {"parts": []}}]},
    {"candidates": [{"finishReason": "SAFETY"}]},
    {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
])
def test_missing_answer_text_is_malformed(fake_session, fake_response, body) -> None:
    """A success status without answer text is not silently accepted."""
    session = fake_session(fake_response(200, body))

    with pytest.raises(MalformedResponse):
        make_client(session).generate("prompt", SCHEMA)


def test_non_json_answer_text_is_malformed(fake_session, fake_response) -> None:
    body = {"candidates": [{"content": {"parts": [{"text": "[{\"question\": \"trunc"}]}}]}
    session = fake_session(fake_response(200, body))

    with pytest.raises(MalformedResponse, match="not valid JSON"):
        make_client(session).generate("prompt", SCHEMA)


def test_non_json_envelope_is_malformed(fake_session, fake_response) -> None:
    session = fake_session(fake_response(200, "<html>proxy page</html>"))

    with pytest.raises(MalformedResponse):
        make_client(session).generate("prompt", SCHEMA)


def test_missing_api_key_fails_at_construction(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(RuntimeError, match="GEMINI_API_KEY"):
        GenerativeClient()


def test_api_key_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", " env-key ")

    with GenerativeClient() as client:
        assert client.api_key == "env-key"
        assert client.endpoint.endswith(":generateContent")


def test_missing_api_key_opens_no_connection_pool(monkeypatch) -> None:
    created: list[object] = []
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setattr(httpx, "Client", lambda *args, **kwargs: created.append(args) or None)

    with pytest.raises(RuntimeError):
        GenerativeClient()

    assert created == []


def test_context_manager_closes_its_own_session(monkeypatch, fake_session, fake_response) -> None:
    owned = fake_session(fake_response(200, {}))
    monkeypatch.setattr(httpx, "Client", lambda *args, **kwargs: owned)

    with GenerativeClient(api_key="test-key"):
        pass

    assert owned.closed


def test_injected_session_is_left_open(fake_session, fake_response) -> None:
    session = fake_session(fake_response(200, {}))

    with make_client(session):
        pass

    assert not session.closed
