from __future__ import annotations

import json

import pytest
import requests

from turnero.backend.client import BackendClient, BackendConfig, extract_message
from turnero.core.exceptions import BackendError


def _response(status, body=None, text=None):
    resp = requests.Response()
    resp.status_code = status
    resp.encoding = "utf-8"
    if body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = (text or "").encode("utf-8")
    return resp


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, token_provider=None):
    return BackendClient(
        BackendConfig(base_url="http://backend.test/api/", timeout=2.5),
        session=session,
        token_provider=token_provider,
    )


def test_success_returns_decoded_json_and_sends_bearer_token():
    session = FakeSession(_response(200, [{"id": 1, "nombre": "Sala Azul"}]))
    client = _client(session, token_provider=lambda: "abc")

    assert client.get("/salas") == [{"id": 1, "nombre": "Sala Azul"}]

    call = session.calls[0]
    assert call["url"] == "http://backend.test/api/salas"
    assert call["headers"]["Authorization"] == "Bearer abc"
    assert call["timeout"] == 2.5


def test_explicit_token_wins_over_provider():
    session = FakeSession(_response(200, {}))
    _client(session, token_provider=lambda: "from-session").post("/usuarios/auth/logout", {}, token="explicit")
    assert session.calls[0]["headers"]["Authorization"] == "Bearer explicit"


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"mensaje": "La sala ya existe"}, "La sala ya existe"),
        ({"error": "DNI inválido"}, "DNI inválido"),
        ({"message": "Bad request"}, "Bad request"),
        ({}, "Error al agregar la sala."),
    ],
)
def test_error_message_is_taken_from_body(body, expected):
    client = _client(FakeSession(_response(400, body)))
    with pytest.raises(BackendError) as exc:
        client.post("/salas", {"nombre": "x"}, default_error="Error al agregar la sala.")
    assert exc.value.message == expected
    assert exc.value.status == 400


def test_plain_text_error_body_is_used_as_message():
    client = _client(FakeSession(_response(500, text="Internal failure")))
    with pytest.raises(BackendError) as exc:
        client.get("/turnos/full/all")
    assert exc.value.message == "Internal failure"


def test_network_failure_maps_to_connection_error():
    client = _client(FakeSession(error=requests.ConnectionError("refused")))
    with pytest.raises(BackendError) as exc:
        client.get("/salas")
    assert exc.value.message == "Error de conexión con el servidor."
    assert exc.value.status is None
    assert not exc.value.is_auth_failure


def test_unauthorized_is_flagged():
    client = _client(FakeSession(_response(401, {"mensaje": "Token inválido"})))
    with pytest.raises(BackendError) as exc:
        client.get("/turnos/full/all")
    assert exc.value.is_auth_failure


def test_no_content_returns_none():
    assert _client(FakeSession(_response(204))).delete("/salas/3") is None


def test_extract_message_ignores_non_dict_bodies():
    assert extract_message(["x"], "fallback") == "fallback"
    assert extract_message({"mensaje": "  "}, "fallback") == "fallback"


def test_error_body_is_kept_on_the_exception():
    body = {"mensaje": "Error al actualizar usuario", "error": "duplicate key violates email_unique"}
    client = _client(FakeSession(_response(400, body)))
    with pytest.raises(BackendError) as exc:
        client.put("/usuarios/2", {"email": "x@gmail.com"})
    assert exc.value.message == "Error al actualizar usuario"
    assert exc.value.body == body
    assert exc.value.detail == "duplicate key violates email_unique"


def test_detail_falls_back_to_message_without_error_field():
    client = _client(FakeSession(_response(400, {"mensaje": "La sala ya existe"})))
    with pytest.raises(BackendError) as exc:
        client.post("/salas", {"nombre": "x"})
    assert exc.value.detail == "La sala ya existe"
