from app import create_app


def test_home_lists_plugins():
    app = create_app("TestingConfig")
    client = app.test_client()
    response = client.get("/")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    titles = [item["title"] for item in payload["data"]["plugins"]]
    assert "PDF Page Splitter" in titles
    assert payload["data"]["site"]["title"] == "PDF Page Splitter"
    assert response.headers.get("Content-Security-Policy")
    assert response.headers.get("X-Request-ID")


def test_unknown_route_uses_error_envelope():
    client = create_app("TestingConfig").test_client()
    response = client.get("/nope")
    assert response.status_code == 404
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "not_found"


def test_yaml_overrides_request_limit(tmp_path):
    config_file = tmp_path / "config.yml"
    config_file.write_text("site:\n  max_content_length_mb: 1\n", encoding="utf-8")
    app = create_app(config_path=config_file)
    assert app.config["MAX_CONTENT_LENGTH"] == 1024 * 1024

    response = app.test_client().post(
        "/api/page_splitter/split",
        data={"ranges": "1", "blob": "x" * (2 * 1024 * 1024)},
    )
    assert response.status_code == 413
    assert response.get_json()["error"]["code"] == "payload_too_large"
