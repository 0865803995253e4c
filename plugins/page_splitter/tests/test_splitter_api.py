import zipfile
from io import BytesIO

from app import create_app
from plugins.page_splitter.api import _upload_limit
from plugins.page_splitter.core import MAX_FILE_SIZE_BYTES, load_settings


def _post_split(client, pdf: bytes | None, query: str = "", **fields):
    data = dict(fields)
    if pdf is not None:
        data["file"] = (BytesIO(pdf), "sample.pdf")
    return client.post(
        f"/api/page_splitter/split{query}", data=data, content_type="multipart/form-data"
    )


def test_split_returns_manifest_and_download_link(client, make_pdf):
    response = _post_split(
        client, make_pdf(4), ranges="01-03", exclusions="2", prefix="p_", zip_name="pages"
    )
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    data = payload["data"]
    assert data["page_count"] == 4
    assert data["sequence"] == [1, 3]
    assert data["padding_length"] == 2
    assert data["processed"] == 2
    assert data["failed"] == 0
    assert data["archive_name"] == "pages.zip"
    assert [item["file_name"] for item in data["files"]] == ["p_01.pdf", "p_03.pdf"]
    assert all(item["success"] and item["error"] is None for item in data["files"])

    download = client.get(data["download_url"])
    assert download.status_code == 200
    assert download.headers.get("Content-Type") == "application/zip"
    assert "pages.zip" in download.headers.get("Content-Disposition", "")
    with zipfile.ZipFile(BytesIO(download.data)) as zf:
        assert zf.namelist() == ["p_01.pdf", "p_03.pdf"]


def test_split_download_flag_streams_zip(client, make_pdf):
    response = _post_split(client, make_pdf(2), query="?download=1", ranges="1-2", zip_name="my pages")
    assert response.status_code == 200
    assert response.headers.get("Content-Type") == "application/zip"
    assert response.headers.get("Content-Disposition", "").startswith("attachment;")
    assert "my_pages.zip" in response.headers.get("Content-Disposition", "")
    with zipfile.ZipFile(BytesIO(response.data)) as zf:
        assert zf.namelist() == ["1.pdf", "2.pdf"]


def test_split_defaults_archive_name(client, make_pdf):
    response = _post_split(client, make_pdf(1), ranges="1")
    assert response.get_json()["data"]["archive_name"] == "split_files.zip"


def test_split_requires_file(client):
    response = _post_split(client, None, ranges="1-2")
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "page_splitter.missing_file"
    assert error["message"] == "Please upload a PDF file"


def test_split_requires_ranges(client, make_pdf):
    response = _post_split(client, make_pdf(1), ranges="  ")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_splitter.missing_ranges"


def test_split_rejects_bad_range_format(client, make_pdf):
    response = _post_split(client, make_pdf(3), ranges="1-")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_splitter.invalid_format"


def test_split_rejects_inverted_range(client, make_pdf):
    response = _post_split(client, make_pdf(3), ranges="3-1")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_splitter.range_order"


def test_split_rejects_insufficient_pages(client, make_pdf):
    response = _post_split(client, make_pdf(5), ranges="1-10")
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "page_splitter.insufficient_pages"
    assert error["details"] == {"highest": 10, "page_count": 5}


def test_split_rejects_fake_pdf_signature(client):
    response = _post_split(client, b"not really a pdf", ranges="1")
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "page_splitter.invalid_upload"
    assert "signature" in error["message"].lower()


def test_split_rejects_unknown_fields(client, make_pdf):
    response = _post_split(client, make_pdf(1), ranges="1", rotate="90")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_splitter.invalid_form"


def test_new_run_supersedes_previous_archive(client, make_pdf):
    first = _post_split(client, make_pdf(2), ranges="1").get_json()["data"]
    second = _post_split(client, make_pdf(2), ranges="2").get_json()["data"]
    assert first["download_url"] != second["download_url"]

    stale = client.get(first["download_url"])
    assert stale.status_code == 404
    assert stale.get_json()["error"]["code"] == "page_splitter.artifact_missing"
    assert client.get(second["download_url"]).status_code == 200


def test_failed_run_releases_previous_archive(client, make_pdf):
    first = _post_split(client, make_pdf(2), ranges="1").get_json()["data"]
    failed = _post_split(client, make_pdf(2), ranges="1-9")
    assert failed.status_code == 400
    assert client.get(first["download_url"]).status_code == 404


def test_archives_are_private_to_their_session(make_pdf):
    app = create_app("TestingConfig")
    owner = app.test_client()
    other = app.test_client()
    data = _post_split(owner, make_pdf(1), ranges="1").get_json()["data"]
    assert other.get(data["download_url"]).status_code == 404
    assert owner.get(data["download_url"]).status_code == 200
    app.extensions["split_artifacts"].clear()


def test_metadata_endpoint_reports_pages_and_size(client, make_pdf):
    response = client.post(
        "/api/page_splitter/metadata",
        data={"file": (BytesIO(make_pdf(3)), "meta.pdf")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    payload = response.get_json()["data"]
    assert payload["pages"] == 3
    assert payload["size_bytes"] > 0
    assert payload["size_label"]


def test_metadata_requires_file(client):
    response = client.post(
        "/api/page_splitter/metadata", data={}, content_type="multipart/form-data"
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "page_splitter.missing_file"


def test_responses_carry_request_id(client, make_pdf):
    response = _post_split(client, make_pdf(1), ranges="1")
    request_id = response.headers.get("X-Request-ID")
    assert request_id
    assert response.get_json()["request_id"] == request_id


def test_upload_limit_defaults_to_document_size_cap():
    limit = _upload_limit(load_settings({}))
    assert limit.max_files == 1
    assert limit.max_size == MAX_FILE_SIZE_BYTES
    assert _upload_limit(load_settings({"upload": {"max_mb": 20}})).max_size == 20 * 1024 * 1024
