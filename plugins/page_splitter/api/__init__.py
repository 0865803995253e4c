"""Page splitter API blueprint with standardized responses."""

from __future__ import annotations

import uuid

from flask import Blueprint, Response, current_app, request, send_file, session, url_for

from common.artifacts import current_store
from common.errors import AppError, InternalAppError, NotFoundAppError, ValidationAppError
from common.forms import get_bool
from common.io import archive_filename, buffer_from_bytes
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import (
    FileLimit,
    SchemaModel,
    ValidationError,
    enforce_limits,
    parse_model,
    validate_mime,
)

from ..core import (
    MAX_FILE_SIZE_BYTES,
    ErrorKind,
    InsufficientPagesError,
    SplitConfiguration,
    SplitError,
    SplitterSettings,
    load_settings,
    pdf_metadata,
    run_split,
    validate_configuration,
)

logger = get_logger()

_OWNER_KEY = "page_splitter_owner"


class SplitForm(SchemaModel):
    ranges: str = ""
    exclusions: str = ""
    prefix: str = ""
    suffix: str = ""
    zip_name: str = ""


api_bp = Blueprint("page_splitter", __name__, url_prefix="/api/page_splitter")


def _settings() -> SplitterSettings:
    raw = current_app.config.get("PLUGIN_SETTINGS", {}).get("page_splitter", {})
    return load_settings(raw)


def _upload_limit(settings: SplitterSettings) -> FileLimit:
    return FileLimit.from_settings(
        settings.upload,
        default_max_files=1,
        default_max_mb=MAX_FILE_SIZE_BYTES // (1024 * 1024),
    )


def _owner() -> str:
    owner = session.get(_OWNER_KEY)
    if not owner:
        owner = uuid.uuid4().hex
        session[_OWNER_KEY] = owner
    return owner


def _app_error(exc: SplitError) -> AppError:
    code = f"page_splitter.{exc.kind.value}"
    if exc.kind is ErrorKind.ARCHIVE_BUILD:
        return InternalAppError(message=exc.message, code=code)
    details = None
    if isinstance(exc, InsufficientPagesError):
        details = {"highest": exc.highest, "page_count": exc.page_count}
    return ValidationAppError(message=exc.message, code=code, details=details)


def _invalid_upload(exc: ValidationError) -> Response:
    details = {"errors": exc.details} if exc.details is not None else None
    return fail(
        ValidationAppError(message=str(exc), code="page_splitter.invalid_upload", details=details)
    )


@api_bp.post("/split")
def split() -> Response:
    try:
        form = parse_model(SplitForm, request.form.to_dict())
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="page_splitter.invalid_form",
                details={"errors": exc.details},
            )
        )

    settings = _settings()
    file = request.files.get("file")
    if file:
        try:
            enforce_limits([file], _upload_limit(settings))
            validate_mime([file], {"application/pdf"})
        except ValidationError as exc:
            return _invalid_upload(exc)

    config = SplitConfiguration(
        document=file.read() if file else None,
        ranges=form.ranges,
        exclusions=form.exclusions,
        prefix=form.prefix,
        suffix=form.suffix,
        zip_name=form.zip_name,
    )
    issue = validate_configuration(config)
    if issue is not None:
        return fail(_app_error(issue))

    store = current_store()
    owner = _owner()
    store.release(owner)

    try:
        run = run_split(config, compress_level=settings.compress_level)
    except SplitError as exc:
        logger.info("split rejected (%s): %s", exc.kind.value, exc.message)
        return fail(_app_error(exc))

    archive_name = archive_filename(config.zip_name, fallback=settings.default_zip_name)
    if get_bool(request.args, "download"):
        return send_file(
            buffer_from_bytes(run.archive),
            mimetype="application/zip",
            as_attachment=True,
            download_name=archive_name,
            max_age=0,
        )

    artifact = store.publish(owner, run.archive, archive_name)
    payload = {
        "files": [result.to_dict() for result in run.results],
        "page_count": run.plan.page_count,
        "sequence": run.plan.sequence,
        "padding_length": run.plan.padding_length,
        "processed": run.succeeded,
        "failed": run.failed,
        "archive_name": archive_name,
        "archive_size_bytes": artifact.size_bytes,
        "download_url": url_for(".download", token=artifact.token),
    }
    return ok(payload)


@api_bp.get("/download/<token>")
def download(token: str) -> Response:
    artifact = current_store().get(_owner(), token)
    if artifact is None:
        return fail(
            NotFoundAppError(
                message="Archive not found or superseded by a newer run",
                code="page_splitter.artifact_missing",
            )
        )
    return send_file(
        artifact.path,
        mimetype="application/zip",
        as_attachment=True,
        download_name=artifact.download_name,
        max_age=0,
    )


@api_bp.post("/metadata")
def metadata() -> Response:
    file = request.files.get("file")
    if not file:
        return fail(
            ValidationAppError(message="Please upload a PDF file", code="page_splitter.missing_file")
        )

    try:
        enforce_limits([file], _upload_limit(_settings()))
        validate_mime([file], {"application/pdf"})
    except ValidationError as exc:
        return _invalid_upload(exc)

    try:
        info = pdf_metadata(file.read())
    except SplitError as exc:
        return fail(_app_error(exc))

    return ok({"pages": info.pages, "size_bytes": info.size_bytes, "size_label": info.size_label})


blueprints = [api_bp]


__all__ = ["blueprints", "split", "download", "metadata"]
