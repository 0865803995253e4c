from io import BytesIO

import pytest
from PyPDF2 import PdfWriter

from app import create_app


def _blank_pdf(pages: int) -> bytes:
    writer = PdfWriter()
    for index in range(pages):
        # Distinct widths let tests tell pages apart after extraction.
        writer.add_blank_page(width=100 + index, height=200)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def make_pdf():
    return _blank_pdf


@pytest.fixture
def client():
    app = create_app("TestingConfig")
    yield app.test_client()
    app.extensions["split_artifacts"].clear()
