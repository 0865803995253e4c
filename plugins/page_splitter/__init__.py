"""PDF page splitter plugin."""

manifest = {
    "title": "PDF Page Splitter",
    "summary": "Split selected pages into individually named PDFs, bundled as a ZIP.",
    "blueprint": "page_splitter",
    "category": "Document Utilities",
    "icon": "img/pdf_tools_icon.png",
}


__all__ = ["manifest"]
