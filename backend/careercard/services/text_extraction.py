"""
Plain text from uploaded resume files using PyMuPDF (no poppler dependency).
"""
import fitz  # PyMuPDF


class UnsupportedResumeFile(ValueError):
    pass


def pdf_to_text(pdf_bytes: bytes) -> str:
    """Concatenate the text layer of every page, one page per block."""
    try:
        pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise UnsupportedResumeFile(f"Could not read PDF: {e}")

    try:
        pages = [pdf_document[page_num].get_text() for page_num in range(len(pdf_document))]
    finally:
        pdf_document.close()
    return "\n\n".join(pages)


def resume_file_to_text(filename: str, content_type: str, data: bytes) -> str:
    name = (filename or "").lower()
    if name.endswith(".pdf") or content_type == "application/pdf":
        return pdf_to_text(data)
    if name.endswith(".txt") or (content_type or "").startswith("text/"):
        return data.decode("utf-8", errors="replace")
    raise UnsupportedResumeFile("Unsupported file type. Upload a PDF or .txt file")
