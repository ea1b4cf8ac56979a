"""
Text extraction for uploaded documents

Text-like files are decoded and stored on the document so that search and
the assistant can read them; other formats contribute their description only.
"""
import logging

from django.utils import timezone

logger = logging.getLogger('rms.documents')

TEXT_EXTENSIONS = {'txt', 'md', 'markdown', 'csv', 'tsv', 'json', 'xml', 'html', 'htm',
                   'tex', 'bib', 'rst', 'yaml', 'yml', 'log'}
TEXT_CONTENT_TYPES = ('text/', 'application/json', 'application/xml', 'application/x-tex')

# Upper bound on stored extracted text
MAX_CONTENT_CHARS = 200_000


class DocumentProcessingError(Exception):
    """Raised when a stored document cannot be read"""


def is_text_document(document):
    file_type = (document.file_type or '').lower()
    return document.extension in TEXT_EXTENSIONS or file_type.startswith(TEXT_CONTENT_TYPES) or file_type in TEXT_EXTENSIONS


def extract_text(document):
    """Return the text content of a document's stored file ('' when not text-like or absent)"""
    if not document.file or not is_text_document(document):
        return ''
    try:
        with document.file.open('rb') as handle:
            raw = handle.read()
    except (OSError, ValueError) as e:
        raise DocumentProcessingError(f"Could not read {document.file_name}: {str(e)}") from e
    return raw.decode('utf-8', errors='replace')[:MAX_CONTENT_CHARS]


def process_document(document):
    """
    Extract and store a document's text, marking it PROCESSED, or FAILED
    when the stored file cannot be read. Returns True on success.
    """
    try:
        document.content_text = extract_text(document)
    except DocumentProcessingError as e:
        logger.error(f"Processing document {document.id} failed: {str(e)}", exc_info=True)
        document.status = 'FAILED'
        document.save(update_fields=['status', 'updated_at'])
        return False

    document.status = 'PROCESSED'
    document.processed_at = timezone.now()
    document.save(update_fields=['content_text', 'status', 'processed_at', 'updated_at'])
    logger.info(f"Processed document {document.id} ({document.file_name}): {len(document.content_text)} characters extracted")
    return True
