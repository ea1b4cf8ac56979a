"""
Document retrieval for the research assistant

Documents are ranked by the share of query words found in their description
and extracted text; the best matches are turned into a prompt context.
"""
import logging
import os

from django.conf import settings

from rms.documents.models import ProjectDocument
from .llm import LLMClient, LLMUnavailable

logger = logging.getLogger('rms.assistant')

SNIPPET_LENGTH = 200
SNIPPET_LEAD = 50

FALLBACK_ANSWER = (
    "I understand you're asking about: {query}. However, I need more specific information "
    "from the documents to provide a comprehensive answer. Please check if the relevant "
    "documents are uploaded to the project."
)


def _setting(name, default, cast=int):
    return cast(getattr(settings, name, os.getenv(name, default)))


def calculate_relevance(content, query):
    """Fraction of the query's words contained in the content"""
    if not content or not query:
        return 0.0
    words = query.lower().split()
    if not words:
        return 0.0
    lowered = content.lower()
    matches = sum(1 for word in words if word in lowered)
    return matches / len(words)


def extract_snippet(content, query):
    if not content or len(content) < SNIPPET_LENGTH:
        return content or ''
    index = content.lower().find((query or '').lower())
    if index == -1 or not query:
        return content[:SNIPPET_LENGTH] + '...'
    start = max(0, index - SNIPPET_LEAD)
    end = min(len(content), index + SNIPPET_LENGTH - SNIPPET_LEAD)
    return content[start:end] + '...'


class DocumentMatch:
    __slots__ = ('document', 'relevance', 'snippet')

    def __init__(self, document, relevance, snippet):
        self.document = document
        self.relevance = relevance
        self.snippet = snippet

    def as_source(self):
        return {
            'documentId': self.document.pk,
            'content': self.document.description,
            'fileName': self.document.file_name,
            'relevance': round(self.relevance, 4),
            'context': self.snippet,
        }


def search_documents(query, project_id=None, limit=None, min_relevance=None):
    """Best matching documents (of one project when project_id is given), most relevant first"""
    limit = limit if limit is not None else _setting('RAG_MAX_SOURCES', '5')
    min_relevance = min_relevance if min_relevance is not None else _setting('RAG_MIN_RELEVANCE', '0.1', float)

    documents = ProjectDocument.objects.all()
    if project_id:
        documents = documents.filter(project_id=project_id)

    matches = []
    for document in documents.only('id', 'file_name', 'description', 'content_text', 'upload_date'):
        text = document.searchable_text
        if not text:
            continue
        relevance = calculate_relevance(text, query)
        if relevance > min_relevance:
            matches.append(DocumentMatch(document, relevance, extract_snippet(text, query)))

    matches.sort(key=lambda match: (-match.relevance, -match.document.pk))
    return matches[:limit]


def build_context(matches):
    return "\n\n".join(f"From {match.document.file_name}: {match.snippet}" for match in matches)


def build_prompt(query, context):
    return (
        f"Based on the following research documents, please answer this question: {query}\n\n"
        f"Context from documents:\n{context}\n\n"
        "Please provide a clear, concise answer based on the provided context. "
        "If the context doesn't contain enough information, please mention that."
    )


def answer_question(query, project_id=None, client=None):
    """
    Retrieve documents and ask the language model.

    Returns {answer, sources, query, llm_used}; the answer falls back to a
    fixed message when the model is unavailable.
    """
    matches = search_documents(query, project_id)
    prompt = build_prompt(query, build_context(matches))
    client = client or LLMClient()

    try:
        answer = client.ask(prompt)
        llm_used = True
    except LLMUnavailable as e:
        logger.warning(f"Answering '{query}' without the language model: {str(e)}")
        answer = FALLBACK_ANSWER.format(query=query)
        llm_used = False

    return {
        'answer': answer,
        'sources': [match.as_source() for match in matches],
        'query': query,
        'llm_used': llm_used,
    }
