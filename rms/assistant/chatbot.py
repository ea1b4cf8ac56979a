"""
Conversational assistant

``chat`` stores the user's message, gathers context from global search and
project documents, and asks the language model with the recent history.
When the model is unavailable the reply comes from ``rule_based_answer``,
which answers simple questions about projects, team, documents, budgets,
risks and tasks straight from the database.
"""
import logging
import os

from django.conf import settings
from django.db.models import Count, Sum
from django.db.models.functions import Coalesce

from rms.documents.models import ProjectDocument
from rms.finance.models import ProjectBudget
from rms.finance.services import ZERO
from rms.planning.models import ProjectTask
from rms.projects.models import ResearchProject
from rms.risks.models import ProjectRisk
from rms.search.engine import SearchFilters, find_hits
from rms.team.models import TeamMember
from .llm import LLMClient, LLMUnavailable
from .models import ChatMessage
from .retrieval import build_context, search_documents

logger = logging.getLogger('rms.assistant')

CHAT_SYSTEM_PROMPT = (
    "You are a research management assistant. Answer questions about the user's research "
    "projects, teams, documents, budgets, risks and tasks using the context provided. "
    "If the context does not contain the answer, say so."
)

SEARCH_CONTEXT_HITS = 5

INTENT_KEYWORDS = [
    ('project', ('project', 'projects')),
    ('team', ('team', 'member', 'members', 'person', 'people')),
    ('document', ('document', 'documents', 'file', 'files', 'paper', 'papers')),
    ('budget', ('budget', 'budgets', 'cost', 'costs', 'spend', 'spending', 'expense')),
    ('risk', ('risk', 'risks')),
    ('task', ('task', 'tasks', 'todo')),
]

COUNT_WORDS = ('count', 'how many', 'number of', 'total')


def detect_intent(message):
    """First matching intent name, or None for a general question"""
    words = set(message.lower().replace('?', ' ').replace(',', ' ').split())
    for intent, keywords in INTENT_KEYWORDS:
        if words.intersection(keywords):
            return intent
    return None


def _wants_count(message):
    return any(word in message for word in COUNT_WORDS)


def _status_breakdown(queryset, field='status'):
    rows = queryset.values(field).annotate(total=Count('id')).order_by(field)
    return ', '.join(f"{row[field]}: {row['total']}" for row in rows)


def _projects_answer(message, projects):
    if 'status' in message:
        breakdown = _status_breakdown(projects)
        return f"Project Status: {breakdown}" if breakdown else "There are no projects yet."
    if _wants_count(message):
        return f"Total Projects: {projects.count()}"
    lines = [
        f"Project: {project.title} | Status: {project.status} | Budget: ${project.budget:,.2f}"
        for project in projects[:5]
    ]
    return "\n".join(lines) or "There are no projects yet."


def _team_answer(message, members):
    if _wants_count(message):
        return f"Total Team Members: {members.count()}"
    lines = [
        f"Member: {member.name} | Role: {member.get_role_display()} | Department: {member.department or '-'}"
        for member in members[:5]
    ]
    return "\n".join(lines) or "No team members have been added yet."


def _documents_answer(message, documents):
    if _wants_count(message):
        return f"Total Documents: {documents.count()}"
    if 'status' in message:
        return f"Document Status: {_status_breakdown(documents)}"
    lines = [
        f"Document: {document.file_name} | Type: {document.file_type or '-'} | "
        f"Uploaded by: {document.uploaded_by.username if document.uploaded_by else 'unknown'}"
        for document in documents.select_related('uploaded_by')[:5]
    ]
    return "\n".join(lines) or "No documents have been uploaded yet."


def _budget_answer(message, lines):
    lines = lines.exclude(status='CANCELLED')
    if _wants_count(message):
        return f"Total Budget Items: {lines.count()}"
    totals = lines.aggregate(
        budgeted=Coalesce(Sum('budgeted_amount'), ZERO),
        actual=Coalesce(Sum('actual_amount'), ZERO),
    )
    return (
        f"Budgeted: ${totals['budgeted']:,.2f} | Spent: ${totals['actual']:,.2f} | "
        f"Remaining: ${totals['budgeted'] - totals['actual']:,.2f}"
    )


def _risks_answer(message, risks):
    open_risks = risks.exclude(status='CLOSED')
    if _wants_count(message):
        return f"Open Risks: {open_risks.count()}"
    if 'status' in message:
        return f"Risk Status: {_status_breakdown(risks)}"
    lines = [
        f"Risk: {risk.title} | Level: {risk.risk_level} | Score: {risk.risk_score} | Status: {risk.status}"
        for risk in open_risks.order_by('-risk_score', 'id')[:5]
    ]
    return "\n".join(lines) or "No open risks are recorded."


def _tasks_answer(message, tasks):
    if _wants_count(message):
        return f"Total Tasks: {tasks.count()}"
    if 'status' in message:
        return f"Task Status: {_status_breakdown(tasks)}"
    lines = [
        f"Task: {task.title} | Status: {task.status} | Priority: {task.priority} | "
        f"Due: {task.due_date.isoformat() if task.due_date else 'not set'}"
        for task in tasks.exclude(status__in=('COMPLETED', 'CANCELLED'))[:5]
    ]
    return "\n".join(lines) or "All tasks are complete."


def _overview(projects, members, documents):
    parts = [
        "Research Management System Overview",
        "",
        f"Projects: {projects.count()} total",
        f"Team Members: {members.count()} total",
        f"Documents: {documents.count()} total",
    ]
    latest = list(projects[:3])
    if latest:
        parts += ["", "Latest Projects:"] + [f"- {project.title} ({project.status})" for project in latest]
    team = list(members[:3])
    if team:
        parts += ["", "Team Members:"] + [f"- {member.name} - {member.get_role_display()}" for member in team]
    recent = list(documents[:3])
    if recent:
        parts += ["", "Recent Documents:"] + [f"- {document.file_name} ({document.file_type or '-'})" for document in recent]
    return "\n".join(parts)


def rule_based_answer(message, project_id=None):
    """Answer a question from database counts and listings, scoped to a project when given"""
    message = (message or '').lower().strip()
    scope = {'project_id': project_id} if project_id else {}

    projects = ResearchProject.objects.all()
    if project_id:
        projects = projects.filter(pk=project_id)
    members = TeamMember.objects.filter(**scope)
    documents = ProjectDocument.objects.filter(**scope)

    intent = detect_intent(message)
    if intent == 'project':
        return _projects_answer(message, projects)
    if intent == 'team':
        return _team_answer(message, members)
    if intent == 'document':
        return _documents_answer(message, documents)
    if intent == 'budget':
        return _budget_answer(message, ProjectBudget.objects.filter(**scope))
    if intent == 'risk':
        return _risks_answer(message, ProjectRisk.objects.filter(**scope))
    if intent == 'task':
        return _tasks_answer(message, ProjectTask.objects.filter(**scope))
    return _overview(projects, members, documents)


def _history_limit():
    return int(getattr(settings, 'RAG_HISTORY_LIMIT', os.getenv('RAG_HISTORY_LIMIT', '10')))


def gather_context(message, project_id=None):
    """Prompt context and source list from global search hits and project documents"""
    hits = find_hits(message, SearchFilters(project_id=project_id))[:SEARCH_CONTEXT_HITS]
    matches = search_documents(message, project_id)

    blocks = [
        f"[{hit.searchable.name}] {hit.searchable.title(hit.record)}: {hit.searchable.content(hit.record)}"
        for hit in hits
    ]
    document_context = build_context(matches)
    if document_context:
        blocks.append(document_context)

    sources = [
        {
            'entityType': hit.searchable.name,
            'entityId': hit.record.pk,
            'title': hit.searchable.title(hit.record),
            'relevance': hit.score,
            'url': hit.searchable.url(hit.record),
        }
        for hit in hits
    ]
    sources += [
        {
            'entityType': 'document',
            'entityId': match.document.pk,
            'title': match.document.file_name,
            'relevance': round(match.relevance, 4),
            'context': match.snippet,
        }
        for match in matches
        if not any(source['entityType'] == 'document' and source['entityId'] == match.document.pk for source in sources)
    ]
    return "\n\n".join(blocks), sources


def answer(message, project_id=None, history=(), client=None):
    """
    Answer one question with the language model, falling back to the rule-based answer.

    Returns (response text, sources, llm_used).
    """
    context, sources = gather_context(message, project_id)

    messages = [{'role': 'system', 'content': CHAT_SYSTEM_PROMPT}]
    messages += [{'role': turn.role, 'content': turn.content} for turn in history]
    user_content = message
    if context:
        user_content = f"Context from the research records:\n{context}\n\nQuestion: {message}"
    messages.append({'role': 'user', 'content': user_content})

    client = client or LLMClient()
    try:
        return client.complete(messages), sources, True
    except LLMUnavailable as e:
        logger.warning(f"Answering '{message[:80]}' with the rule-based assistant: {str(e)}")
        return rule_based_answer(message, project_id), sources, False


def chat(user, message, project=None, client=None):
    """
    Handle one chat turn for a user: store the question, answer it with the
    recent conversation as history and store the reply.

    Returns (assistant ChatMessage, sources).
    """
    history = list(
        ChatMessage.objects.filter(user=user, project=project).order_by('-created_at', '-id')[:_history_limit()]
    )
    history.reverse()

    ChatMessage.objects.create(user=user, project=project, role='user', content=message)
    project_id = project.pk if project is not None else None
    response, sources, llm_used = answer(message, project_id, history, client)

    reply = ChatMessage.objects.create(
        user=user, project=project, role='assistant', content=response, sources=sources, llm_used=llm_used,
    )
    return reply, sources
