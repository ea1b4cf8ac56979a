"""
Project and document insights for the research assistant

Keyword statistics, similar-project recommendations, actionable suggestions
and summaries computed from the database without the language model.
"""
from collections import Counter
import re

from django.utils import timezone

from rms.documents.models import ProjectDocument
from rms.finance.services import budget_summary
from rms.planning.models import ProjectMilestone, ProjectTask
from rms.projects.models import ResearchProject
from rms.risks.models import ProjectRisk

POSITIVE_WORDS = ('good', 'great', 'excellent', 'successful', 'innovative')
NEGATIVE_WORDS = ('bad', 'poor', 'failed', 'problem', 'issue')

# Flesch reading ease with a fixed 1.5 syllables per word
AVERAGE_SYLLABLES_PER_WORD = 1.5

STALE_DOCUMENT_DAYS = 90
RECOMMENDATION_LIMIT = 5


def top_words(texts, min_length, limit=10):
    """Most frequent lower-cased words longer than min_length, ties in first-seen order"""
    counts = Counter()
    for text in texts:
        if not text:
            continue
        counts.update(word for word in text.lower().split() if len(word) > min_length)
    return [word for word, _count in counts.most_common(limit)]


def summarize_text(text, length=200):
    if not text or len(text) <= length:
        return text or ''
    return text[:length] + '...'


def analyze_sentiment(text):
    lowered = (text or '').lower()
    positive = [word for word in POSITIVE_WORDS if word in lowered]
    negative = [word for word in NEGATIVE_WORDS if word in lowered]
    if len(positive) > len(negative):
        label = 'positive'
    elif len(negative) > len(positive):
        label = 'negative'
    else:
        label = 'neutral'
    return {'label': label, 'positive': positive, 'negative': negative}


def readability_score(text):
    if not text or not text.strip():
        return 0.0
    sentences = [sentence for sentence in re.split(r'[.!?]+', text) if sentence.strip()]
    words = text.split()
    if not sentences or not words:
        return 0.0
    words_per_sentence = len(words) / len(sentences)
    return round(206.835 - 1.015 * words_per_sentence - 84.6 * AVERAGE_SYLLABLES_PER_WORD, 2)


def project_insights(project):
    documents = list(ProjectDocument.objects.filter(project=project).select_related('uploaded_by'))
    type_counts = Counter(document.file_type or 'unknown' for document in documents)
    recent = sorted(documents, key=lambda document: (document.upload_date, document.pk), reverse=True)[:5]

    return {
        'project_id': project.id,
        'project_title': project.title,
        'status': project.status,
        'team_size': project.team_members.filter(is_active=True).count(),
        'totalDocuments': len(documents),
        'documentTypes': dict(type_counts),
        'recentActivity': [
            {
                'documentId': document.pk,
                'fileName': document.file_name,
                'uploadDate': document.upload_date.isoformat(),
                'uploadedBy': document.uploaded_by.username if document.uploaded_by else None,
            }
            for document in recent
        ],
        'keyTopics': top_words((document.description for document in documents), min_length=4),
    }


def analyze_document(document):
    text = document.searchable_text
    return {
        'documentId': document.pk,
        'title': document.file_name,
        'category': document.document_type,
        'summary': summarize_text(text),
        'keywords': top_words([text], min_length=3),
        'sentiment': analyze_sentiment(text),
        'readability': readability_score(text),
    }


def keyword_similarity(first, second):
    """Jaccard similarity of two projects' keyword sets"""
    union = first.keyword_set | second.keyword_set
    if not union:
        return 0.0
    return len(first.keyword_set & second.keyword_set) / len(union)


def similar_projects(project, limit=RECOMMENDATION_LIMIT):
    """Other projects in the same research area, most similar keywords first"""
    if not project.research_area:
        return []
    candidates = ResearchProject.objects.filter(research_area__iexact=project.research_area).exclude(pk=project.pk)
    ranked = sorted(
        ((keyword_similarity(project, other), other) for other in candidates),
        key=lambda pair: (-pair[0], pair[1].pk),
    )
    return [
        {
            'projectId': other.pk,
            'title': other.title,
            'status': other.status,
            'researchArea': other.research_area,
            'similarityScore': round(score, 4),
            'commonKeywords': sorted(project.keyword_set & other.keyword_set),
        }
        for score, other in ranked[:limit]
    ]


def project_suggestions(project, today=None):
    """Actionable suggestions derived from the project's tasks, budget, risks, milestones and documents"""
    today = today or timezone.localdate()
    suggestions = []

    overdue = ProjectTask.objects.filter(project=project, due_date__lt=today).exclude(
        status__in=('COMPLETED', 'CANCELLED')
    ).count()
    if overdue:
        suggestions.append(f"{overdue} task(s) are overdue. Review assignments and update due dates.")

    budget = budget_summary(project)
    if budget['total_budgeted'] and budget['total_actual'] > budget['total_budgeted']:
        suggestions.append(
            f"Spending exceeds the budget by ${budget['total_actual'] - budget['total_budgeted']:,.2f}. "
            "Review the budget lines."
        )
    elif project.budget and budget['total_budgeted'] > float(project.budget):
        suggestions.append("Budget lines exceed the project's approved budget.")

    open_high = ProjectRisk.objects.filter(project=project, risk_level__in=ProjectRisk.HIGH_LEVELS).exclude(
        status='CLOSED'
    ).count()
    if open_high:
        suggestions.append(f"{open_high} high or critical risk(s) are open. Confirm mitigation plans are in place.")

    if not ProjectMilestone.objects.filter(project=project).exists():
        suggestions.append("No milestones are defined. Add milestones to track progress.")

    documents = ProjectDocument.objects.filter(project=project)
    if not documents.exists():
        suggestions.append("No documents are uploaded. Upload research documents so the assistant can use them.")
    else:
        latest = documents.order_by('-upload_date').values_list('upload_date', flat=True).first()
        if (today - timezone.localdate(latest)).days > STALE_DOCUMENT_DAYS:
            suggestions.append(f"No documents were uploaded in the last {STALE_DOCUMENT_DAYS} days.")

    if not suggestions:
        suggestions.append("The project is on track. Keep tasks and documents up to date.")
    return suggestions


def project_analysis(project, today=None):
    """Plain-text health report of a project"""
    today = today or timezone.localdate()
    tasks = ProjectTask.objects.filter(project=project)
    total_tasks = tasks.count()
    completed = tasks.filter(status='COMPLETED').count()
    budget = budget_summary(project)
    open_risks = ProjectRisk.objects.filter(project=project).exclude(status='CLOSED').count()

    lines = [
        f"Project analysis: {project.title}",
        f"Status: {project.get_status_display()} | Priority: {project.get_priority_display()} | "
        f"Completion: {project.completion_percentage}%",
        f"Tasks: {completed}/{total_tasks} completed",
        f"Budget: ${budget['total_actual']:,.2f} spent of ${budget['total_budgeted']:,.2f} "
        f"({budget['utilization_percentage']}% utilized)",
        f"Open risks: {open_risks}",
    ]
    if project.end_date:
        remaining = (project.end_date - today).days
        if remaining >= 0:
            lines.append(f"Timeline: {remaining} day(s) until the planned end date")
        else:
            lines.append(f"Timeline: {-remaining} day(s) past the planned end date")
    lines.append("")
    lines.append("Suggestions:")
    lines += [f"- {suggestion}" for suggestion in project_suggestions(project, today)]
    return "\n".join(lines)


def project_summary(project):
    milestones = ProjectMilestone.objects.filter(project=project)
    achievements = [f"Milestone completed: {title}" for title in
                    milestones.filter(status='COMPLETED').values_list('title', flat=True)]
    achievements += [f"Publication: {title}" for title in
                     project.publications.filter(status__in=('ACCEPTED', 'PUBLISHED')).values_list('title', flat=True)]
    achievements += [f"Patent {number}: {title}" for number, title in
                     project.patents.values_list('patent_number', 'title')]

    next_steps = [f"Milestone due {due.isoformat()}: {title}" for title, due in
                  milestones.exclude(status__in=('COMPLETED', 'CANCELLED')).order_by('due_date')
                  .values_list('title', 'due_date')[:5]]
    next_steps += [f"Task: {title}" for title in
                   ProjectTask.objects.filter(project=project).exclude(status__in=('COMPLETED', 'CANCELLED'))
                   .order_by('due_date', 'id').values_list('title', flat=True)[:5]]

    area = project.research_area or 'an unspecified'
    lead = project.principal_investigator or 'an unassigned investigator'
    institution = f" at {project.institution}" if project.institution else ''
    return {
        'projectId': project.pk,
        'projectTitle': project.title,
        'executiveSummary': (
            f"Project '{project.title}' focuses on {area} research area with a budget of "
            f"${project.budget:,.2f}. Led by {lead}{institution}."
        ),
        'currentStatus': f"Current status: {project.status}",
        'keyAchievements': achievements,
        'nextSteps': next_steps,
        'potentialImpact': f"Potential impact includes advancement in {area} and practical applications",
    }


def suggested_questions(user, limit=3):
    """Starter questions for the chat, with a few about the user's most recent projects"""
    questions = [
        "How many projects are there?",
        "What is the status of all projects?",
        "Who is on the team?",
        "Which documents were uploaded recently?",
        "What are the open risks?",
    ]
    recent = ResearchProject.objects.order_by('-updated_at', '-id')
    if user is not None and ResearchProject.objects.filter(created_by=user).exists():
        recent = recent.filter(created_by=user)
    for title in recent.values_list('title', flat=True)[:limit]:
        questions.append(f"Summarize the project '{title}'")
        questions.append(f"What are the overdue tasks in '{title}'?")
    return questions
