"""
Project analytics and dashboard aggregates

Schedule progress of a project is derived from its start and end dates
relative to "today":

    duration    = max(1, end - start) days
    elapsed     = max(0, today - start) days
    completion  = clamp(elapsed / duration * 100, 0, 100), 100 once past the end

A project without a start date is treated as starting today, and one without
an end date as lasting 30 days.
"""
from datetime import timedelta
from decimal import Decimal
import logging

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from rms.core.cache_utils import (
    cached_query,
    DASHBOARD_STATS_CACHE_KEY, DASHBOARD_STATS_CACHE_TTL,
    ANALYTICS_DASHBOARD_CACHE_KEY, ANALYTICS_DASHBOARD_CACHE_TTL,
)
from rms.documents.models import ProjectDocument
from rms.finance.services import budget_summary
from rms.outputs.models import ProjectPatent, ProjectPublication
from rms.planning.models import ProjectTask
from rms.projects.models import ResearchProject
from rms.risks.models import ProjectRisk
from rms.team.models import TeamMember
from .models import ResearchAnalytics

logger = logging.getLogger('rms.analytics')

DEFAULT_DURATION_DAYS = 30
ACTIVITY_LIMIT = 10


def schedule_metrics(start_date, end_date, today):
    """Completion figures for a date range as of ``today``"""
    start = start_date or today
    end = end_date or start + timedelta(days=DEFAULT_DURATION_DAYS)

    duration = max(1, (end - start).days)
    elapsed = max(0, (today - start).days)
    completion = min(100.0, max(0.0, elapsed / duration * 100))
    past_end = today > end
    if past_end:
        completion = 100.0

    return {
        'duration_days': duration,
        'actual_duration_days': elapsed,
        'completion_rate': round(completion, 2),
        'actual_end_date': today if past_end else end,
        'on_time_completion': not past_end,
    }


def calculate_project_analytics(project, today=None):
    """Store and return a new ResearchAnalytics row for a project"""
    today = today or timezone.localdate()
    metrics = schedule_metrics(project.start_date, project.end_date, today)
    analytics = ResearchAnalytics.objects.create(
        project=project,
        project_title=project.title,
        start_date=project.start_date,
        end_date=project.end_date,
        calculated_date=today,
        **metrics,
    )
    logger.info(f"Calculated analytics for project {project.id}: {metrics['completion_rate']}% complete")
    return analytics


def calculate_all_analytics(today=None, projects=None):
    """
    Calculate analytics for every project (or the given ones).

    A failing project is logged and skipped. Returns (created rows, failed project ids).
    """
    projects = projects if projects is not None else ResearchProject.objects.all()
    created, failed = [], []
    for project in projects:
        try:
            with transaction.atomic():
                created.append(calculate_project_analytics(project, today))
        except Exception as e:
            logger.error(f"Error calculating analytics for project {project.id}: {str(e)}", exc_info=True)
            failed.append(project.id)
    return created, failed


def _distribution(queryset, field):
    rows = queryset.values(field).annotate(total=Count('id')).order_by(field)
    return {row[field]: row['total'] for row in rows}


@cached_query(cache_ttl=ANALYTICS_DASHBOARD_CACHE_TTL, key_prefix=ANALYTICS_DASHBOARD_CACHE_KEY)
def analytics_dashboard():
    """Summary over the latest calculation of each project"""
    latest = {}
    for row in ResearchAnalytics.objects.order_by('-calculated_date', '-id'):
        latest.setdefault(row.project_id, row)
    rows = list(latest.values())

    on_time = sum(1 for row in rows if row.on_time_completion)
    average = round(sum(row.completion_rate for row in rows) / len(rows), 2) if rows else 0.0
    projects = ResearchProject.objects.all()

    return {
        'totalProjects': projects.count(),
        'analyzedProjects': len(rows),
        'onTimeProjects': on_time,
        'delayedProjects': len(rows) - on_time,
        'averageCompletionRate': average,
        'statusDistribution': _distribution(projects, 'status'),
        'priorityDistribution': _distribution(projects, 'priority'),
        'lastCalculated': max((row.calculated_date for row in rows), default=None),
    }


def task_analytics(project, today=None):
    today = today or timezone.localdate()
    tasks = ProjectTask.objects.filter(project=project)
    total = tasks.count()
    completed = tasks.filter(status='COMPLETED').count()
    hours = tasks.aggregate(
        estimated=Coalesce(Sum('estimated_hours'), 0),
        actual=Coalesce(Sum('actual_hours'), 0),
    )
    overdue = tasks.filter(due_date__lt=today).exclude(status__in=('COMPLETED', 'CANCELLED')).count()

    return {
        'project_id': project.id,
        'total_tasks': total,
        'completed_tasks': completed,
        'completion_percentage': round(completed / total * 100, 2) if total else 0.0,
        'overdue_tasks': overdue,
        'by_status': _distribution(tasks, 'status'),
        'by_priority': _distribution(tasks, 'priority'),
        'estimated_hours': hours['estimated'],
        'actual_hours': hours['actual'],
    }


def budget_analytics(project):
    """Budget line summary compared with the project's approved budget"""
    summary = budget_summary(project)
    ceiling = float(project.budget or Decimal('0.00'))
    summary['project_budget'] = ceiling
    summary['variance'] = round(ceiling - summary['total_actual'], 2)
    summary['over_budget'] = bool(ceiling) and summary['total_actual'] > ceiling
    return summary


@cached_query(cache_ttl=DASHBOARD_STATS_CACHE_TTL, key_prefix=DASHBOARD_STATS_CACHE_KEY)
def dashboard_stats():
    projects = ResearchProject.objects.aggregate(
        total=Count('id'),
        completed=Count('id', filter=Q(status='COMPLETED')),
        active=Count('id', filter=Q(status='ACTIVE')),
        budget=Coalesce(Sum('budget'), Decimal('0.00')),
    )
    return {
        'totalProjects': projects['total'],
        'completedProjects': projects['completed'],
        'inProgressProjects': projects['active'],
        'totalBudget': float(projects['budget']),
        'totalTeamMembers': TeamMember.objects.count(),
        'totalDocuments': ProjectDocument.objects.count(),
        'totalTasks': ProjectTask.objects.count(),
        'openRisks': ProjectRisk.objects.exclude(status='CLOSED').count(),
        'totalPublications': ProjectPublication.objects.count(),
        'totalPatents': ProjectPatent.objects.count(),
    }


def time_ago(moment, now=None):
    """'3 days ago', '1 hour ago', '5 minutes ago'"""
    if moment is None:
        return 'Unknown time'
    now = now or timezone.now()
    seconds = abs((now - moment).total_seconds())
    for unit, size in (('day', 86400), ('hour', 3600), ('minute', 60)):
        amount = int(seconds // size)
        if amount > 0 or unit == 'minute':
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"


# (type, action, queryset factory, timestamp field, label field)
ACTIVITY_SOURCES = [
    ('project', 'Project created', lambda: ResearchProject.objects.all(), 'created_at', 'title'),
    ('member', 'Team member added', lambda: TeamMember.objects.all(), 'created_at', 'name'),
    ('document', 'Document uploaded', lambda: ProjectDocument.objects.all(), 'upload_date', 'file_name'),
    ('task', 'Task created', lambda: ProjectTask.objects.all(), 'created_at', 'title'),
    ('publication', 'Publication added', lambda: ProjectPublication.objects.all(), 'created_at', 'title'),
]


def recent_activity(limit=ACTIVITY_LIMIT, now=None):
    """Most recent creations across projects, members, documents, tasks and publications"""
    now = now or timezone.now()
    activities = []
    for activity_type, action, queryset, timestamp_field, label_field in ACTIVITY_SOURCES:
        for record in queryset().order_by(f'-{timestamp_field}', '-id')[:limit]:
            timestamp = getattr(record, timestamp_field)
            activities.append({
                'id': f"{activity_type}_{record.pk}",
                'action': action,
                'item': getattr(record, label_field),
                'type': activity_type,
                'timestamp': timestamp,
                'time': time_ago(timestamp, now),
            })

    activities.sort(key=lambda activity: activity['timestamp'], reverse=True)
    return activities[:limit]
