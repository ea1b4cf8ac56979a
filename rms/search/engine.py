"""
Global search across research records

Candidates are fetched per entity type with case-insensitive containment
queries, then scored and ranked in Python:

    score = sum(best field weight per query token) / (token count * max weight)
            + 0.25 when the whole query occurs in the record's title

capped at 1.0. Results are ordered by score, then most recently modified.
"""
from datetime import datetime, time as dt_time
from functools import reduce
import logging
import math
import operator
import os
import time

from django.conf import settings
from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .registry import SEARCHABLE_TYPES, SEARCHABLE_TYPES_BY_NAME, resolve_type_name

logger = logging.getLogger('rms.search')

TITLE_PHRASE_BONUS = 0.25


def _setting(name, default):
    return int(getattr(settings, name, os.getenv(name, default)))


class SearchQueryError(ValueError):
    """Raised for malformed search parameters (bad dates, page numbers...)"""


def tokenize(query):
    """Lower-cased whitespace tokens, duplicates removed, first occurrence order kept"""
    seen = []
    for token in (query or '').lower().split():
        if token not in seen:
            seen.append(token)
    return seen


def score_record(searchable, record, tokens, phrase):
    """Relevance of one record in (0, 1], or 0.0 when no token matches"""
    if not tokens:
        return 0.0
    texts = {field: str(getattr(record, field, '') or '').lower() for field in searchable.fields}
    total = 0
    for token in tokens:
        best = 0
        for field, weight in searchable.fields.items():
            if weight > best and token in texts[field]:
                best = weight
        total += best
    if total == 0:
        return 0.0

    score = total / (len(tokens) * searchable.max_weight)
    if phrase and phrase in searchable.title(record).lower():
        score += TITLE_PHRASE_BONUS
    return round(min(score, 1.0), 4)


def _parse_bound(value, end_of_day=False):
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        # well-formed but impossible dates (2024-02-30) raise instead of returning None
        try:
            parsed = parse_datetime(str(value))
            day = parse_date(str(value)) if parsed is None else None
        except ValueError:
            raise SearchQueryError(f"Invalid date '{value}'")
        if parsed is None:
            if day is None:
                raise SearchQueryError(f"Invalid date '{value}'")
            parsed = datetime.combine(day, dt_time.max if end_of_day else dt_time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_current_timezone())
    return parsed


def _as_list(value):
    if value in (None, ''):
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    if not isinstance(value, (list, tuple)):
        raise SearchQueryError(f"Expected a list or comma separated string, got {value!r}")
    return [str(item).strip() for item in value if str(item).strip()]


def _parse_project_id(value):
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise SearchQueryError(f"Invalid project id '{value}'")


class SearchFilters:
    """Normalized filters accepted by :func:`search`"""

    def __init__(self, entity_types=None, statuses=None, priorities=None,
                 date_start=None, date_end=None, department=None, project_id=None):
        resolved = (resolve_type_name(name) for name in _as_list(entity_types))
        self.entity_types = [name for name in resolved if name]
        self.statuses = [value.upper() for value in _as_list(statuses)]
        self.priorities = [value.upper() for value in _as_list(priorities)]
        self.date_start = _parse_bound(date_start)
        self.date_end = _parse_bound(date_end, end_of_day=True)
        self.department = (department or '').strip()
        self.project_id = _parse_project_id(project_id)

    @classmethod
    def from_payload(cls, filters, project_id=None):
        """Build from the JSON body shape {entityTypes, status, priority, dateRange: {start, end}}"""
        filters = filters or {}
        if not isinstance(filters, dict):
            raise SearchQueryError("'filters' must be an object")
        date_range = filters.get('dateRange') or {}
        if not isinstance(date_range, dict):
            raise SearchQueryError("'filters.dateRange' must be an object")
        return cls(
            entity_types=filters.get('entityTypes'),
            statuses=filters.get('status'),
            priorities=filters.get('priority'),
            date_start=date_range.get('start'),
            date_end=date_range.get('end'),
            department=filters.get('department'),
            project_id=project_id or filters.get('projectId'),
        )

    def selected_types(self):
        if not self.entity_types:
            types = list(SEARCHABLE_TYPES)
        else:
            types = [SEARCHABLE_TYPES_BY_NAME[name] for name in self.entity_types]
        if self.statuses:
            types = [searchable for searchable in types if searchable.status_field]
        if self.priorities:
            types = [searchable for searchable in types if searchable.priority_field]
        return types

    def apply(self, searchable, queryset):
        if self.statuses:
            queryset = queryset.filter(**{f'{searchable.status_field}__in': self.statuses})
        if self.priorities:
            queryset = queryset.filter(**{f'{searchable.priority_field}__in': self.priorities})
        if self.date_start:
            queryset = queryset.filter(updated_at__gte=self.date_start)
        if self.date_end:
            queryset = queryset.filter(updated_at__lte=self.date_end)
        if self.department and searchable.name == 'team_member':
            queryset = queryset.filter(department__icontains=self.department)
        if self.project_id:
            if searchable.name == 'project':
                queryset = queryset.filter(pk=self.project_id)
            else:
                queryset = queryset.filter(project_id=self.project_id)
        return queryset


class SearchHit:
    __slots__ = ('searchable', 'record', 'score', 'last_modified')

    def __init__(self, searchable, record, score):
        self.searchable = searchable
        self.record = record
        self.score = score
        self.last_modified = searchable.last_modified(record)

    def sort_key(self):
        modified = self.last_modified.timestamp() if self.last_modified else 0
        return (-self.score, -modified, self.searchable.name, self.record.pk)

    def as_dict(self):
        project = self.searchable.project(self.record)
        return {
            'entityId': self.record.pk,
            'entityType': self.searchable.name,
            'title': self.searchable.title(self.record),
            'content': self.searchable.content(self.record),
            'projectId': project.pk if project is not None else None,
            'projectName': project.title if project is not None else None,
            'lastModified': self.last_modified.isoformat() if self.last_modified else None,
            'relevanceScore': self.score,
            'url': self.searchable.url(self.record),
            'metadata': self.searchable.metadata(self.record),
        }


def find_hits(query, filters=None):
    """Score and rank every matching record; returns a sorted list of SearchHit"""
    tokens = tokenize(query)
    if not tokens:
        return []
    filters = filters or SearchFilters()
    phrase = ' '.join((query or '').lower().split())
    candidate_limit = _setting('SEARCH_CANDIDATES_PER_TYPE', '200')

    hits = []
    for searchable in filters.selected_types():
        conditions = [
            Q(**{f'{field}__icontains': token})
            for token in tokens
            for field in searchable.fields
        ]
        queryset = filters.apply(searchable, searchable.queryset().filter(reduce(operator.or_, conditions)))
        for record in queryset.order_by('-updated_at', '-pk')[:candidate_limit]:
            score = score_record(searchable, record, tokens, phrase)
            if score > 0:
                hits.append(SearchHit(searchable, record, score))

    hits.sort(key=SearchHit.sort_key)
    return hits


def _page_params(page, size):
    default_size = _setting('SEARCH_DEFAULT_PAGE_SIZE', '20')
    max_size = _setting('SEARCH_MAX_PAGE_SIZE', '100')
    try:
        page = int(page) if page not in (None, '') else 0
        size = int(size) if size not in (None, '') else default_size
    except (TypeError, ValueError):
        raise SearchQueryError('page and size must be integers')
    if page < 0:
        raise SearchQueryError('page must be zero or greater')
    if size < 1:
        raise SearchQueryError('size must be at least 1')
    return page, min(size, max_size)


def search(query, filters=None, page=0, size=None):
    """
    Run a paginated global search.

    Returns {results, totalResults, totalPages, page, size, hasNext,
    hasPrevious, searchTime, query}; a blank query yields an empty result set.
    """
    started = time.perf_counter()
    page, size = _page_params(page, size)
    hits = find_hits(query, filters)
    total = len(hits)
    total_pages = math.ceil(total / size) if total else 0
    window = hits[page * size:(page + 1) * size]
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.debug(f"Search '{query}' matched {total} records in {elapsed_ms}ms")
    return {
        'query': (query or '').strip(),
        'results': [hit.as_dict() for hit in window],
        'totalResults': total,
        'totalPages': total_pages,
        'page': page,
        'size': size,
        'hasNext': page + 1 < total_pages,
        'hasPrevious': page > 0,
        'searchTime': elapsed_ms,
    }


def suggestions(query, limit=5, per_type=3):
    """Distinct record names containing the query: project titles, document names, member names"""
    query = (query or '').strip()
    if not query:
        return []

    from rms.projects.models import ResearchProject
    from rms.documents.models import ProjectDocument
    from rms.team.models import TeamMember

    candidates = []
    candidates += ResearchProject.objects.filter(title__icontains=query).values_list('title', flat=True)[:per_type]
    candidates += ProjectDocument.objects.filter(file_name__icontains=query).values_list('file_name', flat=True)[:per_type]
    candidates += TeamMember.objects.filter(name__icontains=query).values_list('name', flat=True)[:per_type]

    results = []
    for name in candidates:
        if name and name not in results:
            results.append(name)
        if len(results) >= limit:
            break
    return results
