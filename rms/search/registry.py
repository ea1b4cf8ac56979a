"""
Searchable entity types

Each entry describes how one research record type takes part in global
search: which text fields are matched and with what weight, which field is
its title, and which fields carry status/priority for filtering.
"""
from rms.projects.models import ResearchProject
from rms.planning.models import ProjectTask, ProjectMilestone, ProjectDeliverable
from rms.team.models import TeamMember
from rms.finance.models import ProjectBudget
from rms.documents.models import ProjectDocument
from rms.risks.models import ProjectRisk
from rms.outputs.models import ProjectPatent, ProjectPublication


class SearchableType:
    def __init__(self, name, model, title_field, fields, content_fields=(), status_field='status',
                 priority_field=None, url_prefix='', metadata_fields=(), related=('project',)):
        self.name = name
        self.model = model
        self.title_field = title_field
        self.fields = fields
        self.content_fields = content_fields
        self.status_field = status_field
        self.priority_field = priority_field
        self.url_prefix = url_prefix
        self.metadata_fields = metadata_fields
        self.related = related

    @property
    def max_weight(self):
        return max(self.fields.values())

    def queryset(self):
        queryset = self.model.objects.all()
        if self.related:
            queryset = queryset.select_related(*self.related)
        return queryset

    def title(self, record):
        return str(getattr(record, self.title_field) or '')

    def content(self, record, limit=200):
        for field in self.content_fields:
            value = getattr(record, field, '') or ''
            if value.strip():
                return value.strip()[:limit]
        return ''

    def project(self, record):
        if self.model is ResearchProject:
            return record
        return getattr(record, 'project', None)

    def url(self, record):
        return f"{self.url_prefix}/{record.pk}"

    def metadata(self, record):
        data = {}
        for field in self.metadata_fields:
            value = getattr(record, field, None)
            if value is None or value == '':
                continue
            data[field] = value if isinstance(value, (str, int, float, bool)) else str(value)
        return data

    def last_modified(self, record):
        return record.updated_at


SEARCHABLE_TYPES = [
    SearchableType(
        'project', ResearchProject, 'title',
        {'title': 3, 'keywords': 2, 'research_area': 2, 'description': 1,
         'principal_investigator': 1, 'institution': 1, 'objectives': 1},
        content_fields=('description', 'objectives'),
        priority_field='priority',
        url_prefix='/projects',
        metadata_fields=('status', 'priority', 'research_area', 'principal_investigator', 'completion_percentage'),
        related=(),
    ),
    SearchableType(
        'task', ProjectTask, 'title',
        {'title': 3, 'tags': 2, 'description': 1, 'notes': 1},
        content_fields=('description', 'notes'),
        priority_field='priority',
        url_prefix='/tasks',
        metadata_fields=('status', 'priority', 'due_date', 'progress'),
    ),
    SearchableType(
        'milestone', ProjectMilestone, 'title',
        {'title': 3, 'description': 1, 'deliverables': 1, 'responsible_person': 1},
        content_fields=('description', 'deliverables'),
        url_prefix='/milestones',
        metadata_fields=('status', 'due_date', 'progress'),
    ),
    SearchableType(
        'deliverable', ProjectDeliverable, 'title',
        {'title': 3, 'type': 2, 'description': 1, 'responsible_person': 1},
        content_fields=('description',),
        url_prefix='/deliverables',
        metadata_fields=('status', 'type', 'approval_status', 'due_date'),
    ),
    SearchableType(
        'team_member', TeamMember, 'name',
        {'name': 3, 'expertise': 2, 'role': 1, 'department': 1, 'affiliation': 1, 'email': 1},
        content_fields=('expertise', 'responsibilities'),
        status_field=None,
        url_prefix='/team',
        metadata_fields=('role', 'email', 'department', 'is_active'),
    ),
    SearchableType(
        'budget', ProjectBudget, 'item_name',
        {'item_name': 3, 'category': 2, 'item_description': 1, 'vendor_name': 1},
        content_fields=('item_description',),
        url_prefix='/budgets',
        metadata_fields=('status', 'category', 'budgeted_amount', 'actual_amount'),
    ),
    SearchableType(
        'document', ProjectDocument, 'file_name',
        {'file_name': 3, 'tags': 2, 'description': 1, 'content_text': 1},
        content_fields=('description', 'content_text'),
        url_prefix='/documents',
        metadata_fields=('status', 'file_type', 'document_type', 'access_level'),
    ),
    SearchableType(
        'risk', ProjectRisk, 'title',
        {'title': 3, 'category': 2, 'description': 1, 'mitigation_plan': 1},
        content_fields=('description', 'mitigation_plan'),
        url_prefix='/risks',
        metadata_fields=('status', 'risk_level', 'risk_score', 'category'),
    ),
    SearchableType(
        'patent', ProjectPatent, 'title',
        {'title': 3, 'patent_number': 2, 'abstract': 1, 'inventors': 1, 'assignee': 1},
        content_fields=('abstract',),
        url_prefix='/patents',
        metadata_fields=('status', 'type', 'patent_number', 'filing_date'),
    ),
    SearchableType(
        'publication', ProjectPublication, 'title',
        {'title': 3, 'keywords': 2, 'authors': 2, 'abstract': 1, 'journal_name': 1},
        content_fields=('abstract',),
        url_prefix='/publications',
        metadata_fields=('status', 'type', 'year', 'doi', 'citations'),
    ),
]

SEARCHABLE_TYPES_BY_NAME = {searchable.name: searchable for searchable in SEARCHABLE_TYPES}


def resolve_type_name(value):
    """Map user-supplied type names (TEAM_MEMBER, team-members, Projects...) to registry names"""
    name = str(value or '').strip().lower().replace('-', '_').replace(' ', '_')
    if name in SEARCHABLE_TYPES_BY_NAME:
        return name
    if name.endswith('s') and name[:-1] in SEARCHABLE_TYPES_BY_NAME:
        return name[:-1]
    if name in ('member', 'members', 'teammember', 'teammembers'):
        return 'team_member'
    return None
