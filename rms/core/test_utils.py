"""
Test utilities and factories for creating test data
"""
from datetime import timedelta
from decimal import Decimal
import random
import string

from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from rms.projects.models import ResearchProject
from rms.planning.models import ProjectTask, ProjectMilestone, ProjectDeliverable
from rms.team.models import TeamMember
from rms.finance.models import ProjectBudget
from rms.documents.models import ProjectDocument
from rms.risks.models import ProjectRisk
from rms.outputs.models import ProjectPatent, ProjectPublication

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False, **extra):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser,
            **extra
        )

    @staticmethod
    def create_project(title=None, created_by=None, **fields):
        """Create a test research project"""
        if not title:
            title = f'Project_{TestDataFactory.random_string(6)}'
        fields.setdefault('description', f'Test project {title}')
        fields.setdefault('status', 'ACTIVE')
        fields.setdefault('priority', 'MEDIUM')
        fields.setdefault('budget', Decimal('10000.00'))
        return ResearchProject.objects.create(title=title, created_by=created_by, **fields)

    @staticmethod
    def create_task(project, title=None, **fields):
        """Create a test task"""
        if not title:
            title = f'Task_{TestDataFactory.random_string(6)}'
        return ProjectTask.objects.create(project=project, title=title, **fields)

    @staticmethod
    def create_milestone(project, title=None, due_date=None, **fields):
        """Create a test milestone"""
        if not title:
            title = f'Milestone_{TestDataFactory.random_string(6)}'
        if not due_date:
            due_date = timezone.localdate() + timedelta(days=30)
        return ProjectMilestone.objects.create(project=project, title=title, due_date=due_date, **fields)

    @staticmethod
    def create_deliverable(project, title=None, **fields):
        """Create a test deliverable"""
        if not title:
            title = f'Deliverable_{TestDataFactory.random_string(6)}'
        return ProjectDeliverable.objects.create(project=project, title=title, **fields)

    @staticmethod
    def create_team_member(project=None, name=None, email=None, **fields):
        """Create a test team member"""
        if not name:
            name = f'Member_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{name.lower()}@test.com'
        return TeamMember.objects.create(project=project, name=name, email=email, **fields)

    @staticmethod
    def create_budget(project, item_name=None, budgeted_amount=None, actual_amount=None, **fields):
        """Create a test budget line"""
        if not item_name:
            item_name = f'Item_{TestDataFactory.random_string(6)}'
        if budgeted_amount is None:
            budgeted_amount = Decimal('1000.00')
        if actual_amount is None:
            actual_amount = Decimal('0.00')
        return ProjectBudget.objects.create(
            project=project,
            item_name=item_name,
            budgeted_amount=budgeted_amount,
            actual_amount=actual_amount,
            **fields
        )

    @staticmethod
    def create_document(project, file_name=None, uploaded_by=None, **fields):
        """Create a test document record (no stored file)"""
        if not file_name:
            file_name = f'doc_{TestDataFactory.random_string(6)}.pdf'
        fields.setdefault('file_type', 'application/pdf')
        return ProjectDocument.objects.create(project=project, file_name=file_name, uploaded_by=uploaded_by, **fields)

    @staticmethod
    def create_risk(project, title=None, probability=1, impact=1, **fields):
        """Create a test risk"""
        if not title:
            title = f'Risk_{TestDataFactory.random_string(6)}'
        return ProjectRisk.objects.create(project=project, title=title, probability=probability, impact=impact, **fields)

    @staticmethod
    def create_patent(project=None, title=None, patent_number=None, **fields):
        """Create a test patent"""
        if not title:
            title = f'Patent_{TestDataFactory.random_string(6)}'
        if not patent_number:
            patent_number = f'US-{TestDataFactory.random_string(8).upper()}'
        return ProjectPatent.objects.create(project=project, title=title, patent_number=patent_number, **fields)

    @staticmethod
    def create_publication(project, title=None, **fields):
        """Create a test publication"""
        if not title:
            title = f'Publication_{TestDataFactory.random_string(6)}'
        return ProjectPublication.objects.create(project=project, title=title, **fields)


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
