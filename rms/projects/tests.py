"""
Test suite for research projects
Tests: list filtering, create/update/delete flow, validation and derived counts
"""
from datetime import date
from django.db import connection
from django.test import TestCase
from django.test.utils import CaptureQueriesContext
from rest_framework import status
from rms.core.models import AuditLog
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.projects.models import ResearchProject


class ResearchProjectModelTests(TestCase):
    """Test ResearchProject model helpers"""

    def test_str(self):
        project = TestDataFactory.create_project(title='Protein folding')
        self.assertEqual(str(project), 'Protein folding')

    def test_keyword_set(self):
        """Test keywords split on commas and whitespace, lower-cased"""
        project = TestDataFactory.create_project(keywords='Machine Learning, genomics  AI')
        self.assertEqual(project.keyword_set, {'machine', 'learning', 'genomics', 'ai'})


class ResearchProjectAPITests(TestCase):
    """Test research project API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_project(self):
        """Test creating a project records the creator"""
        data = {
            'title': 'Quantum sensors',
            'status': 'PLANNING',
            'priority': 'HIGH',
            'budget': '25000.00',
            'research_area': 'Physics',
            'start_date': '2024-01-01',
            'end_date': '2024-12-31',
        }
        response = self.client.post('/api/v1/projects/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created_by_username'], self.user.username)
        self.assertEqual(response.data['team_size'], 0)
        self.assertEqual(ResearchProject.objects.get(pk=response.data['id']).created_by, self.user)

    def test_create_project_end_before_start(self):
        data = {'title': 'Backwards', 'start_date': '2024-06-01', 'end_date': '2024-01-01'}
        response = self.client.post('/api/v1/projects/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_create_project_invalid_status(self):
        response = self.client.post('/api/v1/projects/', {'title': 'Bad', 'status': 'UNKNOWN'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filters(self):
        """Test status, priority and search filters"""
        TestDataFactory.create_project(title='Solar cells', status='ACTIVE', priority='HIGH')
        TestDataFactory.create_project(title='Wind turbines', status='COMPLETED', priority='LOW')
        TestDataFactory.create_project(title='Solar storage', status='PLANNING', priority='HIGH',
                                       start_date=date(2024, 3, 1))

        response = self.client.get('/api/v1/projects/', {'status': 'active'})
        self.assertEqual([p['title'] for p in response.data], ['Solar cells'])

        response = self.client.get('/api/v1/projects/', {'priority': 'HIGH'})
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/projects/', {'search': 'solar'})
        self.assertEqual(len(response.data), 2)

        response = self.client.get('/api/v1/projects/', {'start_after': '2024-02-01'})
        self.assertEqual([p['title'] for p in response.data], ['Solar storage'])

    def test_list_invalid_filter_value(self):
        response = self.client.get('/api/v1/projects/', {'start_after': 'not-a-date'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_project_audits_changes(self):
        """Test PATCH updates the project and records the changed fields"""
        project = TestDataFactory.create_project(title='Old title')
        response = self.client.patch(f'/api/v1/projects/{project.id}/', {'title': 'New title'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'New title')

        log = AuditLog.objects.get(action='update', model_name='ResearchProject')
        self.assertEqual(log.changes['title'], {'old': 'Old title', 'new': 'New title'})

    def test_put_requires_full_payload(self):
        project = TestDataFactory.create_project()
        response = self.client.put(f'/api/v1/projects/{project.id}/', {'status': 'ACTIVE'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('title', response.data)

    def test_delete_project(self):
        project = TestDataFactory.create_project()
        TestDataFactory.create_task(project)
        response = self.client.delete(f'/api/v1/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ResearchProject.objects.filter(pk=project.id).exists())
        self.assertTrue(AuditLog.objects.filter(action='delete', model_name='ResearchProject').exists())

    def test_retrieve_missing_project(self):
        response = self.client.get('/api/v1/projects/9999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_derived_counts(self):
        project = TestDataFactory.create_project()
        TestDataFactory.create_task(project)
        TestDataFactory.create_task(project)
        TestDataFactory.create_team_member(project)
        TestDataFactory.create_team_member(project, is_active=False)
        TestDataFactory.create_document(project)

        response = self.client.get(f'/api/v1/projects/{project.id}/')
        self.assertEqual(response.data['task_count'], 2)
        self.assertEqual(response.data['team_size'], 1)
        self.assertEqual(response.data['document_count'], 1)

    def test_list_counts_use_single_query(self):
        project = TestDataFactory.create_project(title='Counted')
        TestDataFactory.create_task(project)
        TestDataFactory.create_task(project)
        TestDataFactory.create_team_member(project)
        TestDataFactory.create_team_member(project, is_active=False)
        TestDataFactory.create_document(project)
        TestDataFactory.create_document(project)

        with CaptureQueriesContext(connection) as single:
            response = self.client.get('/api/v1/projects/')
        row = response.data[0]
        self.assertEqual((row['task_count'], row['team_size'], row['document_count']), (2, 1, 2))

        for _ in range(3):
            TestDataFactory.create_task(TestDataFactory.create_project())
        with CaptureQueriesContext(connection) as several:
            response = self.client.get('/api/v1/projects/')
        self.assertEqual(len(response.data), 4)
        self.assertEqual(len(several.captured_queries), len(single.captured_queries))
