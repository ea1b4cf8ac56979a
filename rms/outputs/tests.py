"""
Test suite for research outputs
Tests: patents and publications, uniqueness and date validation, inventor/author lookups
"""
from django.test import TestCase
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.outputs.models import ProjectPatent


class PatentAPITests(TestCase):
    """Test patent API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_patent(self):
        response = self.client.post('/api/v1/patents/', {
            'project': self.project.id,
            'title': 'Self-healing polymer',
            'patent_number': 'EP-1234567',
            'inventors': 'Marie Curie, Pierre Curie',
            'filing_date': '2023-01-10',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'FILED')
        self.assertEqual(response.data['project_title'], self.project.title)

    def test_patent_without_project(self):
        response = self.client.post('/api/v1/patents/', {
            'title': 'Independent invention', 'patent_number': 'US-0000001'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['project_title'])

    def test_duplicate_patent_number(self):
        TestDataFactory.create_patent(self.project, patent_number='US-42')
        response = self.client.post('/api/v1/patents/', {
            'title': 'Copy', 'patent_number': 'US-42'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('patent_number', response.data)

    def test_grant_before_filing_rejected(self):
        response = self.client.post('/api/v1/patents/', {
            'title': 'Time travel', 'patent_number': 'US-88',
            'filing_date': '2024-05-01', 'grant_date': '2024-01-01',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('grant_date', response.data)

    def test_partial_update_checks_stored_filing_date(self):
        patent = TestDataFactory.create_patent(self.project, filing_date='2024-05-01')
        response = self.client.patch(f'/api/v1/patents/{patent.id}/', {'grant_date': '2024-01-01'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(f'/api/v1/patents/{patent.id}/', {
            'grant_date': '2025-02-01', 'status': 'GRANTED'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_by_inventor(self):
        TestDataFactory.create_patent(self.project, inventors='Nikola Tesla')
        TestDataFactory.create_patent(self.project, inventors='Thomas Edison')
        response = self.client.get('/api/v1/patents/inventor/tesla/')
        self.assertEqual(len(response.data), 1)

    def test_by_project_status_and_type(self):
        TestDataFactory.create_patent(self.project, status='GRANTED', type='DESIGN')
        TestDataFactory.create_patent(self.project)
        response = self.client.get(f'/api/v1/patents/project/{self.project.id}/status/granted/')
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f'/api/v1/patents/project/{self.project.id}/type/design/')
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f'/api/v1/patents/project/{self.project.id}/type/musical/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patent_survives_project_deletion(self):
        patent = TestDataFactory.create_patent(self.project)
        self.project.delete()
        patent.refresh_from_db()
        self.assertIsNone(patent.project)
        self.assertTrue(ProjectPatent.objects.filter(pk=patent.id).exists())


class PublicationAPITests(TestCase):
    """Test publication API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_publication(self):
        response = self.client.post('/api/v1/publications/', {
            'project': self.project.id,
            'title': 'On the origin of samples',
            'type': 'CONFERENCE_PAPER',
            'authors': 'A. Author, B. Writer',
            'year': 2024,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'DRAFT')
        self.assertEqual(response.data['citations'], 0)

    def test_publication_requires_project(self):
        response = self.client.post('/api/v1/publications/', {'title': 'Loose paper'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('project', response.data)

    def test_by_author(self):
        TestDataFactory.create_publication(self.project, authors='Rosalind Franklin, Maurice Wilkins')
        TestDataFactory.create_publication(self.project, authors='James Watson')
        response = self.client.get('/api/v1/publications/author/franklin/')
        self.assertEqual(len(response.data), 1)

    def test_by_project_status_and_type(self):
        TestDataFactory.create_publication(self.project, status='PUBLISHED', type='THESIS')
        TestDataFactory.create_publication(self.project)
        response = self.client.get(f'/api/v1/publications/project/{self.project.id}/status/published/')
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f'/api/v1/publications/project/{self.project.id}/type/thesis/')
        self.assertEqual(len(response.data), 1)

    def test_filter_by_year(self):
        TestDataFactory.create_publication(self.project, title='Old', year=2019)
        TestDataFactory.create_publication(self.project, title='New', year=2024)
        response = self.client.get('/api/v1/publications/', {'year': 2024})
        self.assertEqual([p['title'] for p in response.data], ['New'])
