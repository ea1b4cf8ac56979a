"""
Test suite for project risks
Tests: score/level derivation, validation, project listings and the high-risk count
"""
from django.test import TestCase
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.risks.models import risk_level_for_score


class RiskScoringTests(TestCase):
    """Test risk score and level derivation"""

    def setUp(self):
        self.project = TestDataFactory.create_project()

    def test_level_boundaries(self):
        self.assertEqual(risk_level_for_score(1), 'LOW')
        self.assertEqual(risk_level_for_score(4), 'LOW')
        self.assertEqual(risk_level_for_score(5), 'MEDIUM')
        self.assertEqual(risk_level_for_score(9), 'MEDIUM')
        self.assertEqual(risk_level_for_score(10), 'HIGH')
        self.assertEqual(risk_level_for_score(15), 'HIGH')
        self.assertEqual(risk_level_for_score(16), 'CRITICAL')
        self.assertEqual(risk_level_for_score(25), 'CRITICAL')

    def test_score_derived_on_save(self):
        risk = TestDataFactory.create_risk(self.project, probability=3, impact=4)
        self.assertEqual(risk.risk_score, 12)
        self.assertEqual(risk.risk_level, 'HIGH')

        risk.impact = 1
        risk.save()
        risk.refresh_from_db()
        self.assertEqual(risk.risk_score, 3)
        self.assertEqual(risk.risk_level, 'LOW')


class RiskAPITests(TestCase):
    """Test risk API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_risk_ignores_client_score(self):
        response = self.client.post('/api/v1/risks/', {
            'project': self.project.id,
            'title': 'Supplier delay',
            'category': 'Operational',
            'probability': 5,
            'impact': 4,
            'risk_score': 1,
            'risk_level': 'LOW',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['risk_score'], 20)
        self.assertEqual(response.data['risk_level'], 'CRITICAL')

    def test_probability_out_of_range(self):
        response = self.client.post('/api/v1/risks/', {
            'project': self.project.id, 'title': 'Impossible', 'probability': 6, 'impact': 1
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('probability', response.data)

    def test_list_sorted_by_score(self):
        TestDataFactory.create_risk(self.project, title='Minor', probability=1, impact=2)
        TestDataFactory.create_risk(self.project, title='Major', probability=4, impact=5)
        response = self.client.get(f'/api/v1/risks/project/{self.project.id}/')
        self.assertEqual([r['title'] for r in response.data], ['Major', 'Minor'])

    def test_by_project_status(self):
        TestDataFactory.create_risk(self.project, status='MITIGATED')
        TestDataFactory.create_risk(self.project)
        response = self.client.get(f'/api/v1/risks/project/{self.project.id}/status/mitigated/')
        self.assertEqual(len(response.data), 1)

        response = self.client.get(f'/api/v1/risks/project/{self.project.id}/status/forgotten/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_by_project_category(self):
        TestDataFactory.create_risk(self.project, category='Technical')
        TestDataFactory.create_risk(self.project, category='Financial')
        response = self.client.get(f'/api/v1/risks/project/{self.project.id}/category/technical/')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['category'], 'Technical')

    def test_high_risk_count(self):
        """Test only open HIGH/CRITICAL risks are counted"""
        TestDataFactory.create_risk(self.project, probability=5, impact=5)
        TestDataFactory.create_risk(self.project, probability=3, impact=4, status='MITIGATED')
        TestDataFactory.create_risk(self.project, probability=4, impact=4, status='CLOSED')
        TestDataFactory.create_risk(self.project, probability=2, impact=2)
        TestDataFactory.create_risk(TestDataFactory.create_project(), probability=5, impact=5)

        response = self.client.get(f'/api/v1/risks/project/{self.project.id}/high-risk-count/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'project_id': self.project.id, 'count': 2})

    def test_high_risk_count_unknown_project(self):
        response = self.client.get('/api/v1/risks/project/9999/high-risk-count/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_by_level(self):
        TestDataFactory.create_risk(self.project, probability=5, impact=5)
        TestDataFactory.create_risk(self.project)
        response = self.client.get('/api/v1/risks/', {'risk_level': 'critical'})
        self.assertEqual(len(response.data), 1)
