"""
Test suite for project team members
Tests: membership CRUD, per-project email uniqueness and role/active listings
"""
from django.test import TestCase
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.team.models import TeamMember


class TeamMemberAPITests(TestCase):
    """Test team member API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_add_member(self):
        data = {
            'project': self.project.id,
            'name': 'Ada Lovelace',
            'email': 'ada@lab.org',
            'role': 'CO_INVESTIGATOR',
            'expertise': 'Analytical engines',
        }
        response = self.client.post('/api/v1/team-members/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['project_title'], self.project.title)
        self.assertTrue(response.data['is_active'])

    def test_duplicate_email_on_project_rejected(self):
        """Test the same email cannot join a project twice (case-insensitive)"""
        TestDataFactory.create_team_member(self.project, email='dup@lab.org')
        response = self.client.post('/api/v1/team-members/', {
            'project': self.project.id, 'name': 'Duplicate', 'email': 'DUP@lab.org'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_same_email_on_other_project_allowed(self):
        TestDataFactory.create_team_member(self.project, email='shared@lab.org')
        other = TestDataFactory.create_project()
        response = self.client.post('/api/v1/team-members/', {
            'project': other.id, 'name': 'Shared', 'email': 'shared@lab.org'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_update_keeps_own_email(self):
        member = TestDataFactory.create_team_member(self.project, email='self@lab.org')
        response = self.client.patch(f'/api/v1/team-members/{member.id}/', {
            'email': 'self@lab.org', 'department': 'Chemistry'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['department'], 'Chemistry')

    def test_invalid_email(self):
        response = self.client.post('/api/v1/team-members/', {
            'project': self.project.id, 'name': 'Bad email', 'email': 'not-an-email'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_by_project_role(self):
        TestDataFactory.create_team_member(self.project, role='POSTDOC')
        TestDataFactory.create_team_member(self.project, role='TECHNICIAN')
        response = self.client.get(f'/api/v1/team-members/project/{self.project.id}/role/postdoc/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['role'], 'POSTDOC')

    def test_active_by_project(self):
        TestDataFactory.create_team_member(self.project)
        TestDataFactory.create_team_member(self.project, is_active=False)
        response = self.client.get(f'/api/v1/team-members/project/{self.project.id}/active/')
        self.assertEqual(len(response.data), 1)

    def test_search_filter(self):
        TestDataFactory.create_team_member(self.project, name='Grace Hopper', expertise='Compilers')
        TestDataFactory.create_team_member(self.project, name='Alan Turing', expertise='Computability')
        response = self.client.get('/api/v1/team-members/', {'search': 'compilers'})
        self.assertEqual([m['name'] for m in response.data], ['Grace Hopper'])

    def test_remove_member(self):
        member = TestDataFactory.create_team_member(self.project)
        response = self.client.delete(f'/api/v1/team-members/{member.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(TeamMember.objects.filter(pk=member.id).exists())
