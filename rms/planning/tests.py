"""
Test suite for project planning
Tests: tasks, milestones and deliverables including project-scoped listings and completion stamping
"""
from datetime import timedelta
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.planning.models import ProjectTask, ProjectMilestone


class PlanningModelTests(TestCase):
    """Test completion stamping and overdue detection"""

    def setUp(self):
        self.project = TestDataFactory.create_project()

    def test_completed_task_gets_progress_and_date(self):
        task = TestDataFactory.create_task(self.project, status='COMPLETED', progress=20)
        self.assertEqual(task.progress, 100)
        self.assertEqual(task.completion_date, timezone.localdate())

    def test_task_is_overdue(self):
        yesterday = timezone.localdate() - timedelta(days=1)
        self.assertTrue(TestDataFactory.create_task(self.project, due_date=yesterday).is_overdue)
        self.assertFalse(TestDataFactory.create_task(self.project, due_date=yesterday, status='COMPLETED').is_overdue)
        self.assertFalse(TestDataFactory.create_task(self.project).is_overdue)

    def test_completed_milestone(self):
        milestone = TestDataFactory.create_milestone(self.project, status='COMPLETED')
        self.assertEqual(milestone.progress, 100)
        self.assertIsNotNone(milestone.completion_date)

    def test_approved_deliverable_gets_completion_date(self):
        deliverable = TestDataFactory.create_deliverable(self.project, status='APPROVED')
        self.assertEqual(deliverable.completion_date, timezone.localdate())


class TaskAPITests(TestCase):
    """Test task API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()
        self.other_project = TestDataFactory.create_project()

    def test_create_task(self):
        data = {
            'project': self.project.id,
            'title': 'Collect samples',
            'priority': 'HIGH',
            'due_date': '2030-01-15',
            'assigned_to': self.user.id,
        }
        response = self.client.post('/api/v1/tasks/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['project_title'], self.project.title)
        self.assertEqual(response.data['assigned_to_username'], self.user.username)
        self.assertFalse(response.data['is_overdue'])

    def test_create_task_without_project(self):
        response = self.client.post('/api/v1/tasks/', {'title': 'Orphan'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('project', response.data)

    def test_by_project(self):
        TestDataFactory.create_task(self.project)
        TestDataFactory.create_task(self.project)
        TestDataFactory.create_task(self.other_project)
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_by_unknown_project(self):
        response = self.client.get('/api/v1/tasks/project/9999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_by_project_status(self):
        TestDataFactory.create_task(self.project, status='IN_PROGRESS')
        TestDataFactory.create_task(self.project, status='PENDING')
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/status/in_progress/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['status'], 'IN_PROGRESS')

    def test_by_project_invalid_status(self):
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/status/sleeping/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_by_project_priority_and_assignee(self):
        TestDataFactory.create_task(self.project, priority='URGENT', assigned_to=self.user)
        TestDataFactory.create_task(self.project, priority='LOW')
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/priority/urgent/')
        self.assertEqual(len(response.data), 1)
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/assigned/{self.user.id}/')
        self.assertEqual(len(response.data), 1)

    def test_sorted_puts_undated_last(self):
        today = timezone.localdate()
        TestDataFactory.create_task(self.project, title='Undated')
        TestDataFactory.create_task(self.project, title='Later', due_date=today + timedelta(days=10))
        TestDataFactory.create_task(self.project, title='Sooner', due_date=today + timedelta(days=1))
        response = self.client.get(f'/api/v1/tasks/project/{self.project.id}/sorted/')
        self.assertEqual([t['title'] for t in response.data], ['Sooner', 'Later', 'Undated'])

    def test_overdue_filter(self):
        yesterday = timezone.localdate() - timedelta(days=1)
        TestDataFactory.create_task(self.project, title='Late', due_date=yesterday)
        TestDataFactory.create_task(self.project, title='Fine')
        response = self.client.get('/api/v1/tasks/', {'overdue': 'true'})
        self.assertEqual([t['title'] for t in response.data], ['Late'])

    def test_complete_task_via_patch(self):
        task = TestDataFactory.create_task(self.project)
        response = self.client.patch(f'/api/v1/tasks/{task.id}/', {'status': 'COMPLETED'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['progress'], 100)
        self.assertIsNotNone(response.data['completion_date'])

    def test_delete_task(self):
        task = TestDataFactory.create_task(self.project)
        response = self.client.delete(f'/api/v1/tasks/{task.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ProjectTask.objects.filter(pk=task.id).exists())


class MilestoneAPITests(TestCase):
    """Test milestone API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_milestone_requires_due_date(self):
        response = self.client.post('/api/v1/milestones/', {
            'project': self.project.id, 'title': 'Prototype'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('due_date', response.data)

    def test_create_milestone(self):
        response = self.client.post('/api/v1/milestones/', {
            'project': self.project.id, 'title': 'Prototype', 'due_date': '2030-06-30'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(ProjectMilestone.objects.filter(title='Prototype').exists())

    def test_sorted_by_due_date(self):
        today = timezone.localdate()
        TestDataFactory.create_milestone(self.project, title='Second', due_date=today + timedelta(days=20))
        TestDataFactory.create_milestone(self.project, title='First', due_date=today + timedelta(days=5))
        response = self.client.get(f'/api/v1/milestones/project/{self.project.id}/sorted/')
        self.assertEqual([m['title'] for m in response.data], ['First', 'Second'])

    def test_by_project_status(self):
        TestDataFactory.create_milestone(self.project, status='DELAYED')
        TestDataFactory.create_milestone(self.project)
        response = self.client.get(f'/api/v1/milestones/project/{self.project.id}/status/DELAYED/')
        self.assertEqual(len(response.data), 1)


class DeliverableAPITests(TestCase):
    """Test deliverable API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_and_filter_by_type(self):
        response = self.client.post('/api/v1/deliverables/', {
            'project': self.project.id, 'title': 'Final report', 'type': 'Report'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        TestDataFactory.create_deliverable(self.project, type='Dataset')

        response = self.client.get(f'/api/v1/deliverables/project/{self.project.id}/type/report/')
        self.assertEqual([d['title'] for d in response.data], ['Final report'])

    def test_by_project_status(self):
        TestDataFactory.create_deliverable(self.project, status='APPROVED')
        TestDataFactory.create_deliverable(self.project)
        response = self.client.get(f'/api/v1/deliverables/project/{self.project.id}/status/approved/')
        self.assertEqual(len(response.data), 1)
