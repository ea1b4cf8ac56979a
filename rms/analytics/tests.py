"""
Test suite for analytics and the dashboard
Tests: schedule metrics, analytics calculation, cached dashboard aggregates,
activity feed, dashboard project lists and the calculate_analytics command
"""
from datetime import date, timedelta
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.cache import cache
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from rms.analytics import services
from rms.analytics.models import ResearchAnalytics
from rms.core.cache_signals import suspend_cache_signals
from rms.core.models import AuditLog
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class ScheduleMetricsTests(TestCase):
    """Test completion figures derived from project dates"""

    def test_halfway(self):
        metrics = services.schedule_metrics(date(2024, 1, 1), date(2024, 1, 11), date(2024, 1, 6))
        self.assertEqual(metrics['duration_days'], 10)
        self.assertEqual(metrics['actual_duration_days'], 5)
        self.assertEqual(metrics['completion_rate'], 50.0)
        self.assertEqual(metrics['actual_end_date'], date(2024, 1, 11))
        self.assertTrue(metrics['on_time_completion'])

    def test_rounded_to_two_places(self):
        metrics = services.schedule_metrics(date(2024, 1, 1), date(2024, 1, 4), date(2024, 1, 2))
        self.assertEqual(metrics['completion_rate'], 33.33)

    def test_past_end_date(self):
        metrics = services.schedule_metrics(date(2024, 1, 1), date(2024, 1, 11), date(2024, 1, 20))
        self.assertEqual(metrics['completion_rate'], 100.0)
        self.assertEqual(metrics['actual_end_date'], date(2024, 1, 20))
        self.assertFalse(metrics['on_time_completion'])

    def test_not_started(self):
        metrics = services.schedule_metrics(date(2024, 2, 1), date(2024, 3, 1), date(2024, 1, 15))
        self.assertEqual(metrics['completion_rate'], 0.0)
        self.assertEqual(metrics['actual_duration_days'], 0)

    def test_missing_dates(self):
        today = date(2024, 5, 1)
        metrics = services.schedule_metrics(None, None, today)
        self.assertEqual(metrics['duration_days'], services.DEFAULT_DURATION_DAYS)
        self.assertEqual(metrics['completion_rate'], 0.0)
        self.assertEqual(metrics['actual_end_date'], today + timedelta(days=services.DEFAULT_DURATION_DAYS))

    def test_same_start_and_end(self):
        metrics = services.schedule_metrics(date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 1))
        self.assertEqual(metrics['duration_days'], 1)
        self.assertEqual(metrics['completion_rate'], 0.0)


class AnalyticsServiceTests(TestCase):
    """Test analytics calculation and aggregates"""

    def setUp(self):
        cache.clear()
        self.on_time = TestDataFactory.create_project(
            title='On time', start_date=date(2024, 1, 1), end_date=date(2024, 1, 11)
        )
        self.delayed = TestDataFactory.create_project(
            title='Delayed', start_date=date(2024, 1, 1), end_date=date(2024, 1, 3), priority='HIGH'
        )

    def test_calculate_project_analytics(self):
        analytics = services.calculate_project_analytics(self.on_time, today=date(2024, 1, 6))
        self.assertEqual(analytics.project_title, 'On time')
        self.assertEqual(analytics.completion_rate, 50.0)
        self.assertEqual(analytics.calculated_date, date(2024, 1, 6))
        self.assertEqual(ResearchAnalytics.objects.filter(project=self.on_time).count(), 1)

    def test_calculate_all_skips_failures(self):
        real = services.calculate_project_analytics

        def flaky(project, today=None):
            if project.pk == self.delayed.pk:
                raise RuntimeError('boom')
            return real(project, today)

        with mock.patch('rms.analytics.services.calculate_project_analytics', side_effect=flaky):
            created, failed = services.calculate_all_analytics(today=date(2024, 1, 6))

        self.assertEqual([row.project_id for row in created], [self.on_time.pk])
        self.assertEqual(failed, [self.delayed.pk])

    def test_analytics_dashboard_uses_latest_rows(self):
        services.calculate_project_analytics(self.on_time, today=date(2024, 1, 6))
        services.calculate_project_analytics(self.on_time, today=date(2024, 1, 8))
        services.calculate_project_analytics(self.delayed, today=date(2024, 1, 6))
        cache.clear()

        data = services.analytics_dashboard()
        self.assertEqual(data['totalProjects'], 2)
        self.assertEqual(data['analyzedProjects'], 2)
        self.assertEqual(data['onTimeProjects'], 1)
        self.assertEqual(data['delayedProjects'], 1)
        self.assertEqual(data['averageCompletionRate'], 85.0)
        self.assertEqual(data['lastCalculated'], date(2024, 1, 8))
        self.assertEqual(data['statusDistribution'], {'ACTIVE': 2})
        self.assertEqual(data['priorityDistribution'], {'HIGH': 1, 'MEDIUM': 1})

    def test_analytics_dashboard_without_rows(self):
        data = services.analytics_dashboard()
        self.assertEqual(data['analyzedProjects'], 0)
        self.assertEqual(data['averageCompletionRate'], 0.0)
        self.assertIsNone(data['lastCalculated'])

    def test_dashboard_stats(self):
        TestDataFactory.create_project(status='COMPLETED', budget=Decimal('500.00'))
        TestDataFactory.create_team_member(self.on_time)
        TestDataFactory.create_task(self.on_time)
        TestDataFactory.create_risk(self.on_time)
        TestDataFactory.create_risk(self.on_time, status='CLOSED')
        TestDataFactory.create_publication(self.on_time)
        TestDataFactory.create_patent(self.on_time)
        cache.clear()

        stats = services.dashboard_stats()
        self.assertEqual(stats['totalProjects'], 3)
        self.assertEqual(stats['completedProjects'], 1)
        self.assertEqual(stats['inProgressProjects'], 2)
        self.assertEqual(stats['totalBudget'], 20500.0)
        self.assertEqual(stats['totalTeamMembers'], 1)
        self.assertEqual(stats['totalTasks'], 1)
        self.assertEqual(stats['openRisks'], 1)
        self.assertEqual(stats['totalPublications'], 1)
        self.assertEqual(stats['totalPatents'], 1)

    def test_dashboard_stats_cached_until_change(self):
        self.assertEqual(services.dashboard_stats()['totalProjects'], 2)

        with suspend_cache_signals():
            TestDataFactory.create_project()
        self.assertEqual(services.dashboard_stats()['totalProjects'], 2)

        TestDataFactory.create_project()
        self.assertEqual(services.dashboard_stats()['totalProjects'], 4)

    def test_task_analytics(self):
        today = timezone.localdate()
        TestDataFactory.create_task(self.on_time, status='COMPLETED', estimated_hours=5, actual_hours=6)
        TestDataFactory.create_task(self.on_time, due_date=today - timedelta(days=1), estimated_hours=3)
        TestDataFactory.create_task(self.on_time, priority='HIGH')

        data = services.task_analytics(self.on_time, today=today)
        self.assertEqual(data['total_tasks'], 3)
        self.assertEqual(data['completed_tasks'], 1)
        self.assertEqual(data['completion_percentage'], 33.33)
        self.assertEqual(data['overdue_tasks'], 1)
        self.assertEqual(data['estimated_hours'], 8)
        self.assertEqual(data['actual_hours'], 6)
        self.assertEqual(data['by_status']['COMPLETED'], 1)

    def test_budget_analytics(self):
        TestDataFactory.create_budget(self.on_time, budgeted_amount=Decimal('9000.00'),
                                      actual_amount=Decimal('12000.00'))
        data = services.budget_analytics(self.on_time)
        self.assertEqual(data['project_budget'], 10000.0)
        self.assertEqual(data['variance'], -2000.0)
        self.assertTrue(data['over_budget'])


class ActivityTests(TestCase):
    """Test the recent activity feed"""

    def test_time_ago(self):
        now = timezone.now()
        self.assertEqual(services.time_ago(now - timedelta(days=1, hours=3), now), '1 day ago')
        self.assertEqual(services.time_ago(now - timedelta(days=4), now), '4 days ago')
        self.assertEqual(services.time_ago(now - timedelta(hours=2), now), '2 hours ago')
        self.assertEqual(services.time_ago(now - timedelta(minutes=1), now), '1 minute ago')
        self.assertEqual(services.time_ago(now - timedelta(seconds=20), now), '0 minutes ago')
        self.assertEqual(services.time_ago(None, now), 'Unknown time')

    def test_recent_activity(self):
        project = TestDataFactory.create_project(title='Feed project')
        TestDataFactory.create_team_member(project, name='Feed Member')
        TestDataFactory.create_document(project, file_name='feed.pdf')
        TestDataFactory.create_task(project, title='Feed task')
        TestDataFactory.create_publication(project, title='Feed paper')

        activity = services.recent_activity()
        self.assertEqual({item['type'] for item in activity}, {'project', 'member', 'document', 'task', 'publication'})
        self.assertIn(f'project_{project.pk}', [item['id'] for item in activity])
        timestamps = [item['timestamp'] for item in activity]
        self.assertEqual(timestamps, sorted(timestamps, reverse=True))

    def test_recent_activity_limit(self):
        for _ in range(4):
            TestDataFactory.create_project()
        self.assertEqual(len(services.recent_activity(limit=3)), 3)


class AnalyticsAPITests(TestCase):
    """Test analytics and dashboard API endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project(
            title='Soil carbon', research_area='Ecology', priority='HIGH',
            start_date=timezone.localdate() - timedelta(days=10),
            end_date=timezone.localdate() + timedelta(days=10),
        )

    def test_calculate_all(self):
        TestDataFactory.create_project()
        response = self.client.post('/api/v1/analytics/calculate/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['calculated'], 2)
        self.assertEqual(response.data['failed'], [])
        self.assertTrue(AuditLog.objects.filter(action='calculate', object_id='all').exists())

    def test_calculate_project_and_list(self):
        response = self.client.post(f'/api/v1/analytics/project/{self.project.id}/calculate/')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['project_id'], self.project.id)
        self.assertEqual(response.data['completion_rate'], 50.0)

        response = self.client.get(f'/api/v1/analytics/project/{self.project.id}/')
        self.assertEqual(len(response.data), 1)
        response = self.client.get('/api/v1/analytics/')
        self.assertEqual(len(response.data), 1)

    def test_calculate_unknown_project(self):
        response = self.client.post('/api/v1/analytics/project/9999/calculate/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_analytics(self):
        analytics = services.calculate_project_analytics(self.project)
        response = self.client.delete(f'/api/v1/analytics/{analytics.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ResearchAnalytics.objects.filter(pk=analytics.id).exists())

    def test_analytics_dashboard(self):
        services.calculate_project_analytics(self.project)
        response = self.client.get('/api/v1/analytics/dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['analyzedProjects'], 1)
        self.assertEqual(response.data['onTimeProjects'], 1)

    def test_task_and_budget_analytics(self):
        TestDataFactory.create_task(self.project, status='COMPLETED')
        response = self.client.get(f'/api/v1/analytics/tasks/{self.project.id}/')
        self.assertEqual(response.data['completion_percentage'], 100.0)

        response = self.client.get(f'/api/v1/analytics/budget/{self.project.id}/')
        self.assertFalse(response.data['over_budget'])
        self.assertEqual(response.data['variance'], 10000.0)

    def test_dashboard_stats(self):
        response = self.client.get('/api/v1/dashboard/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalProjects'], 1)
        self.assertEqual(response.data['inProgressProjects'], 1)

    def test_dashboard_activity(self):
        response = self.client.get('/api/v1/dashboard/activity/')
        self.assertEqual(response.data[0]['id'], f'project_{self.project.id}')
        self.assertEqual(response.data[0]['action'], 'Project created')

    def test_projects_by_status_and_priority(self):
        TestDataFactory.create_project(status='ON_HOLD')
        response = self.client.get('/api/v1/dashboard/projects/status/active/')
        self.assertEqual([p['title'] for p in response.data], ['Soil carbon'])

        response = self.client.get('/api/v1/dashboard/projects/priority/high/')
        self.assertEqual(len(response.data), 1)

        response = self.client.get('/api/v1/dashboard/projects/status/dreaming/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recent_and_active_projects(self):
        for _ in range(6):
            TestDataFactory.create_project(status='PLANNING')
        response = self.client.get('/api/v1/dashboard/projects/recent/')
        self.assertEqual(len(response.data), 5)

        response = self.client.get('/api/v1/dashboard/projects/active/')
        self.assertEqual([p['id'] for p in response.data], [self.project.id])

    def test_project_search(self):
        TestDataFactory.create_project(title='Ocean acidity', research_area='Marine')
        response = self.client.get('/api/v1/dashboard/projects/search/', {'query': 'ecology'})
        self.assertEqual([p['title'] for p in response.data], ['Soil carbon'])

        response = self.client.get('/api/v1/dashboard/projects/search/', {'q': ''})
        self.assertEqual(response.data, [])


class CalculateAnalyticsCommandTests(TestCase):
    """Test the calculate_analytics management command"""

    def setUp(self):
        cache.clear()
        self.active = TestDataFactory.create_project(title='Active one')
        self.completed = TestDataFactory.create_project(title='Done one', status='COMPLETED')

    def test_all_projects(self):
        out = StringIO()
        call_command('calculate_analytics', stdout=out)
        self.assertIn('Calculated analytics for 2 project(s)', out.getvalue())
        self.assertEqual(ResearchAnalytics.objects.count(), 2)

    def test_status_filter(self):
        out = StringIO()
        call_command('calculate_analytics', '--status', 'completed', stdout=out)
        self.assertEqual(list(ResearchAnalytics.objects.values_list('project_id', flat=True)), [self.completed.pk])

    def test_single_project(self):
        call_command('calculate_analytics', '--project-id', str(self.active.pk), stdout=StringIO())
        self.assertEqual(ResearchAnalytics.objects.get().project_id, self.active.pk)

    def test_unknown_project(self):
        with self.assertRaises(CommandError):
            call_command('calculate_analytics', '--project-id', '9999', stdout=StringIO())

    def test_invalidates_dashboard_cache(self):
        self.assertEqual(services.analytics_dashboard()['analyzedProjects'], 0)
        call_command('calculate_analytics', stdout=StringIO())
        self.assertEqual(services.analytics_dashboard()['analyzedProjects'], 2)
