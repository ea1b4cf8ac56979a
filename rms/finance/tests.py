"""
Test suite for project budgets
Tests: budget line CRUD, amount validation, category/status listings and the budget summary
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.finance.services import budget_summary, utilization_percentage


class BudgetSummaryTests(TestCase):
    """Test budget aggregation"""

    def setUp(self):
        self.project = TestDataFactory.create_project()

    def test_utilization_percentage(self):
        self.assertEqual(utilization_percentage(Decimal('300.00'), Decimal('100.00')), 33.33)
        self.assertEqual(utilization_percentage(Decimal('0.00'), Decimal('50.00')), 0.0)

    def test_summary_excludes_cancelled_lines(self):
        TestDataFactory.create_budget(self.project, category='Equipment',
                                      budgeted_amount=Decimal('1000.00'), actual_amount=Decimal('400.00'))
        TestDataFactory.create_budget(self.project, category='Travel',
                                      budgeted_amount=Decimal('500.00'), actual_amount=Decimal('100.00'))
        TestDataFactory.create_budget(self.project, category='Travel', status='CANCELLED',
                                      budgeted_amount=Decimal('9999.00'))

        summary = budget_summary(self.project)
        self.assertEqual(summary['total_budgeted'], 1500.0)
        self.assertEqual(summary['total_actual'], 500.0)
        self.assertEqual(summary['remaining'], 1000.0)
        self.assertEqual(summary['utilization_percentage'], 33.33)
        self.assertEqual(summary['line_count'], 2)
        self.assertEqual([row['category'] for row in summary['by_category']], ['Equipment', 'Travel'])

    def test_summary_of_empty_project(self):
        summary = budget_summary(self.project)
        self.assertEqual(summary['total_budgeted'], 0.0)
        self.assertEqual(summary['utilization_percentage'], 0.0)
        self.assertEqual(summary['by_category'], [])


class BudgetAPITests(TestCase):
    """Test budget API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def test_create_budget_line(self):
        data = {
            'project': self.project.id,
            'item_name': 'Microscope',
            'category': 'Equipment',
            'budgeted_amount': '5000.00',
            'actual_amount': '4200.50',
        }
        response = self.client.post('/api/v1/budgets/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['remaining_amount'], '799.50')

    def test_negative_amount_rejected(self):
        response = self.client.post('/api/v1/budgets/', {
            'project': self.project.id, 'item_name': 'Refund', 'budgeted_amount': '-10.00'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('budgeted_amount', response.data)

    def test_by_project_category(self):
        TestDataFactory.create_budget(self.project, category='Travel')
        TestDataFactory.create_budget(self.project, category='Equipment')
        response = self.client.get(f'/api/v1/budgets/project/{self.project.id}/category/travel/')
        self.assertEqual(len(response.data), 1)

    def test_by_project_status(self):
        TestDataFactory.create_budget(self.project, status='PAID')
        TestDataFactory.create_budget(self.project)
        response = self.client.get(f'/api/v1/budgets/project/{self.project.id}/status/paid/')
        self.assertEqual(len(response.data), 1)

    def test_summary_endpoint(self):
        TestDataFactory.create_budget(self.project, budgeted_amount=Decimal('200.00'), actual_amount=Decimal('50.00'))
        response = self.client.get(f'/api/v1/budgets/project/{self.project.id}/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['project_id'], self.project.id)
        self.assertEqual(response.data['utilization_percentage'], 25.0)

    def test_summary_unknown_project(self):
        response = self.client.get('/api/v1/budgets/project/9999/summary/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_filter_by_amount(self):
        TestDataFactory.create_budget(self.project, item_name='Small', budgeted_amount=Decimal('10.00'))
        TestDataFactory.create_budget(self.project, item_name='Large', budgeted_amount=Decimal('10000.00'))
        response = self.client.get('/api/v1/budgets/', {'min_amount': '100'})
        self.assertEqual([b['item_name'] for b in response.data], ['Large'])
