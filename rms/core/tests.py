"""
Test suite for the core module
Tests: registration, JWT login/refresh, user administration, audit logging and cache invalidation
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from rms.core.cache_signals import suspend_cache_signals
from rms.core.cache_utils import DASHBOARD_STATS_CACHE_KEY, cached_query, make_cache_key
from rms.core.models import AuditLog, User
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.core.utils import create_audit_log, diff_changes


class AuthAPITests(TestCase):
    """Test registration, login and token refresh"""

    def setUp(self):
        self.client = APIClient()

    def test_register_returns_tokens(self):
        """Test signup creates the user and returns a token pair"""
        data = {
            'username': 'newresearcher',
            'email': 'new@lab.org',
            'password': 'Str0ng-passw0rd!',
            'password_confirm': 'Str0ng-passw0rd!',
            'institution': 'Test University',
            'role': 'PRINCIPAL_INVESTIGATOR',
        }
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['institution'], 'Test University')
        self.assertTrue(User.objects.filter(username='newresearcher', role='PRINCIPAL_INVESTIGATOR').exists())

    def test_register_password_mismatch(self):
        """Test signup with mismatching passwords is rejected"""
        data = {
            'username': 'mismatch',
            'email': 'mismatch@lab.org',
            'password': 'Str0ng-passw0rd!',
            'password_confirm': 'different-Passw0rd',
        }
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_login_includes_user(self):
        """Test login returns tokens and the user profile"""
        TestDataFactory.create_user(username='loginuser', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'loginuser', 'password': 'testpass123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['username'], 'loginuser')
        self.assertIn('access', response.data)

    def test_login_wrong_password(self):
        TestDataFactory.create_user(username='loginuser2', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'loginuser2', 'password': 'wrong'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_for_deleted_user(self):
        """Test refreshing a token of a deleted user is reported as invalid"""
        user = TestDataFactory.create_user()
        refresh = str(RefreshToken.for_user(user))
        user.delete()
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': refresh}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_endpoints_require_authentication(self):
        response = self.client.get('/api/v1/projects/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserAPITests(TestCase):
    """Test user endpoints and access flags"""

    def setUp(self):
        self.admin = TestDataFactory.create_user(is_staff=True)
        self.user = TestDataFactory.create_user(role='VIEWER')
        self.client = AuthenticatedAPIClient()

    def test_me_flags(self):
        """Test /auth/me/ reports access flags for a viewer"""
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_admin'])
        self.assertFalse(response.data['can_edit'])
        self.assertEqual(response.data['groups'], [])

    def test_user_list_admin_only(self):
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/v1/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.authenticate_user(self.admin)
        response = self.client.get('/api/v1/users/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_admin_cannot_delete_self(self):
        self.client.authenticate_user(self.admin)
        response = self.client.delete(f'/api/v1/users/{self.admin.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.delete(f'/api/v1/users/{self.user.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)


class AuditLogTests(TestCase):
    """Test the audit trail helpers and endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_diff_changes(self):
        """Test only changed fields are reported"""
        changes = diff_changes({'title': 'A', 'status': 'ACTIVE'}, {'title': 'B', 'status': 'ACTIVE'})
        self.assertEqual(changes, {'title': {'old': 'A', 'new': 'B'}})

    def test_create_audit_log_skips_missing_fields(self):
        self.assertIsNone(create_audit_log(user=self.user, action='create', model_name='ResearchProject'))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_mutation_is_audited(self):
        """Test creating a project through the API records an audit entry"""
        response = self.client.post('/api/v1/projects/', {'title': 'Audited project'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        log = AuditLog.objects.get(action='create', model_name='ResearchProject')
        self.assertEqual(log.user, self.user)
        self.assertEqual(log.object_name, 'Audited project')
        self.assertEqual(log.object_id, str(response.data['id']))

    def test_list_only_own_logs(self):
        create_audit_log(user=self.user, action='view', model_name='ResearchProject', object_id=1)
        create_audit_log(user=self.other, action='view', model_name='ResearchProject', object_id=2)
        response = self.client.get('/api/v1/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['object_id'], '1')

    def test_detail_of_other_user_forbidden(self):
        log = create_audit_log(user=self.other, action='view', model_name='ResearchProject', object_id=2)
        response = self.client.get(f'/api/v1/audit-logs/{log.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_filter_by_action(self):
        create_audit_log(user=self.user, action='view', model_name='ResearchProject', object_id=1)
        create_audit_log(user=self.user, action='delete', model_name='ResearchProject', object_id=1)
        response = self.client.get('/api/v1/audit-logs/', {'action': 'delete'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['action'], 'delete')


class CacheTests(TestCase):
    """Test cached aggregates and signal-driven invalidation"""

    def setUp(self):
        cache.clear()

    def test_make_cache_key_without_args(self):
        self.assertEqual(make_cache_key('dashboard_stats'), 'dashboard_stats')
        self.assertNotEqual(make_cache_key('prefix', 1), make_cache_key('prefix', 2))

    def test_cached_query_reuses_result(self):
        calls = []

        @cached_query(cache_ttl=60, key_prefix='test_counter')
        def counter():
            calls.append(1)
            return len(calls)

        self.assertEqual(counter(), 1)
        self.assertEqual(counter(), 1)
        self.assertEqual(len(calls), 1)

    def test_saving_record_invalidates_dashboard(self):
        cache.set(DASHBOARD_STATS_CACHE_KEY, {'totalProjects': 0})
        TestDataFactory.create_project()
        self.assertIsNone(cache.get(DASHBOARD_STATS_CACHE_KEY))

    def test_suspended_signals_keep_cache(self):
        cache.set(DASHBOARD_STATS_CACHE_KEY, {'totalProjects': 0})
        with suspend_cache_signals():
            TestDataFactory.create_project()
        self.assertIsNotNone(cache.get(DASHBOARD_STATS_CACHE_KEY))
