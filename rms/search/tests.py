"""
Test suite for global search
Tests: scoring, ranking, filters, pagination and the search endpoints
"""
from datetime import timedelta
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.projects.models import ResearchProject
from rms.search.engine import (
    SearchFilters, SearchQueryError, find_hits, score_record, search, suggestions, tokenize,
)
from rms.search.registry import SEARCHABLE_TYPES_BY_NAME, resolve_type_name


class SearchEngineTests(TestCase):
    """Test ranking and filtering in the search engine"""

    def setUp(self):
        self.project = TestDataFactory.create_project(
            title='Quantum sensors', description='Cold atom interferometry', research_area='Physics'
        )

    def test_tokenize(self):
        self.assertEqual(tokenize('  Quantum  quantum Sensors '), ['quantum', 'sensors'])
        self.assertEqual(tokenize(''), [])

    def test_resolve_type_name(self):
        self.assertEqual(resolve_type_name('TEAM_MEMBER'), 'team_member')
        self.assertEqual(resolve_type_name('team-members'), 'team_member')
        self.assertEqual(resolve_type_name('Projects'), 'project')
        self.assertIsNone(resolve_type_name('spaceship'))

    def test_title_match_outranks_description_match(self):
        other = TestDataFactory.create_project(title='Atom clocks', description='Quantum timekeeping')
        project_type = SEARCHABLE_TYPES_BY_NAME['project']

        self.assertEqual(score_record(project_type, self.project, ['quantum'], 'quantum'), 1.0)
        self.assertEqual(score_record(project_type, other, ['quantum'], 'quantum'), 0.3333)

        hits = find_hits('quantum', SearchFilters(entity_types='project'))
        self.assertEqual([hit.record.pk for hit in hits], [self.project.pk, other.pk])

    def test_unmatched_tokens_lower_the_score(self):
        project_type = SEARCHABLE_TYPES_BY_NAME['project']
        score = score_record(project_type, self.project, ['quantum', 'biology'], 'quantum biology')
        self.assertEqual(score, 0.5)

    def test_searches_related_records(self):
        TestDataFactory.create_task(self.project, title='Calibrate quantum detector')
        TestDataFactory.create_risk(self.project, title='Laser failure', description='Quantum source drift')
        types = {hit.searchable.name for hit in find_hits('quantum')}
        self.assertEqual(types, {'project', 'task', 'risk'})

    def test_status_filter_skips_types_without_status(self):
        TestDataFactory.create_team_member(self.project, name='Quantum Quinn')
        TestDataFactory.create_task(self.project, title='Quantum task', status='IN_PROGRESS')
        hits = find_hits('quantum', SearchFilters(statuses='in_progress'))
        self.assertEqual([hit.searchable.name for hit in hits], ['task'])

    def test_project_filter(self):
        other = TestDataFactory.create_project(title='Quantum biology')
        TestDataFactory.create_task(other, title='Quantum enzymes')
        hits = find_hits('quantum', SearchFilters(project_id=other.pk))
        self.assertEqual({hit.searchable.name for hit in hits}, {'project', 'task'})
        self.assertTrue(all(hit.searchable.project(hit.record).pk == other.pk for hit in hits))

    def test_department_filter_applies_to_team_members(self):
        TestDataFactory.create_team_member(self.project, name='Quantum Ann', department='Physics')
        TestDataFactory.create_team_member(self.project, name='Quantum Bob', department='Chemistry')
        hits = find_hits('quantum', SearchFilters(entity_types='team_member', department='phys'))
        self.assertEqual([hit.record.name for hit in hits], ['Quantum Ann'])

    def test_invalid_date_filter(self):
        with self.assertRaises(SearchQueryError):
            SearchFilters(date_start='yesterday-ish')

    def test_impossible_calendar_date_rejected(self):
        with self.assertRaises(SearchQueryError):
            SearchFilters(date_start='2024-02-30')
        with self.assertRaises(SearchQueryError):
            SearchFilters(date_end='2024-13-01T10:00:00')

    def test_project_id_must_be_numeric(self):
        self.assertEqual(SearchFilters(project_id='12').project_id, 12)
        with self.assertRaises(SearchQueryError):
            SearchFilters(project_id='abc')

    def test_entity_types_must_be_list_or_string(self):
        with self.assertRaises(SearchQueryError):
            SearchFilters(entity_types=5)
        with self.assertRaises(SearchQueryError):
            SearchFilters.from_payload({'entityTypes': {'type': 'project'}})

    def test_date_range_excludes_records_outside_bounds(self):
        old = TestDataFactory.create_project(title='Coral old')
        new = TestDataFactory.create_project(title='Coral new')
        today = timezone.localdate()
        ResearchProject.objects.filter(pk=old.pk).update(updated_at=timezone.now() - timedelta(days=30))

        hits = find_hits('coral', SearchFilters(date_start=today.isoformat()))
        self.assertEqual([hit.record.pk for hit in hits], [new.pk])

        hits = find_hits('coral', SearchFilters(date_end=(today - timedelta(days=10)).isoformat()))
        self.assertEqual([hit.record.pk for hit in hits], [old.pk])

    def test_equal_scores_ordered_by_most_recently_modified(self):
        older = TestDataFactory.create_project(title='Coral survey')
        newer = TestDataFactory.create_project(title='Coral census')
        ResearchProject.objects.filter(pk=older.pk).update(updated_at=timezone.now() - timedelta(days=5))

        hits = find_hits('coral', SearchFilters(entity_types='project'))
        self.assertEqual([hit.score for hit in hits], [1.0, 1.0])
        self.assertEqual([hit.record.pk for hit in hits], [newer.pk, older.pk])

    def test_blank_query(self):
        result = search('   ')
        self.assertEqual(result['results'], [])
        self.assertEqual(result['totalResults'], 0)
        self.assertEqual(result['totalPages'], 0)

    def test_pagination(self):
        for index in range(4):
            TestDataFactory.create_project(title=f'Graphene study {index}')
        result = search('graphene', page=1, size=3)
        self.assertEqual(result['totalResults'], 4)
        self.assertEqual(result['totalPages'], 2)
        self.assertEqual(len(result['results']), 1)
        self.assertEqual(result['page'], 1)

    def test_negative_page_rejected(self):
        with self.assertRaises(SearchQueryError):
            search('quantum', page=-1)

    def test_result_shape(self):
        result = search('quantum sensors')
        hit = result['results'][0]
        self.assertEqual(hit['entityType'], 'project')
        self.assertEqual(hit['entityId'], self.project.pk)
        self.assertEqual(hit['projectId'], self.project.pk)
        self.assertEqual(hit['projectName'], 'Quantum sensors')
        self.assertEqual(hit['url'], f'/projects/{self.project.pk}')
        self.assertEqual(hit['content'], 'Cold atom interferometry')
        self.assertEqual(hit['metadata']['research_area'], 'Physics')

    def test_suggestions(self):
        TestDataFactory.create_document(self.project, file_name='quantum_notes.txt')
        TestDataFactory.create_team_member(self.project, name='Quantum Quinn')
        self.assertEqual(suggestions('quant'), ['Quantum sensors', 'quantum_notes.txt', 'Quantum Quinn'])
        self.assertEqual(suggestions(''), [])


class SearchAPITests(TestCase):
    """Test search API endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project(title='Coral reef monitoring', priority='HIGH')
        TestDataFactory.create_document(self.project, file_name='reef_survey.csv', description='Coral census')
        TestDataFactory.create_team_member(self.project, name='Reef Diver', expertise='Coral ecology')

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/search/', {'query': 'coral'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_get_search(self):
        response = self.client.get('/api/v1/search/', {'q': 'coral'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalResults'], 3)
        self.assertEqual(response.data['results'][0]['entityType'], 'project')

    def test_get_search_type_and_priority(self):
        response = self.client.get('/api/v1/search/', {'query': 'coral', 'type': 'project,document'})
        self.assertEqual({r['entityType'] for r in response.data['results']}, {'project', 'document'})

        response = self.client.get('/api/v1/search/', {'query': 'coral', 'priority': 'high'})
        self.assertEqual([r['entityType'] for r in response.data['results']], ['project'])

    def test_get_search_bad_date(self):
        response = self.client.get('/api/v1/search/', {'query': 'coral', 'date_from': 'soon'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_get_search_bad_page(self):
        response = self.client.get('/api/v1/search/', {'query': 'coral', 'page': 'first'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_impossible_date_rejected(self):
        response = self.client.post('/api/v1/search/global/', {
            'query': 'coral', 'filters': {'dateRange': {'start': '2024-02-30'}}
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('2024-02-30', response.data['error'])

        response = self.client.get('/api/v1/search/', {'query': 'coral', 'date_to': '2024-02-30'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_numeric_project_id_rejected(self):
        response = self.client.get('/api/v1/search/', {'query': 'coral', 'projectId': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

        response = self.client.post('/api/v1/search/global/', {'query': 'coral', 'projectId': 'abc'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_scalar_entity_types_rejected(self):
        response = self.client.post('/api/v1/search/global/', {
            'query': 'coral', 'filters': {'entityTypes': 5}
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_page_navigation_flags(self):
        response = self.client.get('/api/v1/search/', {'query': 'coral', 'size': 2})
        self.assertEqual(response.data['totalPages'], 2)
        self.assertTrue(response.data['hasNext'])
        self.assertFalse(response.data['hasPrevious'])

        response = self.client.get('/api/v1/search/', {'query': 'coral', 'size': 2, 'page': 1})
        self.assertFalse(response.data['hasNext'])
        self.assertTrue(response.data['hasPrevious'])

    def test_post_global_search(self):
        response = self.client.post('/api/v1/search/global/', {
            'query': 'coral',
            'filters': {'entityTypes': ['TEAM_MEMBER'], 'dateRange': {'start': '2000-01-01'}},
            'page': 0,
            'size': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['title'] for r in response.data['results']], ['Reef Diver'])

    def test_post_with_malformed_filters(self):
        response = self.client.post('/api/v1/search/global/', {'query': 'coral', 'filters': 'all'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search_documents(self):
        response = self.client.post('/api/v1/search/documents/', {'query': 'coral'}, format='json')
        self.assertEqual([r['entityType'] for r in response.data['results']], ['document'])

    def test_search_team_members(self):
        response = self.client.post('/api/v1/search/team-members/', {'query': 'coral'}, format='json')
        self.assertEqual([r['entityType'] for r in response.data['results']], ['team_member'])

    def test_suggestions_endpoint(self):
        response = self.client.get('/api/v1/search/suggestions/', {'query': 'reef'})
        self.assertEqual(response.data, ['Coral reef monitoring', 'reef_survey.csv', 'Reef Diver'])
