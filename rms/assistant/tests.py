"""
Test suite for the research assistant
Tests: document retrieval, the language model client, chat with rule-based fallback,
project insights and the rag/ and ai/ endpoints
"""
import shutil
import tempfile
from datetime import timedelta
from decimal import Decimal
from unittest import mock

import requests
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework import status

from rms.assistant import chatbot, insights
from rms.assistant.llm import LLMClient, LLMUnavailable
from rms.assistant.models import ChatMessage
from rms.assistant.retrieval import (
    FALLBACK_ANSWER, answer_question, calculate_relevance, extract_snippet, search_documents,
)
from rms.core.models import AuditLog
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.documents.models import ProjectDocument


class StubLLMClient:
    """Records transcripts; replies with a fixed answer or raises LLMUnavailable when reply is None"""

    def __init__(self, reply=None):
        self.reply = reply
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.reply is None:
            raise LLMUnavailable('offline')
        return self.reply

    def ask(self, prompt, system_prompt='system'):
        return self.complete([
            {'role': 'system', 'content': system_prompt},
            {'role': 'user', 'content': prompt},
        ])


def _completion(content):
    response = mock.Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {'choices': [{'message': {'content': content}}]}
    return response


class RetrievalTests(TestCase):
    """Test document relevance, snippets and retrieval-backed answers"""

    def setUp(self):
        self.project = TestDataFactory.create_project()

    def test_calculate_relevance(self):
        self.assertEqual(calculate_relevance('Protein folding study', 'protein structure'), 0.5)
        self.assertEqual(calculate_relevance('', 'protein'), 0.0)
        self.assertEqual(calculate_relevance('Protein', ''), 0.0)

    def test_extract_snippet_short_text(self):
        self.assertEqual(extract_snippet('Short abstract', 'abstract'), 'Short abstract')

    def test_extract_snippet_around_match(self):
        content = 'a' * 300 + 'needle' + 'b' * 300
        snippet = extract_snippet(content, 'needle')
        self.assertTrue(snippet.startswith('a' * 50 + 'needle'))
        self.assertTrue(snippet.endswith('...'))
        self.assertEqual(len(snippet), 203)

    def test_extract_snippet_without_match(self):
        content = 'c' * 500
        self.assertEqual(extract_snippet(content, 'needle'), 'c' * 200 + '...')

    def test_search_documents_ranking(self):
        best = TestDataFactory.create_document(self.project, description='Enzyme kinetics at low temperature')
        partial = TestDataFactory.create_document(self.project, description='Enzyme purification')
        TestDataFactory.create_document(self.project, description='Unrelated budget memo')
        TestDataFactory.create_document(TestDataFactory.create_project(), description='Enzyme kinetics elsewhere')

        matches = search_documents('enzyme kinetics', project_id=self.project.pk)
        self.assertEqual([match.document.pk for match in matches], [best.pk, partial.pk])
        self.assertEqual(matches[1].relevance, 0.5)

    def test_search_documents_uses_extracted_text(self):
        document = TestDataFactory.create_document(self.project, content_text='Results on graphene membranes')
        matches = search_documents('graphene', project_id=self.project.pk)
        self.assertEqual([match.document.pk for match in matches], [document.pk])

    def test_answer_question_with_model(self):
        TestDataFactory.create_document(self.project, file_name='kinetics.txt', description='Enzyme kinetics data')
        client = StubLLMClient('Kinetics were measured at 4C.')
        result = answer_question('enzyme kinetics', self.project.pk, client=client)

        self.assertTrue(result['llm_used'])
        self.assertEqual(result['answer'], 'Kinetics were measured at 4C.')
        self.assertEqual(result['sources'][0]['fileName'], 'kinetics.txt')
        self.assertIn('From kinetics.txt: Enzyme kinetics data', client.calls[0][1]['content'])

    def test_answer_question_fallback(self):
        result = answer_question('dark matter', client=StubLLMClient())
        self.assertFalse(result['llm_used'])
        self.assertEqual(result['answer'], FALLBACK_ANSWER.format(query='dark matter'))
        self.assertEqual(result['sources'], [])


class LLMClientTests(TestCase):
    """Test the chat completions client"""

    def test_not_configured(self):
        client = LLMClient(api_key='')
        self.assertFalse(client.is_configured)
        with self.assertRaises(LLMUnavailable):
            client.ask('hello')

    @mock.patch('rms.assistant.llm.requests.post')
    def test_complete(self, mock_post):
        mock_post.return_value = _completion('  An answer  ')
        client = LLMClient(api_url='https://llm.test/v1/chat/completions', api_key='secret', model='test-model')

        self.assertEqual(client.ask('question'), 'An answer')
        _args, kwargs = mock_post.call_args
        self.assertEqual(kwargs['headers']['Authorization'], 'Bearer secret')
        self.assertEqual(kwargs['json']['model'], 'test-model')
        self.assertEqual(kwargs['json']['messages'][-1], {'role': 'user', 'content': 'question'})

    @mock.patch('rms.assistant.llm.requests.post')
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()
        with self.assertRaises(LLMUnavailable):
            LLMClient(api_key='secret').ask('question')

    @mock.patch('rms.assistant.llm.requests.post')
    def test_http_error(self, mock_post):
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError('503 Server Error')
        mock_post.return_value = response
        with self.assertRaises(LLMUnavailable):
            LLMClient(api_key='secret').ask('question')

    @mock.patch('rms.assistant.llm.requests.post')
    def test_unexpected_payload(self, mock_post):
        response = mock.Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {'error': 'quota'}
        mock_post.return_value = response
        with self.assertRaises(LLMUnavailable):
            LLMClient(api_key='secret').ask('question')


class ChatbotTests(TestCase):
    """Test intent detection, rule-based answers and chat history"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.project = TestDataFactory.create_project(title='Deep sea sensors', budget=Decimal('50000.00'))

    def test_detect_intent(self):
        self.assertEqual(chatbot.detect_intent('How many team members are there?'), 'team')
        self.assertEqual(chatbot.detect_intent('What is the project budget?'), 'project')
        self.assertEqual(chatbot.detect_intent('List the open risks'), 'risk')
        self.assertIsNone(chatbot.detect_intent('hello there'))

    def test_project_answers(self):
        TestDataFactory.create_project(title='Second project', status='COMPLETED')
        self.assertEqual(chatbot.rule_based_answer('How many projects?'), 'Total Projects: 2')
        self.assertEqual(chatbot.rule_based_answer('project status'), 'Project Status: ACTIVE: 1, COMPLETED: 1')
        answer = chatbot.rule_based_answer('show projects', project_id=self.project.pk)
        self.assertEqual(answer, 'Project: Deep sea sensors | Status: ACTIVE | Budget: $50,000.00')

    def test_budget_answer_excludes_cancelled(self):
        TestDataFactory.create_budget(self.project, budgeted_amount=Decimal('1500.00'), actual_amount=Decimal('500.00'))
        TestDataFactory.create_budget(self.project, budgeted_amount=Decimal('900.00'), status='CANCELLED')
        self.assertEqual(
            chatbot.rule_based_answer('What is the spending?'),
            'Budgeted: $1,500.00 | Spent: $500.00 | Remaining: $1,000.00',
        )

    def test_risk_and_task_counts(self):
        TestDataFactory.create_risk(self.project)
        TestDataFactory.create_risk(self.project, status='CLOSED')
        TestDataFactory.create_task(self.project)
        self.assertEqual(chatbot.rule_based_answer('how many risks?'), 'Open Risks: 1')
        self.assertEqual(chatbot.rule_based_answer('total tasks'), 'Total Tasks: 1')

    def test_overview_for_general_questions(self):
        TestDataFactory.create_team_member(self.project, name='Marine Biologist')
        answer = chatbot.rule_based_answer('hello')
        self.assertTrue(answer.startswith('Research Management System Overview'))
        self.assertIn('Projects: 1 total', answer)
        self.assertIn('- Deep sea sensors (ACTIVE)', answer)

    def test_gather_context_includes_records_and_documents(self):
        TestDataFactory.create_document(self.project, file_name='sonar.txt', description='Sensors calibration log')
        context, sources = chatbot.gather_context('sensors', self.project.pk)
        self.assertIn('[project] Deep sea sensors', context)
        self.assertEqual({source['entityType'] for source in sources}, {'project', 'document'})
        document_sources = [source for source in sources if source['entityType'] == 'document']
        self.assertEqual(len(document_sources), 1)

    def test_chat_stores_turns_and_sends_history(self):
        client = StubLLMClient('First reply')
        reply, _sources = chatbot.chat(self.user, 'Tell me about sensors', self.project, client=client)
        self.assertEqual(reply.content, 'First reply')
        self.assertTrue(reply.llm_used)

        client.reply = 'Second reply'
        chatbot.chat(self.user, 'And the budget?', self.project, client=client)
        second_transcript = client.calls[1]
        self.assertEqual([turn['role'] for turn in second_transcript], ['system', 'user', 'assistant', 'user'])
        self.assertEqual(second_transcript[2]['content'], 'First reply')
        self.assertEqual(ChatMessage.objects.filter(user=self.user).count(), 4)

    @override_settings(RAG_HISTORY_LIMIT=2)
    def test_history_is_limited(self):
        client = StubLLMClient('ok')
        for index in range(3):
            chatbot.chat(self.user, f'question {index}', self.project, client=client)
        self.assertEqual(len(client.calls[2]), 4)

    def test_chat_fallback(self):
        reply, _sources = chatbot.chat(self.user, 'How many projects?', client=StubLLMClient())
        self.assertFalse(reply.llm_used)
        self.assertEqual(reply.content, 'Total Projects: 1')


class InsightsTests(TestCase):
    """Test text statistics, recommendations, suggestions and summaries"""

    def setUp(self):
        self.project = TestDataFactory.create_project(
            title='Genome atlas', research_area='Biology', keywords='genomics, ai',
            principal_investigator='Dr. Reed', institution='Sea Lab',
        )

    def test_text_helpers(self):
        self.assertEqual(insights.top_words(['alpha beta alpha', 'beta alpha gamma'], min_length=3),
                         ['alpha', 'beta', 'gamma'])
        self.assertEqual(insights.summarize_text('x' * 250), 'x' * 200 + '...')
        self.assertEqual(insights.analyze_sentiment('A great and innovative result')['label'], 'positive')
        self.assertEqual(insights.analyze_sentiment('A problem')['label'], 'negative')
        self.assertEqual(insights.readability_score('One two three. Four five six.'), 76.89)
        self.assertEqual(insights.readability_score(''), 0.0)

    def test_similar_projects(self):
        close = TestDataFactory.create_project(title='Close', research_area='biology', keywords='ai genomics')
        partial = TestDataFactory.create_project(title='Partial', research_area='Biology', keywords='genomics, proteins')
        TestDataFactory.create_project(title='Elsewhere', research_area='Physics', keywords='genomics ai')

        results = insights.similar_projects(self.project)
        self.assertEqual([item['projectId'] for item in results], [close.pk, partial.pk])
        self.assertEqual(results[0]['similarityScore'], 1.0)
        self.assertEqual(results[1]['similarityScore'], 0.3333)
        self.assertEqual(results[1]['commonKeywords'], ['genomics'])

    def test_similar_projects_without_area(self):
        project = TestDataFactory.create_project(research_area='')
        self.assertEqual(insights.similar_projects(project), [])

    def test_suggestions_for_empty_project(self):
        suggestions = insights.project_suggestions(self.project)
        self.assertIn("No milestones are defined. Add milestones to track progress.", suggestions)
        self.assertIn("No documents are uploaded. Upload research documents so the assistant can use them.",
                      suggestions)

    def test_suggestions_for_problems(self):
        today = timezone.localdate()
        TestDataFactory.create_task(self.project, due_date=today - timedelta(days=2))
        TestDataFactory.create_risk(self.project, probability=5, impact=5)
        TestDataFactory.create_budget(self.project, budgeted_amount=Decimal('100.00'), actual_amount=Decimal('150.00'))

        suggestions = insights.project_suggestions(self.project, today=today)
        self.assertIn("1 task(s) are overdue. Review assignments and update due dates.", suggestions)
        self.assertIn("1 high or critical risk(s) are open. Confirm mitigation plans are in place.", suggestions)
        self.assertIn("Spending exceeds the budget by $50.00. Review the budget lines.", suggestions)

    def test_suggestions_on_track(self):
        TestDataFactory.create_milestone(self.project)
        TestDataFactory.create_document(self.project)
        self.assertEqual(insights.project_suggestions(self.project),
                         ["The project is on track. Keep tasks and documents up to date."])

    def test_stale_documents(self):
        TestDataFactory.create_milestone(self.project)
        TestDataFactory.create_document(self.project)
        later = timezone.localdate() + timedelta(days=insights.STALE_DOCUMENT_DAYS + 1)
        self.assertIn(f"No documents were uploaded in the last {insights.STALE_DOCUMENT_DAYS} days.",
                      insights.project_suggestions(self.project, today=later))

    def test_project_insights(self):
        uploader = TestDataFactory.create_user()
        TestDataFactory.create_document(self.project, uploaded_by=uploader, description='sequencing sequencing pipeline')
        TestDataFactory.create_document(self.project, file_type='text/csv', description='sequencing results')
        TestDataFactory.create_team_member(self.project)

        data = insights.project_insights(self.project)
        self.assertEqual(data['totalDocuments'], 2)
        self.assertEqual(data['documentTypes'], {'application/pdf': 1, 'text/csv': 1})
        self.assertEqual(data['team_size'], 1)
        self.assertEqual(data['keyTopics'][0], 'sequencing')
        self.assertEqual(len(data['recentActivity']), 2)

    def test_project_summary(self):
        TestDataFactory.create_milestone(self.project, title='Sequencing done', status='COMPLETED')
        TestDataFactory.create_milestone(self.project, title='Atlas release')
        TestDataFactory.create_publication(self.project, title='Atlas paper', status='PUBLISHED')
        TestDataFactory.create_publication(self.project, title='Draft paper')

        summary = insights.project_summary(self.project)
        self.assertEqual(summary['currentStatus'], 'Current status: ACTIVE')
        self.assertEqual(summary['keyAchievements'],
                         ['Milestone completed: Sequencing done', 'Publication: Atlas paper'])
        self.assertTrue(summary['nextSteps'][0].endswith(': Atlas release'))
        self.assertIn('Led by Dr. Reed at Sea Lab.', summary['executiveSummary'])

    def test_suggested_questions_use_own_projects(self):
        user = TestDataFactory.create_user()
        TestDataFactory.create_project(title='Mine', created_by=user)
        questions = insights.suggested_questions(user)
        self.assertEqual(len(questions), 7)
        self.assertIn("Summarize the project 'Mine'", questions)
        self.assertNotIn("Summarize the project 'Genome atlas'", questions)


@override_settings(RAG_LLM_API_KEY='')
class AssistantAPITests(TestCase):
    """Test rag/ and ai/ endpoints with the language model unavailable"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project(title='Battery chemistry', research_area='Chemistry')
        self.document = TestDataFactory.create_document(
            self.project, file_name='electrolyte.txt',
            description='Electrolyte stability results for solid state cells',
        )

    def test_rag_search(self):
        response = self.client.post('/api/v1/rag/search/', {
            'query': 'electrolyte stability', 'projectId': self.project.pk
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['llm_used'])
        self.assertEqual(response.data['sources'][0]['documentId'], self.document.pk)
        self.assertEqual(response.data['sources'][0]['relevance'], 1.0)

    def test_rag_search_accepts_query_params(self):
        response = self.client.post('/api/v1/rag/search/?query=electrolyte')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['query'], 'electrolyte')

    def test_rag_search_validation(self):
        response = self.client.post('/api/v1/rag/search/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/v1/rag/search/', {'query': 'x', 'projectId': 9999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_rag_chat_fallback_and_audit(self):
        response = self.client.post('/api/v1/rag/chat/', {'message': 'How many documents?'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['response'], 'Total Documents: 1')
        self.assertFalse(response.data['llm_used'])
        self.assertTrue(ChatMessage.objects.filter(pk=response.data['messageId'], role='assistant').exists())
        self.assertTrue(AuditLog.objects.filter(action='chat', model_name='ChatMessage').exists())

    @override_settings(RAG_LLM_API_KEY='test-key')
    @mock.patch('rms.assistant.llm.requests.post')
    def test_rag_chat_with_model(self, mock_post):
        mock_post.return_value = _completion('Solid state cells were stable for 500 cycles.')
        response = self.client.post('/api/v1/rag/chat/', {
            'message': 'electrolyte stability', 'projectId': self.project.pk
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['llm_used'])
        self.assertEqual(response.data['response'], 'Solid state cells were stable for 500 cycles.')
        self.assertIn({'entityType': 'document', 'entityId': self.document.pk},
                      [{'entityType': s['entityType'], 'entityId': s['entityId']} for s in response.data['sources']])

    def test_rag_chat_unknown_project(self):
        response = self.client.post('/api/v1/rag/chat/', {'message': 'hi', 'projectId': 9999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_rag_history(self):
        self.client.post('/api/v1/rag/chat/', {'message': 'How many projects?'}, format='json')
        response = self.client.get('/api/v1/rag/history/')
        self.assertEqual([m['role'] for m in response.data], ['user', 'assistant'])

        other = TestDataFactory.create_user()
        ChatMessage.objects.create(user=other, role='user', content='not mine')
        response = self.client.delete('/api/v1/rag/history/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(ChatMessage.objects.filter(user=self.user).count(), 0)
        self.assertEqual(ChatMessage.objects.filter(user=other).count(), 1)

    def test_rag_history_rejects_non_numeric_project(self):
        ChatMessage.objects.create(user=self.user, project=self.project, role='user', content='kept')
        response = self.client.get('/api/v1/rag/history/', {'projectId': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

        response = self.client.delete('/api/v1/rag/history/?projectId=abc')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(ChatMessage.objects.filter(user=self.user).count(), 1)

        response = self.client.get('/api/v1/rag/history/', {'projectId': self.project.pk})
        self.assertEqual([m['content'] for m in response.data], ['kept'])

    def test_rag_suggestions_and_insights(self):
        response = self.client.get('/api/v1/rag/suggestions/')
        self.assertIn("Summarize the project 'Battery chemistry'", response.data['suggestions'])

        response = self.client.get(f'/api/v1/rag/insights/{self.project.pk}/')
        self.assertEqual(response.data['totalDocuments'], 1)
        response = self.client.get('/api/v1/rag/insights/9999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_rag_summarize_fallback(self):
        response = self.client.post('/api/v1/rag/summarize/', {'documentId': self.document.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['llm_used'])
        self.assertTrue(response.data['summary'].startswith('Electrolyte stability results'))
        self.assertIn('electrolyte', response.data['keywords'])

    def test_rag_summarize_empty_document(self):
        empty = TestDataFactory.create_document(self.project)
        response = self.client.post('/api/v1/rag/summarize/', {'documentId': empty.pk}, format='json')
        self.assertEqual(response.data['keywords'], [])
        self.assertFalse(response.data['llm_used'])

    def test_ai_query(self):
        response = self.client.post('/api/v1/ai/query/', {'query': 'How many projects?'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['response'], 'Total Projects: 1')
        self.assertEqual(response.data['confidence'], 'medium')
        self.assertEqual(response.data['type'], 'query')
        self.assertIsNone(response.data['error'])

    def test_ai_chat_accepts_message(self):
        response = self.client.post('/api/v1/ai/chat/', {'message': 'How many risks?'}, format='json')
        self.assertEqual(response.data['response'], 'Open Risks: 0')
        self.assertEqual(response.data['type'], 'chat')

    def test_ai_query_requires_text(self):
        response = self.client.post('/api/v1/ai/query/', {'query': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_ai_analyze(self):
        response = self.client.post('/api/v1/ai/analyze/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post('/api/v1/ai/analyze/', {'projectId': self.project.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['response'].startswith('Project analysis: Battery chemistry'))
        self.assertEqual(response.data['type'], 'analyze')

    def test_ai_project_endpoints(self):
        response = self.client.get(f'/api/v1/ai/suggestions/{self.project.pk}/')
        self.assertIn("No milestones are defined. Add milestones to track progress.", response.data)

        response = self.client.get(f'/api/v1/ai/recommendations/{self.project.pk}/')
        self.assertEqual(response.data, [])

        response = self.client.get(f'/api/v1/ai/projects/{self.project.pk}/summary/')
        self.assertEqual(response.data['projectTitle'], 'Battery chemistry')

        response = self.client.get(f'/api/v1/ai/documents/{self.document.pk}/analysis/')
        self.assertEqual(response.data['title'], 'electrolyte.txt')
        self.assertIn('sentiment', response.data)


class ProcessDocumentAPITests(TestCase):
    """Test the rag/process-document endpoint"""

    def setUp(self):
        self.media_root = tempfile.mkdtemp(prefix='rms-assistant-media-')
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root)
        self.settings_override.enable()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def tearDown(self):
        self.settings_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_process_document(self):
        document = TestDataFactory.create_document(self.project)
        response = self.client.post('/api/v1/rag/process-document/', {'documentId': document.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        document.refresh_from_db()
        self.assertEqual(document.status, 'PROCESSED')
        self.assertTrue(AuditLog.objects.filter(action='process', model_name='ProjectDocument').exists())

    def test_missing_stored_file(self):
        document = TestDataFactory.create_document(self.project, file_name='lost.txt', file_type='text/plain',
                                                   file='documents/lost.txt')
        response = self.client.post('/api/v1/rag/process-document/', {'documentId': document.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertFalse(response.data['success'])
        self.assertEqual(ProjectDocument.objects.get(pk=document.pk).status, 'FAILED')

    def test_unknown_document(self):
        response = self.client.post('/api/v1/rag/process-document/', {'documentId': 9999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
