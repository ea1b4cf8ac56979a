"""
Test suite for project documents
Tests: upload/download, text extraction, listings and stored file cleanup
"""
import shutil
import tempfile
from io import StringIO
from django.core.files.base import ContentFile
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework import status
from rms.core.models import AuditLog
from rms.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from rms.documents.models import ProjectDocument
from rms.documents.processing import extract_text, is_text_document, process_document

TEST_MEDIA_ROOT = tempfile.mkdtemp(prefix='rms-test-media-')


@override_settings(MEDIA_ROOT=TEST_MEDIA_ROOT)
class DocumentProcessingTests(TestCase):
    """Test text extraction from stored files"""

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(TEST_MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.project = TestDataFactory.create_project()

    def _stored_document(self, file_name, content, file_type):
        document = TestDataFactory.create_document(self.project, file_name=file_name, file_type=file_type)
        document.file.save(file_name, ContentFile(content), save=True)
        return document

    def test_is_text_document(self):
        self.assertTrue(is_text_document(ProjectDocument(file_name='notes.md', file_type='')))
        self.assertTrue(is_text_document(ProjectDocument(file_name='data', file_type='text/csv')))
        self.assertFalse(is_text_document(ProjectDocument(file_name='scan.pdf', file_type='application/pdf')))

    def test_process_text_document(self):
        document = self._stored_document('results.txt', b'Gene expression rose by 40%.', 'text/plain')
        self.assertTrue(process_document(document))
        document.refresh_from_db()
        self.assertEqual(document.status, 'PROCESSED')
        self.assertEqual(document.content_text, 'Gene expression rose by 40%.')
        self.assertIsNotNone(document.processed_at)

    def test_binary_document_has_no_extracted_text(self):
        document = self._stored_document('scan.pdf', b'%PDF-1.4 binary', 'application/pdf')
        self.assertEqual(extract_text(document), '')
        self.assertTrue(process_document(document))
        document.refresh_from_db()
        self.assertEqual(document.status, 'PROCESSED')
        self.assertEqual(document.content_text, '')

    def test_missing_file_marks_failed(self):
        document = self._stored_document('gone.txt', b'temporary', 'text/plain')
        document.file.storage.delete(document.file.name)
        self.assertFalse(process_document(document))
        document.refresh_from_db()
        self.assertEqual(document.status, 'FAILED')

    def test_process_documents_command(self):
        self._stored_document('a.txt', b'alpha', 'text/plain')
        self._stored_document('b.txt', b'beta', 'text/plain')
        out = StringIO()
        call_command('process_documents', stdout=out)
        self.assertIn('Processed 2 document(s)', out.getvalue())
        self.assertEqual(ProjectDocument.objects.filter(status='PROCESSED').count(), 2)

    def test_process_documents_dry_run(self):
        self._stored_document('c.txt', b'gamma', 'text/plain')
        out = StringIO()
        call_command('process_documents', '--dry-run', stdout=out)
        self.assertIn('1 document(s) pending', out.getvalue())
        self.assertEqual(ProjectDocument.objects.filter(status='PROCESSED').count(), 0)


@override_settings(MEDIA_ROOT=TEST_MEDIA_ROOT)
class DocumentAPITests(TestCase):
    """Test document API endpoints"""

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(TEST_MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.project = TestDataFactory.create_project()

    def _upload(self, name='protocol.txt', content=b'Sample preparation protocol', **extra):
        upload = SimpleUploadedFile(name, content, content_type='text/plain')
        data = {'file': upload, 'project': self.project.id, 'description': 'Lab protocol'}
        data.update(extra)
        return self.client.post('/api/v1/documents/upload/', data, format='multipart')

    def test_upload_document(self):
        """Test uploading derives name, type and size and audits the upload"""
        response = self._upload()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['file_name'], 'protocol.txt')
        self.assertEqual(response.data['file_type'], 'text/plain')
        self.assertEqual(response.data['file_size'], len(b'Sample preparation protocol'))
        self.assertEqual(response.data['uploaded_by_username'], self.user.username)
        self.assertTrue(response.data['has_file'])
        self.assertEqual(response.data['status'], 'UPLOADED')
        self.assertTrue(AuditLog.objects.filter(action='upload', model_name='ProjectDocument').exists())

    def test_upload_and_process(self):
        response = self._upload(process='true')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        document = ProjectDocument.objects.get(pk=response.data['id'])
        self.assertEqual(document.status, 'PROCESSED')
        self.assertEqual(document.content_text, 'Sample preparation protocol')

    def test_upload_without_file(self):
        response = self.client.post('/api/v1/documents/upload/', {'project': self.project.id}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('file', response.data)

    def test_download_document(self):
        document_id = self._upload().data['id']
        response = self.client.get(f'/api/v1/documents/{document_id}/download/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('attachment', response['Content-Disposition'])
        self.assertEqual(b''.join(response.streaming_content), b'Sample preparation protocol')

    def test_download_without_stored_file(self):
        document = TestDataFactory.create_document(self.project)
        response = self.client.get(f'/api/v1/documents/{document.id}/download/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_removes_stored_file(self):
        document_id = self._upload().data['id']
        document = ProjectDocument.objects.get(pk=document_id)
        storage, name = document.file.storage, document.file.name
        self.assertTrue(storage.exists(name))

        response = self.client.delete(f'/api/v1/documents/{document_id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(storage.exists(name))

    def test_register_document_without_file(self):
        response = self.client.post('/api/v1/documents/', {
            'project': self.project.id, 'file_name': 'external.pdf', 'file_type': 'application/pdf'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['has_file'])

    def test_by_type_accepts_mime_types(self):
        TestDataFactory.create_document(self.project, file_type='application/pdf')
        TestDataFactory.create_document(self.project, file_type='text/plain')
        response = self.client.get('/api/v1/documents/type/application/pdf/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_by_project(self):
        TestDataFactory.create_document(self.project)
        TestDataFactory.create_document(TestDataFactory.create_project())
        response = self.client.get(f'/api/v1/documents/project/{self.project.id}/')
        self.assertEqual(len(response.data), 1)
