"""
Django management command to extract text from uploaded documents
so that search and the research assistant can use their content
"""
from django.core.management.base import BaseCommand
from rms.core.cache_signals import suspend_cache_signals
from rms.core.cache_utils import invalidate_dashboard_cache
from rms.documents.models import ProjectDocument
from rms.documents.processing import process_document


class Command(BaseCommand):
    help = 'Process documents that have not been processed yet (use --all to reprocess everything)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--all',
            action='store_true',
            help='Reprocess every document, including already processed ones',
        )
        parser.add_argument(
            '--project-id',
            type=int,
            help='Only process documents of this project',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List the documents that would be processed without processing them',
        )

    def handle(self, *args, **options):
        documents = ProjectDocument.objects.order_by('id')
        if not options.get('all'):
            documents = documents.exclude(status='PROCESSED')
        if options.get('project_id'):
            documents = documents.filter(project_id=options['project_id'])

        if options.get('dry_run'):
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No changes will be made"))
            for document in documents:
                self.stdout.write(f"  Would process {document.id}: {document.file_name}")
            self.stdout.write(f"{documents.count()} document(s) pending")
            return

        processed = failed = 0
        with suspend_cache_signals():
            for document in documents.iterator():
                if process_document(document):
                    processed += 1
                else:
                    failed += 1
                    self.stdout.write(self.style.ERROR(f"  Failed: {document.id} {document.file_name}"))
        invalidate_dashboard_cache()

        self.stdout.write(self.style.SUCCESS(f"Processed {processed} document(s)"))
        if failed:
            self.stdout.write(self.style.WARNING(f"{failed} document(s) could not be processed"))
