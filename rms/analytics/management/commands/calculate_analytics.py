"""
Django management command to recalculate project analytics
Intended for a nightly cron job so the analytics dashboard stays current
"""
from django.core.management.base import BaseCommand, CommandError
from rms.analytics.services import calculate_all_analytics
from rms.core.cache_signals import suspend_cache_signals
from rms.core.cache_utils import invalidate_dashboard_cache
from rms.projects.models import ResearchProject


class Command(BaseCommand):
    help = 'Calculate schedule analytics for all research projects (or one with --project-id)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--project-id',
            type=int,
            help='Calculate analytics for this project only',
        )
        parser.add_argument(
            '--status',
            help='Only calculate for projects with this status (e.g. ACTIVE)',
        )

    def handle(self, *args, **options):
        project_id = options.get('project_id')
        project_status = options.get('status')

        projects = ResearchProject.objects.order_by('id')
        if project_id:
            projects = projects.filter(pk=project_id)
            if not projects.exists():
                raise CommandError(f"Project {project_id} does not exist")
        if project_status:
            projects = projects.filter(status=project_status.upper())

        with suspend_cache_signals():
            created, failed = calculate_all_analytics(projects=projects)
        invalidate_dashboard_cache()

        for analytics in created:
            marker = 'on time' if analytics.on_time_completion else 'delayed'
            self.stdout.write(f"  {analytics.project_title}: {analytics.completion_rate}% ({marker})")

        self.stdout.write(self.style.SUCCESS(f"Calculated analytics for {len(created)} project(s)"))
        if failed:
            self.stdout.write(self.style.ERROR(f"Failed for project(s): {', '.join(str(pk) for pk in failed)}"))
