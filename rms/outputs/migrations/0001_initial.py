# Generated manually

import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ProjectPatent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('abstract', models.TextField(blank=True)),
                ('patent_number', models.CharField(max_length=50, unique=True)),
                ('type', models.CharField(choices=[('UTILITY', 'Utility'), ('DESIGN', 'Design'), ('PLANT', 'Plant'), ('PROVISIONAL', 'Provisional')], default='UTILITY', max_length=20)),
                ('status', models.CharField(choices=[('FILED', 'Filed'), ('PENDING', 'Pending'), ('EXAMINED', 'Examined'), ('GRANTED', 'Granted'), ('ABANDONED', 'Abandoned')], default='FILED', max_length=20)),
                ('inventors', models.TextField(blank=True)),
                ('assignee', models.CharField(blank=True, max_length=200)),
                ('patent_office', models.CharField(blank=True, max_length=100)),
                ('filing_date', models.DateField(blank=True, null=True)),
                ('publication_date', models.DateField(blank=True, null=True)),
                ('grant_date', models.DateField(blank=True, null=True)),
                ('priority_date', models.DateField(blank=True, null=True)),
                ('licensing_status', models.CharField(blank=True, max_length=100)),
                ('revenue_generated', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('ipc_class', models.CharField(blank=True, max_length=50)),
                ('cpc_class', models.CharField(blank=True, max_length=50)),
                ('claims', models.TextField(blank=True)),
                ('url', models.URLField(blank=True, max_length=500)),
                ('commercialization_status', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='patents', to='projects.researchproject')),
            ],
            options={
                'db_table': 'project_patents',
                'ordering': ['-filing_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ProjectPublication',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=300)),
                ('abstract', models.TextField(blank=True)),
                ('type', models.CharField(choices=[('JOURNAL_ARTICLE', 'Journal Article'), ('CONFERENCE_PAPER', 'Conference Paper'), ('BOOK_CHAPTER', 'Book Chapter'), ('TECHNICAL_REPORT', 'Technical Report'), ('THESIS', 'Thesis')], default='JOURNAL_ARTICLE', max_length=30)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('SUBMITTED', 'Submitted'), ('UNDER_REVIEW', 'Under Review'), ('ACCEPTED', 'Accepted'), ('PUBLISHED', 'Published'), ('REJECTED', 'Rejected')], default='DRAFT', max_length=20)),
                ('journal_name', models.CharField(blank=True, max_length=200)),
                ('conference_name', models.CharField(blank=True, max_length=200)),
                ('authors', models.TextField(blank=True)),
                ('corresponding_author', models.CharField(blank=True, max_length=200)),
                ('doi', models.CharField(blank=True, max_length=100)),
                ('issn', models.CharField(blank=True, max_length=20)),
                ('isbn', models.CharField(blank=True, max_length=20)),
                ('volume', models.CharField(blank=True, max_length=20)),
                ('issue', models.CharField(blank=True, max_length=20)),
                ('pages', models.CharField(blank=True, max_length=20)),
                ('year', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('publisher', models.CharField(blank=True, max_length=200)),
                ('url', models.URLField(blank=True, max_length=500)),
                ('keywords', models.CharField(blank=True, max_length=500)),
                ('submission_date', models.DateField(blank=True, null=True)),
                ('acceptance_date', models.DateField(blank=True, null=True)),
                ('publication_date', models.DateField(blank=True, null=True)),
                ('impact_factor', models.DecimalField(blank=True, decimal_places=3, max_digits=6, null=True)),
                ('citations', models.PositiveIntegerField(default=0)),
                ('open_access', models.CharField(choices=[('YES', 'Yes'), ('NO', 'No'), ('EMBARGO', 'Embargo')], default='NO', max_length=10)),
                ('license', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='publications', to='projects.researchproject')),
            ],
            options={
                'db_table': 'project_publications',
                'ordering': ['-year', '-created_at', '-id'],
            },
        ),
    ]
