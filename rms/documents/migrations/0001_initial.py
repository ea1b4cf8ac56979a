# Generated manually

import django.db.models.deletion
import rms.documents.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProjectDocument',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file', models.FileField(blank=True, max_length=500, null=True, upload_to=rms.documents.models.document_upload_path)),
                ('file_name', models.CharField(max_length=255)),
                ('file_type', models.CharField(blank=True, max_length=100)),
                ('file_path', models.CharField(blank=True, max_length=500)),
                ('file_size', models.PositiveBigIntegerField(default=0)),
                ('description', models.TextField(blank=True)),
                ('document_type', models.CharField(blank=True, max_length=50)),
                ('version', models.CharField(blank=True, max_length=20)),
                ('tags', models.CharField(blank=True, max_length=200)),
                ('access_level', models.CharField(choices=[('PUBLIC', 'Public'), ('PRIVATE', 'Private'), ('RESTRICTED', 'Restricted')], default='PRIVATE', max_length=20)),
                ('status', models.CharField(choices=[('UPLOADED', 'Uploaded'), ('PROCESSED', 'Processed'), ('FAILED', 'Failed')], default='UPLOADED', max_length=20)),
                ('content_text', models.TextField(blank=True, help_text='Text extracted for search and the assistant')),
                ('processed_at', models.DateTimeField(blank=True, null=True)),
                ('upload_date', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documents', to='projects.researchproject')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_documents', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'project_documents',
                'ordering': ['-upload_date', '-id'],
                'indexes': [
                    models.Index(fields=['project', 'status'], name='documents_project_status_idx'),
                    models.Index(fields=['file_type'], name='documents_file_type_idx'),
                ],
            },
        ),
    ]
