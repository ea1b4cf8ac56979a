# Generated manually

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ResearchAnalytics',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('project_title', models.CharField(max_length=200)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('actual_end_date', models.DateField()),
                ('completion_rate', models.FloatField(default=0.0)),
                ('duration_days', models.PositiveIntegerField(default=1)),
                ('actual_duration_days', models.PositiveIntegerField(default=0)),
                ('on_time_completion', models.BooleanField(default=True)),
                ('calculated_date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='analytics', to='projects.researchproject')),
            ],
            options={
                'db_table': 'research_analytics',
                'verbose_name_plural': 'Research analytics',
                'ordering': ['-calculated_date', '-id'],
                'indexes': [models.Index(fields=['project', 'calculated_date'], name='analytics_project_date_idx')],
            },
        ),
    ]
