# Generated manually

import django.db.models.deletion
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
            name='TeamMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('email', models.EmailField(max_length=100)),
                ('role', models.CharField(choices=[('PRINCIPAL_INVESTIGATOR', 'Principal Investigator'), ('CO_INVESTIGATOR', 'Co-Investigator'), ('RESEARCH_ASSISTANT', 'Research Assistant'), ('GRADUATE_STUDENT', 'Graduate Student'), ('POSTDOC', 'Postdoctoral Researcher'), ('TECHNICIAN', 'Technician'), ('MEMBER', 'Member')], default='MEMBER', max_length=30)),
                ('expertise', models.CharField(blank=True, max_length=200)),
                ('department', models.CharField(blank=True, max_length=100)),
                ('affiliation', models.CharField(blank=True, max_length=200)),
                ('responsibilities', models.TextField(blank=True)),
                ('join_date', models.DateField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('project', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='team_members', to='projects.researchproject')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='team_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'team_members',
                'ordering': ['name', 'id'],
                'constraints': [
                    models.UniqueConstraint(fields=('project', 'email'), name='team_member_unique_email_per_project'),
                ],
            },
        ),
    ]
