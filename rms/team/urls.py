from django.urls import path
from .views import (
    team_member_list_create, team_member_detail, team_member_by_project,
    team_member_by_project_role, team_member_active_by_project,
)

urlpatterns = [
    path('team-members/', team_member_list_create, name='team-member-list-create'),
    path('team-members/<int:pk>/', team_member_detail, name='team-member-detail'),
    path('team-members/project/<int:project_id>/', team_member_by_project, name='team-member-by-project'),
    path('team-members/project/<int:project_id>/role/<str:role>/', team_member_by_project_role, name='team-member-by-project-role'),
    path('team-members/project/<int:project_id>/active/', team_member_active_by_project, name='team-member-active-by-project'),
]
