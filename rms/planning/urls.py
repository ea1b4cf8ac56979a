from django.urls import path
from .views import (
    task_list_create, task_detail, task_by_project, task_by_project_status,
    task_by_project_priority, task_by_project_assignee, task_by_project_sorted,
    milestone_list_create, milestone_detail, milestone_by_project,
    milestone_by_project_status, milestone_by_project_sorted,
    deliverable_list_create, deliverable_detail, deliverable_by_project,
    deliverable_by_project_status, deliverable_by_project_type,
)

urlpatterns = [
    # Task endpoints
    path('tasks/', task_list_create, name='task-list-create'),
    path('tasks/<int:pk>/', task_detail, name='task-detail'),
    path('tasks/project/<int:project_id>/', task_by_project, name='task-by-project'),
    path('tasks/project/<int:project_id>/status/<str:status_value>/', task_by_project_status, name='task-by-project-status'),
    path('tasks/project/<int:project_id>/priority/<str:priority>/', task_by_project_priority, name='task-by-project-priority'),
    path('tasks/project/<int:project_id>/assigned/<int:user_id>/', task_by_project_assignee, name='task-by-project-assignee'),
    path('tasks/project/<int:project_id>/sorted/', task_by_project_sorted, name='task-by-project-sorted'),

    # Milestone endpoints
    path('milestones/', milestone_list_create, name='milestone-list-create'),
    path('milestones/<int:pk>/', milestone_detail, name='milestone-detail'),
    path('milestones/project/<int:project_id>/', milestone_by_project, name='milestone-by-project'),
    path('milestones/project/<int:project_id>/status/<str:status_value>/', milestone_by_project_status, name='milestone-by-project-status'),
    path('milestones/project/<int:project_id>/sorted/', milestone_by_project_sorted, name='milestone-by-project-sorted'),

    # Deliverable endpoints
    path('deliverables/', deliverable_list_create, name='deliverable-list-create'),
    path('deliverables/<int:pk>/', deliverable_detail, name='deliverable-detail'),
    path('deliverables/project/<int:project_id>/', deliverable_by_project, name='deliverable-by-project'),
    path('deliverables/project/<int:project_id>/status/<str:status_value>/', deliverable_by_project_status, name='deliverable-by-project-status'),
    path('deliverables/project/<int:project_id>/type/<str:deliverable_type>/', deliverable_by_project_type, name='deliverable-by-project-type'),
]
