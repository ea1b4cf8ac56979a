from django.urls import path
from . import views

urlpatterns = [
    path('analytics/', views.analytics_list, name='analytics-list'),
    path('analytics/calculate/', views.analytics_calculate_all, name='analytics-calculate-all'),
    path('analytics/dashboard/', views.analytics_dashboard, name='analytics-dashboard'),
    path('analytics/project/<int:project_id>/', views.analytics_by_project, name='analytics-by-project'),
    path('analytics/project/<int:project_id>/calculate/', views.analytics_calculate_project, name='analytics-calculate-project'),
    path('analytics/tasks/<int:project_id>/', views.analytics_tasks, name='analytics-tasks'),
    path('analytics/budget/<int:project_id>/', views.analytics_budget, name='analytics-budget'),
    path('analytics/<int:pk>/', views.analytics_delete, name='analytics-delete'),

    path('dashboard/stats/', views.dashboard_stats, name='dashboard-stats'),
    path('dashboard/activity/', views.dashboard_activity, name='dashboard-activity'),
    path('dashboard/projects/status/<str:status_value>/', views.dashboard_projects_by_status, name='dashboard-projects-status'),
    path('dashboard/projects/priority/<str:priority>/', views.dashboard_projects_by_priority, name='dashboard-projects-priority'),
    path('dashboard/projects/recent/', views.dashboard_projects_recent, name='dashboard-projects-recent'),
    path('dashboard/projects/active/', views.dashboard_projects_active, name='dashboard-projects-active'),
    path('dashboard/projects/search/', views.dashboard_projects_search, name='dashboard-projects-search'),
]
