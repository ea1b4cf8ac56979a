from django.urls import path
from .views import (
    budget_list_create, budget_detail, budget_by_project, budget_by_project_status,
    budget_by_project_category, budget_summary_by_project,
)

urlpatterns = [
    path('budgets/', budget_list_create, name='budget-list-create'),
    path('budgets/<int:pk>/', budget_detail, name='budget-detail'),
    path('budgets/project/<int:project_id>/', budget_by_project, name='budget-by-project'),
    path('budgets/project/<int:project_id>/status/<str:status_value>/', budget_by_project_status, name='budget-by-project-status'),
    path('budgets/project/<int:project_id>/category/<str:category>/', budget_by_project_category, name='budget-by-project-category'),
    path('budgets/project/<int:project_id>/summary/', budget_summary_by_project, name='budget-summary-by-project'),
]
