from django.urls import path
from .views import (
    risk_list_create, risk_detail, risk_by_project, risk_by_project_status,
    risk_by_project_category, risk_high_count,
)

urlpatterns = [
    path('risks/', risk_list_create, name='risk-list-create'),
    path('risks/<int:pk>/', risk_detail, name='risk-detail'),
    path('risks/project/<int:project_id>/', risk_by_project, name='risk-by-project'),
    path('risks/project/<int:project_id>/status/<str:status_value>/', risk_by_project_status, name='risk-by-project-status'),
    path('risks/project/<int:project_id>/category/<str:category>/', risk_by_project_category, name='risk-by-project-category'),
    path('risks/project/<int:project_id>/high-risk-count/', risk_high_count, name='risk-high-count'),
]
