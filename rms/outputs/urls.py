from django.urls import path
from .views import (
    patent_list_create, patent_detail, patent_by_project, patent_by_project_status,
    patent_by_project_type, patent_by_inventor,
    publication_list_create, publication_detail, publication_by_project,
    publication_by_project_status, publication_by_project_type, publication_by_author,
)

urlpatterns = [
    # Patent endpoints
    path('patents/', patent_list_create, name='patent-list-create'),
    path('patents/<int:pk>/', patent_detail, name='patent-detail'),
    path('patents/project/<int:project_id>/', patent_by_project, name='patent-by-project'),
    path('patents/project/<int:project_id>/status/<str:status_value>/', patent_by_project_status, name='patent-by-project-status'),
    path('patents/project/<int:project_id>/type/<str:patent_type>/', patent_by_project_type, name='patent-by-project-type'),
    path('patents/inventor/<str:inventor>/', patent_by_inventor, name='patent-by-inventor'),

    # Publication endpoints
    path('publications/', publication_list_create, name='publication-list-create'),
    path('publications/<int:pk>/', publication_detail, name='publication-detail'),
    path('publications/project/<int:project_id>/', publication_by_project, name='publication-by-project'),
    path('publications/project/<int:project_id>/status/<str:status_value>/', publication_by_project_status, name='publication-by-project-status'),
    path('publications/project/<int:project_id>/type/<str:publication_type>/', publication_by_project_type, name='publication-by-project-type'),
    path('publications/author/<str:author>/', publication_by_author, name='publication-by-author'),
]
