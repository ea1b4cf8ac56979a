from django.urls import path
from .views import (
    document_list_create, document_detail, document_by_project, document_by_type,
    document_upload, document_download,
)

urlpatterns = [
    path('documents/', document_list_create, name='document-list-create'),
    path('documents/upload/', document_upload, name='document-upload'),
    path('documents/<int:pk>/', document_detail, name='document-detail'),
    path('documents/<int:pk>/download/', document_download, name='document-download'),
    path('documents/project/<int:project_id>/', document_by_project, name='document-by-project'),
    path('documents/type/<path:file_type>/', document_by_type, name='document-by-type'),
]
