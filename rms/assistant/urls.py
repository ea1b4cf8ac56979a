from django.urls import path
from . import views

urlpatterns = [
    path('rag/search/', views.rag_search, name='rag-search'),
    path('rag/chat/', views.rag_chat, name='rag-chat'),
    path('rag/history/', views.rag_history, name='rag-history'),
    path('rag/suggestions/', views.rag_suggestions, name='rag-suggestions'),
    path('rag/insights/<int:project_id>/', views.rag_insights, name='rag-insights'),
    path('rag/summarize/', views.rag_summarize, name='rag-summarize'),
    path('rag/process-document/', views.rag_process_document, name='rag-process-document'),

    path('ai/query/', views.ai_query, name='ai-query'),
    path('ai/chat/', views.ai_chat, name='ai-chat'),
    path('ai/analyze/', views.ai_analyze, name='ai-analyze'),
    path('ai/suggestions/<int:project_id>/', views.ai_suggestions, name='ai-suggestions'),
    path('ai/recommendations/<int:project_id>/', views.ai_recommendations, name='ai-recommendations'),
    path('ai/documents/<int:document_id>/analysis/', views.ai_document_analysis, name='ai-document-analysis'),
    path('ai/projects/<int:project_id>/summary/', views.ai_project_summary, name='ai-project-summary'),
]
