from django.urls import path
from .views import (
    global_search, global_search_post, search_documents, search_team_members, search_suggestions,
)

urlpatterns = [
    path('search/', global_search, name='global-search'),
    path('search/global/', global_search_post, name='global-search-post'),
    path('search/universal/', global_search_post, name='universal-search'),
    path('search/documents/', search_documents, name='search-documents'),
    path('search/team-members/', search_team_members, name='search-team-members'),
    path('search/suggestions/', search_suggestions, name='search-suggestions'),
]
