"""
URL configuration for the research management backend.

Every app publishes its routes under ``/api/v1/``.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Research Manager Admin Panel"
admin.site.site_title = "Research Manager Admin Portal"
admin.site.index_title = "Research project administration"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('rms.core.urls')),
    path('api/v1/', include('rms.projects.urls')),
    path('api/v1/', include('rms.planning.urls')),
    path('api/v1/', include('rms.team.urls')),
    path('api/v1/', include('rms.finance.urls')),
    path('api/v1/', include('rms.documents.urls')),
    path('api/v1/', include('rms.risks.urls')),
    path('api/v1/', include('rms.outputs.urls')),
    path('api/v1/', include('rms.search.urls')),
    path('api/v1/', include('rms.assistant.urls')),
    path('api/v1/', include('rms.analytics.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
]
