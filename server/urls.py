"""Root URL configuration of the files manager API."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('', include('server.apps.core.urls')),
    path('', include('server.apps.users.urls')),
    path('', include('server.apps.authentication.urls')),
    path('', include('server.apps.files.urls')),
    path('admin/', admin.site.urls),
]
