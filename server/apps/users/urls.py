"""URL configuration for users app."""

from django.urls import path

from server.apps.users import views

app_name = 'users'

urlpatterns = [
    path('users', views.create_user, name='create'),
    path('users/me', views.me, name='me'),
]
