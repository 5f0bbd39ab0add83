from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # GET /api/dashboard/?as_of=YYYY-MM-DD
    path('', views.dashboard, name='dashboard'),
]
