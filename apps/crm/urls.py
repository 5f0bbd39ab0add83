from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'crm'

router = DefaultRouter()
router.register(r'customers', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # Customer ViewSet routes
    # GET    /api/crm/customers/                   - List customers
    # POST   /api/crm/customers/                   - Create customer
    # GET    /api/crm/customers/{id}/              - Get customer with interactions
    # PUT    /api/crm/customers/{id}/              - Update customer
    # PATCH  /api/crm/customers/{id}/              - Partial update
    # DELETE /api/crm/customers/{id}/              - Delete customer

    # Interaction routes
    # GET    /api/crm/customers/{id}/interactions/ - List interactions
    # POST   /api/crm/customers/{id}/interactions/ - Log interaction

    path('', include(router.urls)),
]
