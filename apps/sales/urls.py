from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'orders', views.SalesOrderViewSet, basename='order')

urlpatterns = [
    # Sales order ViewSet routes
    # GET    /api/sales/orders/                        - List orders
    # POST   /api/sales/orders/                        - Create order
    # GET    /api/sales/orders/{id}/                   - Get order
    # PUT    /api/sales/orders/{id}/                   - Update order
    # PATCH  /api/sales/orders/{id}/                   - Partial update
    # DELETE /api/sales/orders/{id}/                   - Delete order

    # Custom order actions
    # POST   /api/sales/orders/{id}/generate_invoice/  - Generate invoice
    # POST   /api/sales/orders/{id}/documents/         - Attach document metadata

    path('', include(router.urls)),
]
