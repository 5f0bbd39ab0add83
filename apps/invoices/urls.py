from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'invoices'

router = DefaultRouter()
router.register(r'', views.InvoiceViewSet, basename='invoice')

urlpatterns = [
    # Invoice ViewSet routes
    # GET    /api/invoices/       - List invoices (?status=overdue&customer=...)
    # POST   /api/invoices/       - Create invoice for an order
    # GET    /api/invoices/{id}/  - Get invoice details
    # PUT    /api/invoices/{id}/  - Update invoice
    # PATCH  /api/invoices/{id}/  - Partial update

    # Invoice generation lives on the order:
    # POST   /api/sales/orders/{id}/generate_invoice/

    path('', include(router.urls)),
]
