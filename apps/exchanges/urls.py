from django.urls import path
from . import views

app_name = 'exchanges'

urlpatterns = [
    path('', views.ExchangeProductView.as_view(), name='exchange'),
    path('transactions/', views.UserExchangeListView.as_view(), name='transactions'),
    path('transactions/<uuid:order_id>/', views.UserExchangeDetailView.as_view(), name='transaction-detail'),
]
