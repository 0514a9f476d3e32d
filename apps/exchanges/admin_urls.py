from django.urls import path
from . import views

app_name = 'admin_exchanges'

urlpatterns = [
    path('', views.AdminExchangeListView.as_view(), name='list'),
    path('<uuid:order_id>/', views.AdminExchangeDetailView.as_view(), name='detail'),
    path('<uuid:order_id>/status/', views.AdminExchangeStatusView.as_view(), name='status'),
]
