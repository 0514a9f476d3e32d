from django.urls import path
from . import views

app_name = 'points'

urlpatterns = [
    path('balance/', views.get_points_balance, name='balance'),
    path('transactions/', views.get_points_transactions, name='transactions'),
]
