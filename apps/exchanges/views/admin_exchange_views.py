"""
Admin exchange management views.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import IsAdminMember
from apps.common.utils import error_response, paginated_response
from ..exceptions import ExchangeError, ExchangeNotFound
from ..serializers import AdminExchangeOrderSerializer, ExchangeStatusUpdateSerializer
from ..services import ExchangeOrderStore, ExchangeStatusWorkflow
from .exchange_views import internal_error_response

logger = logging.getLogger(__name__)


class AdminExchangeListView(APIView):
    """All exchanges, filterable by status and user - GET /api/admin/exchanges/"""
    permission_classes = [IsAuthenticated, IsAdminMember]

    def get(self, request):
        status_filter = request.GET.get('status') or None
        user_id = request.GET.get('user_id')
        try:
            user_id = int(user_id) if user_id else None
        except ValueError:
            return error_response('Invalid user_id')

        queryset = ExchangeOrderStore.list_all(status=status_filter, user_id=user_id)
        return paginated_response(queryset, AdminExchangeOrderSerializer, request)


class AdminExchangeDetailView(APIView):
    """Exchange detail for admins - GET /api/admin/exchanges/{id}/"""
    permission_classes = [IsAuthenticated, IsAdminMember]

    def get(self, request, order_id):
        order = ExchangeOrderStore.get(order_id)
        if order is None:
            return error_response('Exchange not found', status_code=status.HTTP_404_NOT_FOUND)
        return Response({
            'success': True,
            'data': AdminExchangeOrderSerializer(order).data
        })


class AdminExchangeStatusView(APIView):
    """Update an exchange's status - PATCH/PUT /api/admin/exchanges/{id}/status/"""
    permission_classes = [IsAuthenticated, IsAdminMember]

    def patch(self, request, order_id):
        serializer = ExchangeStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Invalid status', errors=serializer.errors, code='VALIDATION')

        data = serializer.validated_data
        try:
            order = ExchangeStatusWorkflow().update_status(
                request.user,
                order_id,
                data['status'],
                notes=data.get('notes') or None,
                tracking_number=data.get('tracking_number') or None,
            )
        except ExchangeNotFound as e:
            return error_response(e.message, status_code=status.HTTP_404_NOT_FOUND, code=e.code)
        except ExchangeError as e:
            return error_response(e.message, code=e.code)
        except Exception as e:
            return internal_error_response(e, request)

        return Response({
            'success': True,
            'message': 'Exchange status updated successfully',
            'data': AdminExchangeOrderSerializer(order).data
        })

    def put(self, request, order_id):
        return self.patch(request, order_id)
