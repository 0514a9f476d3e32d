"""
User-facing exchange views.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.services import AuditRecorder
from apps.common.utils import error_response, paginated_response
from apps.users.services import AuthService
from ..exceptions import ExchangeError, ExchangeInternalError, ExchangeValidationError
from ..serializers import ExchangeRequestSerializer, ExchangeOrderSerializer
from ..services import ExchangeOrderStore, ExchangeTransactionCoordinator

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADERS = ('Idempotency-Key', 'X-Request-ID')


def exchange_failed_response(exc, errors=None):
    """400 body shared by every domain failure of an exchange"""
    response = error_response(
        exc.message,
        errors=errors,
        status_code=status.HTTP_400_BAD_REQUEST,
        code='EXCHANGE_FAILED',
        reason=exc.code,
    )
    response.data['message'] = exc.message
    return response


def internal_error_response(exc, request):
    """Generic 500; detail goes to the logs and the audit trail only"""
    logger.error(f"Unexpected exchange error on {request.path}: {exc}", exc_info=True)
    try:
        AuditRecorder.log_exception(exc, request)
    except Exception:
        logger.exception("Failed to record exchange error")
    return error_response('Internal server error', status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def get_idempotency_key(request):
    for header in IDEMPOTENCY_HEADERS:
        value = request.headers.get(header)
        if value:
            return value.strip()[:100]
    return None


class ExchangeProductView(APIView):
    """Exchange points for a product - POST /api/products/{id}/exchange/ or /api/exchange/"""
    permission_classes = [IsAuthenticated]

    def post(self, request, product_id=None):
        user = AuthService.get_current_user(request)
        if user is None:
            return error_response('Unauthorized', status_code=status.HTTP_401_UNAUTHORIZED)

        serializer = ExchangeRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return exchange_failed_response(ExchangeValidationError('Invalid input'), serializer.errors)

        product_id = product_id or serializer.validated_data.get('product_id')

        try:
            result = ExchangeTransactionCoordinator().submit_exchange(
                user,
                product_id,
                quantity=serializer.validated_data.get('quantity'),
                delivery_info=serializer.delivery_info(),
                idempotency_key=get_idempotency_key(request),
            )
        except ExchangeInternalError as e:
            return internal_error_response(e, request)
        except ExchangeError as e:
            logger.info(f"Exchange rejected for user {user.pk}, product {product_id}: {e.code} {e.message}")
            return exchange_failed_response(e)
        except Exception as e:
            return internal_error_response(e, request)

        response = Response({
            'success': True,
            'exchange_id': str(result.order.id),
            'points_used': result.points_used,
            'remaining_points': result.remaining_points,
            'message': 'Product exchanged successfully',
            'replayed': result.replayed,
        })
        if result.replayed:
            response['X-Idempotent-Replay'] = 'true'
        return response


class UserExchangeListView(APIView):
    """Current user's exchange history - GET /api/exchange/transactions/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        queryset = ExchangeOrderStore.list_for_user(request.user)
        return paginated_response(queryset, ExchangeOrderSerializer, request)


class UserExchangeDetailView(APIView):
    """One of the current user's exchanges - GET /api/exchange/transactions/{id}/"""
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        order = ExchangeOrderStore.get_for_user(request.user, order_id)
        if order is None:
            return error_response('Exchange not found', status_code=status.HTTP_404_NOT_FOUND)
        return Response({
            'success': True,
            'data': ExchangeOrderSerializer(order).data
        })
