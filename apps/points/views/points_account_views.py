"""
Points account query views.
"""
import logging

from django.db.models import Sum
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.common.pagination import StandardPagination
from ..models import PointsLedgerEntry
from ..services import PointsLedger
from ..serializers import PointsLedgerEntrySerializer, PointsBalanceSerializer

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_balance(request):
    """Get user's current points balance"""
    try:
        entries = PointsLedgerEntry.objects.filter(user=request.user)
        earned = entries.filter(points__gt=0).aggregate(total=Sum('points'))['total'] or 0
        redeemed = entries.filter(
            type=PointsLedgerEntry.TYPE_PRODUCT_EXCHANGE
        ).aggregate(total=Sum('points'))['total'] or 0

        serializer = PointsBalanceSerializer({
            'points': request.user.points,
            'lifetime_earned': earned,
            'lifetime_redeemed': -redeemed,
        })
        return Response({
            'success': True,
            'data': serializer.data
        })
    except Exception:
        logger.exception(f"Failed to load points balance for user {request.user.id}")
        return Response({
            'success': False,
            'error': 'Internal server error'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_transactions(request):
    """Get user's points ledger history"""
    try:
        queryset = PointsLedger.entries_for(request.user, entry_type=request.GET.get('type'))
        paginator = StandardPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = PointsLedgerEntrySerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)
    except Exception:
        logger.exception(f"Failed to load points history for user {request.user.id}")
        return Response({
            'success': False,
            'error': 'Internal server error'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
