"""
API tests for exchange submission, history and admin management.
"""
import uuid
from unittest.mock import patch

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from apps.common.models import AuditLog, Message
from apps.exchanges.models import ExchangeOrder
from apps.points.models import PointsLedgerEntry
from tests.factories import AdminUserFactory, ExchangeOrderFactory, ProductFactory, UserFactory


class ExchangeSubmitAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory(points=250)
        self.product = ProductFactory(stock=5, points_required=100)
        self.client.force_authenticate(user=self.user)

    def test_exchange_by_product_path(self):
        response = self.client.post(
            f'/api/products/{self.product.id}/exchange/',
            {'quantity': 2, 'address': '1 Green Road', 'mobile': '13800000000', 'remark': 'thanks'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['points_used'], 200)
        self.assertEqual(data['remaining_points'], 50)
        self.assertEqual(data['message'], 'Product exchanged successfully')

        order = ExchangeOrder.objects.get(pk=data['exchange_id'])
        self.assertEqual(order.delivery_address, '1 Green Road')
        self.assertEqual(order.contact_phone, '13800000000')
        self.assertEqual(order.notes, 'thanks')

    def test_exchange_with_product_id_in_body(self):
        response = self.client.post(
            '/api/exchange/', {'product_id': self.product.id, 'quantity': 1}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 4)

    def test_missing_product_id(self):
        response = self.client.post('/api/exchange/', {'quantity': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['code'], 'EXCHANGE_FAILED')
        self.assertEqual(data['reason'], 'VALIDATION')

    def test_malformed_body_reports_field_errors(self):
        response = self.client.post('/api/exchange/', {'product_id': 'abc'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['error'], 'Invalid input')
        self.assertEqual(data['message'], 'Invalid input')
        self.assertEqual(data['code'], 'EXCHANGE_FAILED')
        self.assertEqual(data['reason'], 'VALIDATION')
        self.assertIn('product_id', data['errors'])

    def test_oversized_quantity_is_rejected(self):
        response = self.client.post(
            f'/api/products/{self.product.id}/exchange/', {'quantity': 10 ** 20}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['reason'], 'VALIDATION')
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 5)
        self.assertFalse(ExchangeOrder.objects.filter(user=self.user).exists())

    def test_insufficient_points_response(self):
        response = self.client.post(
            f'/api/products/{self.product.id}/exchange/', {'quantity': 3}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        data = response.json()
        self.assertEqual(data['error'], 'Insufficient points')
        self.assertEqual(data['message'], 'Insufficient points')
        self.assertEqual(data['code'], 'EXCHANGE_FAILED')
        self.assertEqual(data['reason'], 'INSUFFICIENT_POINTS')
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 250)

    def test_unknown_product_response(self):
        response = self.client.post('/api/products/999999/exchange/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error'], 'Product not found')

    def test_unauthenticated(self):
        client = APIClient()
        response = client.post(f'/api/products/{self.product.id}/exchange/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.json()['success'])

    def test_idempotency_key_header_replays(self):
        url = f'/api/products/{self.product.id}/exchange/'
        first = self.client.post(url, {}, format='json', HTTP_IDEMPOTENCY_KEY='order-abc')
        second = self.client.post(url, {}, format='json', HTTP_IDEMPOTENCY_KEY='order-abc')

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(first.json()['exchange_id'], second.json()['exchange_id'])
        self.assertTrue(second.json()['replayed'])
        self.assertEqual(second['X-Idempotent-Replay'], 'true')
        self.assertEqual(PointsLedgerEntry.objects.filter(user=self.user).count(), 1)

    def test_request_id_header_is_used_as_key(self):
        url = f'/api/products/{self.product.id}/exchange/'
        self.client.post(url, {}, format='json', HTTP_X_REQUEST_ID='req-1')
        self.client.post(url, {}, format='json', HTTP_X_REQUEST_ID='req-1')

        self.assertEqual(ExchangeOrder.objects.filter(user=self.user).count(), 1)

    @patch('apps.exchanges.views.exchange_views.ExchangeTransactionCoordinator.submit_exchange')
    def test_unexpected_error_is_generic(self, mock_submit):
        mock_submit.side_effect = RuntimeError('secret connection string')

        response = self.client.post(f'/api/products/{self.product.id}/exchange/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json()['error'], 'Internal server error')
        self.assertNotIn('secret', response.content.decode())
        audit = AuditLog.objects.get(action='unexpected_error')
        self.assertEqual(audit.metadata['exception'], 'RuntimeError')
        self.assertEqual(audit.user_id, self.user.id)


class ExchangeHistoryAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_lists_only_own_orders(self):
        ExchangeOrderFactory.create_batch(3, user=self.user)
        ExchangeOrderFactory(user=UserFactory())

        response = self.client.get('/api/exchange/transactions/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(len(data['data']), 3)
        self.assertEqual(data['pagination']['total'], 3)
        self.assertEqual(data['pagination']['limit'], 20)

    def test_limit_is_clamped(self):
        ExchangeOrderFactory.create_batch(12, user=self.user)

        small = self.client.get('/api/exchange/transactions/', {'limit': 2})
        self.assertEqual(small.json()['pagination']['limit'], 10)
        self.assertEqual(len(small.json()['data']), 10)
        self.assertEqual(small.json()['pagination']['pages'], 2)

        second_page = self.client.get('/api/exchange/transactions/', {'limit': 2, 'page': 2})
        self.assertEqual(len(second_page.json()['data']), 2)

        large = self.client.get('/api/exchange/transactions/', {'limit': 500})
        self.assertEqual(large.json()['pagination']['limit'], 50)

    def test_soft_deleted_orders_hidden(self):
        from django.utils import timezone
        ExchangeOrderFactory(user=self.user, deleted_at=timezone.now())

        response = self.client.get('/api/exchange/transactions/')
        self.assertEqual(response.json()['pagination']['total'], 0)

    def test_own_order_detail(self):
        order = ExchangeOrderFactory(user=self.user)

        response = self.client.get(f'/api/exchange/transactions/{order.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()['data']
        self.assertEqual(data['id'], str(order.id))
        self.assertEqual(data['status'], 'pending')
        self.assertNotIn('admin_notes', data)

    def test_other_users_order_is_not_found(self):
        order = ExchangeOrderFactory(user=UserFactory())

        response = self.client.get(f'/api/exchange/transactions/{order.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminExchangeAPITests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = AdminUserFactory()
        self.client.force_authenticate(user=self.admin)
        self.owner = UserFactory()
        self.order = ExchangeOrderFactory(user=self.owner)

    def test_non_admin_forbidden(self):
        client = APIClient()
        client.force_authenticate(user=self.owner)

        self.assertEqual(client.get('/api/admin/exchanges/').status_code, status.HTTP_403_FORBIDDEN)
        response = client.patch(
            f'/api/admin/exchanges/{self.order.id}/status/', {'status': 'shipped'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters(self):
        ExchangeOrderFactory(status='shipped')
        other = ExchangeOrderFactory()

        by_status = self.client.get('/api/admin/exchanges/', {'status': 'shipped'}).json()
        self.assertEqual(by_status['pagination']['total'], 1)

        by_user = self.client.get('/api/admin/exchanges/', {'user_id': other.user_id}).json()
        self.assertEqual(by_user['pagination']['total'], 1)
        self.assertEqual(by_user['data'][0]['user_id'], other.user_id)

        everything = self.client.get('/api/admin/exchanges/').json()
        self.assertEqual(everything['pagination']['total'], 3)

    def test_invalid_user_filter(self):
        response = self.client.get('/api/admin/exchanges/', {'user_id': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail(self):
        response = self.client.get(f'/api/admin/exchanges/{self.order.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()['data']
        self.assertEqual(data['user_username'], self.owner.username)
        self.assertIn('admin_notes', data)

    def test_detail_not_found(self):
        response = self.client.get(f'/api/admin/exchanges/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_status(self):
        response = self.client.patch(
            f'/api/admin/exchanges/{self.order.id}/status/',
            {'status': 'shipped', 'tracking_number': 'TRK123'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['data']['status'], 'shipped')
        self.assertEqual(response.json()['data']['tracking_number'], 'TRK123')
        message = Message.objects.get(receiver=self.owner)
        self.assertIn('TRK123', message.content)

    def test_put_status(self):
        response = self.client.put(
            f'/api/admin/exchanges/{self.order.id}/status/',
            {'status': 'processing', 'notes': 'picking'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'processing')
        self.assertEqual(self.order.admin_notes, 'picking')

    def test_invalid_status(self):
        response = self.client.patch(
            f'/api/admin/exchanges/{self.order.id}/status/', {'status': 'lost'}, format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error'], 'Invalid status')

    def test_status_of_unknown_order(self):
        response = self.client.patch(
            f'/api/admin/exchanges/{uuid.uuid4()}/status/', {'status': 'shipped'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_strict_mode_rejection_over_api(self):
        with self.settings(EXCHANGE_ENFORCE_STATUS_TRANSITIONS=True):
            response = self.client.patch(
                f'/api/admin/exchanges/{self.order.id}/status/', {'status': 'completed'}, format='json'
            )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['code'], 'INVALID_TRANSITION')
