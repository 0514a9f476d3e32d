"""
Tests for admin-driven exchange status changes.
"""
import uuid
from unittest.mock import MagicMock

from django.db import transaction
from django.test import TestCase, override_settings

from apps.common.models import AuditLog, Message
from apps.exchanges.exceptions import ExchangeNotFound, ExchangeValidationError, InvalidStatusTransition
from apps.exchanges.models import ExchangeOrder
from apps.exchanges.services import ExchangeStatusWorkflow
from tests.factories import AdminUserFactory, ExchangeOrderFactory


class StatusWorkflowTests(TestCase):

    def setUp(self):
        self.admin = AdminUserFactory()
        self.order = ExchangeOrderFactory(notes='ring the bell')
        self.workflow = ExchangeStatusWorkflow()

    def test_ship_with_tracking_number_notifies_owner(self):
        updated = self.workflow.update_status(
            self.admin, self.order.id, ExchangeOrder.STATUS_SHIPPED, tracking_number='TRK123'
        )

        self.assertEqual(updated.status, ExchangeOrder.STATUS_SHIPPED)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_SHIPPED)
        self.assertEqual(self.order.tracking_number, 'TRK123')

        message = Message.objects.get(receiver=self.order.user)
        self.assertEqual(message.message_type, 'exchange_status_updated')
        self.assertIn('TRK123', message.content)
        self.assertIn(self.order.product_name, message.content)

        audit = AuditLog.objects.get(action='exchange_status_updated')
        self.assertEqual(audit.user_id, self.admin.id)
        self.assertEqual(audit.metadata['previous_status'], 'pending')
        self.assertEqual(audit.metadata['status'], 'shipped')
        self.assertEqual(audit.metadata['tracking_number'], 'TRK123')

    def test_admin_notes_do_not_overwrite_user_notes(self):
        self.workflow.update_status(
            self.admin, self.order.id, ExchangeOrder.STATUS_PROCESSING, notes='packed'
        )

        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, 'ring the bell')
        self.assertEqual(self.order.admin_notes, 'packed')
        self.assertIn('Notes: packed', Message.objects.get(receiver=self.order.user).content)

    def test_missing_tracking_number_keeps_existing_one(self):
        self.order.tracking_number = 'TRK999'
        self.order.save()

        self.workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_COMPLETED)

        self.order.refresh_from_db()
        self.assertEqual(self.order.tracking_number, 'TRK999')

    def test_points_and_quantity_untouched(self):
        points_used, quantity = self.order.points_used, self.order.quantity
        self.workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_CANCELLED)

        self.order.refresh_from_db()
        self.assertEqual(self.order.points_used, points_used)
        self.assertEqual(self.order.quantity, quantity)

    def test_invalid_status(self):
        for status in ('pending', 'lost', ''):
            with self.assertRaises(ExchangeValidationError) as ctx:
                self.workflow.update_status(self.admin, self.order.id, status)
            self.assertEqual(ctx.exception.message, 'Invalid status')

    def test_unknown_order(self):
        with self.assertRaises(ExchangeNotFound):
            self.workflow.update_status(self.admin, uuid.uuid4(), ExchangeOrder.STATUS_SHIPPED)

    def test_soft_deleted_order_is_not_found(self):
        from django.utils import timezone
        self.order.deleted_at = timezone.now()
        self.order.save()

        with self.assertRaises(ExchangeNotFound):
            self.workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_SHIPPED)

    def test_notification_failure_keeps_update(self):
        notifier = MagicMock()
        notifier.send_message.side_effect = RuntimeError('down')
        workflow = ExchangeStatusWorkflow(notifier=notifier)

        workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_PROCESSING)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_PROCESSING)
        self.assertTrue(AuditLog.objects.filter(action='exchange_status_updated').exists())

    def test_failed_message_write_leaves_outer_transaction_usable(self):
        def broken_send(receiver_id, *args, **kwargs):
            return Message.objects.create(receiver_id=None, message_type='x', title='x', content='x')

        notifier = MagicMock()
        notifier.send_message.side_effect = broken_send
        workflow = ExchangeStatusWorkflow(notifier=notifier)

        with transaction.atomic():
            workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_SHIPPED, tracking_number='TRK1')
            self.assertEqual(AuditLog.objects.filter(action='exchange_status_updated').count(), 1)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_SHIPPED)
        self.assertFalse(Message.objects.exists())


class StrictTransitionTests(TestCase):

    def setUp(self):
        self.admin = AdminUserFactory()
        self.order = ExchangeOrderFactory()

    def test_can_transition_table(self):
        can = ExchangeStatusWorkflow.can_transition
        self.assertTrue(can('pending', 'processing'))
        self.assertTrue(can('shipped', 'completed'))
        self.assertTrue(can('processing', 'cancelled'))
        self.assertFalse(can('pending', 'completed'))
        self.assertFalse(can('completed', 'cancelled'))
        self.assertFalse(can('cancelled', 'processing'))

    def test_strict_mode_rejects_skipping_states(self):
        workflow = ExchangeStatusWorkflow(enforce_transitions=True)

        with self.assertRaises(InvalidStatusTransition) as ctx:
            workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_COMPLETED)
        self.assertEqual(ctx.exception.code, 'INVALID_TRANSITION')

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_PENDING)
        self.assertFalse(Message.objects.exists())

    def test_strict_mode_allows_declared_path(self):
        workflow = ExchangeStatusWorkflow(enforce_transitions=True)
        for status in ('processing', 'shipped', 'completed'):
            workflow.update_status(self.admin, self.order.id, status)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_COMPLETED)

    @override_settings(EXCHANGE_ENFORCE_STATUS_TRANSITIONS=True)
    def test_setting_enables_strict_mode(self):
        self.assertTrue(ExchangeStatusWorkflow().enforce_transitions)

    def test_permissive_by_default(self):
        workflow = ExchangeStatusWorkflow()
        self.assertFalse(workflow.enforce_transitions)
        workflow.update_status(self.admin, self.order.id, ExchangeOrder.STATUS_COMPLETED)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, ExchangeOrder.STATUS_COMPLETED)
