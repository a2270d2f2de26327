from decimal import Decimal

from django.test import SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from hotel_management.exceptions import NotFoundError, ValidationError
from hotel_management.gateways import FixedOutcomeGateway, SimulatedPaymentGateway, get_payment_gateway
from hotel_management.models import Payment
from hotel_management.repositories import InMemoryRepository
from hotel_management.services import PaymentService

FIXED_PAID = {
    'PAYMENT_GATEWAY': 'hotel_management.gateways.FixedOutcomeGateway',
    'PAYMENT_GATEWAY_OPTIONS': {'outcome': 'PAID'},
}
FIXED_FAILED = {
    'PAYMENT_GATEWAY': 'hotel_management.gateways.FixedOutcomeGateway',
    'PAYMENT_GATEWAY_OPTIONS': {'outcome': 'FAILED'},
}


class PaymentServiceTestCase(SimpleTestCase):
    """Payment handler against an in-memory store and a fixed gateway"""

    def setUp(self):
        self.gateway = FixedOutcomeGateway(outcome=Payment.Status.PAID)
        self.service = PaymentService(
            repository=InMemoryRepository(index_fields=['booking_id']),
            gateway=self.gateway,
        )

    def test_create_payment_is_pending(self):
        payment = self.service.create_payment(booking_id="booking-1", amount=Decimal("100"))

        self.assertEqual(payment.status, Payment.Status.PENDING)
        self.assertEqual(payment.payment_method, Payment.Method.CARD)
        self.assertIsNone(payment.processed_at)

    def test_create_payment_requires_booking_and_amount(self):
        for kwargs in [{'booking_id': None, 'amount': 10}, {'booking_id': 'b-1', 'amount': None}]:
            with self.subTest(kwargs=kwargs):
                with self.assertRaisesMessage(ValidationError, 'Missing required fields: bookingId, amount'):
                    self.service.create_payment(**kwargs)

    def test_process_pending_payment(self):
        payment = self.service.create_payment(booking_id="booking-1", amount=100)

        processed = self.service.process_payment(str(payment.pk))

        self.assertEqual(processed.status, Payment.Status.PAID)
        self.assertIsNotNone(processed.processed_at)
        self.assertEqual(self.gateway.charged, [payment.pk])

    def test_process_payment_failure_outcome(self):
        self.service.gateway = FixedOutcomeGateway(outcome=Payment.Status.FAILED)
        payment = self.service.create_payment(booking_id="booking-1", amount=100)

        processed = self.service.process_payment(str(payment.pk))

        self.assertEqual(processed.status, Payment.Status.FAILED)
        self.assertIsNotNone(processed.processed_at)

    def test_reprocessing_is_not_guarded(self):
        """A processed payment can be charged again and change outcome"""
        payment = self.service.create_payment(booking_id="booking-1", amount=100)
        self.service.process_payment(str(payment.pk))
        first_processed_at = payment.processed_at

        self.service.gateway = FixedOutcomeGateway(outcome=Payment.Status.FAILED)
        with self.assertLogs('hotel_management.services', level='WARNING'):
            reprocessed = self.service.process_payment(str(payment.pk))

        self.assertEqual(reprocessed.status, Payment.Status.FAILED)
        self.assertGreaterEqual(reprocessed.processed_at, first_processed_at)

    def test_process_unknown_payment(self):
        with self.assertRaisesMessage(NotFoundError, 'Payment not found'):
            self.service.process_payment('missing')
        with self.assertRaisesMessage(ValidationError, 'Payment ID is required'):
            self.service.process_payment('')

    def test_processed_at_set_iff_not_pending(self):
        payments = [self.service.create_payment(booking_id=f"b-{i}", amount=10) for i in range(4)]
        for payment in payments[:2]:
            self.service.process_payment(str(payment.pk))

        for payment in self.service.get_all_payments():
            self.assertEqual(payment.processed_at is not None, payment.status != Payment.Status.PENDING)

    def test_simulated_gateway_failure_rate(self):
        """Over a large sample roughly one in ten charges fails"""
        self.service.gateway = SimulatedPaymentGateway(failure_rate=0.1, seed=20240501)
        samples = 5000
        outcomes = []
        # Keeps per-payment INFO lines out of the test output
        with self.assertLogs('hotel_management.services', level='INFO'):
            for i in range(samples):
                payment = self.service.create_payment(booking_id=f"b-{i}", amount=10)
                processed = self.service.process_payment(str(payment.pk))
                self.assertIsNotNone(processed.processed_at)
                self.assertIn(processed.status, (Payment.Status.PAID, Payment.Status.FAILED))
                outcomes.append(processed.status)

        failure_rate = outcomes.count(Payment.Status.FAILED) / samples
        self.assertGreater(failure_rate, 0.08)
        self.assertLess(failure_rate, 0.12)

    def test_payments_by_booking(self):
        self.service.create_payment(booking_id="b-1", amount=10)
        self.service.create_payment(booking_id="b-1", amount=20)
        self.service.create_payment(booking_id="b-2", amount=30)

        payments = self.service.get_payments_by_booking("b-1")

        self.assertEqual(sorted(p.amount for p in payments), [10, 20])
        self.assertEqual(self.service.get_payments_by_booking("b-unknown"), [])


class PaymentGatewayTestCase(SimpleTestCase):

    def test_simulated_gateway_rejects_bad_rate(self):
        with self.assertRaises(ValueError):
            SimulatedPaymentGateway(failure_rate=1.5)

    def test_simulated_gateway_extremes(self):
        payment = Payment(booking_id="b-1", amount=10)
        self.assertEqual(SimulatedPaymentGateway(failure_rate=0).charge(payment), Payment.Status.PAID)
        self.assertEqual(SimulatedPaymentGateway(failure_rate=1).charge(payment), Payment.Status.FAILED)

    def test_fixed_gateway_rejects_pending(self):
        with self.assertRaises(ValueError):
            FixedOutcomeGateway(outcome=Payment.Status.PENDING)

    @override_settings(**FIXED_FAILED)
    def test_gateway_built_from_settings(self):
        gateway = get_payment_gateway()

        self.assertIsInstance(gateway, FixedOutcomeGateway)
        self.assertEqual(gateway.outcome, Payment.Status.FAILED)


class PaymentApiTestCase(APITestCase):
    """Payment endpoints"""

    def create_payment(self, **overrides):
        payload = {'bookingId': 'booking-1', 'amount': 100}
        payload.update(overrides)
        return self.client.post('/payments', payload, format='json')

    def test_create_payment(self):
        response = self.create_payment(paymentMethod='bank_transfer')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        body = response.json()
        self.assertEqual(body['message'], 'Payment created. Use process endpoint to complete payment.')
        self.assertEqual(body['data']['status'], 'PENDING')
        self.assertEqual(body['data']['paymentMethod'], 'bank_transfer')
        self.assertEqual(body['data']['amount'], 100.0)
        self.assertIsNone(body['data']['processedAt'])

    def test_create_payment_defaults_to_card(self):
        response = self.create_payment()

        self.assertEqual(response.json()['data']['paymentMethod'], 'card')

    def test_create_payment_missing_amount(self):
        response = self.client.post('/payments', {'bookingId': 'booking-1'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error'], 'Missing required fields: bookingId, amount')

    def test_create_payment_rejects_bad_amount_and_method(self):
        scenarios = [
            ({'amount': 0}, 'amount'),
            ({'amount': 'lots'}, 'amount'),
            ({'paymentMethod': 'crypto'}, 'paymentMethod'),
        ]
        for overrides, field in scenarios:
            with self.subTest(overrides=overrides):
                response = self.create_payment(**overrides)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertTrue(response.json()['error'].startswith(f'Invalid value for {field}'))

    @override_settings(**FIXED_PAID)
    def test_process_payment_paid(self):
        payment_id = self.create_payment().json()['data']['paymentId']

        response = self.client.post(f'/payments/{payment_id}/process')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body['message'], 'Payment processed successfully!')
        self.assertEqual(body['data']['status'], 'PAID')
        self.assertIsNotNone(body['data']['processedAt'])

        stored = Payment.objects.get(pk=payment_id)
        self.assertEqual(stored.status, Payment.Status.PAID)
        self.assertIsNotNone(stored.processed_at)

    @override_settings(**FIXED_FAILED)
    def test_process_payment_failed(self):
        payment_id = self.create_payment().json()['data']['paymentId']

        response = self.client.post(f'/payments/{payment_id}/process')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['message'], 'Payment processing failed. Please try again.')
        self.assertEqual(response.json()['data']['status'], 'FAILED')

    def test_process_unknown_payment(self):
        response = self.client.post('/payments/7f1c6f0a-1111-4111-8111-111111111111/process')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'error': 'Payment not found'})

    def test_get_payment(self):
        created = self.create_payment().json()['data']

        response = self.client.get(f"/payments/{created['paymentId']}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['data'], created)

    def test_list_and_filter_by_booking(self):
        self.create_payment(bookingId='booking-1')
        self.create_payment(bookingId='booking-2')

        everything = self.client.get('/payments').json()['data']
        for_booking = self.client.get('/payments/booking/booking-1').json()['data']

        self.assertEqual(len(everything), 2)
        self.assertEqual([p['bookingId'] for p in for_booking], ['booking-1'])
        self.assertEqual(self.client.get('/payments/booking/nothing').json()['data'], [])
