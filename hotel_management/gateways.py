import random

from django.conf import settings
from django.utils.module_loading import import_string

from .models import Payment


class PaymentGateway:
    """Decides the outcome of charging a payment."""

    def charge(self, payment):
        """Return ``Payment.Status.PAID`` or ``Payment.Status.FAILED``."""
        raise NotImplementedError


class SimulatedPaymentGateway(PaymentGateway):
    """Stand-in for a real provider: fails a fixed share of charges at random."""

    def __init__(self, failure_rate=0.1, seed=None):
        if not 0 <= failure_rate <= 1:
            raise ValueError("failure_rate must be between 0 and 1")
        self.failure_rate = failure_rate
        self._random = random.Random(seed)

    def charge(self, payment):
        if self._random.random() < self.failure_rate:
            return Payment.Status.FAILED
        return Payment.Status.PAID


class FixedOutcomeGateway(PaymentGateway):
    def __init__(self, outcome=Payment.Status.PAID):
        if outcome not in (Payment.Status.PAID, Payment.Status.FAILED):
            raise ValueError(f"Unsupported outcome: {outcome}")
        self.outcome = outcome
        self.charged = []

    def charge(self, payment):
        self.charged.append(payment.pk)
        return self.outcome


def get_payment_gateway():
    gateway_class = import_string(settings.PAYMENT_GATEWAY)
    return gateway_class(**settings.PAYMENT_GATEWAY_OPTIONS)
