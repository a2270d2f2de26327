"""Room, booking and payment handlers.

Each service owns one entity's repository and never calls another service.
Cross-entity consistency (a booking's room existing, a payment's booking
existing) is left to the caller.
"""
import logging

from django.utils import timezone

from .exceptions import NotFoundError, ValidationError
from .gateways import get_payment_gateway
from .models import Booking, Payment, Room
from .repositories import DjangoRepository

logger = logging.getLogger(__name__)


def is_missing(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(**fields):
    """Raise ValidationError listing the required fields if any is absent."""
    if any(is_missing(value) for value in fields.values()):
        raise ValidationError(f"Missing required fields: {', '.join(fields)}")


def require_id(value, label):
    if is_missing(value):
        raise ValidationError(f"{label} ID is required")


class RoomService:
    def __init__(self, repository=None):
        self.repository = repository or DjangoRepository(Room)

    def create_room(self, room_number, type, price, status=Room.Status.AVAILABLE):
        require_fields(roomNumber=room_number, type=type, price=price)
        room = Room(
            room_number=room_number,
            room_type=type,
            price=price,
            status=status or Room.Status.AVAILABLE,
            created_at=timezone.now(),
        )
        self.repository.add(room)
        logger.info("Created room %s (number=%s, type=%s)", room.pk, room.room_number, room.room_type)
        return room

    def get_all_rooms(self):
        return self.repository.all()

    def get_room_by_id(self, room_id):
        require_id(room_id, "Room")
        room = self.repository.get(room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    def check_availability(self, start_date=None, end_date=None):
        # Only the status flag is consulted; the dates are echoed back.
        rooms = self.repository.filter_by(status=Room.Status.AVAILABLE)
        return {
            'availableRooms': rooms,
            'count': len(rooms),
            'startDate': start_date or None,
            'endDate': end_date or None,
        }


class BookingService:
    def __init__(self, repository=None):
        self.repository = repository or DjangoRepository(Booking)

    def create_booking(self, room_id, guest_name, guest_email, check_in_date, check_out_date):
        require_fields(
            roomId=room_id,
            guestName=guest_name,
            guestEmail=guest_email,
            checkInDate=check_in_date,
            checkOutDate=check_out_date,
        )
        booking = Booking(
            room_id=str(room_id),
            guest_name=guest_name,
            guest_email=guest_email,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            status=Booking.Status.CONFIRMED,
            created_at=timezone.now(),
        )
        self.repository.add(booking)
        logger.info("Created booking %s for room %s", booking.pk, booking.room_id)
        return booking

    def get_all_bookings(self):
        return self.repository.all()

    def get_booking_by_id(self, booking_id):
        require_id(booking_id, "Booking")
        booking = self.repository.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def get_bookings_by_room(self, room_id):
        require_id(room_id, "Room")
        return self.repository.filter_by(room_id=str(room_id))


class PaymentService:
    def __init__(self, repository=None, gateway=None):
        self.repository = repository or DjangoRepository(Payment)
        self.gateway = gateway or get_payment_gateway()

    def create_payment(self, booking_id, amount, payment_method=Payment.Method.CARD):
        require_fields(bookingId=booking_id, amount=amount)
        payment = Payment(
            booking_id=str(booking_id),
            amount=amount,
            payment_method=payment_method or Payment.Method.CARD,
            status=Payment.Status.PENDING,
            created_at=timezone.now(),
            processed_at=None,
        )
        self.repository.add(payment)
        logger.info("Created payment %s for booking %s (amount=%s)", payment.pk, payment.booking_id, payment.amount)
        return payment

    def process_payment(self, payment_id):
        """Charge a payment through the gateway and record the outcome.

        Not guarded against re-invocation: processing an already PAID or
        FAILED payment charges again and overwrites the outcome.
        """
        require_id(payment_id, "Payment")
        payment = self.repository.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")

        if payment.status != Payment.Status.PENDING:
            logger.warning("Re-processing payment %s already in status %s", payment.pk, payment.status)

        payment.status = self.gateway.charge(payment)
        payment.processed_at = timezone.now()
        self.repository.save(payment, fields=['status', 'processed_at'])
        logger.info("Processed payment %s: %s", payment.pk, payment.status)
        return payment

    def get_all_payments(self):
        return self.repository.all()

    def get_payment_by_id(self, payment_id):
        require_id(payment_id, "Payment")
        payment = self.repository.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")
        return payment

    def get_payments_by_booking(self, booking_id):
        require_id(booking_id, "Booking")
        return self.repository.filter_by(booking_id=str(booking_id))
