import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Room(models.Model):
    class Type(models.TextChoices):
        STANDARD = "standard"
        DELUXE = "deluxe"
        SUITE = "suite"
        PRESIDENTIAL = "presidential"

    class Status(models.TextChoices):
        AVAILABLE = "available"
        OCCUPIED = "occupied"
        MAINTENANCE = "maintenance"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room_number = models.CharField(max_length=20)  # not unique
    room_type = models.CharField(max_length=50)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = settings.ROOMS_TABLE_NAME

    def __str__(self):
        return f"Room {self.room_number} ({self.room_type})"


class Booking(models.Model):
    class Status(models.TextChoices):
        CONFIRMED = "confirmed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Plain indexed column: the room may not exist
    room_id = models.CharField(max_length=64, db_index=True)
    guest_name = models.CharField(max_length=150)
    guest_email = models.CharField(max_length=254)
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CONFIRMED)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = settings.BOOKINGS_TABLE_NAME

    def __str__(self):
        return f"Booking {self.id} for room {self.room_id}"


class Payment(models.Model):
    class Method(models.TextChoices):
        CARD = "card"
        CASH = "cash"
        BANK_TRANSFER = "bank_transfer"

    class Status(models.TextChoices):
        PENDING = "PENDING"
        PAID = "PAID"
        FAILED = "FAILED"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_id = models.CharField(max_length=64, db_index=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=Method.choices, default=Method.CARD)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(default=timezone.now)
    processed_at = models.DateTimeField(null=True, blank=True)  # set iff status != PENDING

    class Meta:
        db_table = settings.PAYMENTS_TABLE_NAME

    def __str__(self):
        return f"Payment {self.id} ({self.status})"
