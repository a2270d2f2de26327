from decimal import ROUND_HALF_UP, Decimal

from rest_framework import serializers
from rest_framework.settings import api_settings

from .exceptions import ValidationError
from .models import Booking, Payment, Room

MISSING_CODES = {'required', 'null', 'blank'}


class EnvelopeSerializer(serializers.ModelSerializer):
    """ModelSerializer that speaks the wire (camelCase) field names.

    ``validated()`` turns DRF field errors into a single ValidationError
    message, the way the handlers report bad input.
    """

    required_fields = ()

    def validated(self):
        if self.is_valid():
            return self.validated_data

        errors = self.errors
        for details in errors.values():
            if any(getattr(detail, 'code', None) in MISSING_CODES for detail in details):
                raise ValidationError(f"Missing required fields: {', '.join(self.required_fields)}")

        field, details = next(iter(errors.items()))
        if field == api_settings.NON_FIELD_ERRORS_KEY:
            raise ValidationError(str(details[0]))
        raise ValidationError(f"Invalid value for {field}: {details[0]}")


class RoomSerializer(EnvelopeSerializer):
    required_fields = ('roomNumber', 'type', 'price')

    roomId = serializers.UUIDField(source='id', read_only=True)
    roomNumber = serializers.CharField(source='room_number', max_length=20)
    type = serializers.CharField(source='room_type', max_length=50)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), rounding=ROUND_HALF_UP
    )
    status = serializers.ChoiceField(
        choices=Room.Status.choices, required=False, allow_null=True, allow_blank=True
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Room
        fields = ['roomId', 'roomNumber', 'type', 'price', 'status', 'createdAt']


class AvailabilitySerializer(serializers.Serializer):
    availableRooms = RoomSerializer(many=True, read_only=True)
    count = serializers.IntegerField(read_only=True)
    startDate = serializers.CharField(read_only=True, allow_null=True)
    endDate = serializers.CharField(read_only=True, allow_null=True)


class BookingSerializer(EnvelopeSerializer):
    required_fields = ('roomId', 'guestName', 'guestEmail', 'checkInDate', 'checkOutDate')

    bookingId = serializers.UUIDField(source='id', read_only=True)
    roomId = serializers.CharField(source='room_id', max_length=64)
    guestName = serializers.CharField(source='guest_name', max_length=150)
    # Format is not checked
    guestEmail = serializers.CharField(source='guest_email', max_length=254)
    # No ordering check between the two dates
    checkInDate = serializers.DateField(source='check_in_date')
    checkOutDate = serializers.DateField(source='check_out_date')
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Booking
        fields = [
            'bookingId', 'roomId', 'guestName', 'guestEmail',
            'checkInDate', 'checkOutDate', 'status', 'createdAt',
        ]


class PaymentSerializer(EnvelopeSerializer):
    required_fields = ('bookingId', 'amount')

    paymentId = serializers.UUIDField(source='id', read_only=True)
    bookingId = serializers.CharField(source='booking_id', max_length=64)
    amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'), rounding=ROUND_HALF_UP
    )
    paymentMethod = serializers.ChoiceField(
        source='payment_method', choices=Payment.Method.choices,
        required=False, allow_null=True, allow_blank=True,
    )
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    processedAt = serializers.DateTimeField(source='processed_at', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'paymentId', 'bookingId', 'amount', 'paymentMethod',
            'status', 'createdAt', 'processedAt',
        ]
