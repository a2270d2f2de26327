from django.http import JsonResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .serializers import AvailabilitySerializer, BookingSerializer, PaymentSerializer, RoomSerializer
from .services import BookingService, PaymentService, RoomService


def health_check(request):
    return JsonResponse({"status": "ok"})


def not_found(request, exception=None):
    return JsonResponse({'success': False, 'error': 'Not found'}, status=status.HTTP_404_NOT_FOUND)


def envelope(data, message=None, status_code=status.HTTP_200_OK):
    body = {'success': True, 'data': data}
    if message:
        body['message'] = message
    return Response(body, status=status_code)


class HandlerViewSet(viewsets.ViewSet):
    """Thin HTTP adapter over one service.

    ``failure_messages`` maps an action to the generic error returned when
    the store or anything unexpected fails during that action.
    """

    # Ids are free-form strings and may contain dots
    lookup_value_regex = '[^/]+'
    service_class = None
    failure_messages = {}

    def get_service(self):
        return self.service_class()


class RoomViewSet(HandlerViewSet):
    service_class = RoomService
    failure_messages = {
        'list': 'Failed to fetch rooms',
        'retrieve': 'Failed to fetch room',
        'create': 'Failed to create room',
        'availability': 'Failed to check availability',
    }

    def list(self, request):
        rooms = self.get_service().get_all_rooms()
        return envelope(RoomSerializer(rooms, many=True).data)

    def retrieve(self, request, pk=None):
        room = self.get_service().get_room_by_id(pk)
        return envelope(RoomSerializer(room).data)

    def create(self, request):
        data = RoomSerializer(data=request.data).validated()
        room = self.get_service().create_room(
            room_number=data['room_number'],
            type=data['room_type'],
            price=data['price'],
            status=data.get('status'),
        )
        return envelope(RoomSerializer(room).data, status_code=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def availability(self, request):
        """Rooms whose status is available; startDate/endDate are echoed only."""
        result = self.get_service().check_availability(
            start_date=request.query_params.get('startDate'),
            end_date=request.query_params.get('endDate'),
        )
        return envelope(AvailabilitySerializer(result).data)


class BookingViewSet(HandlerViewSet):
    service_class = BookingService
    failure_messages = {
        'list': 'Failed to fetch bookings',
        'retrieve': 'Failed to fetch booking',
        'create': 'Failed to create booking',
        'by_room': 'Failed to fetch bookings',
    }

    def list(self, request):
        bookings = self.get_service().get_all_bookings()
        return envelope(BookingSerializer(bookings, many=True).data)

    def retrieve(self, request, pk=None):
        booking = self.get_service().get_booking_by_id(pk)
        return envelope(BookingSerializer(booking).data)

    def create(self, request):
        data = BookingSerializer(data=request.data).validated()
        booking = self.get_service().create_booking(
            room_id=data['room_id'],
            guest_name=data['guest_name'],
            guest_email=data['guest_email'],
            check_in_date=data['check_in_date'],
            check_out_date=data['check_out_date'],
        )
        return envelope(
            BookingSerializer(booking).data,
            message='Booking created. Please complete payment.',
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=['get'], url_path=r'room/(?P<room_id>[^/]+)')
    def by_room(self, request, room_id=None):
        bookings = self.get_service().get_bookings_by_room(room_id)
        return envelope(BookingSerializer(bookings, many=True).data)


class PaymentViewSet(HandlerViewSet):
    service_class = PaymentService
    failure_messages = {
        'list': 'Failed to fetch payments',
        'retrieve': 'Failed to fetch payment',
        'create': 'Failed to create payment',
        'process': 'Failed to process payment',
        'by_booking': 'Failed to fetch payments',
    }

    def list(self, request):
        payments = self.get_service().get_all_payments()
        return envelope(PaymentSerializer(payments, many=True).data)

    def retrieve(self, request, pk=None):
        payment = self.get_service().get_payment_by_id(pk)
        return envelope(PaymentSerializer(payment).data)

    def create(self, request):
        data = PaymentSerializer(data=request.data).validated()
        payment = self.get_service().create_payment(
            booking_id=data['booking_id'],
            amount=data['amount'],
            payment_method=data.get('payment_method'),
        )
        return envelope(
            PaymentSerializer(payment).data,
            message='Payment created. Use process endpoint to complete payment.',
            status_code=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['post'])
    def process(self, request, pk=None):
        payment = self.get_service().process_payment(pk)
        if payment.status == payment.Status.FAILED:
            message = 'Payment processing failed. Please try again.'
        else:
            message = 'Payment processed successfully!'
        return envelope(PaymentSerializer(payment).data, message=message)

    @action(detail=False, methods=['get'], url_path=r'booking/(?P<booking_id>[^/]+)')
    def by_booking(self, request, booking_id=None):
        payments = self.get_service().get_payments_by_booking(booking_id)
        return envelope(PaymentSerializer(payments, many=True).data)
