"""HTTP client for the three hotel handlers.

Each handler is deployed on its own base URL, so the client keeps one per
service. Responses are unwrapped from the ``{success, data, error}``
envelope.
"""
import logging
import os

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    def __init__(self, status_code, error):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error


class HotelClient:
    def __init__(self, room_service_url=None, booking_service_url=None,
                 payment_service_url=None, session=None, timeout=DEFAULT_TIMEOUT):
        self.room_service_url = (room_service_url or os.getenv('ROOM_SERVICE_URL', 'http://localhost:3001')).rstrip('/')
        self.booking_service_url = (booking_service_url or os.getenv('BOOKING_SERVICE_URL', 'http://localhost:3002')).rstrip('/')
        self.payment_service_url = (payment_service_url or os.getenv('PAYMENT_SERVICE_URL', 'http://localhost:3003')).rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, **kwargs):
        from django.conf import settings

        return cls(
            room_service_url=settings.ROOM_SERVICE_URL,
            booking_service_url=settings.BOOKING_SERVICE_URL,
            payment_service_url=settings.PAYMENT_SERVICE_URL,
            **kwargs,
        )

    def _request(self, method, url, **kwargs):
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException:
            logger.exception("%s %s failed", method, url)
            raise

        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text or 'Invalid response body') from None

        if not body.get('success'):
            raise ApiError(response.status_code, body.get('error', 'Unknown error'))
        return body.get('data')

    # Rooms

    def list_rooms(self):
        return self._request('GET', f"{self.room_service_url}/rooms")

    def get_room(self, room_id):
        return self._request('GET', f"{self.room_service_url}/rooms/{room_id}")

    def create_room(self, room_number, type, price, status=None):
        payload = {'roomNumber': room_number, 'type': type, 'price': price}
        if status:
            payload['status'] = status
        return self._request('POST', f"{self.room_service_url}/rooms", json=payload)

    def check_availability(self, start_date=None, end_date=None):
        params = {}
        if start_date:
            params['startDate'] = start_date
        if end_date:
            params['endDate'] = end_date
        return self._request('GET', f"{self.room_service_url}/rooms/availability", params=params)

    # Bookings

    def list_bookings(self):
        return self._request('GET', f"{self.booking_service_url}/bookings")

    def get_booking(self, booking_id):
        return self._request('GET', f"{self.booking_service_url}/bookings/{booking_id}")

    def create_booking(self, room_id, guest_name, guest_email, check_in_date, check_out_date):
        payload = {
            'roomId': room_id,
            'guestName': guest_name,
            'guestEmail': guest_email,
            'checkInDate': check_in_date,
            'checkOutDate': check_out_date,
        }
        return self._request('POST', f"{self.booking_service_url}/bookings", json=payload)

    def bookings_by_room(self, room_id):
        return self._request('GET', f"{self.booking_service_url}/bookings/room/{room_id}")

    # Payments

    def list_payments(self):
        return self._request('GET', f"{self.payment_service_url}/payments")

    def get_payment(self, payment_id):
        return self._request('GET', f"{self.payment_service_url}/payments/{payment_id}")

    def create_payment(self, booking_id, amount, payment_method='card'):
        payload = {'bookingId': booking_id, 'amount': amount, 'paymentMethod': payment_method}
        return self._request('POST', f"{self.payment_service_url}/payments", json=payload)

    def process_payment(self, payment_id):
        return self._request('POST', f"{self.payment_service_url}/payments/{payment_id}/process")

    def payments_by_booking(self, booking_id):
        return self._request('GET', f"{self.payment_service_url}/payments/booking/{booking_id}")
