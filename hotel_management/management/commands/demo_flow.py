from datetime import date, timedelta

from django.core.management.base import BaseCommand, CommandError

from hotel_management.client import ApiError, HotelClient


class Command(BaseCommand):
    help = 'Walk through room, booking and payment against the deployed handlers'

    def add_arguments(self, parser):
        parser.add_argument('--room-number', default='101')
        parser.add_argument('--room-type', default='standard')
        parser.add_argument('--price', default='100')
        parser.add_argument('--guest-name', default='Demo Guest')
        parser.add_argument('--guest-email', default='demo@example.com')
        parser.add_argument('--nights', type=int, default=2)

    def handle(self, *args, **options):
        client = HotelClient.from_settings()
        check_in = date.today() + timedelta(days=1)
        check_out = check_in + timedelta(days=options['nights'])

        try:
            room = client.create_room(options['room_number'], options['room_type'], options['price'])
            self.stdout.write(f"Created room {room['roomNumber']} ({room['roomId']})")

            booking = client.create_booking(
                room['roomId'],
                options['guest_name'],
                options['guest_email'],
                check_in.isoformat(),
                check_out.isoformat(),
            )
            self.stdout.write(f"Created booking {booking['bookingId']} ({booking['status']})")

            payment = client.create_payment(booking['bookingId'], room['price'])
            self.stdout.write(f"Created payment {payment['paymentId']} for {payment['amount']}")

            payment = client.process_payment(payment['paymentId'])
        except ApiError as exc:
            raise CommandError(f"Request failed: {exc}") from exc

        style = self.style.SUCCESS if payment['status'] == 'PAID' else self.style.WARNING
        self.stdout.write(style(f"Payment {payment['paymentId']} {payment['status']} at {payment['processedAt']}"))
