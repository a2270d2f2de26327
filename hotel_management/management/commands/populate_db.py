from decimal import Decimal

from django.core.management.base import BaseCommand

from hotel_management.models import Room
from hotel_management.services import RoomService


class Command(BaseCommand):
    help = 'Populate database with sample hotel rooms'

    def handle(self, *args, **options):
        rooms_data = [
            {'room_number': '101', 'type': Room.Type.STANDARD, 'price': Decimal('80.00')},
            {'room_number': '102', 'type': Room.Type.STANDARD, 'price': Decimal('85.00')},
            {'room_number': '201', 'type': Room.Type.DELUXE, 'price': Decimal('120.00')},
            {'room_number': '202', 'type': Room.Type.DELUXE, 'price': Decimal('130.00'),
             'status': Room.Status.MAINTENANCE},
            {'room_number': '301', 'type': Room.Type.SUITE, 'price': Decimal('180.00')},
            {'room_number': '302', 'type': Room.Type.SUITE, 'price': Decimal('200.00'),
             'status': Room.Status.OCCUPIED},
            {'room_number': '401', 'type': Room.Type.PRESIDENTIAL, 'price': Decimal('350.00')},
        ]

        service = RoomService()
        # Room numbers are not unique in the store, so check before seeding
        existing = {room.room_number for room in service.get_all_rooms()}

        for room_data in rooms_data:
            if room_data['room_number'] in existing:
                self.stdout.write(f"Room {room_data['room_number']} already exists")
                continue

            room = service.create_room(**room_data)
            self.stdout.write(f'Created room: {room.room_number} - {room.room_type}')

        self.stdout.write(
            self.style.SUCCESS('Successfully populated database with sample data')
        )
