from django.contrib import admin

from .models import Booking, Payment, Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_number', 'room_type', 'price', 'status', 'created_at')
    list_filter = ('status', 'room_type')


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'room_id', 'guest_name', 'check_in_date', 'check_out_date', 'status')
    search_fields = ('room_id', 'guest_email')


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'booking_id', 'amount', 'payment_method', 'status', 'processed_at')
    list_filter = ('status', 'payment_method')
    search_fields = ('booking_id',)
