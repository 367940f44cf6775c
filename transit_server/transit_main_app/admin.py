from django.contrib import admin
from .models import Profile, Vehicle, Route, Trip, Reservation, Passenger

# Customize admin site
admin.site.site_header = "Transit Back Office"
admin.site.site_title = "Transit Admin"
admin.site.index_title = "Welcome to the Transit Admin Panel"


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'role', 'full_name', 'company_id', 'company']
    list_filter = ['role']
    search_fields = ['user__username', 'first_name', 'last_name', 'company', 'company_id']
    ordering = ['id']
    list_per_page = 50


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ['id', 'plate_number', 'economic_number', 'brand', 'model', 'capacity', 'has_ac', 'company_id']
    list_filter = ['has_ac']
    search_fields = ['plate_number', 'economic_number', 'model']
    ordering = ['id']


@admin.register(Route)
class RouteAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'origin', 'destination', 'get_num_stops', 'company_id']
    search_fields = ['name', 'origin', 'destination']
    ordering = ['id']

    def get_num_stops(self, obj):
        return len(obj.stops or [])
    get_num_stops.short_description = 'Stops'


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ['id', 'route', 'company_id', 'visibility', 'capacity', 'get_segment_count', 'is_sub_trip', 'created_at']
    list_filter = ['visibility', 'is_sub_trip']
    search_fields = ['route__name', 'route__origin', 'route__destination', 'company_id']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['route', 'vehicle', 'driver', 'parent_trip']

    def get_segment_count(self, obj):
        return len(obj.trip_data or [])
    get_segment_count.short_description = 'Segments'


class PassengerInline(admin.TabularInline):
    model = Passenger
    extra = 0


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ['id', 'code', 'company_id', 'status', 'payment_status', 'total_amount', 'checked', 'created_at']
    list_filter = ['status', 'payment_status', 'payment_method', 'checked']
    search_fields = ['id', 'email', 'phone']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['created_at', 'updated_at', 'checked_at']
    raw_id_fields = ['created_by', 'checked_by']
    inlines = [PassengerInline]
