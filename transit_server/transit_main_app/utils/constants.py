"""Centralized constants and business rules"""

class UserRole:
    SUPER_ADMIN = 'superadmin'
    ADMIN = 'admin'
    OWNER = 'owner'
    CALL_CENTER = 'call_center'
    CHECKER = 'checker'
    DRIVER = 'driver'
    TICKET_OFFICE = 'ticket_office'
    COMMISSIONER = 'commissioner'
    
    CHOICES = [
        (SUPER_ADMIN, 'Super Admin'),
        (ADMIN, 'Admin'),
        (OWNER, 'Owner'),
        (CALL_CENTER, 'Call Center'),
        (CHECKER, 'Checker'),
        (DRIVER, 'Driver'),
        (TICKET_OFFICE, 'Ticket Office'),
        (COMMISSIONER, 'Commissioner'),
    ]

class TripVisibility:
    DRAFT = 'draft'
    PUBLISHED = 'published'
    HIDDEN = 'hidden'
    CANCELLED = 'cancelled'
    
    CHOICES = [
        (DRAFT, 'Draft'),
        (PUBLISHED, 'Published'),
        (HIDDEN, 'Hidden'),
        (CANCELLED, 'Cancelled'),
    ]

class ReservationStatus:
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELED = 'canceled'
    CANCELED_AND_REFUND = 'canceledAndRefund'
    
    CHOICES = [
        (PENDING, 'Pending'),
        (CONFIRMED, 'Confirmed'),
        (CANCELED, 'Canceled'),
        (CANCELED_AND_REFUND, 'Canceled and refunded'),
    ]
    
    CANCELED_STATES = (CANCELED, CANCELED_AND_REFUND)

class PaymentStatus:
    PENDING = 'pending'
    PAID = 'paid'
    CANCELLED = 'cancelled'
    
    CHOICES = [
        (PENDING, 'Pending'),
        (PAID, 'Paid'),
        (CANCELLED, 'Cancelled'),
    ]

class PaymentMethod:
    CASH = 'cash'
    TRANSFER = 'transfer'
    
    CHOICES = [
        (CASH, 'Cash'),
        (TRANSFER, 'Transfer'),
    ]

class SearchMode:
    EXPANDED = 'expanded'
    OPTIMIZED = 'optimized'

class BusinessRules:
    """Business rules and limits"""
    DEFAULT_CAPACITY = 40
    ALL_COMPANIES = 'ALL'
    RELATED_TRIP_LABEL = 'Viaje Relacionado #{}'
    UNKNOWN_FIRST_NAME = 'Sin nombre'
    UNKNOWN_LAST_NAME = 'Sin apellido'
    RESERVATION_CODE_WIDTH = 6
