"""Models package - domain-based organization"""

# User models
from .user import Profile

# Fleet models
from .fleet import Vehicle

# Route models
from .route import Route

# Trip models
from .trip import Trip

# Reservation models
from .reservation import Reservation, Passenger

__all__ = [
    'Profile', 'Vehicle', 'Route', 'Trip', 'Reservation', 'Passenger',
]
