from .user import User
from .amenity import Amenity, AmenityCategory
from .rent import Rent, PropertyType, CancellationPolicy, rent_amenities
from .booking import Booking, BookingStatus, StayTerm
from .review import Review
from .destination import Destination
