# SQLAlchemy models
from globetrotter.models.profile import Profile
from globetrotter.models.city import City
from globetrotter.models.activity import Activity
from globetrotter.models.trip import Trip
from globetrotter.models.trip_stop import TripStop
from globetrotter.models.trip_activity import TripActivity

__all__ = [
    "Profile",
    # Reference data
    "City",
    "Activity",
    # Trip graph
    "Trip",
    "TripStop",
    "TripActivity",
]
