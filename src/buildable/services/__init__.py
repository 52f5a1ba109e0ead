from buildable.services.analytics import AnalyticsService
from buildable.services.ratings import RatingService
from buildable.services.seed import seed_store

__all__ = ["AnalyticsService", "RatingService", "seed_store"]
