from config_fetcher.models.entities import Assignment
from config_fetcher.models.schemas import RecommendedServer, parse_recommendations

__all__ = ["Assignment", "RecommendedServer", "parse_recommendations"]
