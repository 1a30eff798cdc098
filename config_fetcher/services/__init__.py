"""Services: assignment table, upstream clients, assignment proxy."""

from config_fetcher.services.assignment_table import AssignmentTable
from config_fetcher.services.config_source import build_config_url, fetch_config
from config_fetcher.services.proxy import FAVICON, AssignmentProxy, node_id_from_path
from config_fetcher.services.recommendations import fetch_recommendations

__all__ = [
    "AssignmentTable",
    "AssignmentProxy",
    "FAVICON",
    "node_id_from_path",
    "build_config_url",
    "fetch_config",
    "fetch_recommendations",
]
