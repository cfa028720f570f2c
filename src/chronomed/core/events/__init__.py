from .cluster import cluster, cluster_lanes
from .summary import format_cluster_date, format_cluster_label, total_count

__all__ = [
    "cluster",
    "cluster_lanes",
    "format_cluster_date",
    "format_cluster_label",
    "total_count",
]
