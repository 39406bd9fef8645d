from .stats import DashboardStats, compute_dashboard_stats

__all__ = ["DashboardStats", "compute_dashboard_stats"]
