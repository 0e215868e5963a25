from .scan_repositories import scan_repositories

__all__ = ["scan_repositories"]
