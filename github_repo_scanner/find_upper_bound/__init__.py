from .find_upper_bound import find_upper_bound

__all__ = ["find_upper_bound"]
