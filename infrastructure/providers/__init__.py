from .base import RateProvider
from .fixerio import FixerIOProvider

__all__ = ['RateProvider', 'FixerIOProvider']
