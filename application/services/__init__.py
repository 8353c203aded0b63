from .conversion_service import ConversionService
from .converter import Converter, round_amount

__all__ = ['ConversionService', 'Converter', 'round_amount']
