from .error_handling import returns_on_error
from .logging_setup import setup_logging
from .text_normalizer import decode_latex

__all__ = ['decode_latex', 'returns_on_error', 'setup_logging']
