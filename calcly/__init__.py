from .errors import CalculationError, CalculatorWarning, ConfigError
from .lexergenerator import LexerGenerator
from .parser import Parser, CLASSIC, CONVENTIONAL
from .box import Token, Outcome, SourcePosition
from .calculator import Calculator, evaluate, calculate, format_result
from .config import Settings, load_settings

__version__ = '0.1.0'

__all__ = [
    "evaluate", "calculate", "format_result", "Calculator",
    "LexerGenerator", "Parser", "CLASSIC", "CONVENTIONAL",
    "Settings", "load_settings",
    "CalculationError", "ConfigError", "CalculatorWarning",
    "Token", "Outcome", "SourcePosition",
]
