from .box import Outcome
from .config import Settings
from .errors import CalculationError
from .parser import CLASSIC, MAX_DEPTH, Parser
from .tokens import LEXER


def _run(parser, text, max_length):
    if max_length is not None and len(text) > max_length:
        return Outcome.failure("Expression too long")
    return parser.parse(LEXER.lex(text))


def _unwrap(outcome):
    if not outcome.ok:
        raise CalculationError(outcome.message, outcome.source_pos)
    return outcome.value


def evaluate(text, mode=CLASSIC, max_depth=MAX_DEPTH, max_length=None):
    """
    对单个表达式求值，返回 `Outcome`，表达式错误不会抛出异常。

    >>> evaluate("2 + 3 * 4")
    Outcome(ok=True, value=14.0)
    >>> evaluate("5 / 0")
    Outcome(ok=False, message='Division by zero')
    """
    return _run(Parser(mode, max_depth), text, max_length)


def calculate(text, mode=CLASSIC, max_depth=MAX_DEPTH, max_length=None):
    """与 `evaluate` 相同，但失败时抛出 `CalculationError`"""
    return _unwrap(evaluate(text, mode, max_depth, max_length))


def format_result(value, precision=10):
    """按有效数字格式化结果（默认 10 位，与 %.10g 一致）"""
    return f"{value:.{precision}g}"


class Calculator:
    """绑定一组 `Settings` 的计算器，供前端使用"""

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else Settings()
        self.parser = Parser(self.settings.mode, self.settings.max_depth)

    def evaluate(self, text):
        return _run(self.parser, text, self.settings.max_length)

    def calculate(self, text):
        return _unwrap(self.evaluate(text))

    def format(self, value):
        return format_result(value, self.settings.precision)
