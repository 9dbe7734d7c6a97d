"""
数值函数与运算，遵循 IEEE-754 的语义：
溢出得到 ±inf，定义域外得到 NaN，不抛出异常。
sqrt 和 log 的定义域错误由求值器报告。
"""
import functools
import math


def _is_odd_integer(y):
    return y.is_integer() and y % 2 == 1


def ieee(func):
    @functools.wraps(func)
    def wrapper(x):
        try:
            return func(x)
        except OverflowError:
            return math.inf
        except ValueError:
            # 例如 sin(inf)
            return math.nan
    return wrapper


def power(x, y):
    """幂运算，溢出和定义域外的结果按 IEEE-754 返回 ±inf 或 NaN"""
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and _is_odd_integer(y) else math.inf
    except ValueError:
        if x == 0:
            # 0 的负数次幂
            return math.copysign(math.inf, x) if _is_odd_integer(y) else math.inf
        return math.nan


def remainder(x, y):
    """浮点取余，结果与被除数同号"""
    try:
        return math.fmod(x, y)
    except ValueError:
        return math.nan


class Function:
    """一元函数。domain_error(x) 为真时求值失败，错误信息为 message"""

    def __init__(self, name, func, domain_error=None, message=None):
        self.name = name
        self.func = ieee(func)
        self.domain_error = domain_error
        self.message = message

    def check(self, x):
        if self.domain_error is not None and self.domain_error(x):
            return self.message
        return None

    def __call__(self, x):
        return self.func(x)

    def __repr__(self):
        return f"Function({self.name!r})"


FUNCTIONS = {
    "SIN": Function("sin", math.sin),
    "COS": Function("cos", math.cos),
    "TAN": Function("tan", math.tan),
    "SQRT": Function("sqrt", math.sqrt, lambda x: x < 0, "Square root of negative number"),
    "LOG": Function("log", math.log, lambda x: x <= 0, "Logarithm of non-positive number"),
    "EXP": Function("exp", math.exp),
    "ABS": Function("abs", math.fabs),
}
