import logging

from .box import Outcome
from .functions import FUNCTIONS, power, remainder

logger = logging.getLogger(__name__)

CLASSIC = "classic"
CONVENTIONAL = "conventional"
GRAMMAR_MODES = (CLASSIC, CONVENTIONAL)

MAX_DEPTH = 64

# 每层嵌套大约占用 8 个 Python 栈帧，超过这个值会触及解释器的递归限制
MAX_DEPTH_LIMIT = 80


class ParseSession:
    """
    一次求值的解析会话，持有词法流和错误槽。
    错误槽只记录第一个错误，一旦设置不会被清除或覆盖。
    """

    def __init__(self, stream, max_depth=MAX_DEPTH):
        self.stream = stream
        self.max_depth = max_depth
        self.depth = 0
        self.has_error = False
        self.error = ""
        self.error_pos = None

    @property
    def current(self):
        return self.stream.current

    def advance(self):
        return self.stream.advance()

    def record_error(self, message, source_pos=None):
        if self.has_error:
            return
        self.has_error = True
        self.error = message
        self.error_pos = source_pos


class Parser:
    """
    递归下降解析器，解析的同时计算数值，不构造语法树。

    classic 模式（默认）的文法：
        expression : term (('+' | '-') term)*
        term       : factor (('*' | '/' | '%') factor)*
        factor     : power
        power      : unary ('^' power)?
        unary      : ('-' | '+') unary | operand
        operand    : FUNCTION primary | primary
        primary    : NUMBER | PI | E | '(' expression ')'
    因为 unary 在 power 之前归约，-2^2 == (-2)^2 == 4。

    conventional 模式中一元负号比 '^' 结合得更松（-2^2 == -4）：
        factor     : unary
        unary      : ('-' | '+') unary | power
        power      : operand ('^' unary)?

    :param mode: 文法模式，CLASSIC 或 CONVENTIONAL。
    :param max_depth: 括号、一元运算符和 '^' 的最大嵌套深度（1 到 MAX_DEPTH_LIMIT）。
    """

    def __init__(self, mode=CLASSIC, max_depth=MAX_DEPTH):
        if mode not in GRAMMAR_MODES:
            raise ValueError(f"Unknown grammar mode: {mode!r}")
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be an integer between 1 and {MAX_DEPTH_LIMIT}, got {max_depth!r}")
        self.mode = mode
        self.max_depth = max_depth

    def parse(self, stream):
        """解析并求值整个词法流，返回 `Outcome`"""
        session = ParseSession(stream, self.max_depth)
        session.advance()

        value = self._expression(session)
        if not session.has_error and session.current.name != "EOF":
            session.record_error("Unexpected tokens after expression", session.current.source_pos)

        if session.has_error:
            logger.debug("evaluation failed: %s at %r", session.error, session.error_pos)
            return Outcome.failure(session.error, session.error_pos)
        return Outcome.success(value)

    def _nested(self, session, production):
        # 所有递归入口都经过这里，限制调用栈深度
        if session.depth >= session.max_depth:
            session.record_error("Expression too deeply nested", session.current.source_pos)
            return 0.0
        session.depth += 1
        try:
            return production(session)
        finally:
            session.depth -= 1

    def _expression(self, session):
        left = self._term(session)
        while not session.has_error:
            name = session.current.name
            if name == "PLUS":
                session.advance()
                left = left + self._term(session)
            elif name == "MINUS":
                session.advance()
                left = left - self._term(session)
            else:
                break
        return left

    def _term(self, session):
        left = self._factor(session)
        while not session.has_error:
            op = session.current
            if op.name == "MUL":
                session.advance()
                left = left * self._factor(session)
            elif op.name in ("DIV", "MOD"):
                session.advance()
                right = self._factor(session)
                if session.has_error:
                    return 0.0
                if right == 0:
                    message = "Division by zero" if op.name == "DIV" else "Modulo by zero"
                    session.record_error(message, op.source_pos)
                    return 0.0
                left = left / right if op.name == "DIV" else remainder(left, right)
            else:
                break
        return left

    def _factor(self, session):
        if self.mode == CLASSIC:
            return self._power(session)
        return self._unary(session)

    def _power(self, session):
        if self.mode == CLASSIC:
            left = self._unary(session)
        else:
            left = self._operand(session)

        if not session.has_error and session.current.name == "POW":
            session.advance()
            # 右结合
            exponent = self._power if self.mode == CLASSIC else self._unary
            right = self._nested(session, exponent)
            if session.has_error:
                return 0.0
            return power(left, right)
        return left

    def _unary(self, session):
        token = session.current
        if token.name in ("MINUS", "PLUS"):
            session.advance()
            value = self._nested(session, self._unary)
            return -value if token.name == "MINUS" else value

        if self.mode == CLASSIC:
            return self._operand(session)
        return self._power(session)

    def _operand(self, session):
        token = session.current
        func = FUNCTIONS.get(token.name)
        if func is None:
            return self._primary(session)

        # 函数的参数只能是一个 primary：sin -1 是语法错误，sin(-1) 才合法
        session.advance()
        x = self._primary(session)
        if session.has_error:
            return 0.0
        message = func.check(x)
        if message is not None:
            session.record_error(message, token.source_pos)
            return 0.0
        return func(x)

    def _primary(self, session):
        token = session.current
        if token.name in ("NUMBER", "PI", "E"):
            session.advance()
            return token.number

        if token.name == "LPAREN":
            session.advance()
            value = self._nested(session, self._expression)
            if session.has_error:
                return 0.0
            if session.current.name != "RPAREN":
                session.record_error("Expected closing parenthesis", session.current.source_pos)
                return 0.0
            session.advance()
            return value

        if token.name == "EOF":
            session.record_error("Unexpected end of expression", token.source_pos)
        elif token.name == "ERROR":
            session.record_error(token.value, token.source_pos)
        else:
            session.record_error(f"Unexpected token: {token.value}", token.source_pos)
        return 0.0
