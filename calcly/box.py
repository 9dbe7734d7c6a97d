class SourcePosition:
    """封装源位置信息（索引，行号，列号）"""

    def __init__(self, idx, lineno, colno):
        self.idx = idx
        self.lineno = lineno
        self.colno = colno

    def __repr__(self):
        return f"SourcePosition(idx={self.idx}, lineno={self.lineno}, colno={self.colno})"

    def __eq__(self, other):
        if not isinstance(other, SourcePosition):
            return NotImplemented
        return (self.idx, self.lineno, self.colno) == (other.idx, other.lineno, other.colno)


class Token:
    """
    封装词法分析器生成的令牌。
    name 为令牌类型，value 为源文本（ERROR 令牌为错误信息），
    number 只有 NUMBER、PI、E 才有值。
    """

    __slots__ = ("name", "value", "number", "source_pos")

    def __init__(self, name, value, source_pos=None, number=None):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "number", number)
        object.__setattr__(self, "source_pos", source_pos)

    def __setattr__(self, key, value):
        raise AttributeError(f"Token is immutable, cannot set {key!r}")

    def __repr__(self):
        return f"Token({self.name!r}, {self.value!r})"

    def __eq__(self, other):
        if not isinstance(other, Token):
            # 尝试other的比较方法
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __hash__(self):
        return hash((self.name, self.value))

    def get_type(self):
        return self.name

    def get_source_pos(self):
        return self.source_pos

    def get_str(self):
        return self.value

    def get_number(self):
        return self.number


class Outcome:
    """一次求值的结果：成功时 value 可用，失败时 message 非空、value 为 0.0 且应被忽略"""

    def __init__(self, ok, value=0.0, message="", source_pos=None):
        self.ok = ok
        self.value = value
        self.message = message
        self.source_pos = source_pos

    @classmethod
    def success(cls, value):
        return cls(True, value)

    @classmethod
    def failure(cls, message, source_pos=None):
        if not message:
            raise ValueError("failure outcome needs a message")
        return cls(False, 0.0, message, source_pos)

    def __bool__(self):
        return self.ok

    def __repr__(self):
        if self.ok:
            return f"Outcome(ok=True, value={self.value!r})"
        return f"Outcome(ok=False, message={self.message!r})"

    def __eq__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        if self.ok != other.ok or self.message != other.message:
            return False
        # NaN 结果也视为相等，保证重复求值可比较
        return self.value == other.value or (self.value != self.value and other.value != other.value)
