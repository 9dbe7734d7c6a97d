class CalculatorWarning(Warning):
    pass


class ConfigError(Exception):
    pass


class CalculationError(Exception):
    """表达式求值失败（词法、语法或算术错误）"""

    def __init__(self, message, source_pos=None):
        super().__init__(message)
        self.message = message
        self.source_pos = source_pos

    def get_source_pos(self):
        return self.source_pos

    def __repr__(self):
        return f'CalculationError({self.message!r}, {self.source_pos!r})'
