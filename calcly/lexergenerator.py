import re
from .lexer import Lexer


class Match:
    """封装匹配索引"""

    __slots__ = ["start", "end"]

    def __init__(self, start, end):
        self.start = start
        self.end = end


class Rule:
    """封装匹配的名称、正则表达式对象和可选的数值转换函数"""

    def __init__(self, name, pattern, flags=0, convert=None):
        self.name = name
        self.re = re.compile(pattern, flags=flags)
        self.convert = convert

    def matches(self, s, pos):
        """
        从位置pos开始解析字符串s
        :return: 如果规则匹配（且非空），则返回一个`Match`对象；否则返回None
        """
        m = self.re.match(s, pos)
        if m is None or m.end() == pos:
            return None
        return Match(*m.span(0))


class LexerGenerator:
    """
    用于生成词法分析器。

    >>> from calcly import LexerGenerator
    >>> lg = LexerGenerator()
    >>> lg.add('NUMBER', r'[0-9]+')
    >>> lg.add('PLUS', r'\\+')
    >>> lg.add('IDENTIFIER', r'[A-Za-z]+')
    >>> lg.identifier('pi', 'PI', 3.14)
    >>> lg.ignore(r'[ \\t]+')
    >>> stream = lg.build().lex('1 + pi')
    >>> stream.next_token()
    Token('NUMBER', '1')
    >>> stream.next_token()
    Token('PLUS', '+')
    >>> stream.next_token()
    Token('PI', 'pi')
    >>> stream.next_token()
    Token('EOF', '')
    """

    def __init__(self):
        self.rules = []
        self.ignore_rules = []
        self.identifiers = {}

    def add(self, name, pattern, flags=0, convert=None):
        """添加匹配规则，第一条优先。convert 用于把匹配文本转换为令牌的数值"""
        self.rules.append(Rule(name, pattern, flags=flags, convert=convert))

    def ignore(self, pattern, flags=0):
        """添加忽略规则，第一条优先"""
        self.ignore_rules.append(Rule("", pattern, flags=flags))

    def identifier(self, word, name, value=None):
        """
        登记标识符表：IDENTIFIER 规则匹配到 word 时产生 name 类型的令牌。
        value 不为 None 时作为令牌的数值（常量）。区分大小写。
        """
        self.identifiers[word] = (name, value)

    def build(self):
        """
        返回一个词法分析器实例，该实例提供一个 `lex` 方法
        该方法必须传递一个字符串，返回一个 `LexerStream`。
        """
        return Lexer(list(self.rules), list(self.ignore_rules), dict(self.identifiers))
