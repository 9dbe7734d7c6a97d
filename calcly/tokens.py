import math

from .lexergenerator import LexerGenerator


OPERATORS = [
    ("PLUS", r"\+"),
    ("MINUS", r"-"),
    ("MUL", r"\*"),
    ("DIV", r"/"),
    ("MOD", r"%"),
    ("POW", r"\^"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
]

FUNCTIONS = {
    "sin": "SIN",
    "cos": "COS",
    "tan": "TAN",
    "sqrt": "SQRT",
    "log": "LOG",
    "exp": "EXP",
    "abs": "ABS",
}

CONSTANTS = {
    "pi": ("PI", math.pi),
    "e": ("E", math.e),
}


def build_lexer():
    lg = LexerGenerator()
    # 只接受第一个小数点："1.2.3" 得到 "1.2" 和 ".3"
    lg.add("NUMBER", r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+", convert=float)
    lg.add("IDENTIFIER", r"[A-Za-z]+")
    for name, pattern in OPERATORS:
        lg.add(name, pattern)
    # 只跳过 ASCII 空白
    lg.ignore(r"[ \t\n\r\f\v]+")

    for word, name in FUNCTIONS.items():
        lg.identifier(word, name)
    for word, (name, value) in CONSTANTS.items():
        lg.identifier(word, name, value)
    return lg.build()


LEXER = build_lexer()
