from calcly import LexerGenerator, Parser, evaluate, format_result, CONVENTIONAL
from calcly.tokens import LEXER


def demo1(code: str):
    outcome = evaluate(code)
    if outcome.ok:
        print(format_result(outcome.value))
    else:
        print(f"Error: {outcome.message} at {outcome.source_pos}")


def demo2():
    code = '-2^2 + 3*4'
    for mode in (Parser().mode, CONVENTIONAL):
        print(mode, Parser(mode).parse(LEXER.lex(code)).value)


def demo3():
    # 自定义词法规则：只有整数和加号
    lg = LexerGenerator()
    lg.add('NUMBER', r'\d+', convert=int)
    lg.add('PLUS', r'\+')
    lg.ignore(r'\s+')
    print(list(lg.build().lex('1 + 22 + 333')))


if __name__ == '__main__':
    demo2()
    demo3()
    demo1(input(">>> "))
