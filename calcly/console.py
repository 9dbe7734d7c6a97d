"""
行模式控制台前端：读取一行表达式，调用计算器，打印结果或错误。
保留字（help、quit、exit、clear、history）在调用计算器之前处理。
"""
import argparse
import sys
from collections import deque

from . import __version__
from .calculator import Calculator
from .config import load_settings
from .errors import ConfigError
from .parser import GRAMMAR_MODES

EXIT_OK = 0
EXIT_EVALUATION_ERROR = 1
EXIT_CONFIG_ERROR = 2

HISTORY_SIZE = 10

BANNER = "=== calcly ===\nType 'help' for instructions or 'quit' to exit\n"

HELP = """
=== Calculator Help ===
Basic Operations:
  +  Addition
  -  Subtraction
  *  Multiplication
  /  Division
  %  Modulo
  ^  Power

Functions:
  sin(x)   Sine
  cos(x)   Cosine
  tan(x)   Tangent
  sqrt(x)  Square root
  log(x)   Natural logarithm
  exp(x)   Exponential (e^x)
  abs(x)   Absolute value

Constants:
  pi       3.14159...
  e        Euler's number (2.71828...)

Commands:
  help     Show this help
  quit     Exit calculator
  exit     Exit calculator
  clear    Clear screen
  history  Show the last expressions of this session

Examples:
  2 + 3 * 4
  sin(pi/2)
  sqrt(16) + log(e)
  2^8
  (5 + 3) * 2
=======================
"""

# 清屏并把光标移到左上角
CLEAR_SCREEN = "\x1b[2J\x1b[H"


def render(calculator, text, history=None):
    outcome = calculator.evaluate(text)
    if history is not None:
        history.append((text, outcome))
    if outcome.ok:
        return f"= {calculator.format(outcome.value)}"
    return f"Error: {outcome.message}"


def render_history(calculator, history):
    if not history:
        return "(no history)"
    lines = []
    for text, outcome in history:
        result = calculator.format(outcome.value) if outcome.ok else "Error"
        lines.append(f"{text} = {result}")
    return "\n".join(lines)


def repl(calculator, stdin=None, stdout=None):
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    # 只保留本次会话最近的表达式，不写入磁盘
    history = deque(maxlen=HISTORY_SIZE)

    stdout.write(BANNER + "\n")
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        text = line.rstrip("\r\n")
        if not text:
            continue
        if text in ("quit", "exit"):
            stdout.write("Goodbye!\n")
            break
        if text == "help":
            stdout.write(HELP + "\n")
            continue
        if text == "clear":
            stdout.write(CLEAR_SCREEN + BANNER + "\n")
            continue
        if text == "history":
            stdout.write(render_history(calculator, history) + "\n")
            continue
        stdout.write(render(calculator, text, history) + "\n")
    return EXIT_OK


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="calcly",
        description="Evaluate arithmetic expressions.",
        epilog="Put '--' before an expression that starts with '-', e.g. calcly -- -2^2",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "expression",
        nargs="?",
        default=None,
        help="Evaluate one expression and exit (interactive mode when omitted).",
    )
    parser.add_argument("--mode", choices=GRAMMAR_MODES, default=None, help="Grammar mode.")
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum nesting depth.")
    parser.add_argument("--precision", type=int, default=None, help="Significant digits to display.")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON settings file (defaults to settings.json in the user config directory).",
    )
    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None):
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    args = _build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    try:
        settings = load_settings(args.config).replace(
            mode=args.mode, max_depth=args.max_depth, precision=args.precision
        )
    except ConfigError as e:
        stderr.write(f"calcly: {e}\n")
        return EXIT_CONFIG_ERROR

    calculator = Calculator(settings)
    if args.expression is not None:
        outcome = calculator.evaluate(args.expression)
        if not outcome.ok:
            stderr.write(f"Error: {outcome.message}\n")
            return EXIT_EVALUATION_ERROR
        stdout.write(calculator.format(outcome.value) + "\n")
        return EXIT_OK
    return repl(calculator, stdin, stdout)
