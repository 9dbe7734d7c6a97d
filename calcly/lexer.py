from .box import SourcePosition, Token


class Lexer:
    """词法分析器，lex()获取 Token 流。规则表构建后不再修改，可在多次求值间共享"""

    def __init__(self, rules, ignore_rules, identifiers):
        self.rules = rules
        self.ignore_rules = ignore_rules
        self.identifiers = identifiers

    def lex(self, s):
        return LexerStream(self, s)


class LexerStream:
    """
    词法分析器流，即一次求值的词法状态。
    current 为最近一次 advance() 得到的令牌；游标只前进不后退，
    到达输入末尾后每次都返回 EOF 令牌。
    """

    def __init__(self, lexer, s):
        self.lexer = lexer  # 词法分析器（包含匹配规则）
        self.s = s          # 输入字符串
        self.idx = 0
        self.current = None
        self._lineno = 1
        self._line_start = 0

    def __iter__(self):
        return self

    def __next__(self):
        token = self.advance()
        if token.name == "EOF":
            raise StopIteration
        return token

    def _source_pos(self, idx):
        return SourcePosition(idx, self._lineno, idx - self._line_start + 1)

    def _move_to(self, end):
        # 统计跨过的换行符，更新行号和行首位置
        newlines = self.s.count("\n", self.idx, end)
        if newlines:
            self._lineno += newlines
            self._line_start = self.s.rfind("\n", self.idx, end) + 1
        self.idx = end

    def skip_whitespace(self):
        while self.idx < len(self.s):
            for rule in self.lexer.ignore_rules:
                match = rule.matches(self.s, self.idx)
                if match:
                    self._move_to(match.end)
                    break
            else:
                break

    def next_token(self):
        self.skip_whitespace()
        if self.idx >= len(self.s):
            return Token("EOF", "", self._source_pos(self.idx))

        for rule in self.lexer.rules:
            match = rule.matches(self.s, self.idx)
            if match:
                source_pos = self._source_pos(match.start)
                self._move_to(match.end)
                text = self.s[match.start:match.end]
                if rule.name == "IDENTIFIER":
                    return self._resolve_identifier(text, source_pos)
                number = rule.convert(text) if rule.convert is not None else None
                return Token(rule.name, text, source_pos, number)

        # 没有规则匹配：只吞掉一个字符，产生 ERROR 令牌
        source_pos = self._source_pos(self.idx)
        char = self.s[self.idx]
        self._move_to(self.idx + 1)
        return Token("ERROR", f"Unexpected character: {char}", source_pos)

    def _resolve_identifier(self, text, source_pos):
        try:
            name, value = self.lexer.identifiers[text]
        except KeyError:
            return Token("ERROR", f"Unknown identifier: {text}", source_pos)
        return Token(name, text, source_pos, value)

    def advance(self):
        """获取下一个令牌并保存为 current"""
        self.current = self.next_token()
        return self.current
