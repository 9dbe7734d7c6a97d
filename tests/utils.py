class RecordingStream:
    """包装 LexerStream，记录解析器每次 advance() 取得的令牌"""

    def __init__(self, record, stream):
        self.stream = stream
        self.record = record

    @property
    def current(self):
        return self.stream.current

    def advance(self):
        s = "None"
        try:
            token = self.stream.advance()
            s = token.get_type()
        finally:
            self.record.append(f"token:{s}")
        return token
