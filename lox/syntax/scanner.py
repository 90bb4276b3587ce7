"""Lexical analysis for lox: turns raw source bytes into a flat list of Tokens.

```
<token>      ::= <punct> | <operator> | <string> | <number> | <identifier>
<punct>      ::= "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "*" | "/"
<operator>   ::= "!" | "!=" | "=" | "==" | "<" | "<=" | ">" | ">="      ; two-character forms are matched greedily
<string>     ::= '"' <any byte but '"'>* '"'                           ; may span lines, must be valid UTF-8
<number>     ::= <digit>+ ( "." <digit>+ )?
<identifier> ::= [A-Za-z_] [A-Za-z0-9_]*                               ; keywords are reserved identifiers
<comment>    ::= "//" <any byte but newline>*
```

The scanner works on bytes rather than str so that a file with invalid UTF-8 can still be scanned: only the offending
string or character is reported. Errors never abort the scan; they are collected and returned next to the tokens.
"""

from lox.lang.error import InvalidEncoding, UnexpectedCharacter, UnterminatedString
from lox.lang.numerical import parse_number
from lox.syntax.token import KEYWORDS, Token, TokenType


class Scanner:
    """Single left-to-right pass over source, keeping track of the current line."""
    SINGLE = {
        b"(": TokenType.LEFT_PAREN,
        b")": TokenType.RIGHT_PAREN,
        b"{": TokenType.LEFT_BRACE,
        b"}": TokenType.RIGHT_BRACE,
        b",": TokenType.COMMA,
        b".": TokenType.DOT,
        b"-": TokenType.MINUS,
        b"+": TokenType.PLUS,
        b";": TokenType.SEMICOLON,
        b"*": TokenType.STAR,
    }
    DOUBLE = {  # char: (kind alone, kind when followed by "=")
        b"!": (TokenType.BANG, TokenType.BANG_EQUAL),
        b"=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
        b"<": (TokenType.LESS, TokenType.LESS_EQUAL),
        b">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    }
    WHITESPACE = b" \t\r"

    def __init__(self, source):
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.source = source

        self.tokens = []
        self.errors = []

        self.start = 0    # offset of the first byte of the token being scanned
        self.current = 0  # offset of the byte about to be consumed
        self.line = 1

    def scan_tokens(self):
        """Returns (tokens, errors). tokens always ends with a single EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens, self.errors

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])
        elif char in Scanner.DOUBLE:
            alone, with_equal = Scanner.DOUBLE[char]
            self.add_token(with_equal if self.match(b"=") else alone)
        elif char == b"/":
            if self.match(b"/"):
                while self.peek() != b"\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif char in Scanner.WHITESPACE:
            pass
        elif char == b"\n":
            self.line += 1
        elif char == b'"':
            self.string()
        elif char.isdigit():
            self.number()
        elif Scanner.is_alpha(char):
            self.identifier()
        else:
            self.unexpected(char)

    def string(self):
        start_line = self.line
        while self.peek() != b'"' and not self.is_at_end():
            if self.peek() == b"\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.errors.append(UnterminatedString(start_line))
            return

        self.advance()  # closing quote

        try:
            content = self.source[self.start + 1:self.current - 1].decode("utf-8")
        except UnicodeDecodeError:
            self.errors.append(InvalidEncoding(start_line))
            return

        self.tokens.append(Token(TokenType.STRING, f'"{content}"', content, start_line))

    def number(self):
        while self.peek().isdigit():
            self.advance()

        if self.peek() == b"." and self.peek_next().isdigit():
            self.advance()
            while self.peek().isdigit():
                self.advance()

        self.add_token(TokenType.NUMBER, parse_number(self.lexeme))

    def identifier(self):
        while Scanner.is_alpha(self.peek()) or self.peek().isdigit():
            self.advance()

        self.add_token(KEYWORDS.get(self.lexeme, TokenType.IDENTIFIER))

    def unexpected(self, char):
        """Reports char. Bytes starting a multi-byte UTF-8 sequence are reported once, as the decoded character."""
        length = Scanner.sequence_length(char[0])
        if length == 1:
            self.errors.append(UnexpectedCharacter(self.line, char.decode("latin-1")))
            return
        elif length == 0:
            self.errors.append(InvalidEncoding(self.line))
            return

        try:
            decoded = self.source[self.start:self.start + length].decode("utf-8")
        except UnicodeDecodeError:
            self.errors.append(InvalidEncoding(self.line))
            return

        self.current = self.start + length
        self.errors.append(UnexpectedCharacter(self.line, decoded))

    @staticmethod
    def sequence_length(lead):
        """Length of the UTF-8 sequence started by byte lead. 0 if lead cannot start a sequence."""
        if lead < 0x80:
            return 1
        elif 0xC2 <= lead <= 0xDF:
            return 2
        elif 0xE0 <= lead <= 0xEF:
            return 3
        elif 0xF0 <= lead <= 0xF4:
            return 4
        return 0

    @staticmethod
    def is_alpha(char):
        return char.isalpha() or char == b"_"

    @property
    def lexeme(self):
        # only called for ASCII-only tokens
        return self.source[self.start:self.current].decode("ascii")

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.lexeme, literal, self.line))

    def advance(self):
        char = self.source[self.current:self.current + 1]
        self.current += 1
        return char

    def match(self, expected):
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        return self.source[self.current:self.current + 1]

    def peek_next(self):
        return self.source[self.current + 1:self.current + 2]

    def is_at_end(self):
        return self.current >= len(self.source)


def scan(source):
    """Returns (tokens, errors) for source."""
    return Scanner(source).scan_tokens()
