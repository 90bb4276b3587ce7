"""Recursive-descent parser for lox. Each grammar rule below is one method, from lowest to highest precedence:

```
<program>     ::= <declaration>* EOF
<declaration> ::= "var" IDENTIFIER ( "=" <expression> )? <end> | <statement>
<statement>   ::= "print" <expression> <end> | <block> | <expression> <end>
<block>       ::= "{" <declaration>* "}"
<expression>  ::= <assignment>
<assignment>  ::= IDENTIFIER "=" <assignment> | <logic_or>       ; right associative
<logic_or>    ::= <logic_and> ( "or" <logic_and> )*
<logic_and>   ::= <equality> ( "and" <equality> )*
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <primary>
<primary>     ::= NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" <expression> ")"
```

<end> is a ";" that is mandatory when require_semicolons is set and optional otherwise.
"""

from lox.lang.error import ParseError
from lox.syntax.token import TokenType
from lox.syntax.tree import Assign, Binary, Block, Expression, Grouping, Literal, Print, Unary, Var, Variable


class Parser:
    """Turns a token list (ending in EOF) into a list of statements."""
    BOUNDARIES = {
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
        TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
    }

    def __init__(self, tokens, require_semicolons=True):
        self.tokens = tokens
        self.require_semicolons = require_semicolons
        self.current = 0
        self.errors = []

    def parse(self):
        """Returns the list of statements in self.tokens. On a syntax error, the error is recorded in self.errors and
        the parser synchronizes to the next statement to look for more. Once all tokens are consumed, the first error
        is raised if there was any, so that a partially parsed program never reaches the interpreter.
        """
        statements = []
        while not self.is_at_end():
            try:
                statements.append(self.declaration())
            except ParseError as error:
                self.errors.append(error)
                self.synchronize()

        if self.errors:
            raise self.errors[0]
        return statements

    # -----------------------------------------------------------------------------------------------------------------
    # statements

    def declaration(self):
        if self.match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.end("Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self):
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        self.end("Expect ';' after value.")
        return Print(value)

    def expression_statement(self):
        expr = self.expression()
        self.end("Expect ';' after expression.")
        return Expression(expr)

    def block(self):
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def end(self, message):
        """Consumes the statement terminator."""
        if self.require_semicolons:
            self.consume(TokenType.SEMICOLON, message)
        else:
            self.match(TokenType.SEMICOLON)

    # -----------------------------------------------------------------------------------------------------------------
    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise self.error(equals, "Invalid assignment target.")

        return expr

    def logic_or(self):
        return self.left_associative(self.logic_and, TokenType.OR)

    def logic_and(self):
        return self.left_associative(self.equality, TokenType.AND)

    def equality(self):
        return self.left_associative(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self.left_associative(
            self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
        )

    def term(self):
        return self.left_associative(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self.left_associative(self.unary, TokenType.SLASH, TokenType.STAR)

    def left_associative(self, operand, *operators):
        """Parses operand ( operator operand )* into a left-leaning chain of Binary nodes."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # -----------------------------------------------------------------------------------------------------------------
    # token helpers

    def synchronize(self):
        """Discards tokens until the start of what is likely the next statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().kind is TokenType.SEMICOLON:
                return
            if self.peek().kind in Parser.BOUNDARIES:
                return
            self.advance()

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, message):
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind is TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    @staticmethod
    def error(token, message):
        return ParseError(token, message)


def parse(tokens, require_semicolons=True):
    """Returns the statements in tokens, raising the first ParseError if there is any."""
    return Parser(tokens, require_semicolons).parse()
