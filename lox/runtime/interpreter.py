"""Tree-walking interpreter for lox. Statements are executed in order against the current Environment; the first
runtime error stops the whole program (there is no partial-failure continuation).

Entering a block pushes a new Environment enclosed by the current one and leaving it restores the previous one, on
every exit path, so an error inside a block never leaves the interpreter pointing at a discarded scope.
"""

from contextlib import contextmanager

from lox.lang.error import DivisionByZero, InvalidBinaryOperands, InvalidUnaryOperand
from lox.runtime.environment import Environment
from lox.runtime.value import is_equal, is_number, is_truthy, stringify
from lox.syntax.token import TokenType
from lox.syntax.tree import ExprVisitor, StmtVisitor


class Interpreter(ExprVisitor, StmtVisitor):
    """Visitor evaluating expressions to runtime values and executing statements for their side effects.

    echo makes expression statements write their value, like print does (evaluate command and shell). out is the
    stream program output is written to (sys.stdout if None).
    """
    ARITHMETIC = {
        TokenType.MINUS: lambda left, right: left - right,
        TokenType.STAR: lambda left, right: left * right,
        TokenType.SLASH: lambda left, right: left / right,
    }
    COMPARISON = {
        TokenType.GREATER: lambda left, right: left > right,
        TokenType.GREATER_EQUAL: lambda left, right: left >= right,
        TokenType.LESS: lambda left, right: left < right,
        TokenType.LESS_EQUAL: lambda left, right: left <= right,
    }

    def __init__(self, echo=False, out=None):
        self.globals = Environment()
        self.environment = self.globals
        self.echo = echo
        self.out = out

    def interpret(self, statements):
        """Executes statements in order. Raises the LoxRuntimeError of the first statement that fails."""
        for statement in statements:
            self.execute(statement)

    def execute(self, stmt):
        stmt.accept(self)

    def evaluate(self, expr):
        return expr.accept(self)

    @contextmanager
    def scope(self, environment):
        """Makes environment current for the duration of the with block."""
        previous = self.environment
        self.environment = environment
        try:
            yield environment
        finally:
            self.environment = previous

    def execute_block(self, statements, environment):
        with self.scope(environment):
            for statement in statements:
                self.execute(statement)

    def write(self, value):
        print(stringify(value), file=self.out)

    # -----------------------------------------------------------------------------------------------------------------
    # statements

    def visit_expression_stmt(self, stmt):
        value = self.evaluate(stmt.expression)
        if self.echo:
            self.write(value)

    def visit_print_stmt(self, stmt):
        self.write(self.evaluate(stmt.expression))

    def visit_var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    # -----------------------------------------------------------------------------------------------------------------
    # expressions

    def visit_literal_expr(self, expr):
        return expr.value

    def visit_grouping_expr(self, expr):
        return self.evaluate(expr.expression)

    def visit_variable_expr(self, expr):
        return self.environment.get(expr.name)

    def visit_assign_expr(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_unary_expr(self, expr):
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.kind is TokenType.BANG:
            return not is_truthy(right)

        # only "-" is left
        if not is_number(right):
            raise InvalidUnaryOperand(operator.line)
        return -right

    def visit_binary_expr(self, expr):
        operator = expr.operator
        left = self.evaluate(expr.left)

        # logical operators short-circuit and yield one of their operands
        if operator.kind is TokenType.OR:
            return left if is_truthy(left) else self.evaluate(expr.right)
        if operator.kind is TokenType.AND:
            return self.evaluate(expr.right) if is_truthy(left) else left

        right = self.evaluate(expr.right)

        if operator.kind is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.kind is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if operator.kind is TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise InvalidBinaryOperands(operator.line, operator.lexeme)

        if not (is_number(left) and is_number(right)):
            raise InvalidBinaryOperands(operator.line, operator.lexeme)

        if operator.kind is TokenType.SLASH and right == 0:
            raise DivisionByZero(operator.line)

        if operator.kind in Interpreter.COMPARISON:
            return Interpreter.COMPARISON[operator.kind](left, right)
        return Interpreter.ARITHMETIC[operator.kind](left, right)
