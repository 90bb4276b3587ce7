"""Renders syntax trees as fully parenthesized s-expressions, e.g. `var x = 1 + 2;` -> `(var x (+ 1.0 2.0))`."""

from lox.lang.numerical import format_number
from lox.syntax.tree import ExprVisitor, StmtVisitor


class AstPrinter(ExprVisitor, StmtVisitor):
    """Visitor returning the s-expression str of a node."""

    def print(self, node):
        return node.accept(self)

    def parenthesize(self, name, *nodes):
        return "(" + " ".join([name] + [node.accept(self) for node in nodes]) + ")"

    def visit_literal_expr(self, expr):
        value = expr.value
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            return format_number(value)
        return value

    def visit_grouping_expr(self, expr):
        return self.parenthesize("group", expr.expression)

    def visit_unary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary_expr(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_variable_expr(self, expr):
        return expr.name.lexeme

    def visit_assign_expr(self, expr):
        return self.parenthesize(f"assign {expr.name.lexeme}", expr.value)

    def visit_expression_stmt(self, stmt):
        return stmt.expression.accept(self)

    def visit_print_stmt(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt):
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme} nil)"
        return self.parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)

    def visit_block_stmt(self, stmt):
        return self.parenthesize("block", *stmt.statements)
