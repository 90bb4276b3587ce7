"""Abstract syntax tree for lox. Expressions and statements are two closed families of node classes; any whole-tree
algorithm (printing, interpreting) is written as a visitor, so adding one never touches the node classes.

```
<expr> ::= Literal(value) | Grouping(expression) | Unary(operator, right) | Binary(left, operator, right)
         | Variable(name) | Assign(name, value)
<stmt> ::= Expression(expression) | Print(expression) | Var(name, initializer?) | Block(statements)
```

Each node owns its children: trees are never shared between parents.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from lox.syntax.token import Token


class ExprVisitor(ABC):
    """Interface of a whole-tree algorithm over expressions."""

    @abstractmethod
    def visit_literal_expr(self, expr): ...

    @abstractmethod
    def visit_grouping_expr(self, expr): ...

    @abstractmethod
    def visit_unary_expr(self, expr): ...

    @abstractmethod
    def visit_binary_expr(self, expr): ...

    @abstractmethod
    def visit_variable_expr(self, expr): ...

    @abstractmethod
    def visit_assign_expr(self, expr): ...


class StmtVisitor(ABC):
    """Interface of a whole-tree algorithm over statements."""

    @abstractmethod
    def visit_expression_stmt(self, stmt): ...

    @abstractmethod
    def visit_print_stmt(self, stmt): ...

    @abstractmethod
    def visit_var_stmt(self, stmt): ...

    @abstractmethod
    def visit_block_stmt(self, stmt): ...


class Expr(ABC):

    @abstractmethod
    def accept(self, visitor):
        """Dispatches to the visitor method of this node's class and returns its result."""


@dataclass
class Literal(Expr):
    value: Union[float, str, bool, None]

    def accept(self, visitor):
        return visitor.visit_literal_expr(self)


@dataclass
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping_expr(self)


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary_expr(self)


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary_expr(self)


@dataclass
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable_expr(self)


@dataclass
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign_expr(self)


class Stmt(ABC):

    @abstractmethod
    def accept(self, visitor):
        """Dispatches to the visitor method of this node's class and returns its result."""


@dataclass
class Expression(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_stmt(self)


@dataclass
class Print(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_stmt(self)


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_var_stmt(self)


@dataclass
class Block(Stmt):
    statements: List[Stmt]

    def accept(self, visitor):
        return visitor.visit_block_stmt(self)
