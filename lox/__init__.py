"""Lox interpreter.

For reference:
- "Lox": the small dynamically-typed scripting language this package runs (expressions, variables, blocks, print)
- "pipeline": scanner -> parser -> interpreter, each stage with its own errors (see lang/error.py)

Basic program flow:
    1. Scanner (syntax/scanner.py): converts raw source bytes into a list of tokens, collecting every lexical error
    2. Parser (syntax/parser.py): recursive descent over the tokens, producing statement trees (syntax/tree.py)
        - For the grammar rules, see the docstring of syntax/parser.py
    3. Interpreter (runtime/interpreter.py): walks the trees against a chain of scopes (runtime/environment.py)

lang/ glues the stages together for the command line (lang/session.py) and interactive mode (lang/shell.py).
"""
