#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
minilang/visitor.py
===================

Visitor pattern infrastructure for MiniLang AST traversal.

Provides:
- ``ASTVisitor`` - abstract base with one abstract ``visit_X`` per node
  kind; a subclass that misses a kind cannot be instantiated
- ``DepthFirstVisitor`` - generic traversal with ``enter``/``leave`` hooks
- ``left_spine`` and ``walk`` - loop-based helpers that stay flat on long
  arithmetic chains
"""

from __future__ import annotations

import abc
from typing import Any, List

from minilang import ast_nodes as A

__all__ = [
    "ASTVisitor",
    "DepthFirstVisitor",
    "left_spine",
    "walk",
]


class ASTVisitor(abc.ABC):
    """Abstract base class for MiniLang AST visitors.

    Each ``visit_X`` method corresponds to exactly one node type.
    """

    def visit(self, node: A.ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return getattr(self, node.visit_method)(node)

    # --- Root ---

    @abc.abstractmethod
    def visit_program(self, node: A.Program) -> Any: ...

    # --- Statements ---

    @abc.abstractmethod
    def visit_let(self, node: A.Let) -> Any: ...

    @abc.abstractmethod
    def visit_assign(self, node: A.Assign) -> Any: ...

    @abc.abstractmethod
    def visit_print(self, node: A.Print) -> Any: ...

    @abc.abstractmethod
    def visit_if(self, node: A.If) -> Any: ...

    @abc.abstractmethod
    def visit_while(self, node: A.While) -> Any: ...

    # --- Expressions ---

    @abc.abstractmethod
    def visit_binary_op(self, node: A.BinaryOp) -> Any: ...

    @abc.abstractmethod
    def visit_comparison(self, node: A.Comparison) -> Any: ...

    @abc.abstractmethod
    def visit_number_literal(self, node: A.NumberLiteral) -> Any: ...

    @abc.abstractmethod
    def visit_string_literal(self, node: A.StringLiteral) -> Any: ...

    @abc.abstractmethod
    def visit_identifier(self, node: A.Identifier) -> Any: ...


class DepthFirstVisitor(ASTVisitor):
    """Visitor that traverses all children in depth-first order.

    Override ``enter`` / ``leave`` instead of ``visit_X`` for pre/post-order
    processing.  The ``visit_X`` methods handle traversal.
    """

    def generic_visit(self, node: A.ASTNode) -> None:
        self.enter(node)
        for child in node.children():
            self.visit(child)
        self.leave(node)

    # Hook methods - override these in subclasses

    def enter(self, node: A.ASTNode) -> None:
        """Called before visiting children."""

    def leave(self, node: A.ASTNode) -> None:
        """Called after visiting children."""

    def visit_program(self, node: A.Program) -> None:
        self.generic_visit(node)

    def visit_let(self, node: A.Let) -> None:
        self.generic_visit(node)

    def visit_assign(self, node: A.Assign) -> None:
        self.generic_visit(node)

    def visit_print(self, node: A.Print) -> None:
        self.generic_visit(node)

    def visit_if(self, node: A.If) -> None:
        self.generic_visit(node)

    def visit_while(self, node: A.While) -> None:
        self.generic_visit(node)

    def visit_binary_op(self, node: A.BinaryOp) -> None:
        self.generic_visit(node)

    def visit_comparison(self, node: A.Comparison) -> None:
        self.generic_visit(node)

    def visit_number_literal(self, node: A.NumberLiteral) -> None:
        self.generic_visit(node)

    def visit_string_literal(self, node: A.StringLiteral) -> None:
        self.generic_visit(node)

    def visit_identifier(self, node: A.Identifier) -> None:
        self.generic_visit(node)


def left_spine(node: A.BinaryOp) -> List[A.BinaryOp]:
    """Return the chain of ``BinaryOp`` nodes reached through ``left``.

    Outermost first.  Arithmetic folds left, so a long sum is one long
    spine; visitors walk it with a loop instead of one call per level.
    """
    spine: List[A.BinaryOp] = []
    current: A.ASTNode = node
    while isinstance(current, A.BinaryOp):
        spine.append(current)
        current = current.left
    return spine


def walk(node: A.ASTNode) -> List[A.ASTNode]:
    """Return *node* and all of its descendants in pre-order."""
    nodes: List[A.ASTNode] = []
    stack = [node]
    while stack:
        current = stack.pop()
        nodes.append(current)
        stack.extend(reversed(list(current.children())))
    return nodes
