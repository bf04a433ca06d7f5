"""minilang/printer.py – human- and machine-readable AST dumps.

``format_ast`` renders an indented tree, one node per line::

    Program
      Let x
        Number 10
      If
        Comparison >
          Identifier x
          Number 0
        Then
          Print
            String "positive"

``ast_to_dict`` produces nested dicts suitable for ``json.dumps``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from minilang import ast_nodes as A
from minilang.visitor import ASTVisitor, left_spine

__all__ = ["TreePrinter", "DictBuilder", "format_ast", "ast_to_dict", "format_number"]


def format_number(value: float) -> str:
    """Render ``10.0`` as ``10`` and ``2.5`` as ``2.5``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class TreePrinter(ASTVisitor):
    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent
        self.lines: List[str] = []
        self._depth = 0

    def _emit(self, text: str) -> None:
        self.lines.append(f"{self.indent * self._depth}{text}")

    def _nested(self, label: Optional[str], nodes: Tuple[A.ASTNode, ...]) -> None:
        if label is not None:
            self._emit(label)
        self._depth += 1
        for node in nodes:
            self.visit(node)
        self._depth -= 1

    def visit_program(self, node: A.Program) -> None:
        self._emit("Program")
        self._nested(None, node.statements)

    def visit_let(self, node: A.Let) -> None:
        self._emit(f"Let {node.name}")
        self._nested(None, (node.value,))

    def visit_assign(self, node: A.Assign) -> None:
        self._emit(f"Assign {node.name}")
        self._nested(None, (node.value,))

    def visit_print(self, node: A.Print) -> None:
        self._emit("Print")
        self._nested(None, node.arguments)

    def visit_if(self, node: A.If) -> None:
        self._emit("If")
        self._depth += 1
        self.visit(node.condition)
        self._nested("Then", node.then_block)
        if node.else_block is not None:
            self._nested("Else", node.else_block)
        self._depth -= 1

    def visit_while(self, node: A.While) -> None:
        self._emit("While")
        self._depth += 1
        self.visit(node.condition)
        self._nested("Body", node.body)
        self._depth -= 1

    def visit_binary_op(self, node: A.BinaryOp) -> None:
        spine = left_spine(node)
        base = self._depth
        for offset, op in enumerate(spine):
            self._depth = base + offset
            self._emit(f"BinaryOp {op.operator.value}")
        self._depth = base + len(spine)
        self.visit(spine[-1].left)
        for offset in range(len(spine) - 1, -1, -1):
            self._depth = base + offset + 1
            self.visit(spine[offset].right)
        self._depth = base

    def visit_comparison(self, node: A.Comparison) -> None:
        self._emit(f"Comparison {node.operator.value}")
        self._nested(None, (node.left, node.right))

    def visit_number_literal(self, node: A.NumberLiteral) -> None:
        self._emit(f"Number {format_number(node.value)}")

    def visit_string_literal(self, node: A.StringLiteral) -> None:
        self._emit(f'String "{node.value}"')

    def visit_identifier(self, node: A.Identifier) -> None:
        self._emit(f"Identifier {node.name}")


class DictBuilder(ASTVisitor):
    """Each ``visit_X`` returns a JSON-friendly dict with a ``node`` tag."""

    def __init__(self, with_locations: bool = False) -> None:
        self.with_locations = with_locations

    def _node(self, node: A.ASTNode, **fields: Any) -> Dict[str, Any]:
        out: Dict[str, Any] = {"node": type(node).__name__}
        out.update(fields)
        if self.with_locations:
            loc = node.loc  # type: ignore[attr-defined]
            out["loc"] = {"line": loc.line, "column": loc.col}
        return out

    def _all(self, nodes: Tuple[A.ASTNode, ...]) -> List[Dict[str, Any]]:
        return [self.visit(n) for n in nodes]

    def visit_program(self, node: A.Program) -> Dict[str, Any]:
        return self._node(node, statements=self._all(node.statements))

    def visit_let(self, node: A.Let) -> Dict[str, Any]:
        return self._node(node, name=node.name, value=self.visit(node.value))

    def visit_assign(self, node: A.Assign) -> Dict[str, Any]:
        return self._node(node, name=node.name, value=self.visit(node.value))

    def visit_print(self, node: A.Print) -> Dict[str, Any]:
        return self._node(node, arguments=self._all(node.arguments))

    def visit_if(self, node: A.If) -> Dict[str, Any]:
        return self._node(
            node,
            condition=self.visit(node.condition),
            then_block=self._all(node.then_block),
            else_block=None if node.else_block is None else self._all(node.else_block),
        )

    def visit_while(self, node: A.While) -> Dict[str, Any]:
        return self._node(node, condition=self.visit(node.condition), body=self._all(node.body))

    def visit_binary_op(self, node: A.BinaryOp) -> Dict[str, Any]:
        spine = left_spine(node)
        built = self.visit(spine[-1].left)
        for op in reversed(spine):
            built = self._node(
                op,
                operator=op.operator.value,
                left=built,
                right=self.visit(op.right),
            )
        return built

    def visit_comparison(self, node: A.Comparison) -> Dict[str, Any]:
        return self._node(
            node,
            operator=node.operator.value,
            left=self.visit(node.left),
            right=self.visit(node.right),
        )

    def visit_number_literal(self, node: A.NumberLiteral) -> Dict[str, Any]:
        return self._node(node, value=node.value)

    def visit_string_literal(self, node: A.StringLiteral) -> Dict[str, Any]:
        return self._node(node, value=node.value)

    def visit_identifier(self, node: A.Identifier) -> Dict[str, Any]:
        return self._node(node, name=node.name)


def format_ast(node: A.ASTNode, indent: str = "  ") -> str:
    printer = TreePrinter(indent)
    printer.visit(node)
    return "\n".join(printer.lines)


def ast_to_dict(node: A.ASTNode, with_locations: bool = False) -> Dict[str, Any]:
    return DictBuilder(with_locations).visit(node)
