"""
Python annotation translation to contract type facts
"""

import ast
from typing import List, Optional

from ..core.config import (
    BOOLEAN_TYPES, OPTIONAL_WRAPPERS, PRIMITIVE_TYPES, UNION_WRAPPERS, UNKNOWN_TYPES
)
from ..core.models import TypeInfo


class AnnotationTranslator(ast.NodeVisitor):
    """Translates annotation expressions into TypeInfo"""

    def translate(self, node: Optional[ast.expr]) -> TypeInfo:
        if node is None:
            return TypeInfo.unknown_type()
        return self.visit(node)

    def visit_Constant(self, node: ast.Constant) -> TypeInfo:
        if node.value is None:
            return TypeInfo(text="None", base="None", void=True)
        if isinstance(node.value, str):
            # Forward reference or postponed annotation
            try:
                expr = ast.parse(node.value.strip(), mode="eval").body
            except SyntaxError:
                return TypeInfo.unknown_type(node.value)
            return self.visit(expr)
        return TypeInfo.unknown_type(ast.unparse(node))

    def visit_Name(self, node: ast.Name) -> TypeInfo:
        return self._named(node.id, node.id)

    def visit_Attribute(self, node: ast.Attribute) -> TypeInfo:
        # typing.Any, t.Optional, builtins.int
        return self._named(node.attr, ast.unparse(node))

    def visit_Subscript(self, node: ast.Subscript) -> TypeInfo:
        head = _head_name(node.value)
        text = ast.unparse(node)

        if head in OPTIONAL_WRAPPERS:
            return self._optional(self.visit(node.slice), text)

        if head in UNION_WRAPPERS:
            members = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
            return self._union(members, text)

        if head == "Annotated" and isinstance(node.slice, ast.Tuple) and node.slice.elts:
            return self.visit(node.slice.elts[0])

        return TypeInfo(text=text, base=text)

    def visit_BinOp(self, node: ast.BinOp) -> TypeInfo:
        if isinstance(node.op, ast.BitOr):
            return self._union(_flatten_union(node), ast.unparse(node))
        return self.generic_visit(node)

    def generic_visit(self, node: ast.AST) -> TypeInfo:
        return TypeInfo.unknown_type(ast.unparse(node))

    def _named(self, name: str, text: str) -> TypeInfo:
        if name in UNKNOWN_TYPES:
            return TypeInfo.unknown_type(text)
        if name == "None":
            return TypeInfo(text=text, base=text, void=True)
        if name in PRIMITIVE_TYPES:
            return TypeInfo(text=text, base=name, primitive=True, boolean=name in BOOLEAN_TYPES)
        return TypeInfo(text=text, base=text)

    def _optional(self, inner: TypeInfo, text: str) -> TypeInfo:
        if inner.unknown or inner.void or inner.optional:
            return inner
        return TypeInfo(text=text, base=inner.base, boolean=inner.boolean, optional=True)

    def _union(self, members: List[ast.expr], text: str) -> TypeInfo:
        types = [self.visit(m) for m in members]
        if any(t.unknown for t in types):
            return TypeInfo.unknown_type(text)
        rest = [t for t in types if not t.void]
        if not rest:
            return TypeInfo(text=text, base="None", void=True)
        if len(rest) == 1:
            inner = rest[0]
        else:
            base = " | ".join(t.base for t in rest)
            inner = TypeInfo(text=base, base=base, boolean=all(t.boolean for t in rest))
        if len(rest) < len(types):
            return self._optional(inner, text)
        return inner


def _head_name(node: ast.expr) -> str:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return ""


def _flatten_union(node: ast.expr) -> List[ast.expr]:
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _flatten_union(node.left) + _flatten_union(node.right)
    return [node]


def translate_annotation(node: Optional[ast.expr]) -> TypeInfo:
    return AnnotationTranslator().translate(node)
