"""
Character spans of clauses and tokens inside contract text
"""

from typing import List

from .models import TextSpan


def clause_span(text: str, clause_index: int) -> TextSpan:
    """Span of a clause, whitespace trimmed"""
    starts: List[int] = [0]
    for i, ch in enumerate(text):
        if ch == ";":
            starts.append(i + 1)
    if clause_index >= len(starts):
        return TextSpan(len(text), len(text))
    start = starts[clause_index]
    end = starts[clause_index + 1] - 1 if clause_index + 1 < len(starts) else len(text)
    piece = text[start:end]
    if not piece.strip():
        return TextSpan(start, end)
    lead = len(piece) - len(piece.lstrip())
    return TextSpan(start + lead, start + lead + len(piece.strip()))


def constraint_span(text: str, clause_index: int, slot: int) -> TextSpan:
    """Span of one constraint token; the clause span if the slot does not exist"""
    bounds = clause_span(text, clause_index)
    clause = text[bounds.start:bounds.end]
    arrow = clause.find("->")
    head = clause if arrow < 0 else clause[:arrow]
    offset = bounds.start
    for i, piece in enumerate(head.split(",")):
        if i == slot:
            lead = len(piece) - len(piece.lstrip())
            return TextSpan(offset + lead, offset + len(piece.rstrip()))
        offset += len(piece) + 1
    return bounds


def return_value_span(text: str, clause_index: int) -> TextSpan:
    """Span of the return value token (empty, just past the arrow, when missing)"""
    bounds = clause_span(text, clause_index)
    clause = text[bounds.start:bounds.end]
    arrow = clause.find("->")
    if arrow < 0:
        return bounds
    tail = clause[arrow + 2:]
    start = bounds.start + arrow + 2 + (len(tail) - len(tail.lstrip()))
    return TextSpan(start, max(start, bounds.end))
