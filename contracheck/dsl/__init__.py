"""Contract text parsing"""
from .parser import format_contract, parse_contract

__all__ = ['parse_contract', 'format_contract']
