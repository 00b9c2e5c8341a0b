"""Report output"""
from .json_formatter import ContractReportJSONFormatter

__all__ = ['ContractReportJSONFormatter']
