"""contracheck FastAPI Server"""
from .client import ContractClient
from .remote import RemoteCheckError, RemoteContractClient

__all__ = ['ContractClient', 'RemoteContractClient', 'RemoteCheckError']
