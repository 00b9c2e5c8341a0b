"""
Hashing utilities for contract check reports.
Lets report consumers tell whether a function or its contract changed.
"""

import hashlib
from typing import Optional


class ArtifactHasher:
    """
    Computes SHA-256 hashes of function sources and contract texts.
    """

    @staticmethod
    def hash_string(content: str) -> str:
        """
        Compute SHA-256 hash of a string.

        Args:
            content: String to hash

        Returns:
            Hexadecimal hash string
        """
        return hashlib.sha256(content.encode('utf-8')).hexdigest()

    @staticmethod
    def hash_file(file_path: str) -> Optional[str]:
        """
        Compute SHA-256 hash of a file, or None if it cannot be read.
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
            return ArtifactHasher.hash_string(content)
        except (OSError, UnicodeDecodeError):
            return None

    @staticmethod
    def compute_combined_hash(source_hash: str, contract_hash: str) -> str:
        """
        Hash of a function together with its contract.

        Args:
            source_hash: SHA-256 hash of the function source
            contract_hash: SHA-256 hash of the contract text

        Returns:
            Combined SHA-256 hash
        """
        combined = f"{source_hash}|{contract_hash}"
        return hashlib.sha256(combined.encode('utf-8')).hexdigest()

    @staticmethod
    def verify_integrity(json_result: dict, source: str, contract: str) -> dict:
        """
        Check a function entry of a JSON report against current source.

        Returns:
            {'valid': bool, 'source_match': bool, 'contract_match': bool, 'combined_match': bool}
        """
        function = json_result.get('function', {})
        source_match = ArtifactHasher.hash_string(source) == function.get('source_hash')
        contract_match = ArtifactHasher.hash_string(contract) == function.get('contract_hash')
        combined_match = ArtifactHasher.compute_combined_hash(
            function.get('source_hash', ''),
            function.get('contract_hash', '')
        ) == function.get('combined_hash')

        return {
            'valid': source_match and contract_match and combined_match,
            'source_match': source_match,
            'contract_match': contract_match,
            'combined_match': combined_match
        }
