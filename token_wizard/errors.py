"""
Error types for ERC20 generation
"""

from typing import Dict


class OptionsError(Exception):
    """Invalid or inconsistent wizard options (fatal, never retried)"""

    def __init__(self, messages: Dict[str, str]):
        self.messages = dict(messages)
        details = "; ".join(f"{k}: {v}" for k, v in self.messages.items())
        super().__init__(f"Invalid options for ERC20 ({details})")
