"""Bearer-token account loading from a newline-delimited file."""

from pathlib import Path
from typing import List, Union
from loguru import logger
from .models import Account
from .utils import parse_claims


class AccountLoadError(Exception):
    """Raised when the accounts file cannot be read."""


class AccountManager:
    """Loads and serves the list of bearer tokens."""

    def __init__(self, accounts_file: Union[str, Path] = "data.txt"):
        self.accounts_file = Path(accounts_file)
        self.accounts: List[str] = []

    @staticmethod
    def read_tokens(path: Union[str, Path]) -> List[str]:
        """Read every non-empty, stripped line of `path` in order."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise AccountLoadError(str(e)) from e
        return [line.strip() for line in data.split("\n") if line.strip()]

    def load_accounts(self) -> bool:
        """Load accounts from the configured file. Returns False on failure."""
        try:
            self.accounts = self.read_tokens(self.accounts_file)
        except AccountLoadError as e:
            self.accounts = []
            logger.error(f"Error loading accounts: {e}")
            return False
        logger.success(f"Loaded {len(self.accounts)} accounts")
        return True

    def get_accounts(self) -> List[str]:
        """Get the loaded tokens."""
        return list(self.accounts)

    def describe_accounts(self) -> List[Account]:
        """Get the loaded tokens with their decoded claims."""
        return [Account(token=token, claims=parse_claims(token)) for token in self.accounts]
