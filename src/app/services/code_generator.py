import secrets
import string
from abc import ABC, abstractmethod

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6


class ICodeGenerator(ABC):
    """Source of one-time verification codes"""

    @abstractmethod
    def generate(self) -> str:
        pass


class SecureCodeGenerator(ICodeGenerator):
    """Six symbols from A-Z0-9 drawn with the secrets module"""

    def __init__(self, length: int = CODE_LENGTH):
        self.length = length

    def generate(self) -> str:
        return "".join(secrets.choice(CODE_ALPHABET) for _ in range(self.length))
