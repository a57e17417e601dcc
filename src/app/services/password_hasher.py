import bcrypt

from config import ApplicationConfig

# Hashes of a throwaway password, one per cost factor
_dummy_hashes = {}


def hash_password(password: str, rounds: int = None) -> str:
    """bcrypt hash with the salt embedded"""
    rounds = rounds or ApplicationConfig.BCRYPT_ROUNDS
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def dummy_hash() -> bytes:
    """Throwaway hash at the configured cost, built on first use"""
    rounds = ApplicationConfig.BCRYPT_ROUNDS
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))
    return _dummy_hashes[rounds]


def dummy_check(password: str) -> None:
    """Spend a bcrypt comparison so a missing account costs as much as a real one"""
    bcrypt.checkpw(password.encode("utf-8"), dummy_hash())
