import pytest

from config import ApplicationConfig


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)
