"""
Maintenance Use Cases
"""

from .sweep_expired_tokens_use_case import SweepExpiredTokensUseCase, SweepReport

__all__ = ["SweepExpiredTokensUseCase", "SweepReport"]
