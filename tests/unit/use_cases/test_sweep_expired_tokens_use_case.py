import pytest

from src.app.use_cases.maintenance import SweepExpiredTokensUseCase


@pytest.mark.asyncio
async def test_sweep_covers_every_token_table(mock_uow):
    # Arrange
    mock_uow.two_factor_codes.expire_stale.return_value = 3
    mock_uow.temp_login_sessions.expire_stale.return_value = 2
    mock_uow.verified_two_factor_sessions.expire_stale.return_value = 1
    mock_uow.password_reset_tokens.expire_stale.return_value = 0

    # Act
    result = await SweepExpiredTokensUseCase(mock_uow).execute()

    # Assert
    report = result.value
    assert report.two_factor_codes == 3
    assert report.temp_login_sessions == 2
    assert report.verified_two_factor_sessions == 1
    assert report.total == 6
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sweep_with_nothing_to_do(mock_uow):
    result = await SweepExpiredTokensUseCase(mock_uow).execute()

    assert result.value.total == 0
