import logging

import uvicorn
from config import ApplicationConfig
from src.adapter.services.token_sweeper import TokenSweeper
from src.api.app import create_app
from src.depends import AsyncSessionLocal, init_db

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

token_sweeper = None
if ApplicationConfig.TOKEN_SWEEP_ENABLED:
    token_sweeper = TokenSweeper(
        AsyncSessionLocal, interval_seconds=ApplicationConfig.TOKEN_SWEEP_INTERVAL_SECONDS
    )

app = create_app(ApplicationConfig, token_sweeper=token_sweeper, init_db=init_db)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=True,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
