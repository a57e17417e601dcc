"""
One-shot token ledger sweep, for cron.

    */5 * * * * cd /srv/park-auth && python sweep.py
"""

import asyncio
import logging

from config import ApplicationConfig
from src.adapter.services.token_sweeper import TokenSweeper
from src.depends import AsyncSessionLocal, engine

logger = logging.getLogger("sweep")


async def main() -> int:
    try:
        return await TokenSweeper(AsyncSessionLocal).run_once()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    swept = asyncio.run(main())
    logger.info(f"Sweep finished, {swept} row(s) marked used")
