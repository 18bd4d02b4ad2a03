from __future__ import annotations
import asyncio
import logging

from innkeeper.channels import create_telegram_app, run_telegram_bot
from innkeeper.config import get_config

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=get_config().get_log_level(),
    )
    try:
        app = create_telegram_app()
        asyncio.run(run_telegram_bot(app))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"System Error: {e}", exc_info=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
