import asyncio
import nest_asyncio
from dotenv import load_dotenv

# before the local imports so LOG_LEVEL / LOG_FORMAT from .env reach the logger
load_dotenv()

from bot import TronWatcherBot  # noqa: E402
from config import load_config  # noqa: E402

nest_asyncio.apply()

if __name__ == "__main__":
    bot = TronWatcherBot(load_config())
    asyncio.run(bot.run())
