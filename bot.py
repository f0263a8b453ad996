import asyncio
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import (
    ApplicationBuilder,
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)
from config import AppConfig, load_config
from logger import get_logger
from lookup import LookupOrchestrator
from scan import TronscanFetcher
from summary import LookupSummaryFormatter
from validator import TRON_ADDRESS_LENGTH

logger = get_logger(__name__)

MAX_TRACKED_CHATS = 1000


class TronWatcherBot:
    def __init__(self, config: AppConfig | None = None):
        self.config = config or load_config()
        self.fetcher = TronscanFetcher(self.config.tronscan)
        # one orchestrator per chat, so each chat has its own current result
        self.orchestrators: dict[int, LookupOrchestrator] = {}
        self.last_address: dict[int, str] = {}
        self.app: Application | None = None

    def build_application(self) -> Application:
        app = ApplicationBuilder().token(self.config.bot_token).build()

        app.add_handler(CommandHandler("start", self.start))
        app.add_handler(CommandHandler("check", self.check_wallet))
        app.add_handler(CommandHandler("retry", self.retry))
        app.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self.text_input)
        )
        self.app = app
        return app

    def orchestrator_for(self, chat_id: int) -> LookupOrchestrator:
        if chat_id not in self.orchestrators:
            self.forget_oldest_chats()
            self.orchestrators[chat_id] = LookupOrchestrator(
                fetcher=self.fetcher, rate=self.config.trx_usd_rate
            )
        return self.orchestrators[chat_id]

    def forget_oldest_chats(self):
        # dicts keep insertion order, so the first keys are the oldest chats
        while len(self.orchestrators) >= MAX_TRACKED_CHATS:
            chat_id = next(iter(self.orchestrators))
            del self.orchestrators[chat_id]
            self.last_address.pop(chat_id, None)

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.message.reply_text(
            "👋 Welcome to TronWatcher!\n"
            "Use /check <TRON_ADDRESS> to scan a wallet.\n"
            "Use /retry to scan the last address again.\n"
            "You can also just paste an address."
        )

    async def check_wallet(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if len(context.args) != 1:
            await update.message.reply_text("❗ Usage: /check <wallet_address>")
            return
        await self.run_lookup(update, context.args[0])

    async def retry(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        address = self.last_address.get(update.effective_chat.id)
        if address is None:
            await update.message.reply_text("ℹ️ Nothing to retry yet. Use /check <wallet_address>.")
            return
        await self.run_lookup(update, address)

    async def text_input(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        text = (update.message.text or "").strip()
        if text.startswith("T") and len(text) == TRON_ADDRESS_LENGTH:
            await self.run_lookup(update, text)
            return
        await update.message.reply_text(
            "🤖 I didn't understand that. Try one of these:\n"
            "/check <wallet>\n/retry\n/start"
        )

    async def run_lookup(self, update: Update, address: str):
        chat_id = update.effective_chat.id
        self.last_address[chat_id] = address
        orchestrator = self.orchestrator_for(chat_id)

        await update.message.reply_text("⏳ Scanning TRON network...")
        run = await asyncio.to_thread(orchestrator.lookup, address)
        if run.stale:
            # a newer /check in this chat already owns the reply
            return

        summary = LookupSummaryFormatter(run.outcome).format_summary()
        try:
            await update.message.reply_text(summary, parse_mode="Markdown")
        except TelegramError as e:
            logger.error("reply_failed", chat_id=chat_id, address=address, error=str(e))

    async def run(self):
        app = self.build_application()
        logger.info("bot_running")
        app.run_polling(close_loop=False)
