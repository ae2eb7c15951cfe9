import logging

from uploader_bot import texts
from uploader_bot.context import BotContext
from uploader_bot.telegram import keyboards
from uploader_bot.telegram.client import TransportError
from uploader_bot.telegram.types import CallbackQuery

logger = logging.getLogger(__name__)

_GUIDES = {
    keyboards.GUIDE_UPLOAD: texts.GUIDE_UPLOAD,
    keyboards.GUIDE_LINK: texts.GUIDE_GET_LINK,
}


async def handle(ctx: BotContext, query: CallbackQuery):
    """Answer a guide button press."""
    if query.message is None or not query.data:
        return

    # Always acknowledge so the client stops its loading spinner.
    try:
        await ctx.client.answer_callback_query(query.id)
    except TransportError as e:
        logger.error("answer callback %s failed: %s", query.id, e)

    text = _GUIDES.get(query.data)
    if text is None:
        return

    await ctx.reply(query.message.chat.id, text, parse_mode="Markdown")
