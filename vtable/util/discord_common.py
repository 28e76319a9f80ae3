import functools
import logging

import discord
from discord.ext import commands

from vtable.util import table

logger = logging.getLogger(__name__)

_ALERT_AMBER = 0xFFBF00
_TABLE_BLUE = 0x198BCC


def embed_alert(desc):
    return discord.Embed(description=str(desc), color=_ALERT_AMBER)


def table_embed(**kwargs):
    return discord.Embed(**kwargs, color=_TABLE_BLUE)


def attach_image(embed, img_file):
    embed.set_image(url=f'attachment://{img_file.filename}')


def send_error_if(*error_cls):
    """Decorator for `cog_command_error` methods. Decorated methods send the error in an alert embed
    when the error is an instance of one of the specified errors, otherwise the wrapped function is
    invoked.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(cog, ctx, error):
            if isinstance(error, commands.CommandInvokeError):
                error = error.original
            if isinstance(error, error_cls):
                await ctx.send(embed=embed_alert(error))
                error.handled = True
            else:
                await func(cog, ctx, error)
        return wrapper
    return decorator


async def bot_error_handler(ctx, exception):
    if getattr(exception, 'handled', False):
        # Errors already handled in cogs should have .handled = True
        return
    if isinstance(exception, commands.CommandInvokeError) and getattr(exception.original, 'handled', False):
        return

    if isinstance(exception, commands.NoPrivateMessage):
        await ctx.send(embed=embed_alert('Commands are disabled in private channels'))
    elif isinstance(exception, commands.DisabledCommand):
        await ctx.send(embed=embed_alert('Sorry, this command is temporarily disabled'))
    elif isinstance(exception, (table.TableError, commands.UserInputError)):
        await ctx.send(embed=embed_alert(exception))
    else:
        msg = 'Ignoring exception in command {}:'.format(ctx.command)
        exc_info = type(exception), exception, exception.__traceback__
        extra = {
            "message_content": ctx.message.content,
            "jump_url": ctx.message.jump_url
        }
        logger.exception(msg, exc_info=exc_info, extra=extra)


def once(func):
    """Decorator that wraps the given async function such that it is executed only once."""
    first = True

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        nonlocal first
        if first:
            first = False
            await func(*args, **kwargs)

    return wrapper


def on_ready_event_once(bot):
    """Decorator that uses bot.event to set the given function as the bot's on_ready event handler,
    but does not execute it more than once.
    """
    def register_on_ready(func):
        @bot.event
        @once
        async def on_ready():
            await func()

    return register_on_ready


async def presence(bot):
    await bot.change_presence(activity=discord.Activity(
        type=discord.ActivityType.listening,
        name=';table show'))
