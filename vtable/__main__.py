import argparse
import asyncio
import csv
import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler
from os import environ
from pathlib import Path

import discord
from discord.ext import commands

from vtable import constants
from vtable.util import discord_common
from vtable.util import measure
from vtable.util import render
from vtable.util.sort import sort_by_column
from vtable.util.table import ColumnSpec, TableError, build_table


def setup():
    # Make required directories.
    for path in constants.ALL_DIRS:
        os.makedirs(path, exist_ok=True)

    # logging to console and file on daily interval
    logging.basicConfig(format='{asctime}:{levelname}:{name}:{message}', style='{',
                        datefmt='%d-%m-%Y %H:%M:%S', level=logging.INFO,
                        handlers=[logging.StreamHandler(),
                                  TimedRotatingFileHandler(constants.LOG_FILE_PATH, when='D',
                                                           backupCount=3, utc=True)])


def _parse_widths(arg, ncols):
    if not arg:
        return [None] * ncols
    widths = [int(w) if w.strip() else None for w in arg.split(',')]
    if len(widths) != ncols:
        raise TableError(f'Got {len(widths)} widths for {ncols} columns.')
    if any(width is not None and width < 1 for width in widths):
        raise TableError('Column widths must be positive.')
    return widths


def _image_backend(args):
    if args.pillow:
        from vtable.util import pillow_common
        measure_fn = pillow_common.PillowMeasure.from_files(args.font_size)

        def write(table, path):
            pillow_common.get_table_image(table, measure_fn).save(path, format='PNG')
    else:
        from vtable.util import cairo_common
        measure_fn = cairo_common.PangoMeasure(args.font, args.font_size)

        def write(table, path):
            with open(path, 'wb') as f:
                f.write(cairo_common.get_table_image(table, measure_fn).getbuffer())
    return measure_fn, write


def render_csv(args):
    with open(args.file, newline='', encoding='utf-8-sig') as f:
        records = [record for record in csv.reader(f) if record]
    if not records:
        raise TableError(f'{args.file} is empty.')
    header, *rows = records
    columns = [ColumnSpec(name, width)
               for name, width in zip(header, _parse_widths(args.widths, len(header)))]

    if args.output:
        measure_fn, write = _image_backend(args)
        gap = constants.SEPARATOR_GAP if args.gap is None else args.gap
    else:
        measure_fn, write = measure.cell_width, None
        gap = 2 if args.gap is None else args.gap
    table = build_table(columns, rows, separator_gap=gap, measure=measure_fn)

    if args.sort is not None:
        names = [name.lower() for name in header]
        column = names.index(args.sort.lower()) if args.sort.lower() in names else None
        if not sort_by_column(table, column, args.reverse):
            raise TableError(f'No column named `{args.sort}`.')

    if write is not None:
        write(table, args.output)
        logging.info(f'Wrote {len(rows)} rows to {args.output}')
    else:
        print(render.as_text(table, ansi=args.ansi))
    return 0


def run_bot(args):
    token = environ.get('BOT_TOKEN')
    if not token:
        logging.error('Token required')
        return 1

    intents = discord.Intents.default()
    intents.message_content = True

    bot = commands.Bot(command_prefix=commands.when_mentioned_or(';'), intents=intents)

    def no_dm_check(ctx):
        if ctx.guild is None:
            raise commands.NoPrivateMessage('Private messages not permitted.')
        return True

    # Restrict bot usage to inside guild channels only.
    bot.add_check(no_dm_check)

    @discord_common.on_ready_event_once(bot)
    async def init():
        logging.info(f'Cogs loaded: {", ".join(bot.cogs)}')
        asyncio.create_task(discord_common.presence(bot))

    async def load_cogs():
        cogs = [file.stem for file in Path(__file__).parent.joinpath('cogs').glob('*.py')]
        for extension in cogs:
            await bot.load_extension(f'vtable.cogs.{extension}')

    bot.setup_hook = load_cogs
    bot.add_listener(discord_common.bot_error_handler, name='on_command_error')
    bot.run(token, log_handler=None)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog='vtable')
    subparsers = parser.add_subparsers(dest='command', required=True)

    render_parser = subparsers.add_parser('render', help='lay out a CSV file as a table')
    render_parser.add_argument('file')
    render_parser.add_argument('--widths', help='comma separated column widths in digits, '
                                                'empty for unconstrained')
    render_parser.add_argument('--sort', metavar='COLUMN')
    render_parser.add_argument('--reverse', action='store_true')
    render_parser.add_argument('--gap', type=int)
    render_parser.add_argument('--ansi', action='store_true')
    render_parser.add_argument('--pillow', action='store_true',
                               help='draw the PNG with Pillow instead of cairo')
    render_parser.add_argument('--output', '-o', help='write a PNG image instead of text')
    render_parser.add_argument('--font', default=constants.FONT)
    render_parser.add_argument('--font-size', type=int, default=constants.FONT_SIZE)
    render_parser.set_defaults(func=render_csv)

    bot_parser = subparsers.add_parser('bot', help='run the Discord bot')
    bot_parser.set_defaults(func=run_bot)

    args = parser.parse_args(argv)
    setup()
    try:
        return args.func(args)
    except (TableError, OSError, ValueError) as e:
        logging.error(e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
