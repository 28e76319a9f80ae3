import asyncio
import csv
import functools
import io
import logging

import discord
from discord.ext import commands

from vtable import constants
from vtable.util import discord_common
from vtable.util import measure
from vtable.util import render
from vtable.util.sort import sort_by_column
from vtable.util.table import ColumnSpec, TableError, build_table

logger = logging.getLogger(__name__)

_MAX_SORT_BUTTONS = 25
_SORT_VIEW_TIMEOUT = 10 * 60  # 10 minutes
_DISCORD_MSG_CHAR_LIMIT = 2000
_UNCONSTRAINED = ('-', '_', 'none')
_REVERSE = ('rev', 'reverse', 'desc', '-')


class TableCogError(commands.CommandError):
    pass


def parse_csv(data):
    """Returns (header, rows) of a CSV file given as bytes."""
    try:
        text = data.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise TableCogError('The attachment is not a UTF-8 encoded CSV file.')
    try:
        records = [record for record in csv.reader(io.StringIO(text)) if record]
    except csv.Error as e:
        raise TableCogError(f'Could not parse CSV: {e}')
    if not records:
        raise TableCogError('The CSV file is empty.')
    header, *rows = records
    for lineno, row in enumerate(rows, start=2):
        if len(row) != len(header):
            raise TableCogError(f'CSV row {lineno} has {len(row)} fields, expected {len(header)}.')
    return header, rows


def parse_widths(args, ncols):
    widths = []
    for arg in args:
        if arg.lower() in _UNCONSTRAINED:
            widths.append(None)
            continue
        try:
            width = int(arg)
        except ValueError:
            raise TableCogError(f'Column width `{arg}` is not a number.')
        if width < 1:
            raise TableCogError('Column widths must be positive.')
        widths.append(width)
    if len(widths) > ncols:
        raise TableCogError(f'Got {len(widths)} widths for {ncols} columns.')
    return widths + [None] * (ncols - len(widths))


class TableState:
    """A built table kept for a channel, with the sort applied last."""

    def __init__(self, table, title, image):
        self.table = table
        self.title = title
        self.image = image
        self.sorted_by = None
        self.reverse = False
        self.lock = asyncio.Lock()

    def resolve_column(self, column):
        """Column index for a 1-based number or a case-insensitive column name."""
        names = [c.name.lower() for c in self.table.columns]
        if column.lower() in names:
            return names.index(column.lower())
        if column.isdigit() and 1 <= int(column) <= len(names):
            return int(column) - 1
        raise TableCogError(f'No column named `{column}`.')

    def description(self):
        if self.sorted_by is None:
            return f'{len(self.table.data_range())} rows'
        name = self.table.columns[self.sorted_by].name
        order = 'descending' if self.reverse else 'ascending'
        return f'{len(self.table.data_range())} rows, sorted by `{name}` ({order})'


class SortView(discord.ui.View):
    """One button per column; pressing the current sort column again reverses it."""

    def __init__(self, cog, channel_id, *, timeout=_SORT_VIEW_TIMEOUT):
        super().__init__(timeout=timeout)
        self.cog = cog
        self.channel_id = channel_id
        self.state = cog.tables[channel_id]
        self.message = None
        for i, column in enumerate(self.state.table.columns[:_MAX_SORT_BUTTONS]):
            button = discord.ui.Button(label=column.name[:80] or str(i + 1),
                                       style=discord.ButtonStyle.secondary)
            button.callback = functools.partial(self.sort_button, i)
            self.add_item(button)

    async def sort_button(self, column_index, interaction):
        state = self.state
        # A newer table in the channel replaces the one these buttons were made for.
        if self.cog.tables.get(self.channel_id) is not state:
            await interaction.response.send_message('This table is no longer available.',
                                                    ephemeral=True)
            return
        reverse = state.sorted_by == column_index and not state.reverse
        await self.cog.sort_table(state, column_index, reverse)
        embed, file = self.cog.make_message(state)
        if file is None:
            await interaction.response.edit_message(content=render_content(state), embed=embed,
                                                    view=self)
        else:
            await interaction.response.edit_message(embed=embed, attachments=[file], view=self)

    async def on_timeout(self):
        for item in self.children:
            item.disabled = True
        if self.message is not None:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException:
                logger.warning('Could not disable sort buttons after timeout.')


def render_content(state):
    content = f'```ansi\n{render.as_text(state.table, ansi=True)}\n```'
    if len(content) > _DISCORD_MSG_CHAR_LIMIT:
        raise TableCogError('Table is too large to show as text, use `;table show` instead.')
    return content


class Tables(commands.Cog):
    def __init__(self, bot):
        self.bot = bot
        self.tables = {}
        self._pango_measure = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def image_measure(self):
        if self._pango_measure is None:
            from vtable.util import cairo_common
            self._pango_measure = cairo_common.PangoMeasure()
        return self._pango_measure

    def make_message(self, state):
        """Returns (embed, file) for a table; file is None for text tables."""
        embed = discord_common.table_embed(title=state.title, description=state.description())
        if not state.image:
            return embed, None
        from vtable.util import cairo_common
        image = cairo_common.get_table_image(state.table, state.table.measure)
        file = discord.File(image, filename='table.png')
        discord_common.attach_image(embed, file)
        return embed, file

    async def sort_table(self, state, column_index, reverse):
        async with state.lock:
            if not sort_by_column(state.table, column_index, reverse):
                raise TableCogError('That column cannot be sorted.')
            state.sorted_by = column_index
            state.reverse = reverse

    async def _load(self, ctx, widths, *, image):
        if not ctx.message.attachments:
            raise TableCogError('Attach a CSV file to the command message.')
        attachment = ctx.message.attachments[0]
        header, rows = parse_csv(await attachment.read())
        widths = parse_widths(widths, len(header))
        columns = [ColumnSpec(name, width) for name, width in zip(header, widths)]
        # (CSV line number, record) so `;table row` can show it after sorting.
        payloads = [(lineno, list(zip(header, row)))
                    for lineno, row in enumerate(rows, start=2)]
        if image:
            measure_fn, gap = self.image_measure(), constants.SEPARATOR_GAP
        else:
            measure_fn, gap = measure.cell_width, 2
        built = build_table(columns, rows, payloads, gap, measure=measure_fn)
        state = TableState(built, attachment.filename, image)
        self.tables[ctx.channel.id] = state
        self.logger.info(f'Loaded table `{attachment.filename}` with {len(rows)} rows '
                         f'in channel {ctx.channel.id}')
        return state

    async def _send(self, ctx, state):
        embed, file = self.make_message(state)
        view = SortView(self, ctx.channel.id)
        if file is None:
            view.message = await ctx.send(render_content(state), embed=embed, view=view)
        else:
            view.message = await ctx.send(embed=embed, file=file, view=view)

    def _state(self, ctx):
        state = self.tables.get(ctx.channel.id)
        if state is None:
            raise TableCogError('There is no table in this channel, use `;table show` first.')
        return state

    @commands.group(brief='Tables from CSV files', invoke_without_command=True)
    async def table(self, ctx):
        """Render CSV attachments as tables and sort them by column."""
        await ctx.send_help(ctx.command)

    @table.command(brief='Render an attached CSV as an image',
                   usage='[width|-]...')
    async def show(self, ctx, *widths: str):
        """Renders the attached CSV file as an image. Optional widths limit each column, in
        digits, in column order; `-` leaves a column unconstrained.
        """
        state = await self._load(ctx, widths, image=True)
        await self._send(ctx, state)

    @table.command(brief='Render an attached CSV as text', usage='[width|-]...')
    async def text(self, ctx, *widths: str):
        """Like `show`, but renders a monospaced code block instead of an image."""
        state = await self._load(ctx, widths, image=False)
        await self._send(ctx, state)

    @table.command(brief='Sort the table by a column', usage='column [rev]')
    async def sort(self, ctx, column: str, order: str = None):
        """Sorts the channel's table by a column name or 1-based number. Add `rev` to sort in
        descending order.
        """
        state = self._state(ctx)
        reverse = order is not None and order.lower() in _REVERSE
        await self.sort_table(state, state.resolve_column(column), reverse)
        await self._send(ctx, state)

    @table.command(brief='Show the CSV record behind a row', usage='row')
    async def row(self, ctx, number: int):
        """Shows the full record of the table's `number`-th row in its current order."""
        state = self._state(ctx)
        record = state.table.payload_at(number)
        if record is None:
            raise TableCogError(f'Row {number} is not in the table.')
        lineno, fields = record
        description = '\n'.join(f'**{key}**: {value}' for key, value in fields)
        embed = discord_common.table_embed(title=f'CSV line {lineno}',
                                           description=description)
        await ctx.send(embed=embed)

    @discord_common.send_error_if(TableCogError, TableError)
    async def cog_command_error(self, ctx, error):
        pass


async def setup(bot):
    await bot.add_cog(Tables(bot))
