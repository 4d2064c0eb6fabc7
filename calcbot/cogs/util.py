from discord.ext import commands

from .. import model as m


class BotError (Exception):
    pass


class NoHistoryError (BotError):
    pass


class Cog (commands.Cog):
    def __init__(self, bot):
        self.bot = bot


def get_history(session, userid):
    '''
    Gets a user's calculations, newest first
    '''
    calculations = session.query(m.Calculation)\
        .filter_by(user=str(userid))\
        .order_by(m.Calculation.id.desc()).all()
    if not calculations:
        raise NoHistoryError()
    return calculations


async def send_pages(ctx, paginator):
    for page in paginator.pages:
        await ctx.send(page)


def item_paginator(items, header=None):
    paginator = commands.Paginator(prefix='', suffix='')
    if header:
        paginator.add_line(header)
    for item in items:
        paginator.add_line(str(item))
    return paginator


def strip_quotes(arg):
    '''
    Strips quotes from arguments
    '''
    if len(arg) >= 2 and arg.startswith('"') and arg.endswith('"'):
        arg = arg[1:-1]
    return arg


def strip_code(arg):
    '''
    Strips inline code markers from arguments
    '''
    if len(arg) >= 2 and arg.startswith('`') and arg.endswith('`'):
        arg = arg[1:-1]
    return arg
