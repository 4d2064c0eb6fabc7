import logging

from discord.ext import commands

from . import util
from .util import m
from ..util import equations

logger = logging.getLogger(__name__)

default_history = 10


def format_result(value):
    '''
    Formats a result for display
    Whole numbers are shown without a fractional part
    '''
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_postfix(tokens):
    return ' '.join('neg' if token.text == equations.negate else token.text for token in tokens)


def record(session, user, server, expression, result, size=default_history):
    '''
    Adds a calculation to a user's history
    Only the newest calculations up to size are kept
    '''
    session.add(m.Calculation(
        user=str(user),
        server=None if server is None else str(server),
        expression=expression,
        result=result))
    session.flush()

    old = session.query(m.Calculation)\
        .filter_by(user=str(user))\
        .order_by(m.Calculation.id.desc())\
        .offset(max(size, 0)).all()
    for item in old:
        session.delete(item)

    session.commit()


class CalculatorCog (util.Cog):
    @property
    def history_size(self):
        value = self.bot.config.get('history')
        return default_history if value is None else int(value)

    @commands.group('calc', aliases=['c', 'math'], invoke_without_command=True)
    async def group(self, ctx, *, expression: str):
        '''
        Evaluates an arithmetic expression

        Parameters:
        [expression*] the expression to evaluate

        Operations from highest precedence to lowest:

        sin, cos, tan, sqrt : functions, the argument goes in parentheses i.e. sqrt(16)
        - : negates a number when it starts an expression or follows ( or an operator

        ^ : exponentiation, grouped right to left so 2^3^2 = 2^9

        * : multiplication
        / : division
        % : remainder, with the sign of the left operand

        + : addition
        - : subtraction
        '''
        expression = util.strip_code(util.strip_quotes(expression))

        try:
            value = equations.evaluate(expression)
        except equations.EquationError as e:
            logger.debug('Rejected expression %r: %s', expression, e)
            raise

        result = format_result(value)
        server = ctx.guild.id if ctx.guild else None
        record(ctx.session, ctx.author.id, server, expression, result, self.history_size)

        await ctx.send('Result: {}'.format(result))

    @group.command(aliases=['rpn'])
    async def postfix(self, ctx, *, expression: str):
        '''
        Shows an expression in postfix notation, the order it is solved in

        Parameters:
        [expression*] the expression to convert
        '''
        expression = util.strip_code(util.strip_quotes(expression))

        tokens = equations.infix2postfix(equations.tokenize(expression))
        await ctx.send('`{}`'.format(format_postfix(tokens)))

    @group.command(ignore_extra=False)
    async def history(self, ctx):
        '''
        Lists your recent calculations, newest first
        '''
        calculations = util.get_history(ctx.session, ctx.author.id)
        pages = util.item_paginator(calculations, header='Recent calculations:')
        await util.send_pages(ctx, pages)

    @group.command(ignore_extra=False)
    async def clear(self, ctx):
        '''
        Deletes your calculation history
        '''
        count = ctx.session.query(m.Calculation)\
            .filter_by(user=str(ctx.author.id)).delete()
        ctx.session.commit()
        await ctx.send('Removed {} calculation{}'.format(count, '' if count == 1 else 's'))

    @group.command(ignore_extra=False)
    async def supported(self, ctx):
        '''
        Lists the supported operators and functions
        '''
        symbols = list(equations.precedence) + list(equations.functions) + ['(', ')']
        await ctx.send('Supported: {}'.format(', '.join(symbols)))


async def setup(bot):
    await bot.add_cog(CalculatorCog(bot))
