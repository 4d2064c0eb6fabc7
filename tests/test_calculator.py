import math
import unittest
from types import SimpleNamespace

from calcbot import model as m
from calcbot.cogs import calculator, util
from calcbot.util import equations

from fakes import FakeContext, make_session


class TestFormatting(unittest.TestCase):
    def test_format_result(self):
        for value, text in [
            (14.0, '14'),
            (-2.0, '-2'),
            (0.5, '0.5'),
            (-0.0, '0'),
            (1e20, '1e+20'),
            (math.inf, 'inf'),
            (-math.inf, '-inf'),
            (math.nan, 'nan'),
        ]:
            with self.subTest(value=value):
                self.assertEqual(calculator.format_result(value), text)

    def test_format_postfix(self):
        tokens = equations.infix2postfix(equations.tokenize('-sqrt(4)+1'))
        self.assertEqual(calculator.format_postfix(tokens), '4 sqrt neg 1 +')


class TestCalculatorCog(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.session = make_session()

    def tearDown(self):
        self.session.close()

    def context(self, **kwargs):
        return FakeContext(self.session, **kwargs)

    def cog(self, history=None):
        config = {} if history is None else {'history': str(history)}
        return calculator.CalculatorCog(SimpleNamespace(config=config))

    async def run_command(self, cog, command, ctx, *args, **kwargs):
        await getattr(cog, command).callback(cog, ctx, *args, **kwargs)

    async def test_calc(self):
        ctx = self.context()
        await self.run_command(self.cog(), 'group', ctx, expression='2+3*4')
        self.assertEqual(ctx.sent, ['Result: 14'])

        calculation = self.session.query(m.Calculation).one()
        self.assertEqual(calculation.user, '1')
        self.assertEqual(calculation.server, '2')
        self.assertEqual(str(calculation), '`2+3*4` = 14')

    async def test_calc_strips_quotes_and_code(self):
        ctx = self.context()
        cog = self.cog()
        await self.run_command(cog, 'group', ctx, expression='"(2+3)*4"')
        await self.run_command(cog, 'group', ctx, expression='`2^3^2`')
        self.assertEqual(ctx.sent, ['Result: 20', 'Result: 512'])

    async def test_calc_direct_message(self):
        ctx = self.context(guild=None)
        await self.run_command(self.cog(), 'group', ctx, expression='sqrt(16)')
        self.assertEqual(ctx.sent, ['Result: 4'])
        self.assertIsNone(self.session.query(m.Calculation).one().server)

    async def test_calc_error_is_not_recorded(self):
        ctx = self.context()
        with self.assertRaises(equations.DivisionByZero):
            await self.run_command(self.cog(), 'group', ctx, expression='1/0')
        self.assertEqual(ctx.sent, [])
        self.assertEqual(self.session.query(m.Calculation).count(), 0)

    async def test_history_is_trimmed(self):
        ctx = self.context()
        cog = self.cog(history=3)
        for i in range(5):
            await self.run_command(cog, 'group', ctx, expression='{}+1'.format(i))

        calculations = util.get_history(self.session, 1)
        self.assertEqual([c.expression for c in calculations], ['4+1', '3+1', '2+1'])

    async def test_history_is_per_user(self):
        cog = self.cog(history=1)
        await self.run_command(cog, 'group', self.context(user=1), expression='1+1')
        await self.run_command(cog, 'group', self.context(user=2), expression='2+2')

        self.assertEqual([c.result for c in util.get_history(self.session, 1)], ['2'])
        self.assertEqual([c.result for c in util.get_history(self.session, 2)], ['4'])

    async def test_history_command(self):
        ctx = self.context()
        cog = self.cog()
        await self.run_command(cog, 'group', ctx, expression='1+1')
        await self.run_command(cog, 'group', ctx, expression='1/4')
        await self.run_command(cog, 'history', ctx)
        self.assertEqual(ctx.sent[-1].strip().splitlines(), [
            'Recent calculations:',
            '`1/4` = 0.25',
            '`1+1` = 2',
        ])

    async def test_empty_history(self):
        with self.assertRaises(util.NoHistoryError):
            await self.run_command(self.cog(), 'history', self.context())

    async def test_clear(self):
        ctx = self.context()
        cog = self.cog()
        await self.run_command(cog, 'group', ctx, expression='1+1')
        await self.run_command(cog, 'group', ctx, expression='2+2')
        await self.run_command(cog, 'group', self.context(user=5), expression='3+3')
        await self.run_command(cog, 'clear', ctx)
        self.assertEqual(ctx.sent[-1], 'Removed 2 calculations')
        self.assertEqual(self.session.query(m.Calculation).count(), 1)

    async def test_postfix(self):
        ctx = self.context()
        await self.run_command(self.cog(), 'postfix', ctx, expression='(2+3)*4')
        self.assertEqual(ctx.sent, ['`2 3 + 4 *`'])

    async def test_postfix_mismatch(self):
        with self.assertRaises(equations.ParenMismatch):
            await self.run_command(self.cog(), 'postfix', self.context(), expression='(1')

    async def test_supported(self):
        ctx = self.context()
        await self.run_command(self.cog(), 'supported', ctx)
        self.assertEqual(ctx.sent, ['Supported: +, -, *, /, %, ^, sin, cos, tan, sqrt, (, )'])


if __name__ == '__main__':
    unittest.main()
