'''
Evaluation of infix arithmetic expressions

An expression is tokenized, converted to postfix with the shunting-yard
algorithm and then solved with an operand stack
'''

import enum
import math
import operator
import string
from collections import namedtuple


class TokenKind (enum.Enum):
    number = 1
    operator = 2
    function = 3
    paren_open = 4
    paren_close = 5


Token = namedtuple('Token', ['kind', 'text'])

# function kind token for a leading or nested minus sign
negate = '_'

precedence = {
    '+': 1,
    '-': 1,
    '*': 2,
    '/': 2,
    '%': 2,
    '^': 3,
}

right_associative = {'^'}

number_chars = set(string.digits + '.')
name_chars = set(string.ascii_letters)


class EquationError (Exception):
    pass


class LexError (EquationError):
    def __init__(self, char, position):
        super().__init__('Unexpected character {!r} at position {}'.format(char, position))
        self.char = char
        self.position = position


class ParenMismatch (EquationError):
    def __init__(self):
        super().__init__('Mismatched parentheses')


class NumberParseError (EquationError):
    def __init__(self, text):
        super().__init__('Invalid number: {}'.format(text))
        self.text = text


class InvalidExpression (EquationError):
    def __init__(self, message='Invalid expression'):
        super().__init__(message)


class DivisionByZero (EquationError):
    def __init__(self):
        super().__init__('Division by zero')


class UnknownFunction (EquationError):
    def __init__(self, name):
        super().__init__('Unknown function: {}'.format(name))
        self.name = name


class UnknownOperator (EquationError):
    def __init__(self, symbol):
        super().__init__('Unknown operator: {}'.format(symbol))
        self.symbol = symbol


def ieee(func):
    '''
    Wraps a math function so that domain errors give nan
    and overflows give infinity instead of raising
    '''
    def wrapper(a):
        try:
            return func(a)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    wrapper.__name__ = func.__name__
    return wrapper


def divide(a, b):
    if b == 0:
        raise DivisionByZero()
    return a / b


def remainder(a, b):
    '''
    Remainder of a / b taking the sign of a, like C fmod
    '''
    if b == 0:
        raise DivisionByZero()
    try:
        return math.fmod(a, b)
    except ValueError:
        # infinite dividend
        return math.nan


def power(a, b):
    '''
    Raises a to the power of b, giving nan or infinity where math.pow raises
    '''
    odd = b % 2 == 1
    try:
        return math.pow(a, b)
    except ValueError:
        if a == 0:
            # zero to a negative power
            return math.copysign(math.inf, a) if odd else math.inf
        return math.nan
    except OverflowError:
        return -math.inf if a < 0 and odd else math.inf


operations = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': divide,
    '%': remainder,
    '^': power,
}

functions = {
    'sin': ieee(math.sin),
    'cos': ieee(math.cos),
    'tan': ieee(math.tan),
    'sqrt': ieee(math.sqrt),
}


def tokenize(expression):
    '''
    Parses a mathematic expression into tokens
    Raises LexError for characters that can not start a token
    '''
    tokens = []
    i = 0
    while i < len(expression):
        c = expression[i]
        if c.isspace():
            i += 1
        elif c in number_chars:
            start = i
            while i < len(expression) and expression[i] in number_chars:
                i += 1
            tokens.append(Token(TokenKind.number, expression[start:i]))
        elif c in name_chars:
            start = i
            while i < len(expression) and expression[i] in name_chars:
                i += 1
            tokens.append(Token(TokenKind.function, expression[start:i]))
        elif c == '(':
            tokens.append(Token(TokenKind.paren_open, c))
            i += 1
        elif c == ')':
            tokens.append(Token(TokenKind.paren_close, c))
            i += 1
        elif c == '-':
            if not tokens or tokens[-1].kind in (TokenKind.paren_open, TokenKind.operator):
                tokens.append(Token(TokenKind.function, negate))
            else:
                tokens.append(Token(TokenKind.operator, c))
            i += 1
        elif c in precedence:
            tokens.append(Token(TokenKind.operator, c))
            i += 1
        else:
            raise LexError(c, i)
    return tokens


def infix2postfix(tokens):
    '''
    Converts an infix token list to a postfix token list

    Functions are held on the stack until their argument group closes
    so sin(x) becomes x sin
    '''
    stack = []
    output = []

    for token in tokens:
        if token.kind == TokenKind.number:
            output.append(token)
        elif token.kind == TokenKind.function:
            stack.append(token)
        elif token.kind == TokenKind.operator:
            prec = precedence.get(token.text, 0)
            right = token.text in right_associative
            while stack and stack[-1].kind != TokenKind.paren_open:
                top = stack[-1]
                top_prec = precedence.get(top.text, 0)
                if (top.kind == TokenKind.function or
                        (not right and prec <= top_prec) or
                        (right and prec < top_prec)):
                    output.append(stack.pop())
                else:
                    break
            stack.append(token)
        elif token.kind == TokenKind.paren_open:
            stack.append(token)
        elif token.kind == TokenKind.paren_close:
            while stack and stack[-1].kind != TokenKind.paren_open:
                output.append(stack.pop())
            if not stack:
                raise ParenMismatch()
            stack.pop()
            if stack and stack[-1].kind == TokenKind.function:
                output.append(stack.pop())

    while stack:
        token = stack.pop()
        if token.kind == TokenKind.paren_open:
            raise ParenMismatch()
        output.append(token)

    return output


def parse_number(text):
    try:
        value = float(text)
    except ValueError:
        raise NumberParseError(text) from None
    if not math.isfinite(value):
        raise NumberParseError(text)
    return value


def solve_postfix(tokens):
    '''
    Solves a postfix token list
    '''
    stack = []

    for token in tokens:
        if token.kind == TokenKind.number:
            stack.append(parse_number(token.text))
        elif token.kind == TokenKind.operator:
            if len(stack) < 2:
                raise InvalidExpression()
            b, a = stack.pop(), stack.pop()
            if token.text not in operations:
                raise UnknownOperator(token.text)
            stack.append(operations[token.text](a, b))
        elif token.kind == TokenKind.function:
            if not stack:
                raise InvalidExpression('Invalid function call')
            a = stack.pop()
            if token.text == negate:
                stack.append(-a)
            elif token.text in functions:
                stack.append(functions[token.text](a))
            else:
                raise UnknownFunction(token.text)
        else:
            raise InvalidExpression()

    if len(stack) != 1:
        raise InvalidExpression()

    return stack[0]


def evaluate(expression):
    '''
    Solves an infix expression

    Supports + - * / % ^, parentheses, unary minus
    and the single argument functions sin, cos, tan and sqrt
    Raises a subclass of EquationError on invalid input
    '''
    tokens = tokenize(expression)
    postfix = infix2postfix(tokens)
    return solve_postfix(postfix)


if __name__ == '__main__':
    print(evaluate(input('Eq: ')))
