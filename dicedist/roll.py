"""
Parse a dice expression into a tree of values.

Grammar:
    value    := "" | integer | "(" value ")" | value operator value
    operator := "+" | "-" | "*" | "/" | "cs<=" | "cs<" | "kh" | "d"

Fixed Order of Splitting (loosest to tightest):
    +, -, *, /, cs<=, cs<, kh, d

For each operator in order, the expression is split on the last occurrence
of that operator outside of any parentheses. The first operator that splits
wins, so + sits highest in the tree and d binds tightest. An empty side
becomes the DEFAULT value, which lets the evaluator fill in implicit
arguments (d6 is one die, kh2 is 2d20 keep 2).

Examples:
    2 + 2       Plus(Constant(2), Constant(2))
    4d6kh3      KeepHighest(Dice(Constant(4), Constant(6)), Constant(3))
    d20         Dice(DEFAULT, Constant(20))
    4d6cs<=4    CountSuccesses(Dice(4, 6), Plus(Constant(4), Constant(1)))
"""
import re

import dicedist.exc
from dicedist.util import ReprMixin

OPERATORS = ['+', '-', '*', '/', 'cs<=', 'cs<', 'kh', 'd']
IS_CONSTANT = re.compile(r'[-+]?[0-9]+', re.ASCII)
IS_OPERATOR = [(op, re.compile(re.escape(op), re.ASCII)) for op in OPERATORS]
IS_VALID_TOKEN = re.compile('|'.join(re.escape(tok) for tok in OPERATORS + list('0123456789()')),
                            re.ASCII)
PARENS_MAP = {'(': 1, ')': -1}


class Value(ReprMixin):
    """
    Base of every node in an expression tree.

    Nodes are never modified after creation, sub trees may be shared.
    """
    @staticmethod
    def parse(text):
        """ Shortcut for parse_value. """
        return parse_value(text)


class Default(Value):
    """
    An operand the user left out, only ever one instance: DEFAULT.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'DEFAULT'

    def __str__(self):
        return ''


class Constant(Value):
    """
    A literal integer.

    Attributes:
        value: The integer.
    """
    _repr_keys = ['value']

    def __init__(self, value):
        self.value = int(value)

    def __eq__(self, other):
        return isinstance(other, Constant) and self.value == other.value

    def __hash__(self):
        return hash(('Constant', self.value))

    def __str__(self):
        if self.value < 0:
            return '({})'.format(self.value)

        return str(self.value)


class Operator(Value):
    """
    A binary operation over two values.

    Attributes:
        left: The Value to the left of the symbol.
        right: The Value to the right of the symbol.
    """
    _repr_keys = ['left', 'right']
    symbol = None

    def __init__(self, left, right):
        self.left = left
        self.right = right

    def __eq__(self, other):
        return type(self) is type(other) and (self.left, self.right) == (other.left, other.right)

    def __hash__(self):
        return hash((self.__class__.__name__, self.left, self.right))

    def __str__(self):
        return '({} {} {})'.format(self.left, self.symbol, self.right).replace('( ', '(').replace(' )', ')')


class Plus(Operator):
    """ Sum of left and right. """
    symbol = '+'


class Minus(Operator):
    """ Difference of left and right. """
    symbol = '-'


class Multiply(Operator):
    """ Product of left and right. """
    symbol = '*'


class Divide(Operator):
    """ Truncating quotient of left and right. """
    symbol = '/'


class KeepHighest(Operator):
    """ Keep right highest dice of the left pool. """
    symbol = 'kh'


class CountSuccesses(Operator):
    """ Count dice of the left pool above right. """
    symbol = 'cs<'


class Dice(Operator):
    """ Roll left dice with right faces. """
    symbol = 'd'


DEFAULT = Default()


def count_successes_inclusive(left, right):
    """
    The cs<= form is sugar for cs< with the threshold raised by one.
    """
    return CountSuccesses(left, Plus(right, Constant(1)))


OPERATOR_MAP = {
    '+': Plus,
    '-': Minus,
    '*': Multiply,
    '/': Divide,
    'cs<=': count_successes_inclusive,
    'cs<': CountSuccesses,
    'kh': KeepHighest,
    'd': Dice,
}


def check_parentheses(line):
    """
    Go over a string and ensure every closing parenthesis has an opening one before it.

    Raises:
        InvalidParentheses: The parentheses are not balanced.

    Returns:
        The line that was passed in.
    """
    cnt = 0
    for char in line:
        cnt += PARENS_MAP.get(char, 0)
        if cnt < 0:
            break

    if cnt != 0:
        raise dicedist.exc.InvalidParentheses()

    return line


def paren_depth(line):
    """ The nesting depth reached at the end of line. """
    return sum(PARENS_MAP.get(char, 0) for char in line)


def is_wrapped(line):
    """
    True IFF the whole of line sits inside one outer pair of parentheses.
    """
    if not line.startswith('(') or not line.endswith(')'):
        return False

    depth = 0
    for ind, char in enumerate(line):
        depth += PARENS_MAP.get(char, 0)
        if depth == 0:
            return ind == len(line) - 1

    return False


def split_top_level(line, regex):
    """
    Find the last match of regex that is outside all parentheses.

    Returns:
        (left, right) substrings around the match, or None if no match.
    """
    for match in reversed(list(regex.finditer(line))):
        if paren_depth(line[:match.start()]) == 0:
            return line[:match.start()], line[match.end():]

    return None


def find_invalid_tokens(line):
    """
    Replace every valid token by a space, whatever remains is invalid.

    Returns:
        List of distinct invalid fragments in order found.
    """
    found = []
    for token in IS_VALID_TOKEN.sub(' ', line).split():
        if token not in found:
            found += [token]

    return found


def parse_value(text):
    """
    Parse a complete expression into a tree of values.

    Raises:
        InvalidParentheses: The parentheses are not balanced.
        InvalidOperators: Part of text is not a valid token or could not be split.

    Returns:
        A Value, one of DEFAULT, Constant or an Operator subclass.
    """
    return _parse(check_parentheses(text.strip()))


def _parse(line):
    """
    Recursive part of parse_value, line must have balanced parentheses.
    """
    line = line.strip()
    if not line:
        return DEFAULT

    if is_wrapped(line):
        return _parse(line[1:-1])

    if IS_CONSTANT.fullmatch(line):
        return Constant(line)

    for symbol, regex in IS_OPERATOR:
        parts = split_top_level(line, regex)
        if parts:
            left, right = parts
            return OPERATOR_MAP[symbol](_parse(left), _parse(right))

    raise dicedist.exc.InvalidOperators(find_invalid_tokens(line))
