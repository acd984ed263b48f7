"""
Evaluate an expression tree into a Distribution.

Every node evaluates to one of three results:
    Constant    a plain integer
    PreDice     a PossibilitySpace, dice not yet summed (keep highest works here)
    PostDice    a Distribution, already summed

Operands the user left out stay DEFAULT while an operator is evaluated so
each operator can fill in its own implicit argument.

Each operator owns a Dispatch table keyed on the kinds of its two operands:
    default, constant, pre, post
A pair missing from the table is that operator's error. Keep highest and
count successes refuse a literal count below 1 before evaluating the pool.
"""
import itertools

import dicedist.exc
import dicedist.roll
from dicedist.dist import Distribution
from dicedist.space import PossibilitySpace
from dicedist.util import ReprMixin

DEFAULT = 'default'
CONSTANT = 'constant'
PRE = 'pre'
POST = 'post'
DICE = (PRE, POST)
ANY = (CONSTANT, PRE, POST)
DEFAULT_FACES = 6
ADVANTAGE_DICE, ADVANTAGE_FACES = 2, 20
SUCCESS_FACES, SUCCESS_THRESHOLD = 10, 6


class EvalValue(ReprMixin):
    """
    Result of evaluating one node.
    """
    kind = None

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((self.kind, self._key()))

    def _key(self):
        raise NotImplementedError

    def distribution(self):
        """ Collapse this result into a Distribution. """
        raise NotImplementedError


class Constant(EvalValue):
    """ A certain integer. """
    kind = CONSTANT
    _repr_keys = ['value']

    def __init__(self, value):
        self.value = value

    def _key(self):
        return self.value

    def distribution(self):
        return Distribution.constant(self.value)


class PreDice(EvalValue):
    """ A pool of dice whose faces are still known individually. """
    kind = PRE
    _repr_keys = ['space']

    def __init__(self, space):
        self.space = space

    def _key(self):
        return self.space

    def distribution(self):
        return Distribution.from_space(self.space)


class PostDice(EvalValue):
    """ Dice already summed into a Distribution. """
    kind = POST
    _repr_keys = ['dist']

    def __init__(self, dist):
        self.dist = dist

    def _key(self):
        return self.dist

    def distribution(self):
        return self.dist


class Dispatch():
    """
    Table of rules for one operator, keyed by (left kind, right kind).

    Attributes:
        name: Name of the operator, for messages.
        error: The EvalError subclass raised for pairs without a rule.
        rules: Dict of (left kind, right kind) -> func(left, right).
        positive_literal: When set, a literal right operand below 1 is refused
                          before either operand is evaluated.
    """
    def __init__(self, name, error, positive_literal=False):
        self.name = name
        self.error = error
        self.rules = {}
        self.positive_literal = positive_literal

    def __repr__(self):
        return "Dispatch(name={!r}, error={}, rules={})".format(
            self.name, self.error.__name__, sorted(self.rules))

    def register(self, lefts, rights):
        """
        Decorator, register func for every pair in lefts x rights.
        Either may be a single kind or a tuple of kinds.
        """
        lefts = (lefts,) if isinstance(lefts, str) else lefts
        rights = (rights,) if isinstance(rights, str) else rights

        def inner(func):
            for pair in itertools.product(lefts, rights):
                if pair in self.rules:
                    raise ValueError("Rule for {} already registered on {}.".format(pair, self.name))
                self.rules[pair] = func
            return func

        return inner

    def check_literal(self, right):
        """
        Raises:
            error: positive_literal is set and right is a literal Constant below 1.
        """
        if self.positive_literal and isinstance(right, dicedist.roll.Constant) and right.value < 1:
            raise self.error()

    def __call__(self, left, right):
        try:
            func = self.rules[(kind_of(left), kind_of(right))]
        except KeyError:
            raise self.error() from None

        return func(left, right)


def kind_of(operand):
    """ The dispatch kind of an evaluated operand or of DEFAULT. """
    if operand is dicedist.roll.DEFAULT:
        return DEFAULT

    return operand.kind


def trunc_div(num, den):
    """
    Integer division rounding toward zero.

    Raises:
        DivideByZero: den is 0.
    """
    if den == 0:
        raise dicedist.exc.DivideByZero()

    quot = abs(num) // abs(den)
    return -quot if (num < 0) != (den < 0) else quot


def nonzero_divisor(operand):
    """
    The Distribution of a dice divisor, refusing any chance of zero.

    Raises:
        DivideByZero: 0 is a possible result of operand.
    """
    dist = operand.distribution()
    if 0 in dist:
        raise dicedist.exc.DivideByZero()

    return dist


def positive(operand, error):
    """
    The value of a constant operand, it must be >= 1.

    Raises:
        error: The value is not positive.
    """
    if operand.value < 1:
        raise error()

    return operand.value


def left_operand(left, _):
    return left


def right_operand(_, right):
    return right


# Plus: DEFAULT is the identity, dice always collapse before convolving.
PLUS = Dispatch('+', dicedist.exc.EvalError)
PLUS.register(DEFAULT, DEFAULT)(lambda left, right: Constant(0))
PLUS.register(DEFAULT, ANY)(right_operand)
PLUS.register(ANY, DEFAULT)(left_operand)


@PLUS.register(CONSTANT, CONSTANT)
def plus_constants(left, right):
    return Constant(left.value + right.value)


@PLUS.register(CONSTANT, DICE)
def plus_constant_dice(left, right):
    return PostDice(right.distribution().mutate(lambda x: left.value + x))


@PLUS.register(DICE, CONSTANT)
def plus_dice_constant(left, right):
    return PostDice(left.distribution().mutate(lambda x: x + right.value))


@PLUS.register(DICE, DICE)
def plus_dice(left, right):
    return PostDice(left.distribution() + right.distribution())


# Minus: x - DEFAULT is x, DEFAULT - x negates.
MINUS = Dispatch('-', dicedist.exc.EvalError)
MINUS.register(DEFAULT, DEFAULT)(lambda left, right: Constant(0))
MINUS.register(ANY, DEFAULT)(left_operand)


@MINUS.register(DEFAULT, CONSTANT)
def negate_constant(_, right):
    return Constant(-right.value)


@MINUS.register(DEFAULT, DICE)
def negate_dice(_, right):
    return PostDice(right.distribution().mutate(lambda x: -x))


@MINUS.register(CONSTANT, CONSTANT)
def minus_constants(left, right):
    return Constant(left.value - right.value)


@MINUS.register(CONSTANT, DICE)
def minus_constant_dice(left, right):
    return PostDice(right.distribution().mutate(lambda x: left.value - x))


@MINUS.register(DICE, CONSTANT)
def minus_dice_constant(left, right):
    return PostDice(left.distribution().mutate(lambda x: x - right.value))


@MINUS.register(DICE, DICE)
def minus_dice(left, right):
    return PostDice(left.distribution() - right.distribution())


# Multiply: DEFAULT is the identity, scalars scale every result, dice * dice unsupported.
MULTIPLY = Dispatch('*', dicedist.exc.MultiplyDiceWithDice)
MULTIPLY.register(DEFAULT, DEFAULT)(lambda left, right: Constant(1))
MULTIPLY.register(DEFAULT, ANY)(right_operand)
MULTIPLY.register(ANY, DEFAULT)(left_operand)


@MULTIPLY.register(CONSTANT, CONSTANT)
def multiply_constants(left, right):
    return Constant(left.value * right.value)


@MULTIPLY.register(CONSTANT, DICE)
def multiply_constant_dice(left, right):
    return PostDice(right.distribution().mutate(lambda x: x * left.value))


@MULTIPLY.register(DICE, CONSTANT)
def multiply_dice_constant(left, right):
    return PostDice(left.distribution().mutate(lambda x: x * right.value))


# Divide: truncating, x / DEFAULT is x, DEFAULT / x is 1 / x.
DIVIDE = Dispatch('/', dicedist.exc.DivideDiceWithDice)
DIVIDE.register(DEFAULT, DEFAULT)(lambda left, right: Constant(1))
DIVIDE.register(ANY, DEFAULT)(left_operand)


@DIVIDE.register(DEFAULT, CONSTANT)
def divide_one_constant(_, right):
    return Constant(trunc_div(1, right.value))


@DIVIDE.register(DEFAULT, DICE)
def divide_one_dice(_, right):
    return PostDice(nonzero_divisor(right).mutate(lambda x: trunc_div(1, x)))


@DIVIDE.register(CONSTANT, CONSTANT)
def divide_constants(left, right):
    return Constant(trunc_div(left.value, right.value))


@DIVIDE.register(CONSTANT, DICE)
def divide_constant_dice(left, right):
    return PostDice(nonzero_divisor(right).mutate(lambda x: trunc_div(left.value, x)))


@DIVIDE.register(DICE, CONSTANT)
def divide_dice_constant(left, right):
    if right.value == 0:
        raise dicedist.exc.DivideByZero()

    return PostDice(left.distribution().mutate(lambda x: trunc_div(x, right.value)))


# Dice: count d faces, count defaults to 1 and faces to 6.
DICE_OP = Dispatch('d', dicedist.exc.InvalidArgForDice)


@DICE_OP.register(DEFAULT, DEFAULT)
def dice_defaults(_, __):
    return PreDice(PossibilitySpace.die(DEFAULT_FACES))


@DICE_OP.register(DEFAULT, CONSTANT)
def dice_one(_, right):
    faces = positive(right, dicedist.exc.InvalidArgForDice)
    return PreDice(PossibilitySpace.die(faces))


@DICE_OP.register(CONSTANT, DEFAULT)
def dice_default_faces(left, _):
    count = positive(left, dicedist.exc.InvalidArgForDice)
    return PreDice(PossibilitySpace.die(DEFAULT_FACES).multiply(count))


@DICE_OP.register(CONSTANT, CONSTANT)
def dice_pool(left, right):
    count = positive(left, dicedist.exc.InvalidArgForDice)
    faces = positive(right, dicedist.exc.InvalidArgForDice)
    return PreDice(PossibilitySpace.die(faces).multiply(count))


# KeepHighest: pool defaults to 2d20 (advantage), keep defaults to 1.
KEEP_HIGHEST = Dispatch('kh', dicedist.exc.InvalidArgForKeepHighest, positive_literal=True)


def advantage_pool():
    return PossibilitySpace.die(ADVANTAGE_FACES).multiply(ADVANTAGE_DICE)


@KEEP_HIGHEST.register(DEFAULT, DEFAULT)
def keep_highest_defaults(_, __):
    return PreDice(advantage_pool().keep_highest(1))


@KEEP_HIGHEST.register(DEFAULT, CONSTANT)
def keep_highest_advantage(_, right):
    num = positive(right, dicedist.exc.InvalidArgForKeepHighest)
    return PreDice(advantage_pool().keep_highest(num))


@KEEP_HIGHEST.register(PRE, DEFAULT)
def keep_highest_one(left, _):
    return PreDice(left.space.keep_highest(1))


@KEEP_HIGHEST.register(PRE, CONSTANT)
def keep_highest_pool(left, right):
    num = positive(right, dicedist.exc.InvalidArgForKeepHighest)
    return PreDice(left.space.keep_highest(num))


# CountSuccesses: pool defaults to 1d10, threshold defaults to 6.
COUNT_SUCCESSES = Dispatch('cs<', dicedist.exc.InvalidArgForCountSuccesses, positive_literal=True)


@COUNT_SUCCESSES.register(DEFAULT, DEFAULT)
def count_successes_defaults(_, __):
    return PreDice(PossibilitySpace.die(SUCCESS_FACES).count_successes(SUCCESS_THRESHOLD))


@COUNT_SUCCESSES.register(DEFAULT, CONSTANT)
def count_successes_d10(_, right):
    threshold = positive(right, dicedist.exc.InvalidArgForCountSuccesses)
    return PreDice(PossibilitySpace.die(SUCCESS_FACES).count_successes(threshold))


@COUNT_SUCCESSES.register(PRE, DEFAULT)
def count_successes_default_threshold(left, _):
    return PreDice(left.space.count_successes(SUCCESS_THRESHOLD))


@COUNT_SUCCESSES.register(PRE, CONSTANT)
def count_successes_pool(left, right):
    threshold = positive(right, dicedist.exc.InvalidArgForCountSuccesses)
    return PreDice(left.space.count_successes(threshold))


DISPATCH = {
    dicedist.roll.Plus: PLUS,
    dicedist.roll.Minus: MINUS,
    dicedist.roll.Multiply: MULTIPLY,
    dicedist.roll.Divide: DIVIDE,
    dicedist.roll.KeepHighest: KEEP_HIGHEST,
    dicedist.roll.CountSuccesses: COUNT_SUCCESSES,
    dicedist.roll.Dice: DICE_OP,
}


def eval_operand(value):
    """
    Evaluate one operand of an operator, DEFAULT is passed through untouched.
    """
    if value is dicedist.roll.DEFAULT:
        return value

    return eval_value(value)


def eval_value(value):
    """
    Evaluate a tree bottom up.

    Raises:
        EvalError: Some operator could not be applied to its operands.

    Returns:
        A Constant, PreDice or PostDice. A lone DEFAULT is Constant(0).
    """
    if value is dicedist.roll.DEFAULT:
        return Constant(0)
    if isinstance(value, dicedist.roll.Constant):
        return Constant(value.value)

    table = DISPATCH[type(value)]
    table.check_literal(value.right)

    return table(eval_operand(value.left), eval_operand(value.right))


def to_distribution(result):
    """ Coerce any evaluation result into a Distribution. """
    return result.distribution()


def evaluate(expression):
    """
    Compute the exact distribution of a dice expression.

    Raises:
        ParseError: The expression could not be parsed.
        EvalError: The expression could not be evaluated.

    Returns:
        A Distribution of result -> number of ways.
    """
    return to_distribution(eval_value(dicedist.roll.parse_value(expression)))
