"""
Common exceptions.

Parse errors and evaluation errors are kept in separate branches so
the caller can tell them apart.
"""


class DiceException(Exception):
    """
    All project exceptions subclass this.
    """
    def __init__(self, msg=None, lvl='info'):
        super().__init__(msg)
        self.log_level = lvl


class UserException(DiceException):
    """
    Exception occurred usually due to user error.

    Not unexpected but can indicate a problem.
    """


class ArgumentParseError(UserException):
    """ Error raised on failure to parse arguments. """


class ArgumentHelpError(UserException):
    """ Error raised on request to print help for command. """


class InvalidCommandArgs(UserException):
    """ Unable to process command due to bad arguements.  """


class ParseError(UserException):
    """
    The expression could not be turned into a tree.
    """


class InvalidParentheses(ParseError):
    """ Parentheses are not balanced. """
    def __init__(self, msg='Invalid Parentheses'):
        super().__init__(msg)


class InvalidOperators(ParseError):
    """
    One or more fragments of the expression are not valid tokens.

    Attributes:
        tokens: The list of offending fragments, in order found.
    """
    def __init__(self, tokens):
        self.tokens = list(tokens)
        msg = ''.join('Invalid Operator: {}\n'.format(tok) for tok in self.tokens)
        super().__init__(msg if msg else 'Invalid Expression: no operator joins the values')


class EvalError(UserException):
    """
    The tree was valid but could not be evaluated.
    """
    default_msg = 'Eval Error'

    def __init__(self, msg=None):
        super().__init__(msg if msg else self.default_msg)


class InvalidArgForDice(EvalError):
    """ Dice count and faces must both be positive constants. """
    default_msg = 'Eval Error: Invalid Arg for Dice'


class InvalidArgForKeepHighest(EvalError):
    """ Keep highest requires a dice pool and a positive constant. """
    default_msg = 'Eval Error: Invalid arg for keep highest'


class InvalidArgForCountSuccesses(EvalError):
    """ Count successes requires a dice pool and a positive constant. """
    default_msg = 'Eval Error: Invalid arg for count successes'


class MultiplyDiceWithDice(EvalError):
    """ Two random outcomes cannot be multiplied. """
    default_msg = 'Eval Error: Tried multiplying dice with other dice'


class DivideDiceWithDice(EvalError):
    """ Two random outcomes cannot be divided. """
    default_msg = 'Eval Error: Tried dividing dice with other dice'


class DivideByZero(EvalError):
    """ A divisor was, or could be, zero. """
    default_msg = 'Eval Error: Tried dividing by zero'


class InternalException(DiceException):
    """
    An internal exception that went uncaught.

    Indicates a severe problem.
    """
    def __init__(self, msg, lvl='exception'):
        super().__init__(msg, lvl)


def log_format(*, expression, kind):
    """ Log useful information about the failed expression. """
    msg = "{kind} while evaluating: {exp}"
    msg += "\n    Length: " + str(len(expression))
    return msg.format(kind=kind, exp=expression)


def write_log(exc, log, *, lvl='info', expression):
    """
    Log all relevant information about this evaluation.
    """
    log_func = getattr(log, getattr(exc, 'log_level', lvl))
    header = '\n{}\n{}\n'.format(exc.__class__.__name__ + ': ' + str(exc).strip(), '=' * 20)
    if isinstance(exc, ParseError):
        kind = 'Parse failed'
    elif isinstance(exc, EvalError):
        kind = 'Eval failed'
    else:
        kind = 'Failed'
    log_func(header + log_format(expression=expression, kind=kind))
