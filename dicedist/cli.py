"""
Command line front end. Everything is started upon main() execution. To invoke from root:
    python -m dicedist.cli 3d6 + 2

The core (dicedist.evaluate) places no bound on pool sizes. Building a pool
of count dice with faces sides enumerates every sorted outcome vector, so the
cost grows with C(count + faces - 1, count) rather than with count. Before
anything is evaluated the tree is walked and every pool is priced, limits
come from data/config.yml.
"""
import logging
import math
import sys

import dicedist.evaluate
import dicedist.exc
import dicedist.parse
import dicedist.roll
import dicedist.tbl
import dicedist.util

LIMIT_DIE_NUMBER = 100
LIMIT_DIE_SIDES = 1000
LIMIT_COMBINATIONS = 1000000
POOL_NODES = (dicedist.roll.Dice, dicedist.roll.KeepHighest, dicedist.roll.CountSuccesses)


def get_limits():
    """
    The configured (max dice, max sides, max combinations), falling back to module defaults.
    """
    try:
        return (dicedist.util.get_config('limits', 'dice', default=LIMIT_DIE_NUMBER),
                dicedist.util.get_config('limits', 'sides', default=LIMIT_DIE_SIDES),
                dicedist.util.get_config('limits', 'combinations', default=LIMIT_COMBINATIONS))
    except OSError:
        return LIMIT_DIE_NUMBER, LIMIT_DIE_SIDES, LIMIT_COMBINATIONS


def walk(value):
    """
    Yield every node of the tree, children before their parent.
    """
    if isinstance(value, dicedist.roll.Operator):
        yield from walk(value.left)
        yield from walk(value.right)
    yield value


def is_scalar(value):
    """ True IFF no node under value can produce dice. """
    return not any(isinstance(node, POOL_NODES) for node in walk(value))


def pool_operand(value, default):
    """
    The integer a count or faces operand evaluates to, only computed for scalar operands.

    Returns:
        The integer, default for DEFAULT, or None when the evaluator would refuse the operand.
    """
    if value is dicedist.roll.DEFAULT:
        return default
    if not is_scalar(value):
        return None

    num = dicedist.evaluate.eval_value(value).value
    return num if num >= 1 else None


def pool_work(count, faces):
    """
    Number of outcome pairs combined while rolling count dice of faces sides together.
    Step i combines the C(i + faces - 2, i - 1) outcomes of i - 1 dice with every face.
    """
    return faces * math.comb(count + faces - 1, count - 1)


def check_limits(value, max_dice=LIMIT_DIE_NUMBER, max_sides=LIMIT_DIE_SIDES,
                 max_work=LIMIT_COMBINATIONS):
    """
    Walk the tree and refuse it if its dice pools are too costly to enumerate.
    Only dice free operands are evaluated to learn a pool's count and faces,
    nested pools are priced before the pool that contains them.

    Raises:
        InvalidCommandArgs: User specified an amount of dice or sides that is unreasonable.

    Returns:
        The value that was passed in.
    """
    total = 0
    for node in walk(value):
        if not isinstance(node, dicedist.roll.Dice):
            continue

        count = pool_operand(node.left, 1)
        faces = pool_operand(node.right, dicedist.evaluate.DEFAULT_FACES)
        if count is None or faces is None:
            continue

        if count > max_dice or faces > max_sides:
            raise dicedist.exc.InvalidCommandArgs(
                "Please roll a lower number of dice or sides. Limits: {}d{}".format(max_dice, max_sides))

        total += pool_work(count, faces)
        if total > max_work:
            raise dicedist.exc.InvalidCommandArgs(
                "Too many combinations to enumerate: over {:,}, limit {:,}".format(total, max_work))

    return value


def format_result(spec, dist, args):
    """
    Format one evaluated expression for the terminal.
    """
    if args.yaml:
        return dicedist.util.dump_yaml({spec: dist.to_dict()})

    msg = '__{}__\n'.format(spec) + dicedist.tbl.format_summary(dist)
    if not args.summary:
        lines = dicedist.tbl.distribution_lines(dist, width=args.width)
        msg += '\n\n' + dicedist.tbl.format_table(lines, header=True)

    return msg


def compute_spec(spec, args):
    """
    Parse, check and evaluate one expression.

    Raises:
        ParseError, EvalError, InvalidCommandArgs: See dicedist.exc.

    Returns:
        The Distribution of spec.
    """
    log = logging.getLogger('dicedist.cli')
    value = dicedist.roll.parse_value(spec)
    log.debug('Parsed %s into %r', spec, value)
    if args.limits:
        check_limits(value, *get_limits())

    dist = dicedist.evaluate.to_distribution(dicedist.evaluate.eval_value(value))
    log.info('Evaluated %s: %d distinct results', spec, len(dist))

    return dist


def process_spec(spec, args):
    """
    Evaluate one expression and return the formatted output for spec.
    """
    return format_result(spec, compute_spec(spec, args), args)


def save_results(fname, results):
    """
    Merge results into the yaml file fname, entries for other expressions are kept.

    Raises:
        InvalidCommandArgs: fname exists but does not hold a mapping.
        InternalException: fname could not be read or written.

    Returns:
        The merged mapping that was written.
    """
    try:
        merged = dicedist.util.load_yaml(fname) or {}
    except OSError as exc:
        raise dicedist.exc.InternalException('Failed to read {}: {}'.format(fname, exc)) from exc
    if not isinstance(merged, dict):
        raise dicedist.exc.InvalidCommandArgs('{} does not hold a mapping of results.'.format(fname))

    merged.update(results)
    try:
        dicedist.util.write_yaml(fname, merged)
    except OSError as exc:
        raise dicedist.exc.InternalException('Failed to write {}: {}'.format(fname, exc)) from exc

    return merged


def main(argv=None):
    """ Entry here! """
    log = logging.getLogger('dicedist.cli')
    try:
        dicedist.util.init_logging()
    except (OSError, KeyError) as exc:
        print('Logging disabled, bad config: ' + str(exc), file=sys.stderr)

    try:
        args = dicedist.parse.make_parser().parse_args(sys.argv[1:] if argv is None else argv)
    except dicedist.exc.ArgumentHelpError as exc:
        print(str(exc))
        return 0
    except dicedist.exc.ArgumentParseError as exc:
        print('Error: ' + str(exc), file=sys.stderr)
        return 2

    ret = 0
    outputs, results = [], {}
    for spec in dicedist.parse.split_specs(args.spec):
        try:
            dist = compute_spec(spec, args)
            outputs += [format_result(spec, dist, args)]
            results[spec] = dist.to_dict()
        except dicedist.exc.UserException as exc:
            dicedist.exc.write_log(exc, log, expression=spec)
            outputs += ['__{}__\n{}'.format(spec, str(exc).strip())]
            ret = 1

    print('\n\n'.join(outputs))

    if args.output and results:
        try:
            save_results(args.output, results)
        except dicedist.exc.DiceException as exc:
            dicedist.exc.write_log(exc, log, expression=', '.join(results))
            print('Error: ' + str(exc), file=sys.stderr)
            ret = 1

    return ret


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
