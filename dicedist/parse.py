"""
Everything related to parsing arguments from the command line.

The expression grammar itself is parsed in dicedist.roll.
"""
import argparse
from argparse import RawDescriptionHelpFormatter as RawHelp

import dicedist.exc

DESCRIPTION = """Compute the exact distribution of dice expressions.

{prog} 3d6 + 2
        Every total of 3d6 + 2 with the number of ways to roll it.
{prog} 4d6kh3, 2d20kh1
        Several expressions, separated by commas.
{prog} kh
        Advantage, 2d20 keep the highest.
{prog} 5d10cs<7
        Count how many of 5d10 roll above 7.
{prog} --yaml 2d6
        Dump the distribution as a yaml mapping.
{prog} -o table.yml 3d6, 4d6kh3
        Also save both distributions into table.yml, keeping what it held.

Operators loosest to tightest: + - * / cs<= cs< kh d
"""


class ThrowArggumentParser(argparse.ArgumentParser):
    """
    ArgumentParser subclass that does NOT terminate the program.
    """
    def print_help(self, file=None):  # pylint: disable=redefined-builtin
        formatter = self._get_formatter()
        formatter.add_text(self.description)
        raise dicedist.exc.ArgumentHelpError(formatter.format_help())

    def error(self, message):
        raise dicedist.exc.ArgumentParseError(message)

    def exit(self, status=0, message=None):
        """
        Suppress default exit behaviour.
        """
        raise dicedist.exc.ArgumentParseError(message)


def make_parser(prog='dicedist'):
    """
    Returns the command line parser.
    """
    parser = ThrowArggumentParser(prog=prog, description=DESCRIPTION.format(prog=prog),
                                  formatter_class=RawHelp)
    parser.add_argument('spec', nargs='+', help='The dice expressions, comma separated.')
    parser.add_argument('-s', '--summary', action='store_true',
                        help='Only print the summary, skip the table.')
    parser.add_argument('-y', '--yaml', action='store_true',
                        help='Print the distribution as a yaml mapping.')
    parser.add_argument('-w', '--width', type=int, default=40,
                        help='Width of the widest bar in the table.')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='Merge the distributions into this yaml file.')
    parser.add_argument('--no-limits', dest='limits', action='store_false',
                        help='Do not enforce the configured dice limits.')

    return parser


def split_specs(spec):
    """
    Join the expression words back together and split on commas.

    Returns: A list of non empty expression strings.
    """
    return [part.strip() for part in ' '.join(spec).split(',') if part.strip()]
