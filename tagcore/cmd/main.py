"""
tagcore command line
"""

import argparse

from ..util import add_subcommand
from . import SUBCOMMANDS


def build_parser():
    """Argument parser with one subparser per subcommand"""
    arg_parser = argparse.ArgumentParser(
        description='Train and run tagcore components')
    subparsers = arg_parser.add_subparsers(dest='subcommand',
                                           help='sub-command help')
    subparsers.required = True
    for module in SUBCOMMANDS:
        subparser = add_subcommand(subparsers, module)
        module.config_argparser(subparser)
    return arg_parser


def main(argv=None):
    "parse the command line and run the subcommand"
    args = build_parser().parse_args(argv)
    args.func(args)
