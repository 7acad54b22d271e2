"""
Decode a CoNLL-X corpus with a trained component
"""

from ..conll import dump_conll
from .args import (add_usual_input_args,
                   announce,
                   load_component,
                   read_trees)


NAME = 'decode'


def config_argparser(parser):
    """
    Subcommand flags.
    """
    add_usual_input_args(parser)
    parser.add_argument('model', metavar='FILE',
                        help='model archive')
    parser.add_argument('input', metavar='FILE',
                        help='corpus to decode (CoNLL-X)')
    parser.add_argument('output', metavar='FILE',
                        help='decoded corpus (CoNLL-X)')
    parser.set_defaults(func=main)


def main(args):
    "subcommand main"
    component = load_component(args, args.model)
    trees = read_trees(args, [args.input])
    for tree in trees:
        component.process(tree)
    dump_conll(trees, args.output)
    announce(args, 'Wrote {} trees to {}'.format(len(trees), args.output))
