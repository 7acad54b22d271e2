"""
Collect lexica from a training corpus

The lexicon lists the frequent (simplified) word forms of the corpus
with their ambiguity classes.  It can be handed to the train
subcommand, which otherwise collects its own.
"""

from .args import (add_usual_input_args,
                   announce,
                   read_trees,
                   write_lexicon)


NAME = 'lexica'


def config_argparser(parser):
    """
    Subcommand flags.
    """
    add_usual_input_args(parser)
    parser.add_argument('output', metavar='FILE',
                        help='lexicon file to write')
    parser.add_argument('input', metavar='FILE', nargs='+',
                        help='training corpus (CoNLL-X)')
    parser.add_argument('--cutoff', type=int, default=0,
                        help='drop forms seen at most this many times')
    parser.set_defaults(func=main)


def collect_lexica(args, trees):
    """Run the selected component in lexica mode over the trees"""
    cls = args.component
    component = cls.for_lexica(cls.default_templates(),
                               lexicon_cutoff=args.cutoff,
                               verbose=args.verbose > 1)
    for tree in trees:
        component.process(tree)
    return component.get_lexica()


def main(args):
    "subcommand main"
    lexicon = collect_lexica(args, read_trees(args, args.input))
    write_lexicon(lexicon, args.output)
    announce(args, '{} forms written to {}'.format(
        len(lexicon.ambiguity_classes), args.output))
