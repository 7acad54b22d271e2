"""Command line options shared by tagcore subcommands"""

import argparse
import codecs
import io
import sys

from ..component.archive import ArchiveReader
from ..component.deplabel import DepLabeler
from ..component.lexicon import Lexicon
from ..component.pos import PosTagger
from ..conll import read_conll
from ..learning.template import FeatureTemplateSet
from ..util import concat_l


COMPONENTS = {'pos': PosTagger,
              'deplabel': DepLabeler}

DEFAULT_COMPONENT = 'pos'


class ComponentAction(argparse.Action):
    """Select the desired component class"""

    def __init__(self, option_strings, dest, nargs=None, **kwargs):
        if nargs is not None:
            raise ValueError("nargs not allowed")
        super(ComponentAction, self).__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, COMPONENTS[values])


def add_usual_input_args(parser):
    """
    Augment a subcommand argparser with the component selection and
    verbosity flags every subcommand uses
    """
    parser.add_argument('--component', '-c',
                        action=ComponentAction,
                        default=COMPONENTS[DEFAULT_COMPONENT],
                        choices=COMPONENTS,
                        help='component (default: {})'.format(
                            DEFAULT_COMPONENT))
    parser.add_argument('--verbose', '-v', action='count',
                        default=1)
    parser.add_argument('--quiet', '-q', action='store_const',
                        const=0,
                        dest='verbose')


def add_training_args(parser):
    """
    Flags for subcommands that build training spaces
    """
    parser.add_argument('--templates', '-t', metavar='FILE',
                        action='append',
                        help='feature template file, one per sub-model '
                        '(default: the packaged templates)')
    parser.add_argument('--epochs', type=int, default=10,
                        help='maximum number of training passes')


def announce(args, msg):
    "progress message, unless --quiet"
    if args.verbose:
        print(msg, file=sys.stderr)


def read_trees(args, paths):
    """All the trees of a list of CoNLL-X files"""
    trees = concat_l(read_conll(path) for path in paths)
    announce(args, 'Read {} trees from {} file(s)'.format(len(trees),
                                                          len(paths)))
    return trees


def read_templates(args):
    """Template sets named on the command line, or the component's
    default ones"""
    cls = args.component
    if not args.templates:
        return cls.default_templates()
    if len(args.templates) != cls.MODEL_SIZE:
        sys.exit('{} needs {} template files, got {}'.format(
            cls.NAME, cls.MODEL_SIZE, len(args.templates)))
    return [FeatureTemplateSet.from_file(f) for f in args.templates]


def read_lexicon(path):
    """Lexicon written by the lexica subcommand"""
    with codecs.open(path, 'r', 'utf-8') as f_in:
        return Lexicon.load(io.StringIO(f_in.read()))


def write_lexicon(lexicon, path):
    """Write a lexicon for later use by the train subcommand"""
    with codecs.open(path, 'w', 'utf-8') as f_out:
        lexicon.dump(f_out)


def load_component(args, path):
    """Decoding component read from a model archive"""
    with ArchiveReader(path) as reader:
        component = args.component.for_decoding(reader,
                                                verbose=args.verbose > 1)
    announce(args, 'Loaded {} from {}'.format(args.component.NAME, path))
    return component
