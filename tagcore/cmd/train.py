"""
Train a component and save it as a model archive

Training goes through two passes over the corpus: one collecting
lexica (skipped if --lexica is given), one generating training
instances for each sub-model.
"""

from ..component.archive import ArchiveWriter
from ..learning.space import StringTrainSpace
from .args import (add_training_args,
                   add_usual_input_args,
                   announce,
                   read_lexicon,
                   read_templates,
                   read_trees)
from .lexica import collect_lexica


NAME = 'train'


def config_argparser(parser):
    """
    Subcommand flags.
    """
    add_usual_input_args(parser)
    add_training_args(parser)
    parser.add_argument('output', metavar='FILE',
                        help='model archive to write')
    parser.add_argument('input', metavar='FILE', nargs='+',
                        help='training corpus (CoNLL-X)')
    parser.add_argument('--lexica', metavar='FILE',
                        help='lexicon from the lexica subcommand')
    parser.add_argument('--lexicon-cutoff', type=int, default=0,
                        dest='cutoff',
                        help='when collecting lexica, drop forms seen '
                        'at most this many times')
    parser.set_defaults(func=main)


def train_spaces(args, spaces):
    """One model per training space"""
    models = []
    for i, space in enumerate(spaces):
        announce(args, 'Training sub-model {} ({} instances)'.format(
            i, len(space)))
        models.append(space.train(epochs=args.epochs,
                                  verbose=args.verbose > 1))
    return models


def train_models(args, templates, lexicon, trees):
    """Generate training instances for each sub-model and train them"""
    spaces = [StringTrainSpace.for_templates(t) for t in templates]
    component = args.component.for_training(templates, spaces, lexicon,
                                             verbose=args.verbose > 1)
    for tree in trees:
        component.process(tree)
    return train_spaces(args, component.get_train_spaces())


def save_component(args, component, path):
    """Write a component to a model archive"""
    with ArchiveWriter(path) as writer:
        component.save_models(writer)
    announce(args, 'Saved {} to {}'.format(component.NAME, path))


def main(args):
    "subcommand main"
    templates = read_templates(args)
    trees = read_trees(args, args.input)
    if args.lexica:
        lexicon = read_lexicon(args.lexica)
    else:
        lexicon = collect_lexica(args, trees)
    models = train_models(args, templates, lexicon, trees)
    component = args.component.for_development(templates, models, lexicon,
                                               verbose=args.verbose > 1)
    save_component(args, component, args.output)
