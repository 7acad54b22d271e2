"""
Retrain a component from its own predictions

Each iteration decodes the training corpus with the current models,
using the predicted labels as context for later decisions, while
collecting instances labeled with the gold annotation.  The models
trained from those instances replace the current ones.
"""

from ..learning.space import StringTrainSpace
from .args import (add_usual_input_args,
                   announce,
                   load_component,
                   read_trees)
from .train import save_component, train_spaces


NAME = 'bootstrap'


def config_argparser(parser):
    """
    Subcommand flags.
    """
    add_usual_input_args(parser)
    parser.add_argument('model', metavar='FILE',
                        help='model archive to start from')
    parser.add_argument('output', metavar='FILE',
                        help='model archive to write')
    parser.add_argument('input', metavar='FILE', nargs='+',
                        help='training corpus (CoNLL-X)')
    parser.add_argument('--iterations', '-n', type=int, default=2,
                        help='number of bootstrapping iterations')
    parser.add_argument('--epochs', type=int, default=10,
                        help='maximum number of training passes')
    parser.set_defaults(func=main)


def bootstrap_once(args, templates, models, lexicon):
    """One bootstrapping iteration, returns the new models"""
    spaces = [StringTrainSpace.for_templates(t) for t in templates]
    component = args.component.for_bootstrapping(templates, spaces, models,
                                                 lexicon,
                                                 verbose=args.verbose > 1)
    # trees are overwritten with predictions, so read them afresh
    for tree in read_trees(args, args.input):
        component.process(tree)
    return train_spaces(args, component.get_train_spaces())


def main(args):
    "subcommand main"
    start = load_component(args, args.model)
    templates = start.get_templates()
    models = start.get_models()
    lexicon = start.get_lexica()
    for i in range(args.iterations):
        announce(args, 'Bootstrapping iteration {}'.format(i + 1))
        models = bootstrap_once(args, templates, models, lexicon)
    component = args.component.for_development(templates, models, lexicon,
                                               verbose=args.verbose > 1)
    save_component(args, component, args.output)
