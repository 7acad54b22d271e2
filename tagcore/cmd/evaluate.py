"""
Score a trained component against a gold CoNLL-X corpus

Taggers are scored on tag accuracy, labelers on attachment and
labeling accuracy.
"""

from ..metrics.attachment import (attachment_report,
                                  new_counts,
                                  tag_report)
from .args import (add_usual_input_args,
                   load_component,
                   read_trees)


NAME = 'evaluate'

REPORTS = {'pos': tag_report,
           'deplabel': attachment_report}


def config_argparser(parser):
    """
    Subcommand flags.
    """
    add_usual_input_args(parser)
    parser.add_argument('model', metavar='FILE',
                        help='model archive')
    parser.add_argument('input', metavar='FILE', nargs='+',
                        help='gold corpus (CoNLL-X)')
    parser.add_argument('--digits', type=int, default=4,
                        help='number of decimals in the report')
    parser.set_defaults(func=main)


def score_component(component, trees):
    """Process gold trees in development mode, return the counts"""
    counts = new_counts()
    for tree in trees:
        component.process(tree)
        component.count_accuracy(counts)
    return counts


def main(args):
    "subcommand main"
    loaded = load_component(args, args.model)
    component = args.component.for_development(loaded.get_templates(),
                                               loaded.get_models(),
                                               loaded.get_lexica(),
                                               verbose=args.verbose > 1)
    rows = []
    for path in args.input:
        counts = score_component(component, read_trees(args, [path]))
        rows.append((path, counts))
    if len(rows) > 1:
        rows.append(('total', sum(counts for _, counts in rows)))
    report = REPORTS[component.NAME]
    print(report(rows, digits=args.digits))
