"""Attachment and labeling accuracy for dependency trees.

Counts are kept in a 4-slot integer array owned by the caller and only
ever added to, so that counts from many trees (or many processes) can
simply be summed ::

    [total, labeled correct, unlabeled correct, label correct]
"""

from collections import namedtuple

import numpy as np
from tabulate import tabulate


TOTAL = 0
LAS = 1
UAS = 2
LS = 3


def new_counts():
    "a zeroed count array"
    return np.zeros(4, dtype=int)


def count_accuracy_dep(tree, gold_heads, counts):
    """Add the attachment counts of a predicted tree to `counts`.

    Parameters
    ----------
    tree : DepTree
        Predicted tree, artificial root at position 0.
    gold_heads : list of GoldHead
        Reference attachment of each position of the tree (position 0
        is never looked at).
    counts : array of int, shape=[4]
        Running counts, updated in place.

    Notes
    -----
    A token with the right head counts towards UAS, and towards LAS if
    its label is also right. A token with the right label counts
    towards LS whether or not its head is right. Labels are compared
    with plain equality, so an unlabeled token matches an unlabeled
    gold token.
    """
    size = len(tree)
    counts[TOTAL] += size - 1
    for i in range(1, size):
        node = tree[i]
        gold = gold_heads[i]
        gold_head = tree[gold.head] if 0 <= gold.head < size else None
        if node.has_head(gold_head):
            counts[UAS] += 1
            if node.has_label(gold.label):
                counts[LAS] += 1
        if node.has_label(gold.label):
            counts[LS] += 1


class AttachmentScores(namedtuple('AttachmentScores',
                                  'las uas ls ls_attached')):
    """Scores derived from attachment counts.

    :param las: labeled attachment score
    :param uas: unlabeled attachment score
    :param ls: label accuracy
    :param ls_attached: label accuracy among correctly attached tokens
    """
    pass


def _ratio(num, den):
    "num/den, 0.0 when there is nothing to divide by"
    return float(num) / den if den else 0.0


def attachment_scores(counts):
    """Derive the scores of a count array"""
    return AttachmentScores(las=_ratio(counts[LAS], counts[TOTAL]),
                            uas=_ratio(counts[UAS], counts[TOTAL]),
                            ls=_ratio(counts[LS], counts[TOTAL]),
                            ls_attached=_ratio(counts[LAS], counts[UAS]))


def tag_accuracy(counts):
    """Tagging accuracy of a count array filled by a tagger
    (`counts[TOTAL]` tokens, `counts[1]` of them correct)"""
    return _ratio(counts[1], counts[TOTAL])


def attachment_report(rows, digits=4):
    """Text table of attachment scores.

    Parameters
    ----------
    rows : list of (string, counts)
        One row per system (or corpus section) to report.
    digits : int, defaults to 4
        Number of decimals.
    """
    headers = ['', 'tokens', 'LAS', 'UAS', 'LS', 'LS|attached']
    table = []
    for name, counts in rows:
        scores = attachment_scores(counts)
        table.append([name, int(counts[TOTAL])] +
                     [round(x, digits) for x in scores])
    return tabulate(table, headers=headers, floatfmt='.{}f'.format(digits))


def tag_report(rows, digits=4):
    """Text table of tagging accuracies, see `attachment_report`"""
    headers = ['', 'tokens', 'correct', 'accuracy']
    table = [[name, int(counts[TOTAL]), int(counts[1]),
              round(tag_accuracy(counts), digits)]
             for name, counts in rows]
    return tabulate(table, headers=headers, floatfmt='.{}f'.format(digits))
