"""
Tests for tagcore.metrics
"""

import unittest

from tagcore.deptree import DepNode, DepTree
from tagcore.metrics.attachment import (attachment_report,
                                        attachment_scores,
                                        count_accuracy_dep,
                                        new_counts,
                                        tag_accuracy,
                                        tag_report)


def mk_tree(attachments):
    "tree of dummy words from (head, label) pairs"
    return DepTree(DepNode(i, 'w{}'.format(i), head=head, label=label)
                   for i, (head, label) in enumerate(attachments, start=1))


GOLD = [(2, 'nsubj'), (0, 'root'), (2, 'dobj')]


class CountAccuracyTest(unittest.TestCase):
    "attachment counts"

    def setUp(self):
        self.gold_heads = mk_tree(GOLD).gold_heads()

    def test_perfect(self):
        "everything right"
        counts = new_counts()
        count_accuracy_dep(mk_tree(GOLD), self.gold_heads, counts)
        self.assertEqual([3, 3, 3, 3], list(counts))

    def test_wrong_label(self):
        "right head, wrong label"
        counts = new_counts()
        pred = mk_tree([(2, 'nsubj'), (0, 'root'), (2, 'iobj')])
        count_accuracy_dep(pred, self.gold_heads, counts)
        self.assertEqual([3, 2, 3, 2], list(counts))

    def test_wrong_head(self):
        "right label, wrong head"
        counts = new_counts()
        pred = mk_tree([(3, 'nsubj'), (0, 'root'), (2, 'dobj')])
        count_accuracy_dep(pred, self.gold_heads, counts)
        self.assertEqual([3, 2, 2, 3], list(counts))

    def test_accumulates(self):
        "counts are only ever added to"
        counts = new_counts()
        count_accuracy_dep(mk_tree(GOLD), self.gold_heads, counts)
        count_accuracy_dep(mk_tree(GOLD), self.gold_heads, counts)
        self.assertEqual([6, 6, 6, 6], list(counts))

    def test_unlabeled(self):
        "an unlabeled token matches an unlabeled gold token"
        tree = mk_tree([(0, None)])
        counts = new_counts()
        count_accuracy_dep(tree, tree.gold_heads(), counts)
        self.assertEqual([1, 1, 1, 1], list(counts))


def test_scores():
    "ratios, and no division by zero"
    scores = attachment_scores([4, 2, 3, 3])
    assert scores.las == 0.5
    assert scores.uas == 0.75
    assert scores.ls == 0.75
    assert abs(scores.ls_attached - 2.0 / 3) < 1e-9
    assert attachment_scores(new_counts()) == (0.0, 0.0, 0.0, 0.0)
    assert tag_accuracy([4, 3, 0, 0]) == 0.75


def test_reports():
    "reports mention every row"
    report = attachment_report([('dev', [4, 2, 3, 3])])
    assert 'dev' in report
    assert 'LAS' in report
    assert '0.5000' in report
    report = tag_report([('dev', [4, 3, 0, 0])])
    assert '0.7500' in report
