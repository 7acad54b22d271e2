# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for the tree layer
"""

import codecs
import os
import shutil
import tempfile
import unittest

from tagcore.conll import dump_conll, read_conll, read_conll_string
from tagcore.deptree import ROOT_TAG, DepNode, DepTree, GoldHead


CONLL = u"""\
1\tThe\tthe\tDT\tDT\t_\t2\tdet\t_\t_
2\tdog\tdog\tNN\tNN\t_\t4\tnsubj\t_\t_
3\tnever\tnever\tRB\tRB\t_\t4\tneg\t_\t_
4\tsleeps\tsleep\tVBZ\tVBZ\t_\t0\troot\t_\t_
5\tin\tin\tIN\tIN\t_\t4\tprep\t_\t_
6\tcafés\tcafé\tNNS\tNNS\tNum=Plur\t5\t_\t_\t_
"""


class DepTreeTest(unittest.TestCase):
    "structural queries"

    def setUp(self):
        self.tree = read_conll_string(CONLL)

    def test_root(self):
        "position 0 is the artificial root"
        root = self.tree[0]
        self.assertEqual(0, root.id)
        self.assertEqual(ROOT_TAG, root.form)
        self.assertIsNone(self.tree.head_of(0))
        self.assertEqual(7, len(self.tree))

    def test_relations(self):
        "heads, dependents and siblings"
        tree = self.tree
        self.assertEqual([1], tree.dependents(2))
        self.assertEqual([2, 3, 5], tree.dependents(4))
        self.assertEqual(4, tree.relative(2, 'hd'))
        self.assertEqual(2, tree.relative(4, 'lmd'))
        self.assertEqual(5, tree.relative(4, 'rmd'))
        self.assertEqual(2, tree.relative(3, 'lns'))
        self.assertEqual(5, tree.relative(3, 'rns'))
        self.assertIsNone(tree.relative(2, 'lns'))
        self.assertIsNone(tree.relative(5, 'rns'))
        self.assertIsNone(tree.relative(1, 'lmd'))
        self.assertRaises(ValueError, tree.relative, 1, 'xyz')

    def test_snapshots(self):
        "gold heads and tags survive changes to the tree"
        tree = self.tree
        gold = tree.gold_heads()
        tags = tree.tags()
        tree.clear_labels()
        tree[1].pos = 'NN'
        self.assertEqual(GoldHead(2, 'det'), gold[1])
        self.assertEqual('DT', tags[1])
        self.assertIsNone(tree[1].label)
        self.assertTrue(tree[1].has_head(tree[2]))
        self.assertTrue(tree[1].has_label(None))
        self.assertFalse(tree[1].has_label('det'))

    def test_append(self):
        "nodes are numbered in order"
        tree = DepTree()
        tree.append(DepNode(1, 'a'))
        self.assertRaises(ValueError, tree.append, DepNode(3, 'b'))


class ConllTest(unittest.TestCase):
    "reading and writing CoNLL-X"

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp(prefix='tagcore-')

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_read(self):
        "columns end up in the right place, '_' is None"
        tree = read_conll_string(CONLL)
        node = tree[6]
        self.assertEqual(u'cafés', node.form)
        self.assertEqual(u'café', node.lemma)
        self.assertEqual('NNS', node.pos)
        self.assertEqual('Num=Plur', node.feats)
        self.assertEqual(5, node.head)
        self.assertIsNone(node.label)
        self.assertIsNone(tree[1].feats)

    def test_round_trip(self):
        "two sentences out and back in"
        path_in = os.path.join(self.tmp_dir, 'in.conll')
        with codecs.open(path_in, 'w', 'utf-8') as fout:
            fout.write(CONLL + u'\n' + CONLL)
        trees = read_conll(path_in)
        self.assertEqual(2, len(trees))

        path_out = os.path.join(self.tmp_dir, 'out.conll')
        dump_conll(trees, path_out)
        again = read_conll(path_out)
        self.assertEqual([t.gold_heads() for t in trees],
                         [t.gold_heads() for t in again])
        self.assertEqual([t.tags() for t in trees],
                         [t.tags() for t in again])
        with codecs.open(path_out, 'r', 'utf-8') as fin:
            first = fin.readline()
        self.assertEqual(u'1\tThe\tthe\tDT\tDT\t_\t2\tdet\t_\t_\n', first)

    def test_unicode_line_separators(self):
        "only newlines end a line, not U+2028 or U+0085 in a form"
        tree = DepTree([DepNode(1, u'a\u2028b', pos='NN', head=2,
                                label='nsubj'),
                        DepNode(2, u'x\x85y', pos='VB', head=0,
                                label='root')])
        path = os.path.join(self.tmp_dir, 'odd.conll')
        dump_conll([tree], path)
        trees = read_conll(path)
        self.assertEqual(1, len(trees))
        self.assertEqual([u'a\u2028b', u'x\x85y'],
                         [n.form for n in trees[0].nodes[1:]])
        self.assertEqual(tree.gold_heads(), trees[0].gold_heads())
