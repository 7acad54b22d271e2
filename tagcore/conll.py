# License: BSD3

"""
Reading and writing dependency trees in the CoNLL-X format.

One token per line, ten tab-separated columns
(id, form, lemma, cpos, pos, feats, head, label, phead, plabel),
and a blank line after each sentence.  Heads must be numeric; use 0
when the attachment is unknown.  Labels may be '_' (unlabeled).
"""

import codecs
import warnings

from nltk.parse import DependencyGraph

from .deptree import DepNode, DepTree


BLANK = '_'


def _none_if_blank(value):
    "'_' columns (and missing ones) are read as None"
    return None if value in (None, '', BLANK) else value


def graph_to_tree(graph):
    """Convert an `nltk.parse.DependencyGraph` to a `DepTree`"""
    tree = DepTree()
    for address in sorted(graph.nodes):
        if address == 0:
            continue
        node = graph.nodes[address]
        tree.append(DepNode(address,
                            node['word'],
                            lemma=_none_if_blank(node['lemma']),
                            pos=_none_if_blank(node['tag']),
                            feats=_none_if_blank(node['feats']),
                            head=node['head'],
                            label=_none_if_blank(node['rel'])))
    return tree


def read_conll_string(block):
    """Read one sentence (a block of CoNLL-X lines) into a `DepTree`"""
    with warnings.catch_warnings():
        # nltk complains about sentences that have no 'ROOT' label
        warnings.simplefilter('ignore')
        graph = DependencyGraph(block, cell_separator='\t',
                                top_relation_label='root')
    return graph_to_tree(graph)


def _read_blocks(lines):
    """Group lines into sentence blocks separated by blank lines"""
    block = []
    for line in lines:
        line = line.rstrip('\r\n')
        if line.strip():
            block.append(line)
        elif block:
            yield '\n'.join(block)
            block = []
    if block:
        yield '\n'.join(block)


def read_conll(f):
    """Read all the trees of a CoNLL-X file.

    Parameters
    ----------
    f : str
        Path of the input file.

    Returns
    -------
    trees : list of DepTree
    """
    with codecs.open(f, 'r', 'utf-8') as f_in:
        # codecs readers also break lines on eg. U+2028, which may
        # occur inside a word form
        lines = f_in.read().split(u'\n')
    return [read_conll_string(block) for block in _read_blocks(lines)]


def _blank_if_none(value):
    "None is written as '_'"
    return BLANK if value is None else str(value)


def _dump_conll(trees, f):
    """Actually do dump"""
    for tree in trees:
        for node in tree.nodes[1:]:
            cells = [str(node.id),
                     node.form,
                     _blank_if_none(node.lemma),
                     _blank_if_none(node.pos),
                     _blank_if_none(node.pos),
                     _blank_if_none(node.feats),
                     str(node.head),
                     _blank_if_none(node.label),
                     BLANK,
                     BLANK]
            f.write(u'\t'.join(cells) + u'\n')
        f.write(u'\n')


def dump_conll(trees, f):
    """Dump dependency trees to a CoNLL-X file.

    Parameters
    ----------
    trees : iterable of DepTree
    f : str
        Path of the output file.
    """
    with codecs.open(f, 'w', 'utf-8') as f_out:
        _dump_conll(trees, f_out)
