# License: BSD3

"""
Dependency trees over the tokens of a sentence.

Position 0 of every tree is an artificial root; real tokens are numbered
from 1, as in the CoNLL formats.
"""

from collections import namedtuple


ROOT_TAG = '<root>'

_ROOT_HEAD = -1
DEFAULT_HEAD = 0
NO_LABEL = None


class GoldHead(namedtuple('GoldHead', 'head label')):
    """Reference attachment of a token: index of its head and its label"""
    pass


class DepNode(object):
    """A token in a dependency tree"""

    def __init__(self, idx, form, lemma=None, pos=None, feats=None,
                 head=DEFAULT_HEAD, label=NO_LABEL):
        self.id = idx
        self.form = form
        self.lemma = lemma
        self.pos = pos
        self.feats = feats
        self.head = head
        self.label = label

    @classmethod
    def root(cls):
        "the artificial root node"
        return cls(0, ROOT_TAG, lemma=ROOT_TAG, pos=ROOT_TAG,
                   head=_ROOT_HEAD)

    def has_head(self, node):
        "True if `node` is the head of this node"
        return node is not None and self.head == node.id

    def has_label(self, label):
        """True if this node is attached with the given label (None for
        unlabeled)"""
        return self.label == label

    def __repr__(self):
        return 'DepNode({}, {!r}, head={}, label={!r})'.format(
            self.id, self.form, self.head, self.label)


class DepTree(object):
    """Dependency tree: a list of `DepNode` headed by the artificial root.

    Parameters
    ----------
    nodes : list of DepNode
        Real tokens, numbered 1..n in order.
    """

    def __init__(self, nodes=()):
        self.nodes = [DepNode.root()]
        for node in nodes:
            self.append(node)

    def append(self, node):
        """Append a token; its id must be the next free position"""
        if node.id != len(self.nodes):
            raise ValueError('Expected node {} but got {}'.format(
                len(self.nodes), node.id))
        self.nodes.append(node)

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, idx):
        return self.nodes[idx]

    def __iter__(self):
        return iter(self.nodes)

    # ------------------------------------------------------------
    # structure
    # ------------------------------------------------------------

    def dependents(self, idx):
        """Indices of the dependents of node `idx`, in linear order"""
        return [node.id for node in self.nodes[1:] if node.head == idx]

    def leftmost_dependent(self, idx):
        "Leftmost dependent of `idx` that precedes it, or None"
        deps = [i for i in self.dependents(idx) if i < idx]
        return deps[0] if deps else None

    def rightmost_dependent(self, idx):
        "Rightmost dependent of `idx` that follows it, or None"
        deps = [i for i in self.dependents(idx) if i > idx]
        return deps[-1] if deps else None

    def left_nearest_sibling(self, idx):
        "Closest sibling of `idx` to its left, or None"
        if idx == 0:
            return None
        sisters = [i for i in self.dependents(self.nodes[idx].head)
                   if i < idx]
        return sisters[-1] if sisters else None

    def right_nearest_sibling(self, idx):
        "Closest sibling of `idx` to its right, or None"
        if idx == 0:
            return None
        sisters = [i for i in self.dependents(self.nodes[idx].head)
                   if i > idx]
        return sisters[0] if sisters else None

    def head_of(self, idx):
        "Index of the head of `idx`, None for the root"
        head = self.nodes[idx].head
        return head if head >= 0 else None

    RELATIONS = {
        'hd': head_of,
        'lmd': leftmost_dependent,
        'rmd': rightmost_dependent,
        'lns': left_nearest_sibling,
        'rns': right_nearest_sibling,
    }

    def relative(self, idx, relation):
        """Follow a structural relation (see `RELATIONS`) from `idx`.

        Returns the index reached or None if there is no such node.
        """
        try:
            step = self.RELATIONS[relation]
        except KeyError:
            raise ValueError('Unknown tree relation: {}'.format(relation))
        return step(self, idx)

    # ------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------

    def gold_heads(self):
        """Current attachments as a list of `GoldHead`, root included"""
        return [GoldHead(node.head, node.label) for node in self.nodes]

    def tags(self):
        "Current part-of-speech tags, root included"
        return [node.pos for node in self.nodes]

    def clear_labels(self):
        "Forget all dependency labels"
        for node in self.nodes[1:]:
            node.label = NO_LABEL
