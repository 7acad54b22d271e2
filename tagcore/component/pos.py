"""
Left-to-right part-of-speech tagger
"""

from .base import AbstractComponent
from .lexicon import simplify_form


class PosTagger(AbstractComponent):
    """
    Tags the tokens of a tree from left to right with a single
    sub-model. Tags to the left of the current token are the ones just
    predicted (or the gold ones when training); tags to its right are
    never looked at.

    Feature token source: `i` (the token being tagged)

    Fields, on top of the common ones (see `AbstractComponent`):

    * a: ambiguity class of the form (from the lexicon)
    * sf (set-valued): suffixes of the simplified form
    * pf (set-valued): prefixes of the simplified form
    """
    NAME = 'pos'
    MODEL_SIZE = 1
    DEFAULT_TEMPLATES = ('pos.xml',)
    AFFIX_LENGTHS = (1, 2, 3)

    def source_index(self, source):
        if source == 'i':
            return self.current
        raise ValueError('Unknown source for {}: {}'.format(self.NAME,
                                                            source))

    def extract_gold_tags(self, tree):
        return tree.tags()

    def label_tree(self):
        for i in range(1, self.tree_size):
            self.current = i
            self.tree[i].pos = self.predict_or_learn(0, self.gold_tags[i])

    def node_field(self, node, field):
        if field == 'p':
            return node.pos if node.id < self.current else None
        elif field == 'a':
            if node.id == 0:
                return node.pos
            return self.lexicon.ambiguity_class(node.form)
        return super(PosTagger, self).node_field(node, field)

    def node_fields(self, node, field):
        if field in ('sf', 'pf'):
            if node.id == 0:
                return None
            form = simplify_form(node.form)
            lengths = [n for n in self.AFFIX_LENGTHS if n < len(form)]
            if field == 'sf':
                return [form[-n:] for n in lengths]
            return [form[:n] for n in lengths]
        return super(PosTagger, self).node_fields(node, field)

    def count_accuracy(self, counts):
        """`counts[0]` tokens, `counts[1]` correctly tagged ones"""
        counts[0] += self.tree_size - 1
        for i in range(1, self.tree_size):
            if self.tree[i].pos == self.gold_tags[i]:
                counts[1] += 1
