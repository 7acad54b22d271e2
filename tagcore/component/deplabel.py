"""
Dependency labeler: labels the arcs of an already attached tree.
"""

from .base import AbstractComponent


class DepLabeler(AbstractComponent):
    """
    Labels each token with the relation to its head, left to right.
    Dependents that precede their head and dependents that follow it
    are labeled by two separate sub-models.

    Feature token sources:

    * d: the dependent being labeled
    * h: its head

    Labels are only visible on tokens already labeled (the ones left of
    the current dependent), both for the `d` field and the `ds` set.
    """
    NAME = 'deplabel'
    MODEL_SIZE = 2
    DEFAULT_TEMPLATES = ('deplabel_left.xml', 'deplabel_right.xml')

    LEFT = 0
    "sub-model for dependents to the left of their head"
    RIGHT = 1
    "sub-model for dependents to the right of their head"

    def source_index(self, source):
        if source == 'd':
            return self.current
        elif source == 'h':
            return self.tree[self.current].head
        raise ValueError('Unknown source for {}: {}'.format(self.NAME,
                                                            source))

    def extract_gold_tags(self, tree):
        return tree.gold_heads()

    def label_tree(self):
        for i in range(1, self.tree_size):
            self.current = i
            node = self.tree[i]
            index = self.LEFT if i < node.head else self.RIGHT
            node.label = self.predict_or_learn(index, self.gold_tags[i].label)

    def _is_labeled(self, idx):
        "True if the label of `idx` is already ours"
        return 0 < idx < self.current

    def node_field(self, node, field):
        if field == 'd':
            return node.label if self._is_labeled(node.id) else None
        return super(DepLabeler, self).node_field(node, field)

    def node_fields(self, node, field):
        if field == 'ds':
            return [self.tree[i].label
                    for i in self.tree.dependents(node.id)
                    if self._is_labeled(i)]
        return super(DepLabeler, self).node_fields(node, field)

    def count_accuracy(self, counts):
        """Attachment counts, see `count_accuracy_dep`"""
        self.count_accuracy_dep(counts, self.gold_tags)
