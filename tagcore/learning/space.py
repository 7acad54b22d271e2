"""
Training spaces: instances collected for one sub-model until there are
enough of them to train a model
"""

from collections import Counter, defaultdict
import sys

import numpy as np

from .model import StringModel, train_perceptron


def _cutoff_vocabulary(counts, cutoff):
    """Vocabulary of the items seen more than `cutoff` times, numbered
    in order of first appearance"""
    vocabulary = defaultdict()
    vocabulary.default_factory = vocabulary.__len__
    for item, count in counts.items():
        if count > cutoff:
            vocabulary[item]
    return dict(vocabulary)


class StringTrainSpace(object):
    """
    Labelled string feature vectors for one sub-model.

    :param label_cutoff: labels seen at most this many times are
                         dropped (with their instances)
    :param feature_cutoff: features seen at most this many times
                           are dropped
    """
    def __init__(self, label_cutoff=0, feature_cutoff=0):
        self.label_cutoff = label_cutoff
        self.feature_cutoff = feature_cutoff
        self.instances = []

    @classmethod
    def for_templates(cls, template_set):
        "a training space with the cutoffs of a FeatureTemplateSet"
        return cls(label_cutoff=template_set.label_cutoff,
                   feature_cutoff=template_set.feature_cutoff)

    def add_instance(self, label, vector):
        "add a training instance"
        self.instances.append((label, vector.feature_names()))

    def __len__(self):
        return len(self.instances)

    def _count_vocab(self):
        """Label set, feature vocabulary and matrices, cutoffs applied
        """
        label_counts = Counter(lbl for lbl, _ in self.instances)
        feat_counts = Counter(name for _, names in self.instances
                              for name in names)
        labels = _cutoff_vocabulary(label_counts, self.label_cutoff)
        vocabulary = _cutoff_vocabulary(feat_counts, self.feature_cutoff)
        if not labels:
            raise ValueError("empty labelset")
        if not vocabulary:
            raise ValueError("empty vocabulary")

        X = []
        y = []
        for label, names in self.instances:
            if label not in labels:
                continue
            X.append(np.array([vocabulary[name] for name in names
                               if name in vocabulary], dtype=int))
            y.append(labels[label])
        return labels, vocabulary, X, y

    def train(self, epochs=10, verbose=False):
        """Train a `StringModel` from the instances collected so far"""
        labels, vocabulary, X, y = self._count_vocab()
        if verbose:
            print('Training: {} instances, {} labels, {} features'.format(
                len(y), len(labels), len(vocabulary)), file=sys.stderr)
        weights = train_perceptron(X, y, len(labels), len(vocabulary),
                                   epochs=epochs, verbose=verbose)
        return StringModel(labels, vocabulary, weights)
