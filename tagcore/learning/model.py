"""
Statistical models over string features.

`StringModel` is a linear multiclass model (one weight row per label)
trained with an averaged perceptron.  Components only rely on
`predict`, `save` and `load`; the text format below is this module's
own business ::

    labels<TAB>n
    <label><TAB><one-based index>       (n lines)
    features<TAB>m
    <feature><TAB><one-based index>     (m lines)
    <m weights>                         (n lines, one per label)
"""

import itertools
import sys

import numpy as np

from .vocabulary_format import dump_vocabulary, load_vocabulary


class ModelFormatError(Exception):
    """
    Model text that we cannot make sense of
    """
    def __init__(self, msg):
        super(ModelFormatError, self).__init__(msg)


def train_perceptron(X, y, n_labels, n_features, epochs=10, verbose=False):
    """Fit a multiclass averaged perceptron.

    Parameters
    ----------
    X : list of int arrays
        Feature indices of each instance (repetitions count twice).
    y : list of int
        Label index of each instance.
    n_labels : int
    n_features : int
    epochs : int
        Maximum number of passes over the data; training stops early
        after a pass without mistakes.

    Returns
    -------
    weights : array of float, shape=[n_labels, n_features]
        Averaged weights.
    """
    weights = np.zeros((n_labels, n_features))
    # updates weighted by the time they were made, for averaging
    totals = np.zeros((n_labels, n_features))
    step = 1
    for epoch in range(epochs):
        errors = 0
        for x, yi in zip(X, y):
            pred = int(np.argmax(weights[:, x].sum(axis=1)))
            if pred != yi:
                np.add.at(weights, (yi, x), 1.0)
                np.add.at(weights, (pred, x), -1.0)
                np.add.at(totals, (yi, x), step)
                np.add.at(totals, (pred, x), -step)
                errors += 1
            step += 1
        if verbose:
            print('epoch {}: {} errors out of {}'.format(
                epoch + 1, errors, len(y)), file=sys.stderr)
        if not errors:
            break
    return weights - totals / step


def _read_header(f, name):
    "read a `name<TAB>size` line"
    line = f.readline()
    fields = line.rstrip('\n').split('\t')
    if len(fields) != 2 or fields[0] != name:
        raise ModelFormatError('Expected "{}" header, got: {!r}'.format(
            name, line))
    try:
        return int(fields[1])
    except ValueError:
        raise ModelFormatError('Bad {} size: {}'.format(name, fields[1]))


class StringModel(object):
    """
    Linear model mapping string feature vectors to string labels.

    :param labels: label to index
    :type labels: dict(string, int)
    :param vocabulary: feature name to index
    :type vocabulary: dict(string, int)
    :param weights: shape=[len(labels), len(vocabulary)]
    """
    def __init__(self, labels, vocabulary, weights):
        self.labels = labels
        self.vocabulary = vocabulary
        self.weights = weights
        self.label_names = [lbl for lbl, _ in sorted(labels.items(),
                                                     key=lambda x: x[1])]

    def feature_indices(self, vector):
        "indices of the known features of a vector (unknown ones dropped)"
        vocabulary = self.vocabulary
        return np.array([vocabulary[name] for name in vector.feature_names()
                         if name in vocabulary], dtype=int)

    def scores(self, vector):
        "score of each label for a FeatureVector"
        return self.weights[:, self.feature_indices(vector)].sum(axis=1)

    def predict(self, vector):
        "best label for a FeatureVector"
        return self.label_names[int(np.argmax(self.scores(vector)))]

    def save(self, f):
        """Write the model to an open text stream"""
        f.write(u'labels\t{}\n'.format(len(self.labels)))
        dump_vocabulary(self.labels, f)
        f.write(u'features\t{}\n'.format(len(self.vocabulary)))
        dump_vocabulary(self.vocabulary, f)
        np.savetxt(f, self.weights, fmt='%.17g')

    @classmethod
    def load(cls, f):
        """Read a model from an open text stream"""
        n_labels = _read_header(f, 'labels')
        try:
            labels = load_vocabulary(f, n_labels)
            n_features = _read_header(f, 'features')
            vocabulary = load_vocabulary(f, n_features)
        except ValueError as oops:
            raise ModelFormatError(str(oops))
        rows = list(itertools.islice(f, n_labels))
        if len(rows) != n_labels:
            raise ModelFormatError('Expected {} weight rows, found '
                                   '{}'.format(n_labels, len(rows)))
        weights = np.loadtxt(rows, ndmin=2)
        if weights.shape != (n_labels, n_features):
            raise ModelFormatError('Weight matrix has shape {}, expected '
                                   '{}'.format(weights.shape,
                                               (n_labels, n_features)))
        return cls(labels, vocabulary, weights)
