"""
Sparse symbolic feature vectors
"""


class FeatureVector(object):
    """
    Ordered multiset of (type, value) string features.

    Features can only be appended; duplicates are kept and insertion
    order is preserved.
    """
    def __init__(self):
        self.types = []
        self.values = []

    def add_feature(self, ftype, value):
        "append a feature"
        self.types.append(ftype)
        self.values.append(value)

    def __len__(self):
        return len(self.types)

    def __iter__(self):
        return iter(zip(self.types, self.values))

    def __eq__(self, other):
        return (isinstance(other, FeatureVector) and
                self.types == other.types and
                self.values == other.values)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'FeatureVector({})'.format(list(self))

    def feature_names(self):
        """Feature names as seen by the learners (`type=value`)"""
        return [u'{}={}'.format(ftype, value) for ftype, value in self]
