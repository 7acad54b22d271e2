"""
Expanding feature templates into feature vectors.

The engine knows nothing of trees or tokens: it asks a `FieldResolver`
for the value(s) behind each feature token and glues the answers
together.
"""

import itertools

from .vector import FeatureVector


BLANK_COLUMN = '_'
"""
Separator between the fields of a multi-token feature value
"""


class FieldResolver(object):
    """
    Capability to look up the fields a feature token points at.

    Both methods return None when the field is absent (eg. the token
    lies outside the sentence); this is not an error, the template
    asking for it simply produces nothing.
    """
    def get_field(self, token):
        """
        A single field value (string) for `token`, or None
        """
        raise NotImplementedError('get_field')

    def get_fields(self, token):
        """
        An ordered sequence of field values for `token`, or None
        """
        raise NotImplementedError('get_fields')


def cross_product_indices(candidates):
    """
    Index tuples over a list of candidate lists, the first list varying
    slowest ::

        [[a, b], [x, y]] -> (0, 0), (0, 1), (1, 0), (1, 1)

    Nothing is generated if any list is empty.
    """
    return itertools.product(*[range(len(cands)) for cands in candidates])


def _add_single_features(vector, template, resolver):
    "single-valued template: at most one feature"
    fields = []
    for token in template.tokens:
        field = resolver.get_field(token)
        if field is None:
            return
        fields.append(field)
    vector.add_feature(template.type, BLANK_COLUMN.join(fields))


def _add_set_features(vector, template, resolver):
    "set-valued template: one feature per combination of fields"
    candidates = []
    for token in template.tokens:
        fields = resolver.get_fields(token)
        if fields is None:
            return
        candidates.append(list(fields))
    for indices in cross_product_indices(candidates):
        value = BLANK_COLUMN.join(cands[i] for cands, i
                                  in zip(candidates, indices))
        vector.add_feature(template.type, value)


def add_features(vector, template, resolver):
    """
    Append to `vector` the features generated by `template`.

    An absent field anywhere in the template cancels the whole
    template (never just one token of it).
    """
    if template.set_valued:
        _add_set_features(vector, template, resolver)
    else:
        _add_single_features(vector, template, resolver)


def feature_vector(template_set, resolver):
    """
    Return a fresh `FeatureVector` with the features of every template
    in the set, in template order
    """
    vector = FeatureVector()
    for template in template_set:
        add_features(vector, template, resolver)
    return vector
