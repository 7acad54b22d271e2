# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for tagcore.learning
"""

import io
import unittest

from tagcore.learning.extraction import (BLANK_COLUMN,
                                         FieldResolver,
                                         add_features,
                                         cross_product_indices,
                                         feature_vector)
from tagcore.learning.model import ModelFormatError, StringModel
from tagcore.learning.space import StringTrainSpace
from tagcore.learning.template import (FeatureTemplate,
                                       FeatureTemplateSet,
                                       FeatureToken,
                                       TemplateError)
from tagcore.learning.vector import FeatureVector


class DictResolver(FieldResolver):
    """Resolver backed by dictionaries from token strings to fields"""

    def __init__(self, single=None, multi=None):
        self.single = single or {}
        self.multi = multi or {}
        self.calls = []

    def get_field(self, token):
        self.calls.append(str(token))
        return self.single.get(str(token))

    def get_fields(self, token):
        self.calls.append(str(token))
        return self.multi.get(str(token))


def mk_template(ftype, tokens, set_valued=False):
    "template from token strings"
    return FeatureTemplate(ftype,
                           [FeatureToken.from_string(t) for t in tokens],
                           set_valued)


# ---------------------------------------------------------------------
# feature vectors
# ---------------------------------------------------------------------


def test_vector_keeps_order_and_duplicates():
    "FeatureVector is an ordered multiset"
    vector = FeatureVector()
    vector.add_feature('0', 'a')
    vector.add_feature('1', 'b')
    vector.add_feature('0', 'a')
    assert list(vector) == [('0', 'a'), ('1', 'b'), ('0', 'a')]
    assert vector.feature_names() == ['0=a', '1=b', '0=a']
    assert len(vector) == 3


# ---------------------------------------------------------------------
# templates
# ---------------------------------------------------------------------


class FeatureTokenTest(unittest.TestCase):
    "feature token text form"

    def test_parse(self):
        "all the parts of a token"
        self.assertEqual(FeatureToken('i', 0, None, 'f'),
                         FeatureToken.from_string('i:f'))
        self.assertEqual(FeatureToken('i', -1, None, 'p'),
                         FeatureToken.from_string('i-1:p'))
        self.assertEqual(FeatureToken('h', 2, 'lmd', 'd'),
                         FeatureToken.from_string('h+2_lmd:d'))
        self.assertEqual(FeatureToken('d', 0, 'hd', 'sf3'),
                         FeatureToken.from_string('d_hd:sf3'))

    def test_str(self):
        "str gives back the text form"
        for text in ['i:f', 'i-1:p', 'h+2_lmd:d', 'd_hd:ds']:
            self.assertEqual(text, str(FeatureToken.from_string(text)))

    def test_bad_token(self):
        "garbage is rejected"
        for text in ['', 'i', 'i:', ':f', 'i+:f', 'I:f', 'i_:f']:
            self.assertRaises(TemplateError, FeatureToken.from_string, text)


class FeatureTemplateSetTest(unittest.TestCase):
    "reading and writing template sets"

    XML = """
<feature_template>
  <cutoff label="1" feature="2"/>
  <feature f0="i:f"/>
  <feature f0="i-1:p" f1="i:f"/>
  <feature type="sfx" set="true" f0="i:sf"/>
</feature_template>
"""

    def test_read(self):
        "types default to the template position"
        tset = FeatureTemplateSet.from_string(self.XML)
        self.assertEqual(1, tset.label_cutoff)
        self.assertEqual(2, tset.feature_cutoff)
        self.assertEqual(['0', '1', 'sfx'], [t.type for t in tset])
        self.assertEqual([False, False, True],
                         [t.set_valued for t in tset])
        self.assertEqual(mk_template('1', ['i-1:p', 'i:f']),
                         tset.templates[1])

    def test_round_trip(self):
        "str then read gives the same set, and the same text"
        tset = FeatureTemplateSet.from_string(self.XML)
        text = str(tset)
        again = FeatureTemplateSet.from_string(text)
        self.assertEqual(tset, again)
        self.assertEqual(text, str(again))

    def test_missing_cutoff(self):
        "cutoffs default to 0"
        tset = FeatureTemplateSet.from_string(
            '<feature_template><feature f0="i:f"/></feature_template>')
        self.assertEqual((0, 0), (tset.label_cutoff, tset.feature_cutoff))

    def test_malformed(self):
        "malformed template text raises TemplateError"
        bad = ['<feature_template>',
               '<features><feature f0="i:f"/></features>',
               '<feature_template><feature/></feature_template>',
               '<feature_template><feature f0="i:f" set="maybe"/>'
               '</feature_template>',
               '<feature_template><feature type="a b" f0="i:f"/>'
               '</feature_template>',
               '<feature_template><cutoff/><cutoff/></feature_template>',
               '<feature_template><cutoff label="-1"/></feature_template>']
        for text in bad:
            self.assertRaises(TemplateError,
                              FeatureTemplateSet.from_string, text)


# ---------------------------------------------------------------------
# extraction
# ---------------------------------------------------------------------


class SingleValuedTest(unittest.TestCase):
    "single-valued templates"

    def test_all_present(self):
        "one feature, fields joined in token order"
        resolver = DictResolver(single={'i:f': 'dog', 'i-1:p': 'DT'})
        vector = FeatureVector()
        add_features(vector, mk_template('t', ['i-1:p', 'i:f']), resolver)
        self.assertEqual([('t', 'DT' + BLANK_COLUMN + 'dog')], list(vector))

    def test_absent_field(self):
        "any absent field cancels the whole template"
        resolver = DictResolver(single={'i:f': 'dog'})
        vector = FeatureVector()
        add_features(vector, mk_template('t', ['i:f', 'i-1:p']), resolver)
        self.assertEqual(0, len(vector))

    def test_absent_stops_lookups(self):
        "tokens after an absent one are not looked up"
        resolver = DictResolver(single={'i:f': 'dog'})
        add_features(FeatureVector(),
                     mk_template('t', ['i-1:p', 'i:f']), resolver)
        self.assertEqual(['i-1:p'], resolver.calls)


class SetValuedTest(unittest.TestCase):
    "set-valued templates"

    def test_product_size(self):
        "2 x 3 x 1 combinations"
        resolver = DictResolver(multi={'i:a': ['1', '2'],
                                       'i:b': ['x', 'y', 'z'],
                                       'i:c': ['k']})
        vector = FeatureVector()
        add_features(vector,
                     mk_template('s', ['i:a', 'i:b', 'i:c'], True),
                     resolver)
        self.assertEqual(6, len(vector))
        self.assertEqual(['1_x_k', '1_y_k', '1_z_k',
                          '2_x_k', '2_y_k', '2_z_k'],
                         vector.values)
        self.assertEqual(set(['s']), set(vector.types))

    def test_order(self):
        "first token outermost, last token innermost"
        resolver = DictResolver(multi={'i:a': ['a', 'b'],
                                       'i:b': ['x', 'y']})
        vector = FeatureVector()
        add_features(vector, mk_template('s', ['i:a', 'i:b'], True),
                     resolver)
        self.assertEqual(['a_x', 'a_y', 'b_x', 'b_y'], vector.values)

    def test_empty_product(self):
        "an empty candidate list means no features"
        resolver = DictResolver(multi={'i:a': ['a', 'b'], 'i:b': []})
        vector = FeatureVector()
        add_features(vector, mk_template('s', ['i:a', 'i:b'], True),
                     resolver)
        self.assertEqual(0, len(vector))

    def test_absent(self):
        "an absent field cancels the template"
        resolver = DictResolver(multi={'i:a': ['a', 'b']})
        vector = FeatureVector()
        add_features(vector, mk_template('s', ['i:a', 'i:b'], True),
                     resolver)
        self.assertEqual(0, len(vector))

    def test_single_token(self):
        "a lone set-valued token gives one feature per value"
        resolver = DictResolver(multi={'i:sf': ['g', 'og']})
        vector = FeatureVector()
        add_features(vector, mk_template('s', ['i:sf'], True), resolver)
        self.assertEqual([('s', 'g'), ('s', 'og')], list(vector))


def test_cross_product_indices():
    "index tuples, outer to inner"
    assert list(cross_product_indices([['a', 'b'], ['x']])) ==\
        [(0, 0), (1, 0)]
    assert list(cross_product_indices([['a'], []])) == []


def test_feature_vector_idempotent():
    "same resolver, same templates, same vector"
    tset = FeatureTemplateSet([mk_template('0', ['i:f']),
                               mk_template('1', ['i:a', 'i:b'], True),
                               mk_template('2', ['i-1:p'])])
    resolver = DictResolver(single={'i:f': 'dog'},
                            multi={'i:a': ['a', 'b'], 'i:b': ['x']})
    first = feature_vector(tset, resolver)
    second = feature_vector(tset, resolver)
    assert first == second
    assert first.values == ['dog', 'a_x', 'b_x']


# ---------------------------------------------------------------------
# training spaces and models
# ---------------------------------------------------------------------


def mk_vector(*names):
    "vector with one feature per name, all of type 'w'"
    vector = FeatureVector()
    for name in names:
        vector.add_feature('w', name)
    return vector


def toy_space(**kwargs):
    "a linearly separable training space"
    space = StringTrainSpace(**kwargs)
    for _ in range(3):
        space.add_instance('N', mk_vector('dog', 'the'))
        space.add_instance('N', mk_vector('cat', 'a'))
        space.add_instance('V', mk_vector('runs', 'dog'))
        space.add_instance('V', mk_vector('sleeps', 'cat'))
    return space


class StringModelTest(unittest.TestCase):
    "training, prediction, saving"

    def test_train_predict(self):
        "the perceptron separates separable data"
        model = toy_space().train(epochs=10)
        self.assertEqual('N', model.predict(mk_vector('dog', 'the')))
        self.assertEqual('V', model.predict(mk_vector('runs', 'dog')))
        self.assertEqual('V', model.predict(mk_vector('sleeps', 'cat')))

    def test_unknown_features(self):
        "unknown features are ignored at prediction time"
        model = toy_space().train()
        self.assertEqual(model.predict(mk_vector('runs')),
                         model.predict(mk_vector('runs', 'zebra')))

    def test_cutoff(self):
        "rare features and labels are dropped"
        space = toy_space(feature_cutoff=3)
        space.add_instance('X', mk_vector('rare'))
        labels, vocabulary, X, y = space._count_vocab()
        self.assertEqual(set(['N', 'V', 'X']), set(labels))
        self.assertEqual(set(['w=dog', 'w=cat']), set(vocabulary))

        space = toy_space(label_cutoff=1)
        space.add_instance('X', mk_vector('dog'))
        labels, _, X, y = space._count_vocab()
        self.assertEqual(set(['N', 'V']), set(labels))
        self.assertEqual(12, len(y))

    def test_empty(self):
        "nothing to learn from"
        self.assertRaises(ValueError, StringTrainSpace().train)

    def test_save_load(self):
        "saving then loading keeps predictions and text"
        model = toy_space().train()
        fout = io.StringIO()
        model.save(fout)
        text = fout.getvalue()
        again = StringModel.load(io.StringIO(text))
        self.assertEqual(model.label_names, again.label_names)
        self.assertEqual(model.vocabulary, again.vocabulary)
        self.assertTrue((model.weights == again.weights).all())
        fout = io.StringIO()
        again.save(fout)
        self.assertEqual(text, fout.getvalue())

    def test_load_malformed(self):
        "truncated or garbled models raise ModelFormatError"
        model = toy_space().train()
        fout = io.StringIO()
        model.save(fout)
        lines = fout.getvalue().splitlines(True)
        for bad in ['', 'nonsense\n',
                    ''.join(lines[:-1]),
                    ''.join(lines[:3])]:
            self.assertRaises(ModelFormatError,
                              StringModel.load, io.StringIO(bad))
