"""
Feature templates.

A feature template is a declarative recipe for one family of features:
an ordered list of feature tokens (which field of which token to look
at), a type tag under which the resulting features are recorded, and a
flag saying whether the fields are single values or sets of values.

Templates for one sub-model are grouped in a `FeatureTemplateSet`,
which reads and writes the following XML format ::

    <feature_template>
      <cutoff label="0" feature="1"/>
      <feature f0="i:f"/>
      <feature f0="i-1:p" f1="i:f"/>
      <feature type="sfx" set="true" f0="i:sf"/>
    </feature_template>

Feature tokens are written `source[+-offset][_relation]:field`, for
example `i+1:f` (form of the token following the current one) or
`h_lmd:d` (label of the leftmost dependent of the head).  Which sources,
relations and fields make sense is up to the component using the
templates.
"""

from collections import namedtuple
import re
import xml.etree.ElementTree as ET

from ..internalutil import (TagcoreXmlException,
                            indent_xml,
                            on_single_element)


ROOT_TAG = 'feature_template'

_TOKEN_RE = re.compile(r'^(?P<source>[a-z]+)'
                       r'(?P<offset>[+-]\d+)?'
                       r'(?:_(?P<relation>[a-z]+))?'
                       r':(?P<field>[a-z]+[0-9]*)$')
_TYPE_RE = re.compile(r'^\w+$')


class TemplateError(Exception):
    """
    Feature template text that we cannot make sense of
    """
    def __init__(self, msg):
        super(TemplateError, self).__init__(msg)


class FeatureToken(namedtuple('FeatureToken',
                              'source offset relation field')):
    """
    Which field of which token to fetch, relative to a decision point.

    :param source: decision point (eg. 'i', the current token)
    :param offset: linear offset from the source token
    :type offset: int
    :param relation: structural hop (eg. 'hd') or None
    :param field: name of the field (eg. 'f' for the word form)
    """
    @classmethod
    def from_string(cls, text):
        "parse `source[+-offset][_relation]:field`"
        match = _TOKEN_RE.match(text.strip())
        if match is None:
            raise TemplateError('Bad feature token: {}'.format(text))
        offset = match.group('offset')
        return cls(match.group('source'),
                   int(offset) if offset else 0,
                   match.group('relation'),
                   match.group('field'))

    def __str__(self):
        res = self.source
        if self.offset:
            res += '{:+d}'.format(self.offset)
        if self.relation:
            res += '_' + self.relation
        return res + ':' + self.field


class FeatureTemplate(namedtuple('FeatureTemplate',
                                 'type tokens set_valued')):
    """
    A template: a type tag, a tuple of `FeatureToken`, and whether
    the tokens resolve to single values or to sets of values
    """
    def __new__(cls, ftype, tokens, set_valued=False):
        tokens = tuple(tokens)
        if not tokens:
            raise TemplateError('Feature template {} has no '
                                'tokens'.format(ftype))
        if not _TYPE_RE.match(ftype):
            raise TemplateError('Bad feature type: {}'.format(ftype))
        return super(FeatureTemplate, cls).__new__(cls, ftype, tokens,
                                                   bool(set_valued))

    def to_xml(self):
        "XML element for this template"
        elem = ET.Element('feature')
        elem.set('type', self.type)
        if self.set_valued:
            elem.set('set', 'true')
        for i, token in enumerate(self.tokens):
            elem.set('f{}'.format(i), str(token))
        return elem


def _read_flag(text):
    "XML boolean attribute"
    if text in ('true', '1'):
        return True
    elif text in (None, 'false', '0'):
        return False
    raise TemplateError('Bad boolean value: {}'.format(text))


def _read_int(elem, attr):
    "non-negative integer attribute, 0 if missing"
    text = elem.get(attr, '0')
    try:
        res = int(text)
    except ValueError:
        res = -1
    if res < 0:
        raise TemplateError('Bad {} cutoff: {}'.format(attr, text))
    return res


def _read_template(elem, position):
    "FeatureTemplate from a <feature> element"
    tokens = []
    i = 0
    while elem.get('f{}'.format(i)) is not None:
        tokens.append(FeatureToken.from_string(elem.get('f{}'.format(i))))
        i += 1
    ftype = elem.get('type', str(position))
    return FeatureTemplate(ftype, tokens, _read_flag(elem.get('set')))


class FeatureTemplateSet(object):
    """
    All the feature templates of one sub-model, plus the count cutoffs
    applied when training from the features they generate.

    Immutable; `str()` gives back the XML text it can be read from.
    """
    def __init__(self, templates, label_cutoff=0, feature_cutoff=0):
        self.templates = tuple(templates)
        self.label_cutoff = label_cutoff
        self.feature_cutoff = feature_cutoff

    def __iter__(self):
        return iter(self.templates)

    def __len__(self):
        return len(self.templates)

    def __eq__(self, other):
        return (isinstance(other, FeatureTemplateSet) and
                self.templates == other.templates and
                self.label_cutoff == other.label_cutoff and
                self.feature_cutoff == other.feature_cutoff)

    def __ne__(self, other):
        return not self == other

    @classmethod
    def from_xml(cls, root):
        "read from a parsed <feature_template> element"
        if root.tag != ROOT_TAG:
            raise TemplateError('Expected <{}> but got <{}>'.format(
                ROOT_TAG, root.tag))
        try:
            label_cutoff, feature_cutoff = on_single_element(
                root, (0, 0),
                lambda e: (_read_int(e, 'label'), _read_int(e, 'feature')),
                'cutoff')
        except TagcoreXmlException as oops:
            raise TemplateError(str(oops))
        templates = [_read_template(elem, i)
                     for i, elem in enumerate(root.findall('feature'))]
        return cls(templates,
                   label_cutoff=label_cutoff,
                   feature_cutoff=feature_cutoff)

    @classmethod
    def from_string(cls, text):
        "read from XML text"
        try:
            root = ET.fromstring(text)
        except ET.ParseError as oops:
            raise TemplateError('Malformed feature template: {}'.format(
                oops))
        return cls.from_xml(root)

    @classmethod
    def from_file(cls, f):
        "read from an XML file"
        with open(f, 'rb') as f_in:
            return cls.from_string(f_in.read())

    def to_xml(self):
        "XML element for the whole set"
        root = ET.Element(ROOT_TAG)
        cutoff = ET.SubElement(root, 'cutoff')
        cutoff.set('label', str(self.label_cutoff))
        cutoff.set('feature', str(self.feature_cutoff))
        for template in self.templates:
            root.append(template.to_xml())
        indent_xml(root)
        return root

    def __str__(self):
        return ET.tostring(self.to_xml(), encoding='unicode')
