"""
Lexica collected from a training corpus before training proper.

For each simplified word form seen often enough, the lexicon records
its ambiguity class: the sorted set of part-of-speech tags it occurred
with, joined by underscores.  Forms that are not in the lexicon are
considered rare.

Text format, one entry per line ::

    form<TAB>ambiguity class
"""

from collections import Counter, defaultdict, namedtuple
import re

from frozendict import frozendict

from ..learning.extraction import BLANK_COLUMN


_DIGITS_RE = re.compile(r'[0-9]')


def simplify_form(form):
    "lowercase word form with all digits replaced by 0"
    return _DIGITS_RE.sub('0', form.lower())


class LexiconCollector(object):
    """
    Writable counts from which a `Lexicon` is frozen
    """
    def __init__(self):
        self.form_counts = Counter()
        self.form_tags = defaultdict(set)

    def update(self, tree):
        "count the forms (and their tags) of a DepTree"
        for node in tree.nodes[1:]:
            form = simplify_form(node.form)
            self.form_counts[form] += 1
            if node.pos is not None:
                self.form_tags[form].add(node.pos)


class Lexicon(namedtuple('Lexicon', 'ambiguity_classes')):
    """
    Frequent simplified forms and their ambiguity classes

    :param ambiguity_classes: simplified form to ambiguity class
                              (empty string if never seen with a tag)
    :type ambiguity_classes: frozendict(string, string)
    """
    @classmethod
    def freeze(cls, collector, cutoff=0):
        """
        A frozen lexicon keeping the forms seen more than `cutoff`
        times
        """
        classes = {}
        for form, count in collector.form_counts.items():
            if count > cutoff:
                tags = sorted(collector.form_tags.get(form, ()))
                classes[form] = BLANK_COLUMN.join(tags)
        return cls(frozendict(classes))

    def is_known(self, form):
        "True if the (unsimplified) form is frequent"
        return simplify_form(form) in self.ambiguity_classes

    def ambiguity_class(self, form):
        "ambiguity class of an (unsimplified) form, None if unknown"
        return self.ambiguity_classes.get(simplify_form(form)) or None

    def dump(self, f):
        "write to an open text stream"
        for form in sorted(self.ambiguity_classes):
            f.write(u'{}\t{}\n'.format(form, self.ambiguity_classes[form]))

    @classmethod
    def load(cls, f):
        "read from an open text stream"
        classes = {}
        for line in f:
            line = line.rstrip('\r\n')
            if not line:
                continue
            form, _, amb_class = line.partition('\t')
            classes[form] = amb_class
        return cls(frozendict(classes))
