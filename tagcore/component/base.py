"""
Common ground for all tagcore components.

A component walks a dependency tree, makes one decision per token,
and for each decision extracts a feature vector from the feature
templates of one of its sub-models.  What happens to that vector
depends on the mode (see `tagcore.component.mode`).

Concrete components say

* which decision points feature tokens are relative to
  (`source_index`)
* which fields they offer on top of the common ones
  (`node_field`, `node_fields`)
* what the gold annotation is and how to walk the tree
  (`extract_gold_tags`, `label_tree`)
* how to count their accuracy (`count_accuracy`)
"""

import os
import sys

from ..learning.extraction import FieldResolver, feature_vector
from ..learning.model import StringModel
from ..learning.template import FeatureTemplateSet
from ..metrics.attachment import count_accuracy_dep
from .archive import entry_name, load_entry, save_entries
from .lexicon import Lexicon, LexiconCollector, simplify_form
from .mode import (Mode,
                   BootstrapState,
                   DecodeState,
                   DevelopState,
                   LexicaState,
                   TrainState)


DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data')

ENTRY_LEXICA = 'lexica'
ENTRY_FEATURE = 'feature'
ENTRY_MODEL = 'model'


class AbstractComponent(FieldResolver):
    """
    Base class for joint components.

    Use one of the `for_*` class methods rather than the constructor;
    they pick the mode and fill in the arrays it needs.

    A component keeps the tree it is working on as instance state, so
    one component must not process two trees at the same time (use one
    component per thread).

    :param state: mode handle, see `tagcore.component.mode`
    :param lexica: `Lexicon` (ignored when collecting lexica)
    :param lexicon_cutoff: forms seen at most this many times are
                           left out of the collected lexicon
    :param verbose: report progress on stderr
    """
    NAME = None
    "name of the component, also the prefix of its archive entries"

    MODEL_SIZE = 1
    "number of sub-models"

    DEFAULT_TEMPLATES = ()
    "default template files (in the package data directory)"

    def __init__(self, state, lexica=None, lexicon_cutoff=0, verbose=False):
        if state.model_size != self.MODEL_SIZE:
            raise ValueError('{} needs {} sub-models, got {}'.format(
                type(self).__name__, self.MODEL_SIZE, state.model_size))
        self.state = state
        self.verbose = verbose
        self.lexicon_cutoff = lexicon_cutoff
        self.lexicon = None
        self.collector = None
        self.tree = None
        self.tree_size = 0
        self.current = None
        self.gold_tags = None
        if state.mode is Mode.LEXICA:
            self.collector = LexiconCollector()
        elif lexica is not None:
            self.init_lexica(lexica)

    # ------------------------------------------------------------
    # constructors, one per mode
    # ------------------------------------------------------------

    @classmethod
    def for_lexica(cls, templates, **kwargs):
        """A component for collecting lexica"""
        return cls(LexicaState(templates), **kwargs)

    @classmethod
    def for_training(cls, templates, spaces, lexica, **kwargs):
        """A component for generating training instances"""
        return cls(TrainState(templates, spaces), lexica=lexica, **kwargs)

    @classmethod
    def for_decoding(cls, reader, **kwargs):
        """A component for decoding, with everything read from an
        archive (see `tagcore.component.archive.ArchiveReader`)"""
        component = cls(DecodeState(cls.MODEL_SIZE), **kwargs)
        component.load_models(reader)
        return component

    @classmethod
    def for_bootstrapping(cls, templates, spaces, models, lexica, **kwargs):
        """A component for generating training instances from its own
        predictions"""
        return cls(BootstrapState(templates, spaces, models),
                   lexica=lexica, **kwargs)

    @classmethod
    def for_development(cls, templates, models, lexica, **kwargs):
        """A component for decoding and evaluation"""
        return cls(DevelopState(templates, models), lexica=lexica,
                   **kwargs)

    @classmethod
    def default_templates(cls):
        """The default feature template sets, one per sub-model"""
        return [FeatureTemplateSet.from_file(os.path.join(DATA_DIR, f))
                for f in cls.DEFAULT_TEMPLATES]

    @property
    def mode(self):
        "see `Mode`"
        return self.state.mode

    # ------------------------------------------------------------
    # lexica
    # ------------------------------------------------------------

    def init_lexica(self, lexica):
        """Set the lexica used by this component"""
        self.lexicon = lexica

    def get_lexica(self):
        """The lexica of this component; when collecting lexica, a
        lexicon frozen from what was seen so far"""
        if self.collector is not None:
            return Lexicon.freeze(self.collector, self.lexicon_cutoff)
        return self.lexicon

    # ------------------------------------------------------------
    # arrays
    # ------------------------------------------------------------

    def get_templates(self):
        "feature template sets, one per sub-model"
        return self.state.templates

    def get_train_spaces(self):
        "training spaces (training and bootstrapping only)"
        return self.state.spaces

    def get_models(self):
        "statistical models (decoding, bootstrapping, developing only)"
        return self.state.models

    # ------------------------------------------------------------
    # load/save
    # ------------------------------------------------------------

    def _log(self, msg):
        "progress message"
        if self.verbose:
            print(msg, file=sys.stderr)

    def entry_base(self, kind):
        "archive entry base name for this component"
        return '{}.{}'.format(self.NAME, kind)

    def load_models(self, reader):
        """Read lexica, feature templates and statistical models, in
        the order `save_models` writes them"""
        self._log('Loading lexica.')
        self.init_lexica(load_entry(reader, Lexicon.load))
        for i in range(self.MODEL_SIZE):
            self.load_feature_templates(reader, i)
        for i in range(self.MODEL_SIZE):
            self.load_statistical_models(reader, i)

    def load_feature_templates(self, reader, index):
        """Read the next archive entry as the template set of
        sub-model `index`"""
        self._log('Loading feature templates.')
        self.state.templates[index] = load_entry(
            reader, lambda fin: FeatureTemplateSet.from_string(fin.read()))

    def load_statistical_models(self, reader, index):
        """Read the next archive entry as the model of sub-model
        `index`"""
        self._log('Loading statistical models.')
        self.state.models[index] = load_entry(reader, StringModel.load)

    def save_models(self, writer):
        """Write lexica, feature templates and statistical models to
        an archive (see `tagcore.component.archive.ArchiveWriter`)"""
        self._log('Saving lexica.')
        with writer.entry(self.entry_base(ENTRY_LEXICA)) as fout:
            self.get_lexica().dump(fout)
        self.save_feature_templates(writer, self.entry_base(ENTRY_FEATURE))
        self.save_statistical_models(writer, self.entry_base(ENTRY_MODEL))

    def save_feature_templates(self, writer, base_name):
        """Write one entry per template set, named `<base_name><i>`"""
        self._log('Saving feature templates.')
        save_entries(writer, base_name, self.state.templates,
                     lambda tset, fout: fout.write(str(tset)))

    def save_statistical_models(self, writer, base_name):
        """Write one entry per model, named `<base_name><i>`"""
        self._log('Saving statistical models.')
        save_entries(writer, base_name, self.state.models,
                     lambda model, fout: model.save(fout))

    def entry_names(self):
        "names of the archive entries this component writes, in order"
        names = [self.entry_base(ENTRY_LEXICA)]
        for kind in [ENTRY_FEATURE, ENTRY_MODEL]:
            names.extend(entry_name(self.entry_base(kind), i)
                         for i in range(self.MODEL_SIZE))
        return names

    # ------------------------------------------------------------
    # process
    # ------------------------------------------------------------

    def process(self, tree):
        """Process a tree according to the mode of this component.

        Collecting lexica only counts; every other mode makes one
        decision per token and writes the result back into the tree.
        """
        self.tree = tree
        self.tree_size = len(tree)
        if self.collector is not None:
            self.collector.update(tree)
            return
        self.gold_tags = self.extract_gold_tags(tree)
        self.label_tree()

    def extract_gold_tags(self, tree):
        """Snapshot of the reference annotation, taken before the tree
        is overwritten"""
        raise NotImplementedError('extract_gold_tags')

    def label_tree(self):
        """Make every decision for `self.tree`"""
        raise NotImplementedError('label_tree')

    def get_gold_tags(self):
        """Reference annotation of the last tree processed"""
        return self.gold_tags

    def predict_or_learn(self, index, gold):
        """Extract features for the current decision with sub-model
        `index` and act on them according to the mode.

        Returns the label to put in the tree: the gold label when
        training, the predicted one otherwise.
        """
        vector = self.get_feature_vector(index)
        mode = self.mode
        if mode in (Mode.TRAIN, Mode.BOOTSTRAP) and gold is not None:
            self.state.add_instance(index, gold, vector)
        if mode is Mode.TRAIN:
            return gold
        return self.state.classify(index, vector)

    # ------------------------------------------------------------
    # accuracy
    # ------------------------------------------------------------

    def count_accuracy(self, counts):
        """Add the counts for the last tree processed to `counts`"""
        raise NotImplementedError('count_accuracy')

    def count_accuracy_dep(self, counts, gold_heads):
        """Attachment counts of the last tree processed, see
        `tagcore.metrics.attachment.count_accuracy_dep`"""
        count_accuracy_dep(self.tree, gold_heads, counts)

    # ------------------------------------------------------------
    # feature extraction
    # ------------------------------------------------------------

    def get_feature_vector(self, index):
        """Feature vector for the current decision point, from the
        templates of sub-model `index`"""
        return feature_vector(self.state.templates[index], self)

    def source_index(self, source):
        """Tree position a feature token source stands for"""
        raise NotImplementedError('source_index')

    def get_node(self, token):
        """Node a feature token points at, None if there is none"""
        idx = self.source_index(token.source)
        if idx is None:
            return None
        idx += token.offset
        if not 0 <= idx < self.tree_size:
            return None
        if token.relation:
            idx = self.tree.relative(idx, token.relation)
            if idx is None:
                return None
        return self.tree[idx]

    def get_field(self, token):
        node = self.get_node(token)
        return None if node is None else self.node_field(node, token.field)

    def get_fields(self, token):
        node = self.get_node(token)
        return None if node is None else self.node_fields(node, token.field)

    def node_field(self, node, field):
        """Single-valued fields common to all components:

        * f: simplified form, for frequent forms only
        * m: lemma
        * p: part-of-speech tag
        * d: dependency label
        """
        if field == 'f':
            if node.id == 0:
                return node.form
            if self.lexicon.is_known(node.form):
                return simplify_form(node.form)
            return None
        elif field == 'm':
            return node.lemma
        elif field == 'p':
            return node.pos
        elif field == 'd':
            return node.label
        raise ValueError('Unknown field for {}: {}'.format(self.NAME, field))

    def node_fields(self, node, field):
        """Set-valued fields common to all components:

        * ps: tags of the dependents of the node
        * ds: labels of the dependents of the node
        """
        if field == 'ps':
            return [self.tree[i].pos for i in self.tree.dependents(node.id)
                    if self.tree[i].pos is not None]
        elif field == 'ds':
            return [self.tree[i].label for i in self.tree.dependents(node.id)
                    if self.tree[i].label is not None]
        raise ValueError('Unknown set field for {}: {}'.format(self.NAME,
                                                               field))
