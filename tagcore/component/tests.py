# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for tagcore.component
"""

import os
import shutil
import tempfile
import unittest
import zipfile

from frozendict import frozendict

from tagcore.deptree import DepNode, DepTree
from tagcore.learning.space import StringTrainSpace
from tagcore.learning.template import FeatureTemplateSet
from tagcore.metrics.attachment import new_counts
from tagcore.component.archive import (ArchiveError,
                                       ArchiveReader,
                                       ArchiveWriter,
                                       load_entry,
                                       save_entries)
from tagcore.component.deplabel import DepLabeler
from tagcore.component.lexicon import Lexicon, LexiconCollector
from tagcore.component.mode import (Mode,
                                    DecodeState,
                                    DevelopState,
                                    TrainState)
from tagcore.component.pos import PosTagger


def mk_templates(*features):
    "template set (no cutoffs) from (type, [tokens], set valued) triples"
    lines = ['<feature_template>']
    for ftype, tokens, set_valued in features:
        attrs = ' '.join('f{}="{}"'.format(i, tok)
                         for i, tok in enumerate(tokens))
        lines.append('<feature type="{}" set="{}" {}/>'.format(
            ftype, 'true' if set_valued else 'false', attrs))
    lines.append('</feature_template>')
    return FeatureTemplateSet.from_string('\n'.join(lines))


SENTENCES = [[('The', 'DT', 2, 'det'),
              ('dog', 'NN', 3, 'nsubj'),
              ('runs', 'VBZ', 0, 'root')],
             [('A', 'DT', 2, 'det'),
              ('cat', 'NN', 3, 'nsubj'),
              ('sleeps', 'VBZ', 0, 'root')]]


def mk_corpus():
    "fresh copies of the toy corpus (components write into trees)"
    return [DepTree(DepNode(i, form, pos=pos, head=head, label=label)
                    for i, (form, pos, head, label)
                    in enumerate(sentence, start=1))
            for sentence in SENTENCES]


def collect_lexicon(cls, templates):
    "run a component in lexica mode over the toy corpus"
    component = cls.for_lexica(templates)
    for tree in mk_corpus():
        component.process(tree)
    return component.get_lexica()


def train_component(cls, templates):
    "lexica then training, returns (lexicon, models)"
    lexicon = collect_lexicon(cls, templates)
    spaces = [StringTrainSpace.for_templates(t) for t in templates]
    component = cls.for_training(templates, spaces, lexicon)
    for tree in mk_corpus():
        component.process(tree)
    return lexicon, [space.train() for space in component.get_train_spaces()]


class TmpDirTest(unittest.TestCase):
    "tests that write files"

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp(prefix='tagcore-')

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def path(self, name):
        "path in the temporary directory"
        return os.path.join(self.tmp_dir, name)


# ---------------------------------------------------------------------
# archives
# ---------------------------------------------------------------------


class ArchiveTest(TmpDirTest):
    "ordered archive entries"

    BLOBS = [u'first\tblob\n', u'', u'third\nwith accents: éè\n']

    def write_blobs(self, path):
        "write BLOBS as base0, base1, base2"
        with ArchiveWriter(path) as writer:
            save_entries(writer, 'base', self.BLOBS,
                         lambda blob, fout: fout.write(blob))
        return path

    def test_round_trip(self):
        "entries come back identical, in written order"
        path = self.write_blobs(self.path('a.zip'))
        with zipfile.ZipFile(path) as zfile:
            self.assertEqual(['base0', 'base1', 'base2'], zfile.namelist())
        with ArchiveReader(path) as reader:
            blobs = [load_entry(reader, lambda fin: fin.read())
                     for _ in self.BLOBS]
            self.assertEqual('base2', reader.last_name)
        self.assertEqual(self.BLOBS, blobs)

    def test_read_too_many(self):
        "reading past the last entry fails"
        path = self.write_blobs(self.path('a.zip'))
        with ArchiveReader(path) as reader:
            for _ in self.BLOBS:
                load_entry(reader, lambda fin: fin.read())
            self.assertRaises(ArchiveError, load_entry, reader,
                              lambda fin: fin.read())

    def test_read_too_few(self):
        "leaving entries unread fails"
        path = self.write_blobs(self.path('a.zip'))
        with self.assertRaises(ArchiveError):
            with ArchiveReader(path) as reader:
                load_entry(reader, lambda fin: fin.read())

    def test_not_an_archive(self):
        "garbage is not an archive"
        path = self.path('garbage.zip')
        with open(path, 'w') as fout:
            fout.write('not a zip file')
        with self.assertRaises(ArchiveError):
            with ArchiveReader(path):
                pass

    def test_duplicate_entry(self):
        "entry names are unique"
        with self.assertRaises(ArchiveError):
            with ArchiveWriter(self.path('a.zip')) as writer:
                with writer.entry('x') as fout:
                    fout.write(u'1')
                with writer.entry('x') as fout:
                    fout.write(u'2')

    def test_partial_archive_removed(self):
        "an error while writing leaves no archive behind"
        path = self.path('a.zip')
        with self.assertRaises(RuntimeError):
            with ArchiveWriter(path) as writer:
                with writer.entry('x') as fout:
                    fout.write(u'1')
                raise RuntimeError('oops')
        self.assertFalse(os.path.exists(path))

    def test_failed_close_removes_archive(self):
        "an error while closing the archive leaves nothing behind"
        path = self.path('a.zip')
        with self.assertRaises(OSError):
            with ArchiveWriter(path) as writer:
                with writer.entry('x') as fout:
                    fout.write(u'1')
                real_close = writer._zip.close

                def failing_close():
                    "close, then report a full disk"
                    real_close()
                    raise OSError('No space left on device')
                writer._zip.close = failing_close
        self.assertFalse(os.path.exists(path))

    def test_only_newlines_end_lines(self):
        "line separators other than newline stay inside entries"
        lexicon = Lexicon(frozendict({u'x\x85y': u'NN',
                                      u'a\u2028b': u'DT',
                                      u'c\rd': u'VB'}))
        path = self.path('a.zip')
        with ArchiveWriter(path) as writer:
            with writer.entry('lexica') as fout:
                lexicon.dump(fout)
        with ArchiveReader(path) as reader:
            self.assertEqual(lexicon, load_entry(reader, Lexicon.load))


# ---------------------------------------------------------------------
# modes
# ---------------------------------------------------------------------


class ModeTest(unittest.TestCase):
    "mode handles"

    def setUp(self):
        self.templates = mk_templates(('f', ['i:f'], False))

    def test_operations(self):
        "each handle only has the operations its mode allows"
        self.assertFalse(hasattr(DecodeState(1), 'add_instance'))
        self.assertFalse(hasattr(DevelopState([self.templates], [None]),
                                 'add_instance'))
        self.assertFalse(hasattr(TrainState([self.templates],
                                            [StringTrainSpace()]),
                                 'classify'))

    def test_decode_slots(self):
        "decoding handles start empty"
        state = DecodeState(2)
        self.assertEqual(2, state.model_size)
        self.assertFalse(state.is_complete())

    def test_size_mismatch(self):
        "parallel arrays have one entry per sub-model"
        self.assertRaises(ValueError, TrainState,
                          [self.templates, self.templates],
                          [StringTrainSpace()])
        self.assertRaises(ValueError, DevelopState, [self.templates], [])
        # the component knows how many sub-models it needs
        self.assertRaises(ValueError, PosTagger.for_training,
                          [self.templates] * 2,
                          [StringTrainSpace()] * 2, None)

    def test_mode_is_fixed(self):
        "the named constructors pick the mode"
        tagger = PosTagger.for_lexica([self.templates])
        self.assertEqual(Mode.LEXICA, tagger.mode)
        tagger = PosTagger.for_training([self.templates],
                                        [StringTrainSpace()], None)
        self.assertEqual(Mode.TRAIN, tagger.mode)


# ---------------------------------------------------------------------
# lexica
# ---------------------------------------------------------------------


class LexiconTest(unittest.TestCase):
    "collecting and freezing lexica"

    def test_collect(self):
        "forms are simplified and their tags collected"
        collector = LexiconCollector()
        collector.update(DepTree([DepNode(1, 'Dog', pos='NN'),
                                  DepNode(2, 'dog', pos='VB'),
                                  DepNode(3, '1984', pos='CD')]))
        lexicon = Lexicon.freeze(collector)
        self.assertEqual('NN_VB', lexicon.ambiguity_class('DOG'))
        self.assertEqual('CD', lexicon.ambiguity_class('2001'))
        self.assertTrue(lexicon.is_known('0000'))
        self.assertIsNone(lexicon.ambiguity_class('cat'))

    def test_cutoff(self):
        "rare forms are left out"
        collector = LexiconCollector()
        collector.update(DepTree([DepNode(1, 'the', pos='DT'),
                                  DepNode(2, 'The', pos='DT'),
                                  DepNode(3, 'dog', pos='NN')]))
        lexicon = Lexicon.freeze(collector, cutoff=1)
        self.assertTrue(lexicon.is_known('the'))
        self.assertFalse(lexicon.is_known('dog'))

    def test_lexica_mode(self):
        "lexica mode only counts, it leaves trees alone"
        templates = [mk_templates(('f', ['i:f'], False))]
        tagger = PosTagger.for_lexica(templates)
        trees = mk_corpus()
        for tree in trees:
            tagger.process(tree)
        self.assertEqual(['DT', 'NN', 'VBZ'],
                         [n.pos for n in trees[0].nodes[1:]])
        self.assertEqual('DT', tagger.get_lexica().ambiguity_class('the'))


# ---------------------------------------------------------------------
# part of speech tagger
# ---------------------------------------------------------------------


class PosTaggerTest(TmpDirTest):
    "the part of speech tagger, end to end"

    def setUp(self):
        super(PosTaggerTest, self).setUp()
        self.templates = [mk_templates(('f', ['i:f'], False))]

    def test_features(self):
        "fields of the tagger, tags to the right are hidden"
        templates = [mk_templates(('f', ['i:f'], False),
                                  ('p', ['i-1:p'], False),
                                  ('pr', ['i+1:p'], False),
                                  ('a', ['i:a'], False),
                                  ('sf', ['i:sf'], True),
                                  ('pf', ['i:pf'], True))]
        lexicon = collect_lexicon(PosTagger, templates)
        space = StringTrainSpace()
        tagger = PosTagger.for_training(templates, [space], lexicon)
        tagger.process(mk_corpus()[0])
        self.assertEqual(3, len(space))
        self.assertEqual(('DT', ['f=the', 'p=<root>', 'a=DT',
                                 'sf=e', 'sf=he', 'pf=t', 'pf=th']),
                         space.instances[0])
        self.assertEqual(('NN', ['f=dog', 'p=DT', 'a=NN',
                                 'sf=g', 'sf=og', 'pf=d', 'pf=do']),
                         space.instances[1])

    def test_feature_vector_idempotent(self):
        "extracting twice at the same point gives the same vector"
        lexicon = collect_lexicon(PosTagger, self.templates)
        tagger = PosTagger.for_training(self.templates,
                                        [StringTrainSpace()], lexicon)
        tagger.process(mk_corpus()[0])
        self.assertEqual(tagger.get_feature_vector(0),
                         tagger.get_feature_vector(0))

    def test_process_twice(self):
        "processing the same tree twice collects the same instances"
        templates = [mk_templates(('f', ['i:f'], False),
                                  ('p', ['i-1:p'], False),
                                  ('a', ['i:a'], False),
                                  ('sf', ['i:sf'], True))]
        lexicon = collect_lexicon(PosTagger, templates)
        space = StringTrainSpace()
        tagger = PosTagger.for_training(templates, [space], lexicon)
        tree = mk_corpus()[0]
        tagger.process(tree)
        tagger.process(tree)
        self.assertEqual(6, len(space))
        self.assertEqual(space.instances[:3], space.instances[3:])

    def test_unknown_field(self):
        "a template the component cannot resolve is an error"
        templates = [mk_templates(('z', ['i:zz'], False))]
        tagger = PosTagger.for_training(templates, [StringTrainSpace()],
                                        collect_lexicon(PosTagger,
                                                        templates))
        self.assertRaises(ValueError, tagger.process, mk_corpus()[0])

    def test_train_decode(self):
        "train, save, load, decode"
        lexicon, models = train_component(PosTagger, self.templates)
        trainer = PosTagger.for_development(self.templates, models, lexicon)
        path = self.path('pos.zip')
        with ArchiveWriter(path) as writer:
            trainer.save_models(writer)
        with zipfile.ZipFile(path) as zfile:
            self.assertEqual(['pos.lexica', 'pos.feature0', 'pos.model0'],
                             zfile.namelist())
            self.assertEqual(trainer.entry_names(), zfile.namelist())

        with ArchiveReader(path) as reader:
            tagger = PosTagger.for_decoding(reader)
        self.assertTrue(tagger.state.is_complete())
        self.assertEqual(self.templates, tagger.get_templates())
        self.assertFalse(hasattr(tagger.state, 'add_instance'))

        for tree in mk_corpus():
            for node in tree.nodes[1:]:
                node.pos = None
            tagger.process(tree)
            self.assertEqual(['DT', 'NN', 'VBZ'],
                             [n.pos for n in tree.nodes[1:]])

    def test_archive_stable(self):
        "a decoder saves exactly what it loaded"
        lexicon, models = train_component(PosTagger, self.templates)
        first = self.path('first.zip')
        with ArchiveWriter(first) as writer:
            PosTagger.for_development(self.templates, models,
                                      lexicon).save_models(writer)
        with ArchiveReader(first) as reader:
            tagger = PosTagger.for_decoding(reader)
        second = self.path('second.zip')
        with ArchiveWriter(second) as writer:
            tagger.save_models(writer)
        with zipfile.ZipFile(first) as zfirst:
            with zipfile.ZipFile(second) as zsecond:
                for name in zfirst.namelist():
                    self.assertEqual(zfirst.read(name), zsecond.read(name))

    def test_develop_accuracy(self):
        "develop mode compares predictions with the gold tags"
        lexicon, models = train_component(PosTagger, self.templates)
        tagger = PosTagger.for_development(self.templates, models, lexicon)
        counts = new_counts()
        for tree in mk_corpus():
            tagger.process(tree)
            tagger.count_accuracy(counts)
        self.assertEqual([6, 6], list(counts[:2]))

    def test_bootstrap(self):
        "bootstrapping both predicts and collects instances"
        lexicon, models = train_component(PosTagger, self.templates)
        space = StringTrainSpace()
        tagger = PosTagger.for_bootstrapping(self.templates, [space],
                                             models, lexicon)
        tree = mk_corpus()[0]
        tagger.process(tree)
        self.assertEqual(['DT', 'NN', 'VBZ'], [l for l, _ in space.instances])
        self.assertEqual(['DT', 'NN', 'VBZ'],
                         [n.pos for n in tree.nodes[1:]])


# ---------------------------------------------------------------------
# dependency labeler
# ---------------------------------------------------------------------


class DepLabelerTest(TmpDirTest):
    "the dependency labeler"

    def setUp(self):
        super(DepLabelerTest, self).setUp()
        features = [('df', ['d:f'], False), ('hp', ['h:p'], False)]
        self.templates = [mk_templates(*features),
                          mk_templates(*features)]

    def test_sub_models(self):
        "left and right dependents go to different spaces"
        lexicon = collect_lexicon(DepLabeler, self.templates)
        spaces = [StringTrainSpace(), StringTrainSpace()]
        labeler = DepLabeler.for_training(self.templates, spaces, lexicon)
        for tree in mk_corpus():
            labeler.process(tree)
        self.assertEqual(['det', 'nsubj', 'det', 'nsubj'],
                         [l for l, _ in spaces[DepLabeler.LEFT].instances])
        self.assertEqual(['root', 'root'],
                         [l for l, _ in spaces[DepLabeler.RIGHT].instances])
        self.assertEqual(('det', ['df=the', 'hp=NN']),
                         spaces[DepLabeler.LEFT].instances[0])

    def test_label_visibility(self):
        "only labels to the left of the dependent are visible"
        templates = [mk_templates(('dl', ['d-1:d'], False),
                                  ('ds', ['d:ds'], True),
                                  ('hds', ['h:ds'], True))] * 2
        lexicon = collect_lexicon(DepLabeler, templates)
        spaces = [StringTrainSpace(), StringTrainSpace()]
        labeler = DepLabeler.for_training(templates, spaces, lexicon)
        labeler.process(mk_corpus()[0])
        left = spaces[DepLabeler.LEFT].instances
        right = spaces[DepLabeler.RIGHT].instances
        # The: left neighbour is the root, no dependents, head's only
        # dependent is itself
        self.assertEqual(('det', []), left[0])
        # dog: 'The' is labeled already
        self.assertEqual(('nsubj', ['dl=det', 'ds=det']), left[1])
        # runs
        self.assertEqual(('root', ['dl=nsubj', 'ds=nsubj']), right[0])

    def test_train_decode(self):
        "train, save, load, decode, evaluate"
        lexicon, models = train_component(DepLabeler, self.templates)
        path = self.path('deplabel.zip')
        with ArchiveWriter(path) as writer:
            DepLabeler.for_development(self.templates, models,
                                       lexicon).save_models(writer)
        with zipfile.ZipFile(path) as zfile:
            self.assertEqual(['deplabel.lexica',
                              'deplabel.feature0', 'deplabel.feature1',
                              'deplabel.model0', 'deplabel.model1'],
                             zfile.namelist())
        with ArchiveReader(path) as reader:
            labeler = DepLabeler.for_decoding(reader)

        counts = new_counts()
        for tree in mk_corpus():
            gold_heads = tree.gold_heads()
            tree.clear_labels()
            labeler.process(tree)
            self.assertEqual(['det', 'nsubj', 'root'],
                             [n.label for n in tree.nodes[1:]])
            labeler.count_accuracy_dep(counts, gold_heads)
        self.assertEqual([6, 6, 6, 6], list(counts))

    def test_develop_accuracy(self):
        "count_accuracy uses the labels the tree came with"
        lexicon, models = train_component(DepLabeler, self.templates)
        labeler = DepLabeler.for_development(self.templates, models, lexicon)
        counts = new_counts()
        for tree in mk_corpus():
            labeler.process(tree)
            labeler.count_accuracy(counts)
        self.assertEqual([6, 6, 6, 6], list(counts))

    def test_default_templates(self):
        "the packaged templates are readable"
        self.assertEqual(2, len(DepLabeler.default_templates()))
        self.assertEqual(1, len(PosTagger.default_templates()))
