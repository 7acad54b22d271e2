"""
Tests for the tagcore command line
"""

import argparse
import os

from frozendict import frozendict
import pytest

from tagcore.cmd.args import (COMPONENTS,
                              add_usual_input_args,
                              read_lexicon,
                              write_lexicon)
from tagcore.cmd.main import main
from tagcore.component.deplabel import DepLabeler
from tagcore.component.lexicon import Lexicon
from tagcore.conll import read_conll


CORPUS = u"""\
1\tThe\tthe\tDT\tDT\t_\t2\tdet\t_\t_
2\tdog\tdog\tNN\tNN\t_\t3\tnsubj\t_\t_
3\truns\trun\tVBZ\tVBZ\t_\t0\troot\t_\t_

1\tA\ta\tDT\tDT\t_\t2\tdet\t_\t_
2\tcat\tcat\tNN\tNN\t_\t3\tnsubj\t_\t_
3\tsleeps\tsleep\tVBZ\tVBZ\t_\t0\troot\t_\t_
"""

POS_TEMPLATES = u"""\
<feature_template>
  <feature type="f" f0="i:f"/>
</feature_template>
"""

LABEL_TEMPLATES = u"""\
<feature_template>
  <feature type="df" f0="d:f"/>
  <feature type="hp" f0="h:p"/>
</feature_template>
"""


def write_file(tmpdir, name, text):
    "write a file in the temporary directory, return its path"
    path = tmpdir.join(name)
    path.write_text(text, 'utf-8')
    return str(path)


def test_lexicon_file_line_separators(tmpdir):
    "forms with U+0085 or U+2028 survive a lexicon file"
    lexicon = Lexicon(frozendict({u'x\x85y': u'NN',
                                  u'a\u2028b': u'DT_NN'}))
    path = str(tmpdir.join('odd.lex'))
    write_lexicon(lexicon, path)
    assert read_lexicon(path) == lexicon


def test_component_action():
    "--component picks a class"
    parser = argparse.ArgumentParser()
    add_usual_input_args(parser)
    assert parser.parse_args([]).component is COMPONENTS['pos']
    assert parser.parse_args(['-c', 'deplabel']).component is DepLabeler
    args = parser.parse_args(['-q'])
    assert args.verbose == 0


def test_pos_pipeline(tmpdir, capsys):
    "lexica, train, bootstrap, decode, evaluate"
    corpus = write_file(tmpdir, 'train.conll', CORPUS)
    templates = write_file(tmpdir, 'pos.xml', POS_TEMPLATES)
    lexicon = str(tmpdir.join('pos.lex'))
    model = str(tmpdir.join('pos.zip'))
    model2 = str(tmpdir.join('pos2.zip'))
    output = str(tmpdir.join('out.conll'))

    main(['lexica', '-q', lexicon, corpus])
    assert os.path.exists(lexicon)
    main(['train', '-q', '-t', templates, '--lexica', lexicon,
          model, corpus])
    main(['bootstrap', '-q', '-n', '1', model, model2, corpus])
    main(['decode', '-q', model2, corpus, output])
    trees = read_conll(output)
    assert [[n.pos for n in t.nodes[1:]] for t in trees] ==\
        [['DT', 'NN', 'VBZ'], ['DT', 'NN', 'VBZ']]

    capsys.readouterr()
    main(['evaluate', '-q', model, corpus])
    report = capsys.readouterr()[0]
    assert '1.0000' in report
    assert 'accuracy' in report


def test_deplabel_pipeline(tmpdir, capsys):
    "two template files, attachment report"
    corpus = write_file(tmpdir, 'train.conll', CORPUS)
    left = write_file(tmpdir, 'left.xml', LABEL_TEMPLATES)
    right = write_file(tmpdir, 'right.xml', LABEL_TEMPLATES)
    model = str(tmpdir.join('deplabel.zip'))

    main(['train', '-q', '-c', 'deplabel', '-t', left, '-t', right,
          model, corpus])
    capsys.readouterr()
    main(['evaluate', '-q', '-c', 'deplabel', model, corpus, corpus])
    report = capsys.readouterr()[0]
    assert 'LAS' in report
    assert 'total' in report
    assert '1.0000' in report


def test_wrong_template_count(tmpdir):
    "one template file per sub-model"
    corpus = write_file(tmpdir, 'train.conll', CORPUS)
    left = write_file(tmpdir, 'left.xml', LABEL_TEMPLATES)
    with pytest.raises(SystemExit):
        main(['train', '-q', '-c', 'deplabel', '-t', left,
              str(tmpdir.join('m.zip')), corpus])
