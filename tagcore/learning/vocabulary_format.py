"""Vocabulary sections of model streams.

A vocabulary maps names (features, labels) to indices.  It is written
one entry per line, tab-separated, with one-based indices, in index
order.  Vocabularies are sections of larger streams (see
`tagcore.learning.model`), so the reader is told how many lines to
consume.
"""

import itertools


def dump_vocabulary(vocabulary, f):
    """Write the vocabulary to an open text stream, in index order"""
    by_index = sorted(vocabulary.items(), key=lambda x: x[1])
    for name, idx in by_index:
        f.write(u'{}\t{}\n'.format(name, idx + 1))


def _parse_row(row):
    "name and zero-based index"
    name, sep, idx_ = row.rstrip('\n').rpartition('\t')
    if not sep:
        raise ValueError('Bad vocabulary entry: {!r}'.format(row))
    return name, int(idx_) - 1


def load_vocabulary(f, size):
    """Read `size` vocabulary entries from an open text stream into a
    dictionary of name and index, leaving the stream just after them"""
    rows = list(itertools.islice(f, size))
    if len(rows) != size:
        raise ValueError('Expected {} vocabulary entries, found '
                         '{}'.format(size, len(rows)))
    return dict(_parse_row(row) for row in rows)
