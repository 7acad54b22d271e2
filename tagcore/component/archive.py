"""
Model archives.

All that a component needs at decoding time (lexica, feature templates,
statistical models) is stored as a sequence of named text entries in a
single zip archive.  Entries are written one at a time and read back
strictly in the order they were written: the names are there for
humans, readers never look entries up by name.
"""

from collections import deque
from contextlib import contextmanager
import io
import os
import zipfile


ENCODING = 'utf-8'


class ArchiveError(Exception):
    """
    Model archives that are missing, truncated, or not read the way
    they were written
    """
    def __init__(self, msg):
        super(ArchiveError, self).__init__(msg)


class ArchiveWriter(object):
    """
    Write-once model archive ::

        with ArchiveWriter(path) as writer:
            with writer.entry('model0') as fout:
                fout.write(...)

    If anything goes wrong inside the `with` block, or while closing
    the archive, the partially written archive is deleted.
    """
    def __init__(self, path):
        self.path = path
        self._zip = None
        self.names = []

    def __enter__(self):
        self._zip = zipfile.ZipFile(self.path, 'w', zipfile.ZIP_DEFLATED)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        failed = exc_type is not None
        try:
            self._zip.close()
        except Exception:
            failed = True
            raise
        finally:
            self._zip = None
            if failed and os.path.exists(self.path):
                os.remove(self.path)
        return False

    @contextmanager
    def entry(self, name):
        """Open a new text entry; it is closed when the block ends,
        before any other entry can be opened"""
        if name in self.names:
            raise ArchiveError('Duplicate archive entry: {}'.format(name))
        self.names.append(name)
        fout = io.TextIOWrapper(self._zip.open(name, mode='w'),
                                encoding=ENCODING, newline='\n')
        try:
            yield fout
            fout.flush()
        finally:
            fout.close()


class ArchiveReader(object):
    """
    Sequential reader for archives written by `ArchiveWriter` ::

        with ArchiveReader(path) as reader:
            with reader.next_entry() as fin:
                ...

    Asking for more entries than there are, or leaving the `with` block
    with entries left unread, raises `ArchiveError`.
    """
    def __init__(self, path):
        self.path = path
        self._zip = None
        self._pending = None
        self.last_name = None

    def __enter__(self):
        try:
            self._zip = zipfile.ZipFile(self.path, 'r')
        except zipfile.BadZipFile:
            raise ArchiveError('Not a model archive: {}'.format(self.path))
        self._pending = deque(self._zip.infolist())
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        unread = len(self._pending)
        self._zip.close()
        self._zip = None
        if exc_type is None and unread:
            raise ArchiveError('{} unread entries left in {}'.format(
                unread, self.path))
        return False

    @contextmanager
    def next_entry(self):
        """Open the next entry, in written order, as a text stream"""
        if not self._pending:
            raise ArchiveError('No more entries in {} (last one read: '
                               '{})'.format(self.path, self.last_name))
        info = self._pending.popleft()
        self.last_name = info.filename
        fin = io.TextIOWrapper(self._zip.open(info),
                               encoding=ENCODING, newline='\n')
        try:
            yield fin
        finally:
            fin.close()


def entry_name(base_name, index):
    "name of the entry for sub-model `index`"
    return '{}{}'.format(base_name, index)


def save_entries(writer, base_name, blobs, dump):
    """Write `blobs[i]` to entry `<base_name><i>`, in order.

    :param dump: `dump(blob, fout)` writes a blob to a text stream
    """
    for i, blob in enumerate(blobs):
        with writer.entry(entry_name(base_name, i)) as fout:
            dump(blob, fout)


def load_entry(reader, load):
    """Read the next entry of the archive.

    :param load: `load(fin)` reads a blob from a text stream
    """
    with reader.next_entry() as fin:
        return load(fin)
