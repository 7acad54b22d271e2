"""
Components: the mode lifecycle, model archives, lexica and the
concrete taggers built on them.

Components are built through the `for_*` class methods of
`AbstractComponent`, one per mode ::

    with ArchiveReader(path) as reader:
        tagger = PosTagger.for_decoding(reader)
    for tree in trees:
        tagger.process(tree)
"""
