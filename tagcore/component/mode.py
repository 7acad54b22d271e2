"""
Component modes.

A component is built in one of five modes and stays in it for life.
Each mode is represented by its own handle class, holding only the
arrays that mode needs (one entry per sub-model) and offering only the
operations those arrays support:

============  ==========================  ===========================
mode          arrays                      operations
============  ==========================  ===========================
LEXICA        templates                   (none: lexica are collected)
TRAIN         templates, spaces           add_instance
DECODE        templates, models           classify
BOOTSTRAP     templates, spaces, models   add_instance, classify
DEVELOP       templates, models           classify
============  ==========================  ===========================

So a decoding handle has no `add_instance` method at all, and a
training handle no `classify`.
"""

from enum import Enum


class Mode(Enum):
    """
    What a component is being used for
    """
    LEXICA = 0
    TRAIN = 1
    DECODE = 2
    BOOTSTRAP = 3
    DEVELOP = 4


def _check_sizes(**arrays):
    "all the arrays of a joint component have one entry per sub-model"
    sizes = set(len(array) for array in arrays.values())
    if len(sizes) > 1:
        details = ', '.join('{}={}'.format(name, len(array))
                            for name, array in sorted(arrays.items()))
        raise ValueError('Mismatched sub-model arrays: ' + details)


class ModeState(object):
    """
    Arrays common to every mode: one feature template set per
    sub-model
    """
    mode = None

    def __init__(self, templates):
        self.templates = list(templates)

    @property
    def model_size(self):
        "number of sub-models"
        return len(self.templates)


class _WithSpaces(object):
    "mixin for modes that collect training instances"

    def add_instance(self, index, label, vector):
        "add a training instance to the space of sub-model `index`"
        self.spaces[index].add_instance(label, vector)


class _WithModels(object):
    "mixin for modes that use statistical models"

    def classify(self, index, vector):
        "predict a label with the model of sub-model `index`"
        return self.models[index].predict(vector)


class LexicaState(ModeState):
    """Collecting lexica"""
    mode = Mode.LEXICA


class TrainState(_WithSpaces, ModeState):
    """Generating training instances"""
    mode = Mode.TRAIN

    def __init__(self, templates, spaces):
        super(TrainState, self).__init__(templates)
        self.spaces = list(spaces)
        _check_sizes(templates=self.templates, spaces=self.spaces)


class DecodeState(_WithModels, ModeState):
    """Decoding with models read from an archive.

    Starts with empty slots that are filled as the archive is read.
    """
    mode = Mode.DECODE

    def __init__(self, model_size):
        super(DecodeState, self).__init__([None] * model_size)
        self.models = [None] * model_size

    def is_complete(self):
        "True once every template set and model slot is filled"
        return all(x is not None for x in self.templates + self.models)


class BootstrapState(_WithSpaces, _WithModels, ModeState):
    """Decoding with the current models while collecting instances"""
    mode = Mode.BOOTSTRAP

    def __init__(self, templates, spaces, models):
        super(BootstrapState, self).__init__(templates)
        self.spaces = list(spaces)
        self.models = list(models)
        _check_sizes(templates=self.templates, spaces=self.spaces,
                     models=self.models)


class DevelopState(_WithModels, ModeState):
    """Decoding then comparing against gold annotations"""
    mode = Mode.DEVELOP

    def __init__(self, templates, models):
        super(DevelopState, self).__init__(templates)
        self.models = list(models)
        _check_sizes(templates=self.templates, models=self.models)
